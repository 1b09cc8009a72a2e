import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from rrcore.config import SystemConfig
from rrcore.errors import ConfigError
from rrcore.interpreter import Interpreter, TurnResult
from rrcore.process import Process, ProcessState
from rrcore.queues import BoundedQueue
from rrcore.resources import ResourceManager
from rrcore.scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the queues for tracing."""
    clock: int
    ready: Tuple[Tuple[int, str], ...]
    blocked: Tuple[Tuple[int, str, str], ...]
    storage: Tuple[Tuple[int, Tuple[str, ...]], ...]


@dataclass
class SimulationResult:
    clock: int
    executed: int
    idle_ticks: int
    finished: List[int] = field(default_factory=list)
    faulted: Dict[int, str] = field(default_factory=dict)
    deadlocked: bool = False
    blocked: List[int] = field(default_factory=list)
    overflows: Dict[str, int] = field(default_factory=dict)


Observer = Callable[[str, Snapshot], None]


class System:
    """Clock-driven round-robin loop over a fixed set of programs.

    ``programs`` is a sequence of ``(arrival_time, instruction_lines)`` pairs;
    process ids are assigned in that order starting at 1.
    """

    def __init__(self, programs: Sequence[Tuple[int, List[str]]], devices,
                 config: Optional[SystemConfig] = None,
                 observers: Sequence[Observer] = ()):
        self.config = config or SystemConfig()
        if len(programs) > self.config.max_processes:
            raise ConfigError(f"at most {self.config.max_processes} programs can be loaded, "
                              f"got {len(programs)}")
        self.devices = devices
        self.observers = list(observers)

        self.clock = 0
        self.executed = 0
        self.idle_ticks = 0
        self._idle_streak = 0
        self.deadlocked = False

        capacity = self.config.max_processes
        self.scheduler = Scheduler(time_quantum=self.config.time_quantum, capacity=capacity)
        self.blocked_queue = BoundedQueue('blocked', capacity)
        self.storage = BoundedQueue('storage', capacity)
        self.resources = ResourceManager(self.scheduler, self.blocked_queue)
        self.interpreter = Interpreter(self.resources, devices, self.config.time_quantum)

        self._next_pid = 1
        self.processes: List[Process] = []
        for arrival_time, lines in programs:
            self.create_process(lines, arrival_time)
        self.finished: List[Process] = []
        self._pending = sorted(self.processes, key=lambda p: (p.arrival_time, p.pid))

    @property
    def ready_queue(self) -> BoundedQueue:
        return self.scheduler.ready_queue

    # process creation
    def create_process(self, lines: List[str], arrival_time: int) -> Process:
        p = Process(self._next_pid, lines, arrival_time,
                    memory_size=self.config.memory_size,
                    max_variables=self.config.max_variables,
                    time_quantum=self.config.time_quantum)
        self._next_pid += 1
        self.processes.append(p)
        return p

    def start(self) -> SimulationResult:
        if not self.processes:
            logger.info("No programs to run.")
            return self.result()
        return self.run()

    # main loop
    def run(self) -> SimulationResult:
        while True:
            self._admit_arrivals()
            self._notify('round-start')

            executed_any = False
            while self.scheduler.has_ready():
                self._notify('turn')
                process = self.scheduler.pick_next()
                if process is None:
                    break
                executed_any = True
                self._run_turn(process)
            self._notify('round-end')

            if executed_any:
                self._idle_streak = 0
                continue
            if self.blocked_queue.is_empty() and not self._pending:
                break
            if not self._pending and self._idle_streak >= self.config.max_idle_ticks:
                self.deadlocked = True
                logger.warning("Deadlock: no progress for %d idle ticks, blocked pids %s",
                               self._idle_streak, [p.pid for p in self.blocked_queue])
                break
            self._idle_streak = 0 if self._pending else self._idle_streak + 1
            self.clock += 1
            self.idle_ticks += 1

        if not self.deadlocked:
            logger.info("All processes have finished execution.")
        return self.result()

    def _run_turn(self, process: Process) -> None:
        while True:
            result = self.interpreter.execute_one(process, self.clock)
            self.clock += 1
            self.executed += 1
            self._admit_arrivals()
            if result is not TurnResult.CONTINUE:
                break
        if result is TurnResult.PREEMPTED:
            self.scheduler.enqueue_ready(process)
        elif result is TurnResult.FINISHED:
            self._retire(process)
        # BLOCKED processes were queued by the resource manager

    def _admit_arrivals(self) -> None:
        while self._pending and self._pending[0].arrival_time <= self.clock:
            p = self._pending.pop(0)
            if not self.storage.enqueue(p):
                logger.warning("Storage full, process %d not admitted", p.pid)
                continue
            logger.info("Process %d has arrived at clock cycle %d", p.pid, self.clock)
            if p.is_exhausted():
                # empty program: finishes without taking a clock cycle
                self._retire(p)
                continue
            self.scheduler.enqueue_ready(p)

    def _retire(self, process: Process) -> None:
        process.state = ProcessState.FINISHED
        self.storage.remove_if(lambda p: p is process)
        self.finished.append(process)
        if process.pcb.fault:
            logger.info("Process %d terminated by fault: %s", process.pid, process.pcb.fault)
            for res, holder in list(self.resources.holders.items()):
                if holder == process.pid:
                    logger.warning("Releasing %s held by faulted process %d", res.value, process.pid)
                    self.resources.signal(res)
        else:
            logger.info("Process %d has finished execution.", process.pid)

    # observation
    def snapshot(self) -> Snapshot:
        def current(p: Process) -> str:
            return p.current_instruction() or ''

        return Snapshot(
            clock=self.clock,
            ready=tuple((p.pid, current(p)) for p in self.ready_queue),
            blocked=tuple((p.pid, current(p), p.pcb.waiting_for_resource.value)
                          for p in self.blocked_queue),
            storage=tuple((p.pid, tuple(p.remaining_instructions())) for p in self.storage),
        )

    def _notify(self, event: str) -> None:
        if not self.observers:
            return
        snap = self.snapshot()
        for observer in self.observers:
            observer(event, snap)

    def overflows(self) -> Dict[str, int]:
        counts = Counter({
            'ready': self.ready_queue.dropped,
            'blocked': self.blocked_queue.dropped,
            'storage': self.storage.dropped,
            'variables': sum(p.variables.dropped for p in self.processes),
            'memory': sum(p.truncated for p in self.processes),
        })
        return {k: v for k, v in counts.items() if v}

    def result(self) -> SimulationResult:
        return SimulationResult(
            clock=self.clock,
            executed=self.executed,
            idle_ticks=self.idle_ticks,
            finished=[p.pid for p in self.finished],
            faulted={p.pid: p.pcb.fault for p in self.finished if p.pcb.fault},
            deadlocked=self.deadlocked,
            blocked=[p.pid for p in self.blocked_queue],
            overflows=self.overflows(),
        )
