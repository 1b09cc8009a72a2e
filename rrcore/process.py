import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional

from rrcore.config import MAX_VARIABLES_PER_PROCESS, MEMORY_SIZE, TIME_QUANTUM
from rrcore.instruction import Resource

logger = logging.getLogger(__name__)


class ProcessState(Enum):
    READY = auto()
    RUNNING = auto()
    BLOCKED = auto()
    FINISHED = auto()


@dataclass
class PCB:
    process_id: int
    state: ProcessState = ProcessState.READY
    program_counter: int = 0
    cycles_remaining: int = TIME_QUANTUM
    waiting_for_resource: Optional[Resource] = None
    fault: Optional[str] = None


class VariableTable:
    """Per-process name -> value bindings with a fixed number of slots.

    Slots are handed out in first-assignment order; re-assigning a bound name
    overwrites it in place. A new name with every slot taken is refused.
    """

    def __init__(self, capacity: int = MAX_VARIABLES_PER_PROCESS):
        self.capacity = capacity
        self._values: Dict[str, str] = {}
        self.dropped = 0

    def store(self, name: str, value: str) -> bool:
        if name not in self._values and len(self._values) >= self.capacity:
            self.dropped += 1
            return False
        self._values[name] = value
        return True

    def lookup(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def items(self):
        return list(self._values.items())

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)


class Process:
    def __init__(self, pid: int, instructions: List[str], arrival_time: int,
                 memory_size: int = MEMORY_SIZE, max_variables: int = MAX_VARIABLES_PER_PROCESS,
                 time_quantum: int = TIME_QUANTUM):
        self.memory_size = memory_size
        self.arrival_time = arrival_time
        self.truncated = max(0, len(instructions) - memory_size)
        if self.truncated:
            logger.warning("Process %d: instruction memory full, %d line(s) not loaded",
                           pid, self.truncated)
        self.instructions: List[str] = list(instructions[:memory_size])
        self.executed: List[bool] = [False] * len(self.instructions)
        self.variables = VariableTable(max_variables)
        self.pcb = PCB(process_id=pid, cycles_remaining=time_quantum)

    @property
    def pid(self) -> int:
        return self.pcb.process_id

    @property
    def state(self) -> ProcessState:
        return self.pcb.state

    @state.setter
    def state(self, value: ProcessState) -> None:
        self.pcb.state = value

    def current_instruction(self) -> Optional[str]:
        pc = self.pcb.program_counter
        if pc < len(self.instructions) and not self.executed[pc]:
            return self.instructions[pc]
        return None

    def retire_current(self) -> None:
        """Mark the current slot executed and move past it."""
        pc = self.pcb.program_counter
        if pc < len(self.executed):
            self.executed[pc] = True
        self.pcb.program_counter += 1

    def is_exhausted(self) -> bool:
        pc = self.pcb.program_counter
        return pc >= self.memory_size or pc >= len(self.instructions)

    def remaining_instructions(self) -> List[str]:
        return [line for line, done in zip(self.instructions, self.executed) if not done]

    def __repr__(self) -> str:
        return (f"Process(pid={self.pid}, state={self.state.name}, "
                f"pc={self.pcb.program_counter}, arrival={self.arrival_time})")
