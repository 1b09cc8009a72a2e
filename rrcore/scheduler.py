# Scheduler class
import logging
from typing import Optional

from rrcore.config import MAX_PROCESSES, TIME_QUANTUM
from rrcore.process import Process, ProcessState
from rrcore.queues import BoundedQueue

logger = logging.getLogger(__name__)


class Scheduler:
    def __init__(self, time_quantum: int = TIME_QUANTUM, capacity: int = MAX_PROCESSES):
        self.time_quantum = time_quantum
        self.ready_queue = BoundedQueue('ready', capacity)

    def enqueue_ready(self, process: Process) -> bool:
        process.state = ProcessState.READY
        if not self.ready_queue.enqueue(process):
            logger.warning("Ready queue full, process %d dropped", process.pid)
            return False
        logger.debug("pid=%d -> ready tail %s", process.pid, self.ready_queue)
        return True

    def has_ready(self) -> bool:
        return not self.ready_queue.is_empty()

    def pick_next(self) -> Optional[Process]:
        # Stale entries (no longer READY) are skipped.
        while self.has_ready():
            process = self.ready_queue.dequeue()
            if process.state is ProcessState.READY:
                return process
            logger.debug("skipping pid=%d in state %s", process.pid, process.state.name)
        return None
