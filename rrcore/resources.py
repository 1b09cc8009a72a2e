# Binary semaphores guarding userInput, file and userOutput
import logging
from typing import Dict, List, Optional, Union

from rrcore.instruction import Resource
from rrcore.process import Process, ProcessState
from rrcore.queues import BoundedQueue
from rrcore.scheduler import Scheduler

logger = logging.getLogger(__name__)


class ResourceManager:
    """Owns the three resource locks and moves processes on and off the blocked queue.

    ``signal`` wakes every waiter of the resource at once; they go back to the
    ready queue and race for the lock on their next ``wait`` retry.
    """

    def __init__(self, scheduler: Scheduler, blocked_queue: BoundedQueue):
        self.scheduler = scheduler
        self.blocked_queue = blocked_queue
        self.locked: Dict[Resource, bool] = {r: False for r in Resource}
        self.holders: Dict[Resource, Optional[int]] = {r: None for r in Resource}

    def wait(self, process: Process, resource: Union[Resource, str]) -> bool:
        """Acquire ``resource`` for ``process`` or block it. Returns True on acquire."""
        res = Resource.lookup(resource)
        if res is None:
            logger.warning("semWait on unknown resource %r ignored", resource)
            return True
        if not self.locked[res]:
            self.locked[res] = True
            self.holders[res] = process.pid
            logger.debug("pid=%d acquired %s", process.pid, res.value)
            return True
        process.state = ProcessState.BLOCKED
        process.pcb.waiting_for_resource = res
        if not self.blocked_queue.enqueue(process):
            logger.warning("Blocked queue full, process %d dropped", process.pid)
        logger.debug("pid=%d blocked on %s (held by pid=%s)", process.pid, res.value, self.holders[res])
        return False

    def signal(self, resource: Union[Resource, str]) -> List[Process]:
        """Release ``resource`` and move all of its waiters to the ready queue."""
        res = Resource.lookup(resource)
        if res is None:
            logger.warning("semSignal on unknown resource %r ignored", resource)
            return []
        self.locked[res] = False
        self.holders[res] = None
        woken = []
        for _ in range(self.blocked_queue.size()):
            process = self.blocked_queue.dequeue()
            if process.pcb.waiting_for_resource is res:
                process.pcb.waiting_for_resource = None
                self.scheduler.enqueue_ready(process)
                woken.append(process)
            else:
                self.blocked_queue.enqueue(process)
        if woken:
            logger.debug("%s released, woke pids %s", res.value, [p.pid for p in woken])
        return woken

