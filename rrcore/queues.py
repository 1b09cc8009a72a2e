# Fixed-capacity FIFO used for the ready, blocked and storage collections
from typing import Callable, Iterator, List, Optional

from rrcore.process import Process


class BoundedQueue:
    """Circular buffer of process handles with strict FIFO order.

    Enqueueing onto a full queue leaves it untouched; the call returns False
    and the drop is counted in ``dropped`` so the owner can report it.
    """

    def __init__(self, name: str, capacity: int):
        if capacity < 1:
            raise ValueError("queue capacity must be positive")
        self.name = name
        self.capacity = capacity
        self._slots: List[Optional[Process]] = [None] * capacity
        self._front = 0
        self._size = 0
        self.dropped = 0

    def is_empty(self) -> bool:
        return self._size == 0

    def is_full(self) -> bool:
        return self._size == self.capacity

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def enqueue(self, process: Process) -> bool:
        if self.is_full():
            self.dropped += 1
            return False
        rear = (self._front + self._size) % self.capacity
        self._slots[rear] = process
        self._size += 1
        return True

    def dequeue(self) -> Optional[Process]:
        if self.is_empty():
            return None
        process = self._slots[self._front]
        self._slots[self._front] = None
        self._front = (self._front + 1) % self.capacity
        self._size -= 1
        return process

    def remove_if(self, predicate: Callable[[Process], bool]) -> List[Process]:
        """Drop every member matching predicate, keeping the others in order."""
        removed = []
        for _ in range(self._size):
            process = self.dequeue()
            if predicate(process):
                removed.append(process)
            else:
                self.enqueue(process)
        return removed

    def __iter__(self) -> Iterator[Process]:
        for i in range(self._size):
            yield self._slots[(self._front + i) % self.capacity]

    def __contains__(self, process: Process) -> bool:
        return any(p is process for p in self)

    def __repr__(self):
        pids = [p.pid for p in self]
        return f"BoundedQueue({self.name}, {self._size}/{self.capacity}, pids={pids})"
