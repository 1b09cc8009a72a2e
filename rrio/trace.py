# Table dumps of the ready/blocked queues and memory contents
from typing import Iterable, List, Tuple

from rrcore.system import Snapshot

BORDER = '+------------+-----------------------+'


def _table(title: str, header: str, rows: Iterable[Tuple[int, str]]) -> List[str]:
    out = [title, BORDER, f"| Process ID | {header:<21} |", BORDER]
    for pid, text in rows:
        out.append(f"| {pid:<10} | {text:<21} |")
    out.append(BORDER)
    return out


def render(snapshot: Snapshot) -> str:
    lines = [f"Clock cycle {snapshot.clock}"]
    lines += _table('Ready Queue:', 'Current Instruction', snapshot.ready)
    lines += _table('Blocked Queue:', 'Current Instruction',
                    ((pid, f"{instr} ({resource})") for pid, instr, resource in snapshot.blocked))
    lines += _table('Memory Contents:', 'Instructions',
                    ((pid, instr) for pid, instrs in snapshot.storage for instr in instrs))
    return '\n'.join(lines) + '\n'


class QueueTracer:
    """Observer for System that writes a table dump on each notified event."""

    def __init__(self, emit, events=('round-start', 'turn', 'round-end')):
        self.emit = emit
        self.events = set(events)

    def __call__(self, event: str, snapshot: Snapshot) -> None:
        if event in self.events:
            self.emit(render(snapshot))
