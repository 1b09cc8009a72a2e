# Devices the interpreter talks to: the terminal and the file store
import sys
from collections import deque
from typing import Dict, Iterable, List, Optional, TextIO


class HostDevices:
    """Terminal on stdin/stdout and the host filesystem."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 encoding: str = 'utf-8'):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.encoding = encoding

    def emit(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_line(self, prompt: str = '') -> str:
        self.emit(prompt)
        line = self.stdin.readline()
        if not line:
            raise EOFError("end of interactive input")
        return line.rstrip('\n')

    def read_lines(self, name: str) -> List[str]:
        with open(name, 'r', encoding=self.encoding) as fh:
            return fh.readlines()

    def write_text(self, name: str, text: str) -> None:
        with open(name, 'w', encoding=self.encoding) as fh:
            fh.write(text)


class MemoryDevices:
    """In-memory terminal and file store, for headless runs and tests."""

    def __init__(self, files: Optional[Dict[str, str]] = None, inputs: Iterable[str] = ()):
        self.files: Dict[str, str] = dict(files or {})
        self.inputs = deque(inputs)
        self.chunks: List[str] = []

    @property
    def output(self) -> str:
        return ''.join(self.chunks)

    def lines(self) -> List[str]:
        return self.output.splitlines()

    def emit(self, text: str) -> None:
        self.chunks.append(text)

    def read_line(self, prompt: str = '') -> str:
        self.emit(prompt)
        if not self.inputs:
            raise EOFError("end of interactive input")
        return self.inputs.popleft()

    def read_lines(self, name: str) -> List[str]:
        if name not in self.files:
            raise FileNotFoundError(f"No such file: {name!r}")
        return self.files[name].splitlines(keepends=True)

    def write_text(self, name: str, text: str) -> None:
        self.files[name] = text
