# Executes one instruction of a process per call
import logging
from enum import Enum, auto

from rrcore.config import TIME_QUANTUM
from rrcore.errors import DecodeError, ProcessFault
from rrcore.instruction import INPUT_MARKER, READ_FILE_MARKER, Instruction, Verb, decode
from rrcore.process import Process, ProcessState
from rrcore.resources import ResourceManager

logger = logging.getLogger(__name__)


class TurnResult(Enum):
    CONTINUE = auto()    # still READY, quantum not used up
    PREEMPTED = auto()   # quantum exhausted, goes to the ready tail
    BLOCKED = auto()
    FINISHED = auto()


class Interpreter:
    """Decodes and runs the current instruction of a process.

    ``devices`` must provide ``emit(text)``, ``read_line(prompt)``,
    ``read_lines(name)`` and ``write_text(name, text)``. Any ``OSError`` or
    ``EOFError`` they raise becomes a fault of the issuing process only.
    """

    def __init__(self, resources: ResourceManager, devices, time_quantum: int = TIME_QUANTUM):
        self.resources = resources
        self.devices = devices
        self.time_quantum = time_quantum
        self.handlers = {
            Verb.PRINT: self._print,
            Verb.ASSIGN: self._assign,
            Verb.WRITE_FILE: self._write_file,
            Verb.READ_FILE: self._read_file,
            Verb.PRINT_FROM_TO: self._print_from_to,
            Verb.SEM_WAIT: self._sem_wait,
            Verb.SEM_SIGNAL: self._sem_signal,
        }

    def execute_one(self, process: Process, clock: int = 0) -> TurnResult:
        pcb = process.pcb
        process.state = ProcessState.RUNNING
        line = process.current_instruction()
        if line is None:
            process.state = ProcessState.FINISHED
            return TurnResult.FINISHED

        logger.info("Executing instruction [%s] from Process %d at clock cycle %d",
                    line, process.pid, clock)
        try:
            instruction = decode(line)
            self.handlers[instruction.verb](process, instruction)
        except DecodeError as exc:
            self.devices.emit(f"{exc}\n")
        except ProcessFault as exc:
            logger.error("%s", exc)
            pcb.fault = exc.message
            process.state = ProcessState.FINISHED

        if process.state is ProcessState.BLOCKED:
            # semWait is retried once the process is woken
            pcb.cycles_remaining = self.time_quantum
            return TurnResult.BLOCKED

        process.retire_current()
        pcb.cycles_remaining -= 1

        if process.state is ProcessState.FINISHED:
            return TurnResult.FINISHED
        if process.is_exhausted():
            process.state = ProcessState.FINISHED
            return TurnResult.FINISHED
        process.state = ProcessState.READY
        if pcb.cycles_remaining <= 0:
            pcb.cycles_remaining = self.time_quantum
            return TurnResult.PREEMPTED
        return TurnResult.CONTINUE

    # device access
    def _io(self, process: Process, call, *args):
        try:
            return call(*args)
        except (OSError, EOFError, UnicodeError) as exc:
            raise ProcessFault(process.pid, str(exc)) from exc

    def _store(self, process: Process, name: str, value: str) -> None:
        if not process.variables.store(name, value):
            logger.warning("Process %d: all %d variable slots in use, %r not stored",
                           process.pid, process.variables.capacity, name)

    # verbs
    def _print(self, process: Process, instruction: Instruction) -> None:
        name = instruction.operands[0]
        value = process.variables.lookup(name)
        if value is None:
            self.devices.emit(f"Variable '{name}' not found.\n")
        else:
            self.devices.emit(f"{value}\n")

    def _assign(self, process: Process, instruction: Instruction) -> None:
        name, value = instruction.operands
        if value == INPUT_MARKER:
            value = self._io(process, self.devices.read_line,
                             f"Please enter a value for variable {name}: ")
        else:
            marker, _, source = value.partition(' ')
            source = source.strip()
            if marker == READ_FILE_MARKER and source:
                filename = process.variables.lookup(source)
                if filename is None:
                    self.devices.emit(f"Filename variable '{source}' not found.\n")
                    return
                lines = self._io(process, self.devices.read_lines, filename)
                value = lines[0].rstrip('\r\n') if lines else ''
        self._store(process, name, value)

    def _write_file(self, process: Process, instruction: Instruction) -> None:
        filename = process.variables.lookup(instruction.operands[0])
        data = process.variables.lookup(instruction.operands[1])
        if filename is None or data is None:
            self.devices.emit("Error: Invalid filename or data.\n")
            return
        self.devices.emit(f"Creating file: {filename}\n")
        self._io(process, self.devices.write_text, filename, data)

    def _read_file(self, process: Process, instruction: Instruction) -> None:
        name = instruction.operands[0]
        filename = process.variables.lookup(name)
        if filename is None:
            self.devices.emit(f"Filename variable '{name}' not found.\n")
            return
        for line in self._io(process, self.devices.read_lines, filename):
            self.devices.emit(line)

    def _print_from_to(self, process: Process, instruction: Instruction) -> None:
        start = process.variables.lookup(instruction.operands[0])
        end = process.variables.lookup(instruction.operands[1])
        if start is None or end is None:
            self.devices.emit("Error: Variables not found.\n")
            return
        try:
            lo, hi = int(start), int(end)
        except ValueError:
            self.devices.emit("Error: Variables must hold integers.\n")
            return
        self.devices.emit(' '.join(str(i) for i in range(lo, hi + 1)) + '\n')

    def _sem_wait(self, process: Process, instruction: Instruction) -> None:
        self.resources.wait(process, instruction.resource)

    def _sem_signal(self, process: Process, instruction: Instruction) -> None:
        self.resources.signal(instruction.resource)
