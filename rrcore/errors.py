# Exception hierarchy for the simulator


class SimulationError(Exception):
    """Base class for every error raised by the simulator."""


class ConfigError(SimulationError):
    pass


class ProgramLoadError(SimulationError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load program {path}: {reason}")
        self.path = path
        self.reason = reason


class DecodeError(SimulationError):
    """An instruction line could not be turned into an Instruction."""

    def __init__(self, line: str, message: str):
        super().__init__(message)
        self.line = line


class UnknownVerbError(DecodeError):
    def __init__(self, line: str, verb: str):
        super().__init__(line, f"Unknown instruction: {verb}")
        self.verb = verb


class UnknownResourceError(DecodeError):
    def __init__(self, line: str, name: str):
        super().__init__(line, f"Unknown resource: {name}")
        self.name = name


class MissingOperandError(DecodeError):
    def __init__(self, line: str, verb: str, expected: int):
        super().__init__(line, f"Error: {verb} expects {expected} operand(s).")
        self.verb = verb
        self.expected = expected


class ProcessFault(SimulationError):
    """An I/O failure inside an instruction. Finishes only the issuing process."""

    def __init__(self, pid: int, message: str):
        super().__init__(f"Process {pid} faulted: {message}")
        self.pid = pid
        self.message = message
