# Instruction set: verbs, resource identifiers and the line decoder
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from rrcore.errors import MissingOperandError, UnknownResourceError, UnknownVerbError


INPUT_MARKER = 'input'
READ_FILE_MARKER = 'readFile'


class Verb(Enum):
    PRINT = 'print'
    ASSIGN = 'assign'
    WRITE_FILE = 'writeFile'
    READ_FILE = 'readFile'
    PRINT_FROM_TO = 'printFromTo'
    SEM_WAIT = 'semWait'
    SEM_SIGNAL = 'semSignal'


class Resource(Enum):
    USER_INPUT = 'userInput'
    FILE = 'file'
    USER_OUTPUT = 'userOutput'

    @classmethod
    def lookup(cls, name) -> Optional['Resource']:
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            return None


OPERAND_COUNT = {
    Verb.PRINT: 1,
    Verb.ASSIGN: 2,
    Verb.WRITE_FILE: 2,
    Verb.READ_FILE: 1,
    Verb.PRINT_FROM_TO: 2,
    Verb.SEM_WAIT: 1,
    Verb.SEM_SIGNAL: 1,
}


@dataclass(frozen=True)
class Instruction:
    verb: Verb
    operands: Tuple[str, ...]
    text: str
    resource: Optional[Resource] = None

    def __repr__(self):
        return f"Instruction({self.text!r})"


def decode(line: str) -> Instruction:
    """Split an instruction line into a verb and its operands.

    The ``assign`` value is everything after the variable name, so multi-word
    literals and ``readFile <var>`` survive.
    """
    text = line.strip()
    parts = text.split(None, 3)
    if not parts:
        raise UnknownVerbError(line, '')
    try:
        verb = Verb(parts[0])
    except ValueError:
        raise UnknownVerbError(line, parts[0]) from None

    args = parts[1:]
    expected = OPERAND_COUNT[verb]
    if len(args) < expected:
        raise MissingOperandError(line, verb.value, expected)

    if verb is Verb.ASSIGN:
        value = ' '.join(args[1:])
        return Instruction(verb, (args[0], value), text)

    operands = tuple(args[:expected])
    resource = None
    if verb in (Verb.SEM_WAIT, Verb.SEM_SIGNAL):
        resource = Resource.lookup(operands[0])
        if resource is None:
            raise UnknownResourceError(line, operands[0])
    return Instruction(verb, operands, text, resource)
