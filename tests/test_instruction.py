import pytest

from rrcore.errors import MissingOperandError, UnknownResourceError, UnknownVerbError
from rrcore.instruction import Resource, Verb, decode


@pytest.mark.parametrize(
    'line,verb,operands',
    [
        ('print x', Verb.PRINT, ('x',)),
        ('assign x 5', Verb.ASSIGN, ('x', '5')),
        ('assign x input', Verb.ASSIGN, ('x', 'input')),
        ('assign b readFile a', Verb.ASSIGN, ('b', 'readFile a')),
        ('assign msg hello big   world', Verb.ASSIGN, ('msg', 'hello big   world')),
        ('writeFile f d', Verb.WRITE_FILE, ('f', 'd')),
        ('readFile f', Verb.READ_FILE, ('f',)),
        ('printFromTo a b\n', Verb.PRINT_FROM_TO, ('a', 'b')),
    ],
)
def test_decode(line, verb, operands):
    instr = decode(line)
    assert instr.verb is verb
    assert instr.operands == operands


def test_decode_semaphore_resource():
    instr = decode('semWait userOutput')
    assert instr.verb is Verb.SEM_WAIT
    assert instr.resource is Resource.USER_OUTPUT


def test_unknown_verb():
    with pytest.raises(UnknownVerbError) as exc:
        decode('jump 4')
    assert str(exc.value) == 'Unknown instruction: jump'


def test_unknown_resource():
    with pytest.raises(UnknownResourceError):
        decode('semSignal printer')


def test_missing_operand():
    with pytest.raises(MissingOperandError):
        decode('assign x')
