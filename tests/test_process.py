import pytest

from rrcore.config import SystemConfig
from rrcore.errors import ConfigError
from rrcore.process import Process, ProcessState, VariableTable


def test_variable_slots_overwrite_in_place():
    table = VariableTable(3)
    assert table.store('a', '1')
    assert table.store('b', '2')
    assert table.store('a', '10')
    assert table.items() == [('a', '10'), ('b', '2')]


def test_variable_slots_full_refuses_new_names():
    table = VariableTable(3)
    for name in 'abc':
        table.store(name, name)
    assert not table.store('d', 'x')
    assert table.dropped == 1
    assert table.lookup('d') is None
    assert table.store('c', 'again')


def test_new_process_control_block():
    p = Process(7, ['print x', 'print y'], arrival_time=2)
    assert p.pid == 7
    assert p.state is ProcessState.READY
    assert p.pcb.program_counter == 0
    assert p.pcb.cycles_remaining == 1
    assert p.pcb.waiting_for_resource is None
    assert p.current_instruction() == 'print x'


def test_retired_slots_are_marked_not_cleared():
    p = Process(1, ['print x', 'print y'], 0)
    p.retire_current()
    assert p.instructions == ['print x', 'print y']
    assert p.remaining_instructions() == ['print y']
    assert not p.is_exhausted()
    p.retire_current()
    assert p.is_exhausted()
    assert p.current_instruction() is None


def test_instruction_memory_truncation_is_recorded():
    p = Process(1, ['print x'] * 5, 0, memory_size=3)
    assert len(p.instructions) == 3
    assert p.truncated == 2


@pytest.mark.parametrize('kwargs', [{'time_quantum': 0}, {'memory_size': -1}, {'max_idle_ticks': 'x'}])
def test_config_rejects_bad_values(kwargs):
    with pytest.raises(ConfigError):
        SystemConfig(**kwargs)
