from rrcore.instruction import Resource
from rrcore.process import Process, ProcessState
from rrcore.queues import BoundedQueue
from rrcore.resources import ResourceManager
from rrcore.scheduler import Scheduler


def setup():
    scheduler = Scheduler(time_quantum=1, capacity=10)
    blocked = BoundedQueue('blocked', 10)
    return scheduler, blocked, ResourceManager(scheduler, blocked)


def running(pid):
    p = Process(pid, ['semWait file'], 0)
    p.state = ProcessState.RUNNING
    return p


def test_wait_on_free_resource_acquires():
    _, blocked, rm = setup()
    p = running(1)
    assert rm.wait(p, 'file')
    assert rm.locked[Resource.FILE]
    assert rm.holders[Resource.FILE] == 1
    assert p.state is ProcessState.RUNNING
    assert blocked.is_empty()


def test_second_wait_blocks():
    _, blocked, rm = setup()
    holder, other = running(1), running(2)
    rm.wait(holder, Resource.FILE)
    assert not rm.wait(other, Resource.FILE)
    assert other.state is ProcessState.BLOCKED
    assert other.pcb.waiting_for_resource is Resource.FILE
    assert list(blocked) == [other]
    assert rm.holders[Resource.FILE] == 1


def test_signal_wakes_every_matching_waiter_in_order():
    scheduler, blocked, rm = setup()
    rm.wait(running(1), 'file')
    rm.wait(running(2), 'userOutput')
    a, b, c, d = running(3), running(4), running(5), running(6)
    rm.wait(a, 'file')
    rm.wait(b, 'userOutput')
    rm.wait(c, 'file')
    rm.wait(d, 'userOutput')

    assert [p.pid for p in blocked] == [3, 4, 5, 6]
    woken = rm.signal('file')

    assert woken == [a, c]
    assert [p.pid for p in scheduler.ready_queue] == [3, 5]
    assert all(p.state is ProcessState.READY for p in woken)
    assert a.pcb.waiting_for_resource is None
    assert [p.pid for p in blocked] == [4, 6]
    assert not rm.locked[Resource.FILE]
    assert rm.locked[Resource.USER_OUTPUT]


def test_unknown_resource_name_is_a_no_op():
    scheduler, blocked, rm = setup()
    p = running(1)
    assert rm.wait(p, 'printer')
    assert rm.signal('printer') == []
    assert p.state is ProcessState.RUNNING
    assert not any(rm.locked.values())
    assert scheduler.ready_queue.is_empty() and blocked.is_empty()
