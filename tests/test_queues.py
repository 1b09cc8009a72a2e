from rrcore.process import Process
from rrcore.queues import BoundedQueue


def make(pid):
    return Process(pid, ['print x'], 0)


def test_fifo_order_and_empty_signal():
    q = BoundedQueue('ready', 3)
    a, b = make(1), make(2)
    assert q.dequeue() is None
    q.enqueue(a)
    q.enqueue(b)
    assert q.size() == 2
    assert q.dequeue() is a
    assert q.dequeue() is b
    assert q.is_empty()


def test_overflow_is_dropped_and_counted():
    q = BoundedQueue('ready', 2)
    assert q.enqueue(make(1))
    assert q.enqueue(make(2))
    assert q.is_full()
    assert not q.enqueue(make(3))
    assert q.dropped == 1
    assert [p.pid for p in q] == [1, 2]


def test_rotation_wraps_the_circular_buffer():
    q = BoundedQueue('ready', 3)
    for pid in (1, 2, 3):
        q.enqueue(make(pid))
    order = []
    for _ in range(7):
        p = q.dequeue()
        order.append(p.pid)
        q.enqueue(p)
    assert order == [1, 2, 3, 1, 2, 3, 1]
    assert [p.pid for p in q] == [2, 3, 1]


def test_remove_if_keeps_relative_order():
    q = BoundedQueue('storage', 5)
    procs = [make(pid) for pid in (1, 2, 3, 4)]
    for p in procs:
        q.enqueue(p)
    removed = q.remove_if(lambda p: p.pid % 2 == 0)
    assert [p.pid for p in removed] == [2, 4]
    assert [p.pid for p in q] == [1, 3]
    assert procs[0] in q and procs[1] not in q
