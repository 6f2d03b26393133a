from census_batch.batch.queue import BatchQueue
from census_batch.common.models import GeocodeRequest


def _queue(count: int) -> BatchQueue:
    queue = BatchQueue()
    for index in range(count):
        queue.add(GeocodeRequest(id=str(index)))
    return queue


def test_take_up_to_returns_prefix_and_keeps_remainder_in_order():
    queue = _queue(5)

    taken = queue.take_up_to(2)

    assert [request.id for request in taken] == ["0", "1"]
    assert queue.size() == 3
    assert [request.id for request in queue.take_up_to(10)] == ["2", "3", "4"]
    assert queue.is_empty()


def test_take_up_to_more_than_size_drains_queue():
    queue = _queue(3)
    assert len(queue.take_up_to(10000)) == 3
    assert len(queue) == 0


def test_take_up_to_zero_takes_nothing():
    queue = _queue(2)
    assert queue.take_up_to(0) == []
    assert queue.size() == 2


def test_duplicate_ids_are_kept():
    queue = BatchQueue()
    queue.add(GeocodeRequest(id="x", address="1 A St"))
    queue.add(GeocodeRequest(id="x", address="2 B St"))
    assert [request.address for request in queue.take_up_to(2)] == ["1 A St", "2 B St"]
