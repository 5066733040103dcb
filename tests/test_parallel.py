import operator
import threading

import pytest

from ffkit.parallel import (
    Accumulator,
    HazardPointerOwner,
    MisoQueue,
    SimoQueue,
    ThreadLocalVar,
)


def _run_in_thread(func):
    result = {}

    def target():
        try:
            result["value"] = func()
        except Exception as exc:  # noqa: BLE001
            result["error"] = exc

    thread = threading.Thread(target=target)
    thread.start()
    thread.join()
    return result


def test_accumulator_sums_across_threads():
    acc = Accumulator(operator.add, 0, concurrency=4)
    barrier = threading.Barrier(4)

    def work():
        barrier.wait()
        for number in range(1, 101):
            acc.increase(number)

    threads = [threading.Thread(target=work) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert acc.get() == 4 * sum(range(1, 101))


def test_accumulator_increase_chains():
    acc = Accumulator(operator.add, 0, concurrency=1)
    assert acc.increase(1).increase(2).get() == 3


def test_accumulator_with_max():
    acc = Accumulator(max, 5, concurrency=2)
    assert acc.increase(3).get() == 5
    assert acc.increase(9).get() == 9


def test_accumulator_reset():
    acc = Accumulator(operator.add, 0, concurrency=2)
    acc.increase(5)
    acc.reset(0)
    assert acc.get() == 0


def test_accumulator_list_values_are_copied():
    acc = Accumulator(operator.add, [], concurrency=2)
    acc.increase(["a"])
    assert acc.get() == ["a"]


def test_accumulator_runs_out_of_slots():
    acc = Accumulator(operator.add, 0, concurrency=1)
    acc.increase(1)
    result = _run_in_thread(lambda: acc.increase(1))
    assert "value" not in result
    assert "slots" in str(result["error"])
    assert acc.get() == 1


def test_accumulator_rejects_non_callable():
    with pytest.raises(TypeError):
        Accumulator(42)


def test_accumulator_rejects_bad_concurrency():
    with pytest.raises(ValueError):
        Accumulator(operator.add, concurrency=0)


def test_thread_local_var_current_is_stable():
    var = ThreadLocalVar(list, concurrency=2)
    var.current().append("x")
    assert var.current() == ["x"]


def test_thread_local_var_separate_per_thread():
    var = ThreadLocalVar(list, concurrency=2)
    var.current().append("main")
    result = _run_in_thread(var.current)
    assert result["value"] == []
    assert var.current() == ["main"]


def test_thread_local_var_for_each_and_reset():
    var = ThreadLocalVar(list, concurrency=3)
    var.current().append(1)
    seen = []
    var.for_each(seen.append)
    assert len(seen) == var.concurrency
    assert [1] in seen
    var.reset()
    assert var.current() == []


def test_thread_local_var_set_current():
    var = ThreadLocalVar(concurrency=1)
    assert var.current() is None
    var.set_current("value")
    assert var.current() == "value"


def test_thread_local_var_for_each_needs_callable():
    var = ThreadLocalVar(concurrency=1)
    with pytest.raises(TypeError):
        var.for_each("not callable")


def test_hazard_pointer_seen_from_other_thread():
    owner = HazardPointerOwner(concurrency=2)
    item = object()
    result = _run_in_thread(lambda: owner.set_hazard_pointer(item))
    assert "error" not in result
    assert owner.outstanding_hazard_pointer_for(item) is True


def test_hazard_pointer_own_pointer_not_outstanding():
    owner = HazardPointerOwner(concurrency=2)
    item = object()
    owner.set_hazard_pointer(item)
    assert owner.get_hazard_pointer() is item
    assert owner.outstanding_hazard_pointer_for(item) is False


def test_hazard_pointer_none_is_never_outstanding():
    owner = HazardPointerOwner(concurrency=2)
    assert owner.outstanding_hazard_pointer_for(None) is False


@pytest.mark.parametrize("queue_type", [MisoQueue, SimoQueue])
def test_queue_fills_to_capacity(queue_type):
    queue = queue_type(2)
    assert [queue.push(item) for item in "abc"] == [True, True, True]
    assert queue.push("d") is False
    assert len(queue) == queue.capacity


@pytest.mark.parametrize("queue_type", [MisoQueue, SimoQueue])
def test_queue_is_fifo(queue_type):
    queue = queue_type(3)
    for item in ("a", "b", "c"):
        queue.push(item)
    assert [queue.pop() for _ in range(3)] == ["a", "b", "c"]
    assert len(queue) == 0


@pytest.mark.parametrize("queue_type", [MisoQueue, SimoQueue])
def test_queue_pop_empty_raises(queue_type):
    with pytest.raises(IndexError):
        queue_type(1).pop()


@pytest.mark.parametrize("queue_type", [MisoQueue, SimoQueue])
def test_queue_rejects_negative_size(queue_type):
    with pytest.raises(ValueError):
        queue_type(-1)


def test_miso_queue_many_producers():
    queue = MisoQueue(10)
    pushed = [list(range(start, start + 50)) for start in range(0, 200, 50)]
    threads = [
        threading.Thread(target=lambda items=items: [queue.push(i) for i in items])
        for items in pushed
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    popped = [queue.pop() for _ in range(len(queue))]
    assert sorted(popped) == sorted(i for items in pushed for i in items)