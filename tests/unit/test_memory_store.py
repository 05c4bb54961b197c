"""
Unit tests for the in-memory task store.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from todo_app.memory_store import InMemoryTaskStore
from todo_app.store import Task, TaskNotFoundError


pytestmark = pytest.mark.unit


def test_ids_start_at_zero_and_increase_by_one(memory_store):
    ids = [memory_store.create_task(f"task {n}") for n in range(3)]

    assert ids == [0, 1, 2]


def test_buy_milk_walk_dog_scenario(memory_store):
    """Create two tasks, delete the first, and only the second remains."""
    # Act
    milk = memory_store.create_task("buy milk")
    dog = memory_store.create_task("walk dog")
    memory_store.delete_task(milk)

    # Assert
    assert (milk, dog) == (0, 1)
    with pytest.raises(TaskNotFoundError):
        memory_store.get_task(0)
    assert memory_store.get_tasks() == [Task(id=1, text="walk dog")]


def test_counter_keeps_running_after_deletes(memory_store):
    # Arrange
    for n in range(3):
        memory_store.create_task(f"task {n}")
    for task_id in (0, 1, 2):
        memory_store.delete_task(task_id)

    # Act
    task_id = memory_store.create_task("after")

    # Assert
    assert task_id == 3


def test_failed_delete_does_not_advance_or_mutate(memory_store):
    # Arrange
    memory_store.create_task("keep")

    # Act
    with pytest.raises(TaskNotFoundError):
        memory_store.delete_task(7)

    # Assert
    assert memory_store.get_tasks() == [Task(id=0, text="keep")]
    assert memory_store.create_task("next") == 1


def test_concurrent_creates_get_distinct_consecutive_ids():
    """Creates from many threads are serialised by the store lock."""
    # Arrange
    store = InMemoryTaskStore()
    workers, per_worker = 8, 50

    def create_batch(worker: int) -> list[int]:
        return [store.create_task(f"w{worker}-{n}") for n in range(per_worker)]

    # Act
    with ThreadPoolExecutor(max_workers=workers) as pool:
        batches = list(pool.map(create_batch, range(workers)))

    # Assert
    ids = [task_id for batch in batches for task_id in batch]
    assert sorted(ids) == list(range(workers * per_worker))
    assert len(store.get_tasks()) == workers * per_worker


def test_concurrent_deletes_succeed_exactly_once():
    # Arrange
    store = InMemoryTaskStore()
    task_id = store.create_task("contended")

    def try_delete(_: int) -> bool:
        try:
            store.delete_task(task_id)
        except TaskNotFoundError:
            return False
        return True

    # Act
    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(try_delete, range(32)))

    # Assert
    assert outcomes.count(True) == 1
    assert store.get_tasks() == []


def test_close_is_a_no_op(memory_store):
    memory_store.create_task("still here")

    memory_store.close()

    assert memory_store.get_task(0).text == "still here"
