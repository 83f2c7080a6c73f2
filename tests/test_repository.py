"""Tests for the in-memory task repository."""

import threading

import pytest

from hypertask.models import DESCRIPTION_INVALID, PRIORITY_INVALID, TITLE_REQUIRED, Priority
from hypertask.repository import Invalid, NotFound, Ok, TaskRepository


def _create(repo: TaskRepository, **fields):
    outcome = repo.create({"title": "Task", "description": "", **fields})
    assert isinstance(outcome, Ok), outcome
    return outcome.value


def test_create_then_get_returns_same_record(repository: TaskRepository) -> None:
    task = _create(repository, title="Write docs", description="API reference", priority="high")
    assert repository.get(task.id) == Ok(task)
    assert task.title == "Write docs"
    assert task.description == "API reference"
    assert task.priority is Priority.HIGH
    assert task.completed is False


def test_create_trims_title(repository: TaskRepository) -> None:
    task = _create(repository, title="  padded  ")
    assert task.title == "padded"


@pytest.mark.parametrize("title", ["", "   ", "\t\n", None])
def test_create_rejects_blank_title(repository: TaskRepository, title) -> None:
    outcome = repository.create({"title": title, "description": ""})
    assert outcome == Invalid(TITLE_REQUIRED, "title")
    assert len(repository) == 0


def test_create_rejects_missing_title(repository: TaskRepository) -> None:
    assert repository.create({"description": "no title"}) == Invalid(TITLE_REQUIRED, "title")


def test_create_rejects_unknown_priority(repository: TaskRepository) -> None:
    outcome = repository.create({"title": "Ship it", "priority": "urgent"})
    assert outcome == Invalid(PRIORITY_INVALID, "priority")
    assert "low, medium, high" in outcome.message


def test_create_rejects_non_string_description(repository: TaskRepository) -> None:
    outcome = repository.create({"title": "Ship it", "description": 42})
    assert outcome == Invalid(DESCRIPTION_INVALID, "description")


@pytest.mark.parametrize("fields", [{}, {"priority": ""}, {"priority": None}])
def test_create_defaults_priority_to_medium(repository: TaskRepository, fields) -> None:
    task = _create(repository, **fields)
    assert task.priority is Priority.MEDIUM


def test_create_defaults_description_to_empty(repository: TaskRepository) -> None:
    outcome = repository.create({"title": "Only a title"})
    assert isinstance(outcome, Ok)
    assert outcome.value.description == ""


def test_ids_are_unique_and_increasing(repository: TaskRepository) -> None:
    ids = [_create(repository).id for _ in range(5)]
    assert ids == ["1", "2", "3", "4", "5"]


def test_seed_takes_first_three_ids(seeded_repository: TaskRepository) -> None:
    assert sorted(task.id for task in seeded_repository.list()) == ["1", "2", "3"]
    assert _create(seeded_repository).id == "4"


def test_seeded_tasks(seeded_repository: TaskRepository) -> None:
    tasks = {task.id: task for task in seeded_repository.list()}
    assert tasks["1"].title == "Complete the project setup"
    assert tasks["2"].completed is True
    assert tasks["3"].priority is Priority.HIGH
    assert tasks["2"].created_at < tasks["1"].created_at


def test_get_missing(repository: TaskRepository) -> None:
    assert repository.get("999") == NotFound("999")


def test_update_missing(repository: TaskRepository) -> None:
    assert repository.update("999", {"title": "x"}) == NotFound("999")


def test_update_with_no_fields_is_noop(repository: TaskRepository) -> None:
    task = _create(repository, title="Keep me", description="same", priority="low")
    assert repository.update(task.id, {}) == Ok(task)
    assert repository.get(task.id) == Ok(task)


def test_update_merges_only_supplied_fields(repository: TaskRepository) -> None:
    task = _create(repository, title="Old", description="desc", priority="low")
    outcome = repository.update(task.id, {"title": "  New  "})
    assert isinstance(outcome, Ok)
    updated = outcome.value
    assert updated.title == "New"
    assert updated.description == "desc"
    assert updated.priority is Priority.LOW
    assert updated.id == task.id
    assert updated.created_at == task.created_at


def test_update_keeps_completion(repository: TaskRepository) -> None:
    task = _create(repository)
    repository.toggle_completion(task.id)
    outcome = repository.update(task.id, {"priority": "high"})
    assert isinstance(outcome, Ok)
    assert outcome.value.completed is True


def test_update_allows_empty_description(repository: TaskRepository) -> None:
    task = _create(repository, description="something")
    outcome = repository.update(task.id, {"description": ""})
    assert isinstance(outcome, Ok)
    assert outcome.value.description == ""


@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ({"title": "   "}, TITLE_REQUIRED),
        ({"priority": "urgent"}, PRIORITY_INVALID),
        ({"priority": ""}, PRIORITY_INVALID),
        ({"description": ["not", "text"]}, DESCRIPTION_INVALID),
    ],
)
def test_update_rejects_invalid_fields(repository: TaskRepository, fields, message) -> None:
    task = _create(repository, title="Stable")
    outcome = repository.update(task.id, fields)
    assert isinstance(outcome, Invalid)
    assert outcome.message == message
    assert repository.get(task.id) == Ok(task)


def test_toggle_is_an_involution(repository: TaskRepository) -> None:
    task = _create(repository)
    first = repository.toggle_completion(task.id)
    second = repository.toggle_completion(task.id)
    assert isinstance(first, Ok) and first.value.completed is True
    assert isinstance(second, Ok) and second.value == task


def test_toggle_missing(repository: TaskRepository) -> None:
    assert repository.toggle_completion("nope") == NotFound("nope")


def test_delete_twice(repository: TaskRepository) -> None:
    task = _create(repository)
    assert repository.delete(task.id) is True
    assert repository.delete(task.id) is False
    assert task.id not in repository


def test_delete_missing(repository: TaskRepository) -> None:
    assert repository.delete("999") is False


def test_deleted_ids_are_not_reused(repository: TaskRepository) -> None:
    task = _create(repository)
    repository.delete(task.id)
    assert _create(repository).id != task.id


def test_list_is_newest_first(repository: TaskRepository) -> None:
    created = [_create(repository, title=f"Task {n}") for n in range(1, 4)]
    listed = repository.list()
    assert [t.title for t in listed] == ["Task 3", "Task 2", "Task 1"]
    stamps = [t.created_at for t in listed]
    assert all(a > b for a, b in zip(stamps, stamps[1:]))
    assert {t.id for t in listed} == {t.id for t in created}


def test_list_filters_partition_all(seeded_repository: TaskRepository) -> None:
    _create(seeded_repository, title="Extra")
    seeded_repository.toggle_completion("3")

    done = seeded_repository.list(completed=True)
    todo = seeded_repository.list(completed=False)
    everything = seeded_repository.list()

    assert all(t.completed for t in done)
    assert not any(t.completed for t in todo)
    assert not {t.id for t in done} & {t.id for t in todo}
    assert sorted(t.id for t in done + todo) == sorted(t.id for t in everything)


def test_list_returns_fresh_sequence(repository: TaskRepository) -> None:
    _create(repository)
    first = repository.list()
    first.clear()
    assert len(repository.list()) == 1


def test_clear(seeded_repository: TaskRepository) -> None:
    seeded_repository.clear()
    assert seeded_repository.list() == []
    assert _create(seeded_repository).id == "4"


def test_instances_are_isolated() -> None:
    first = TaskRepository()
    second = TaskRepository()
    first.create({"title": "Only in first"})
    assert len(first) == 1
    assert len(second) == 0


def test_concurrent_creates_get_unique_ids(repository: TaskRepository) -> None:
    def worker() -> None:
        for _ in range(50):
            repository.create({"title": "parallel"})

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(repository) == 400
    assert len({task.id for task in repository.list()}) == 400
