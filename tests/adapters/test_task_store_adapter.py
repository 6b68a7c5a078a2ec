"""Tests for the TinyDB task store and analytics adapters."""

from __future__ import annotations

import asyncio
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from tinydb import TinyDB

from dobot_engine.adapters import task_store
from dobot_engine.adapters.task_store import AnalyticsAdapter, TaskStoreAdapter
from dobot_engine.core.exceptions import (
    TaskNotFoundError,
    TaskValidationError,
    UserNotFoundError,
)
from dobot_engine.core.models import TaskStatus
from dobot_engine.services.response_synthesizer import blocked_tasks_reply


@pytest.fixture(name="temp_task_db")
def _temp_task_db(tmp_path: Path):
    """Provide a temporary TinyDB instance for a single test."""
    db = TinyDB(tmp_path / "tasks.json")
    yield db
    db.close()


@pytest.fixture(name="store")
def _store(temp_task_db: TinyDB) -> TaskStoreAdapter:
    return TaskStoreAdapter(temp_task_db)


def test_create_and_get_roundtrip(store: TaskStoreAdapter) -> None:
    """Created tasks come back with ids, trimmed titles and assignees."""
    ana = asyncio.run(store.add_user("Ana", "ana@example.com"))
    created = asyncio.run(
        store.create("  Revisar código ", "Revisión semanal", TaskStatus.IN_PROGRESS, [ana.id])
    )

    fetched = asyncio.run(store.get(created.id))
    assert fetched.title == "Revisar código"
    assert fetched.description == "Revisión semanal"
    assert fetched.status is TaskStatus.IN_PROGRESS
    assert fetched.assignee_names() == ["Ana"]
    assert fetched.assignments[0].user_id == ana.id
    assert fetched.created_at.tzinfo is not None


def test_blank_title_rejected(store: TaskStoreAdapter) -> None:
    """Whitespace-only titles never reach the table."""
    with pytest.raises(TaskValidationError):
        asyncio.run(store.create("   "))
    assert asyncio.run(store.list_tasks()) == []


def test_unknown_user_rejected(store: TaskStoreAdapter) -> None:
    """Assigning a user that does not exist fails without storing the task."""
    with pytest.raises(UserNotFoundError):
        asyncio.run(store.create("Deploy", user_ids=[42]))
    assert asyncio.run(store.list_tasks()) == []


def test_missing_task_raises(store: TaskStoreAdapter) -> None:
    """Lookups, updates and deletes of unknown ids raise TaskNotFoundError."""
    with pytest.raises(TaskNotFoundError):
        asyncio.run(store.get(99))
    with pytest.raises(TaskNotFoundError):
        asyncio.run(store.update(99, title="x"))
    with pytest.raises(TaskNotFoundError):
        asyncio.run(store.delete(99))


def test_update_changes_only_given_fields(store: TaskStoreAdapter) -> None:
    """Partial updates keep untouched fields and existing assignment ids."""
    ana = asyncio.run(store.add_user("Ana"))
    carlos = asyncio.run(store.add_user("Carlos"))
    task = asyncio.run(store.create("Deploy", "v1", user_ids=[ana.id]))
    original_assignment = task.assignments[0].id

    updated = asyncio.run(
        store.update(task.id, status=TaskStatus.BLOCKED, user_ids=[ana.id, carlos.id])
    )

    assert updated.title == "Deploy"
    assert updated.description == "v1"
    assert updated.status is TaskStatus.BLOCKED
    assert updated.assignee_names() == ["Ana", "Carlos"]
    assert updated.assignments[0].id == original_assignment
    assert updated.assignments[1].id != original_assignment


def test_delete_removes_task(store: TaskStoreAdapter) -> None:
    """Deleted tasks disappear from listings."""
    first = asyncio.run(store.create("Uno"))
    second = asyncio.run(store.create("Dos"))

    asyncio.run(store.delete(first.id))

    assert [task.id for task in asyncio.run(store.list_tasks())] == [second.id]


def test_users_listed_in_id_order(store: TaskStoreAdapter) -> None:
    """Users come back in insertion order and blank names are rejected."""
    asyncio.run(store.add_user("Roberto"))
    asyncio.run(store.add_user(" Ana "))
    with pytest.raises(TaskValidationError):
        asyncio.run(store.add_user(" "))

    assert [user.name for user in asyncio.run(store.list_users())] == ["Roberto", "Ana"]


def test_analytics_summary_from_store(store: TaskStoreAdapter) -> None:
    """The aggregator folds the stored board into a consistent summary."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    asyncio.run(store.create("A", status=TaskStatus.CREATED, created_at=base))
    asyncio.run(store.create("B", status=TaskStatus.BLOCKED, created_at=base))
    for offset in range(7):
        asyncio.run(
            store.create(
                f"Hecha {offset}",
                status=TaskStatus.COMPLETED,
                created_at=base + timedelta(days=offset),
            )
        )

    summary = asyncio.run(AnalyticsAdapter(store, recent_limit=5).get_tasks_summary())

    assert summary.total == 9
    assert summary.by_status == {"Created": 1, "Blocked": 1, "Completed": 7}
    assert [task.title for task in summary.blocked] == ["B"]
    assert [task.title for task in summary.recently_completed] == [
        "Hecha 6",
        "Hecha 5",
        "Hecha 4",
        "Hecha 3",
        "Hecha 2",
    ]


def test_analytics_user_stats_counts_active_assignments(store: TaskStoreAdapter) -> None:
    """Completed and cancelled tasks do not count towards a user's load."""
    ana = asyncio.run(store.add_user("Ana"))
    carlos = asyncio.run(store.add_user("Carlos"))
    asyncio.run(store.add_user("Luis"))
    asyncio.run(store.create("1", status=TaskStatus.IN_PROGRESS, user_ids=[ana.id]))
    asyncio.run(store.create("2", status=TaskStatus.BLOCKED, user_ids=[ana.id, carlos.id]))
    asyncio.run(store.create("3", status=TaskStatus.COMPLETED, user_ids=[carlos.id]))
    asyncio.run(store.create("4", status=TaskStatus.CANCELLED, user_ids=[carlos.id]))

    stats = asyncio.run(AnalyticsAdapter(store).get_user_stats())

    assert stats.total_users == 3
    assert stats.tasks_per_user == {"Ana": 2, "Carlos": 1, "Luis": 0}
    assert stats.most_busy_user == "Ana"


def test_default_database_lives_under_data_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without an injected database the adapter opens the configured file."""
    monkeypatch.setattr(task_store, "_db", None)
    monkeypatch.setattr(task_store.config, "DATA_DIR", tmp_path / "data")

    store = TaskStoreAdapter()
    asyncio.run(store.create("Persistida"))

    assert (tmp_path / "data" / task_store.config.TASK_DB_FILENAME).exists()
    task_store.get_task_db().close()


def test_descriptions_are_trimmed_and_blank_dropped(store: TaskStoreAdapter) -> None:
    """Whitespace around descriptions is stripped and blank ones are stored as None."""
    padded = asyncio.run(store.create("Uno", "  Revisar logs  "))
    blank = asyncio.run(store.create("Dos", "   "))

    assert padded.description == "Revisar logs"
    assert blank.description is None

    cleared = asyncio.run(store.update(padded.id, description=" \t"))
    assert cleared.description is None
    assert asyncio.run(store.get(padded.id)).title == "Uno"


def test_blank_description_not_listed_in_blocked_report(store: TaskStoreAdapter) -> None:
    """A blank description never produces an empty detail line."""
    asyncio.run(store.create("Bloqueada", "   ", TaskStatus.BLOCKED))

    summary = asyncio.run(AnalyticsAdapter(store).get_tasks_summary())
    reply = blocked_tasks_reply(summary.blocked)

    assert "📝" not in reply.text


def test_store_calls_run_off_the_event_loop(
    store: TaskStoreAdapter, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Blocking TinyDB work happens in a worker thread, not on the loop thread."""
    loop_threads: list[int] = []
    db_threads: list[int] = []
    original = store._list_tasks  # pylint: disable=protected-access

    def _recording_list_tasks():  # type: ignore[no-untyped-def]
        db_threads.append(threading.get_ident())
        return original()

    monkeypatch.setattr(store, "_list_tasks", _recording_list_tasks)

    async def _exercise() -> None:
        loop_threads.append(threading.get_ident())
        await asyncio.gather(store.list_tasks(), store.list_tasks())

    asyncio.run(_exercise())

    assert len(db_threads) == 2
    assert loop_threads[0] not in db_threads
