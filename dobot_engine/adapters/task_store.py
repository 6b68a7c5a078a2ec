"""Task store adapters implementing the TinyDB-backed ports.

Provides TinyDB database wiring plus the task directory (tasks, users,
assignments) and the analytics aggregator that reads from the same file.
"""

from __future__ import annotations

import asyncio
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, TypeVar, cast

from tinydb import TinyDB
from tinydb.table import Document

from dobot_engine.core.config import config
from dobot_engine.core.exceptions import (
    TaskNotFoundError,
    TaskValidationError,
    UserNotFoundError,
)
from dobot_engine.core.logging import get_logger
from dobot_engine.core.models import (
    Task,
    TaskAssignment,
    TaskStatus,
    TaskSummary,
    User,
    UserStats,
)
from dobot_engine.core.ports import AnalyticsPort, TaskDirectoryPort
from dobot_engine.services.analytics import summarize_tasks, summarize_users

logger = get_logger(__name__)

TASKS_TABLE = "tasks"
USERS_TABLE = "users"
COUNTERS_TABLE = "counters"

R = TypeVar("R")

_db: Optional[TinyDB] = None
_db_lock = threading.Lock()


def get_task_db() -> TinyDB:
    """Return the process-wide TinyDB instance, creating it on first use."""
    global _db  # pylint: disable=global-statement
    with _db_lock:
        if _db is None:
            data_dir = Path(getattr(config, "DATA_DIR", Path("data")))
            data_dir.mkdir(parents=True, exist_ok=True)
            _db = TinyDB(str(data_dir / config.TASK_DB_FILENAME))
        return _db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStoreAdapter(TaskDirectoryPort):
    """Concrete task directory persisting tasks and users in TinyDB.

    TinyDB is synchronous and not thread-safe, so every operation runs in a
    worker thread while holding one store-wide lock.
    """

    def __init__(self, db: TinyDB | None = None) -> None:
        self._db = db
        self._lock = threading.Lock()

    @property
    def db(self) -> TinyDB:
        return self._db if self._db is not None else get_task_db()

    # -- helpers -----------------------------------------------------------------

    def _next_assignment_id(self) -> int:
        counters = self.db.table(COUNTERS_TABLE)
        doc = counters.get(doc_id=1)
        if doc is None:
            counters.insert(Document({"assignment": 1}, doc_id=1))
            return 1
        next_id = int(cast(Dict[str, Any], doc).get("assignment", 0)) + 1
        counters.update({"assignment": next_id}, doc_ids=[1])
        return next_id

    def _user_docs(self) -> dict[int, Dict[str, Any]]:
        return {doc.doc_id: dict(doc) for doc in self.db.table(USERS_TABLE).all()}

    def _to_user(self, user_id: int, doc: Dict[str, Any]) -> User:
        return User(id=user_id, name=doc["name"], email=doc.get("email"))

    def _to_task(self, doc: Document, users: dict[int, Dict[str, Any]]) -> Task:
        assignments = []
        for raw in doc.get("assignments", []):
            user_doc = users.get(raw["user_id"])
            if user_doc is None:
                continue
            assignments.append(
                TaskAssignment(
                    id=raw["id"],
                    user_id=raw["user_id"],
                    assigned_at=datetime.fromisoformat(raw["assigned_at"]),
                    user=self._to_user(raw["user_id"], user_doc),
                )
            )
        return Task(
            id=doc.doc_id,
            title=doc["title"],
            description=doc.get("description"),
            status=TaskStatus(doc["status"]),
            created_at=datetime.fromisoformat(doc["created_at"]),
            assignments=assignments,
        )

    def _build_assignments(
        self, user_ids: Sequence[int], existing: Sequence[Dict[str, Any]] = ()
    ) -> list[Dict[str, Any]]:
        users = self._user_docs()
        missing = [uid for uid in user_ids if uid not in users]
        if missing:
            raise UserNotFoundError(f"Unknown user ids: {', '.join(map(str, missing))}")
        kept = {raw["user_id"]: raw for raw in existing}
        assignments: list[Dict[str, Any]] = []
        for uid in dict.fromkeys(user_ids):
            if uid in kept:
                assignments.append(kept[uid])
                continue
            assignments.append(
                {
                    "id": self._next_assignment_id(),
                    "user_id": uid,
                    "assigned_at": _utcnow().isoformat(),
                }
            )
        return assignments

    @staticmethod
    def _clean_title(title: str) -> str:
        cleaned = title.strip()
        if not cleaned:
            raise TaskValidationError("Task title must not be empty")
        return cleaned

    @staticmethod
    def _clean_description(description: str | None) -> str | None:
        if description is None:
            return None
        return description.strip() or None

    def _get_doc(self, task_id: int) -> Document:
        doc = self.db.table(TASKS_TABLE).get(doc_id=task_id)
        if doc is None:
            raise TaskNotFoundError(f"Task {task_id} not found")
        return cast(Document, doc)

    def _read_task(self, task_id: int) -> Task:
        return self._to_task(self._get_doc(task_id), self._user_docs())

    def _locked(self, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        with self._lock:
            return func(*args, **kwargs)

    async def _run(self, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Run a blocking TinyDB call under the store lock, off the event loop."""
        return await asyncio.to_thread(self._locked, func, *args, **kwargs)

    # -- blocking operations -----------------------------------------------------

    def _create(
        self,
        title: str,
        description: str | None,
        status: TaskStatus,
        user_ids: Sequence[int],
        created_at: datetime | None,
    ) -> Task:
        cleaned = self._clean_title(title)
        assignments = self._build_assignments(user_ids)
        task_id = self.db.table(TASKS_TABLE).insert(
            {
                "title": cleaned,
                "description": self._clean_description(description),
                "status": TaskStatus(status).value,
                "created_at": (created_at or _utcnow()).isoformat(),
                "assignments": assignments,
            }
        )
        logger.info("Stored task %s with status %s", task_id, TaskStatus(status).value)
        return self._read_task(task_id)

    def _list_tasks(self) -> list[Task]:
        users = self._user_docs()
        docs = sorted(self.db.table(TASKS_TABLE).all(), key=lambda doc: doc.doc_id)
        return [self._to_task(doc, users) for doc in docs]

    def _update(
        self, task_id: int, changes: Dict[str, Any], user_ids: Sequence[int] | None
    ) -> Task:
        doc = self._get_doc(task_id)
        if "title" in changes:
            changes["title"] = self._clean_title(changes["title"])
        if user_ids is not None:
            changes["assignments"] = self._build_assignments(user_ids, doc.get("assignments", []))
        if changes:
            self.db.table(TASKS_TABLE).update(changes, doc_ids=[task_id])
        return self._read_task(task_id)

    def _delete(self, task_id: int) -> None:
        self._get_doc(task_id)
        self.db.table(TASKS_TABLE).remove(doc_ids=[task_id])
        logger.info("Deleted task %s", task_id)

    def _add_user(self, name: str, email: str | None) -> User:
        cleaned = name.strip()
        if not cleaned:
            raise TaskValidationError("User name must not be empty")
        user_id = self.db.table(USERS_TABLE).insert({"name": cleaned, "email": email})
        return User(id=user_id, name=cleaned, email=email)

    def _list_users(self) -> list[User]:
        users = self._user_docs()
        return [self._to_user(uid, users[uid]) for uid in sorted(users)]

    # -- TaskDirectoryPort -------------------------------------------------------

    async def create(
        self,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.CREATED,
        user_ids: Sequence[int] = (),
        *,
        created_at: datetime | None = None,
    ) -> Task:
        return await self._run(self._create, title, description, status, user_ids, created_at)

    async def get(self, task_id: int) -> Task:
        return await self._run(self._read_task, task_id)

    async def list_tasks(self) -> list[Task]:
        return await self._run(self._list_tasks)

    async def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
        user_ids: Sequence[int] | None = None,
    ) -> Task:
        changes: Dict[str, Any] = {}
        if title is not None:
            changes["title"] = title
        if description is not None:
            changes["description"] = self._clean_description(description)
        if status is not None:
            changes["status"] = TaskStatus(status).value
        return await self._run(self._update, task_id, changes, user_ids)

    async def delete(self, task_id: int) -> None:
        await self._run(self._delete, task_id)

    async def add_user(self, name: str, email: str | None = None) -> User:
        return await self._run(self._add_user, name, email)

    async def list_users(self) -> list[User]:
        return await self._run(self._list_users)


class AnalyticsAdapter(AnalyticsPort):
    """Aggregator computing summaries on demand from the task store; nothing is cached."""

    def __init__(self, store: TaskStoreAdapter, recent_limit: int | None = None) -> None:
        self._store = store
        self._recent_limit = (
            recent_limit if recent_limit is not None else config.RECENTLY_COMPLETED_LIMIT
        )

    async def get_tasks_summary(self) -> TaskSummary:
        tasks = await self._store.list_tasks()
        return summarize_tasks(tasks, self._recent_limit)

    async def get_user_stats(self) -> UserStats:
        users = await self._store.list_users()
        tasks = await self._store.list_tasks()
        return summarize_users(users, tasks)


__all__ = [
    "TaskStoreAdapter",
    "AnalyticsAdapter",
    "get_task_db",
    "TASKS_TABLE",
    "USERS_TABLE",
]
