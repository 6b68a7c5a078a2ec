"""Pure aggregation folds used to build task summaries and user workload stats.

Every fold preserves the iteration order of its input: status counts appear
in the order each status is first seen, and per-user counts in the order the
users are listed. Store adapters list rows in insertion order, so the status
report and the workload table are stable across calls.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from dobot_engine.core.models import Task, TaskStatus, TaskSummary, User, UserStats


def count_by_status(tasks: Iterable[Task]) -> dict[str, int]:
    """Fold ``tasks`` into a status -> count mapping in first-seen order."""
    counts: dict[str, int] = {}
    for task in tasks:
        key = task.status.value
        counts[key] = counts.get(key, 0) + 1
    return counts


def recently_completed(tasks: Iterable[Task], limit: int = 5) -> list[Task]:
    """Return up to ``limit`` completed tasks, newest ``created_at`` first."""
    completed = [task for task in tasks if task.status is TaskStatus.COMPLETED]
    completed.sort(key=lambda task: task.created_at, reverse=True)
    return completed[:limit]


def count_active_assignments(users: Sequence[User], tasks: Iterable[Task]) -> dict[str, int]:
    """Map each user's name to the number of active tasks assigned to them.

    Users without active work are kept with a zero count. Assignments to users
    missing from ``users`` are ignored, and two users sharing a display name
    share a single entry.
    """
    counts: dict[str, int] = {user.name: 0 for user in users}
    names_by_id = {user.id: user.name for user in users}
    for task in tasks:
        if not task.is_active():
            continue
        for assignment in task.assignments:
            name = names_by_id.get(assignment.user_id)
            if name is not None:
                counts[name] += 1
    return counts


def pick_most_busy_user(tasks_per_user: Mapping[str, int]) -> str | None:
    """Return the name with the highest count; ties go to the lexically first name."""
    if not tasks_per_user:
        return None
    return min(tasks_per_user.items(), key=lambda item: (-item[1], item[0]))[0]


def rank_users_by_workload(tasks_per_user: Mapping[str, int]) -> list[tuple[str, int]]:
    """Order ``(name, count)`` pairs by count descending, then name ascending."""
    return sorted(tasks_per_user.items(), key=lambda item: (-item[1], item[0]))


def summarize_tasks(tasks: Sequence[Task], recent_limit: int = 5) -> TaskSummary:
    """Build the task summary the analytics aggregator reports."""
    return TaskSummary(
        total=len(tasks),
        by_status=count_by_status(tasks),
        blocked=[task for task in tasks if task.status is TaskStatus.BLOCKED],
        recently_completed=recently_completed(tasks, recent_limit),
    )


def summarize_users(users: Sequence[User], tasks: Sequence[Task]) -> UserStats:
    """Build the per-user workload stats the analytics aggregator reports."""
    tasks_per_user = count_active_assignments(users, tasks)
    return UserStats(
        total_users=len(users),
        tasks_per_user=tasks_per_user,
        most_busy_user=pick_most_busy_user(tasks_per_user),
    )


__all__ = [
    "count_by_status",
    "recently_completed",
    "count_active_assignments",
    "pick_most_busy_user",
    "rank_users_by_workload",
    "summarize_tasks",
    "summarize_users",
]
