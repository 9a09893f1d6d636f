"""Dense per-column task ordering.

Every ``(project_id, status)`` column keeps its positions as ``0..n-1``. The
pure helpers compute new orders on plain lists; :class:`TaskOrderingEngine`
reads columns through the session, applies the helpers and flushes the result
inside the caller's transaction so a renumber is all-or-nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Protocol, TypeVar
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Task, TaskStatus
from ..repositories import TaskRepository

BOARD_ORDER: tuple[TaskStatus, ...] = (TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE)


class Positioned(Protocol):
    id: UUID
    position: int


class Orderable(Positioned, Protocol):
    status: TaskStatus
    created_at: datetime


PositionedT = TypeVar("PositionedT", bound=Positioned)
OrderableT = TypeVar("OrderableT", bound=Orderable)


def clamp_index(index: int, length: int) -> int:
    """Clamp ``index`` into the insertable range ``[0, length]``."""

    return max(0, min(index, length))


def renumber(items: Iterable[PositionedT]) -> list[PositionedT]:
    """Assign ``position = index`` in the given order and return the items."""

    ordered = list(items)
    for index, item in enumerate(ordered):
        if item.position != index:
            item.position = index
    return ordered


def _without(items: Iterable[PositionedT], item: Positioned) -> list[PositionedT]:
    return [candidate for candidate in items if candidate.id != item.id]


def move_within(column: Sequence[PositionedT], item: PositionedT, index: int) -> list[PositionedT]:
    """Return ``column`` with ``item`` moved to ``index``, renumbered."""

    remaining = _without(column, item)
    remaining.insert(clamp_index(index, len(remaining)), item)
    return renumber(remaining)


def move_between(
    source: Sequence[PositionedT],
    destination: Sequence[PositionedT],
    item: PositionedT,
    index: int | None = None,
) -> tuple[list[PositionedT], list[PositionedT]]:
    """Take ``item`` out of ``source`` and insert it into ``destination`` at ``index``.

    ``index=None`` appends. Both columns come back renumbered.
    """

    remaining_source = _without(source, item)
    target = _without(destination, item)
    position = len(target) if index is None else clamp_index(index, len(target))
    target.insert(position, item)
    return renumber(remaining_source), renumber(target)


def order_column(items: Iterable[OrderableT]) -> list[OrderableT]:
    """Sort one column by position ascending, newest first on ties."""

    newest_first = sorted(items, key=lambda item: item.created_at, reverse=True)
    return sorted(newest_first, key=lambda item: item.position)


def order_board(items: Iterable[OrderableT]) -> list[OrderableT]:
    """Order a whole board: TODO, then IN_PROGRESS, then DONE, each by column order."""

    columns: dict[TaskStatus, list[OrderableT]] = {status: [] for status in BOARD_ORDER}
    for item in items:
        columns[TaskStatus(item.status)].append(item)
    board: list[OrderableT] = []
    for status in BOARD_ORDER:
        board.extend(order_column(columns[status]))
    return board


class TaskOrderingEngine:
    """Store-backed column maintenance; callers own the transaction and the project lock."""

    async def append_position(self, session: AsyncSession, project_id: UUID, status: TaskStatus) -> int:
        """Position for a task appended to the end of a column."""

        return await TaskRepository(session).count_column(project_id, status)

    async def place(
        self,
        session: AsyncSession,
        task: Task,
        *,
        status: TaskStatus,
        index: int | None = None,
    ) -> Task:
        """Move ``task`` to ``status`` at ``index`` and renumber every touched column.

        Within the same column ``index=None`` keeps the current slot (and heals gaps);
        across columns it appends to the destination.
        """

        tasks = TaskRepository(session)
        source_status = TaskStatus(task.status)
        if status == source_status:
            column = await tasks.list_column(task.project_id, status)
            current = next((i for i, candidate in enumerate(column) if candidate.id == task.id), len(column))
            move_within(column, task, current if index is None else index)
        else:
            source = await tasks.list_column(task.project_id, source_status)
            destination = await tasks.list_column(task.project_id, status)
            task.status = status
            move_between(source, destination, task, index)
        await session.flush()
        return task

    async def close_gap(self, session: AsyncSession, task: Task) -> list[Task]:
        """Renumber the column ``task`` was removed from."""

        column = await TaskRepository(session).list_column(task.project_id, TaskStatus(task.status))
        remaining = renumber(_without(column, task))
        await session.flush()
        return remaining


__all__ = [
    "BOARD_ORDER",
    "TaskOrderingEngine",
    "clamp_index",
    "move_between",
    "move_within",
    "order_board",
    "order_column",
    "renumber",
]
