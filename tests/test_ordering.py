from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from taskboard.models import TaskStatus
from taskboard.services.ordering import (
    clamp_index,
    move_between,
    move_within,
    order_board,
    order_column,
    renumber,
)

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


@dataclass
class Card:
    position: int
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime = BASE_TIME
    id: UUID = field(default_factory=uuid4)


def column(size: int, status: TaskStatus = TaskStatus.TODO) -> list[Card]:
    return [Card(position=i, status=status, created_at=BASE_TIME + timedelta(minutes=i)) for i in range(size)]


def test_clamp_index_bounds() -> None:
    assert clamp_index(-3, 4) == 0
    assert clamp_index(2, 4) == 2
    assert clamp_index(99, 4) == 4
    assert clamp_index(0, 0) == 0


def test_renumber_heals_gaps_and_duplicates() -> None:
    cards = [Card(position=3), Card(position=3), Card(position=10)]
    result = renumber(cards)
    assert [card.position for card in result] == [0, 1, 2]
    assert result == cards


def test_move_within_moves_last_card_to_front() -> None:
    task0, task1, task2 = column(3)

    result = move_within([task0, task1, task2], task2, 0)

    assert result == [task2, task0, task1]
    assert [card.position for card in result] == [0, 1, 2]


def test_move_within_clamps_index_past_the_end() -> None:
    task0, task1, task2 = column(3)

    result = move_within([task0, task1, task2], task0, 42)

    assert result == [task1, task2, task0]
    assert [card.position for card in result] == [0, 1, 2]


def test_move_between_closes_source_gap_and_opens_destination_slot() -> None:
    todo = column(3)
    moved = todo[1]
    in_progress: list[Card] = []

    source, destination = move_between(todo, in_progress, moved, 0)

    assert source == [todo[0], todo[2]]
    assert [card.position for card in source] == [0, 1]
    assert destination == [moved]
    assert moved.position == 0


def test_move_between_without_index_appends() -> None:
    todo = column(2)
    done = column(2, TaskStatus.DONE)

    _, destination = move_between(todo, done, todo[0])

    assert destination[-1] is todo[0]
    assert [card.position for card in destination] == [0, 1, 2]


def test_move_between_inserts_at_index() -> None:
    todo = column(1)
    done = column(3, TaskStatus.DONE)

    _, destination = move_between(todo, done, todo[0], 1)

    assert destination[1] is todo[0]
    assert [card.position for card in destination] == [0, 1, 2, 3]


def test_order_column_breaks_ties_newest_first() -> None:
    older = Card(position=0, created_at=BASE_TIME)
    newer = Card(position=0, created_at=BASE_TIME + timedelta(seconds=5))
    last = Card(position=1, created_at=BASE_TIME - timedelta(days=1))

    assert order_column([older, last, newer]) == [newer, older, last]


def test_order_board_groups_columns_in_fixed_order() -> None:
    done = Card(position=0, status=TaskStatus.DONE)
    doing = Card(position=0, status=TaskStatus.IN_PROGRESS)
    todo_second = Card(position=1, status=TaskStatus.TODO)
    todo_first = Card(position=0, status=TaskStatus.TODO)

    board = order_board([done, todo_second, doing, todo_first])

    assert board == [todo_first, todo_second, doing, done]


def test_density_holds_after_mixed_sequence() -> None:
    todo = column(4)
    doing: list[Card] = []

    todo = move_within(todo, todo[3], 1)
    todo, doing = move_between(todo, doing, todo[0], 0)
    todo, doing = move_between(todo, doing, todo[-1], 5)
    doing = move_within(doing, doing[1], 0)
    todo = renumber(card for card in todo if card is not todo[0])

    assert sorted(card.position for card in todo) == list(range(len(todo)))
    assert sorted(card.position for card in doing) == list(range(len(doing)))
