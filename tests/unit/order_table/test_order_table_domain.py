from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from eatin.domain.common.ids import OrderTableId
from eatin.domain.order_table.entities import (
    InvalidNumberOfGuestsError,
    OrderTable,
    OrderTableEmptyError,
    create_empty_order_table,
)


def _table(occupied: bool, number_of_guests: int) -> OrderTable:
    return OrderTable(
        order_table_id=OrderTableId("tbl_001"),
        name="1번",
        number_of_guests=number_of_guests,
        occupied=occupied,
    )


def test_create_empty_order_table_starts_empty() -> None:
    table = create_empty_order_table(OrderTableId("tbl_001"), "1번")

    assert table.occupied is False
    assert table.number_of_guests == 0
    assert table.name == "1번"


@pytest.mark.parametrize("name", ["", "   "])
def test_order_table_requires_name(name: str) -> None:
    with pytest.raises(ValueError):
        create_empty_order_table(OrderTableId("tbl_001"), name)


def test_empty_table_cannot_hold_guests() -> None:
    with pytest.raises(ValueError):
        _table(occupied=False, number_of_guests=3)


def test_negative_guests_rejected_on_construction() -> None:
    with pytest.raises(ValueError):
        _table(occupied=True, number_of_guests=-1)


def test_sit_marks_table_occupied() -> None:
    seated = _table(occupied=False, number_of_guests=0).sit()

    assert seated.occupied is True
    assert seated.number_of_guests == 0


def test_sit_on_occupied_table_keeps_guest_count() -> None:
    table = _table(occupied=True, number_of_guests=4)

    assert table.sit() is table


def test_clear_resets_guests_and_occupancy() -> None:
    cleared = _table(occupied=True, number_of_guests=4).clear()

    assert cleared.occupied is False
    assert cleared.number_of_guests == 0


def test_clear_on_empty_table_is_noop() -> None:
    table = _table(occupied=False, number_of_guests=0)

    assert table.clear() is table


def test_change_number_of_guests_on_occupied_table() -> None:
    changed = _table(occupied=True, number_of_guests=0).change_number_of_guests(4)

    assert changed.number_of_guests == 4
    assert changed.occupied is True


def test_change_number_of_guests_rejects_empty_table() -> None:
    with pytest.raises(OrderTableEmptyError):
        _table(occupied=False, number_of_guests=0).change_number_of_guests(4)


@pytest.mark.parametrize("value", [-1, True, 2.5])
def test_change_number_of_guests_rejects_invalid_count(value: object) -> None:
    with pytest.raises(InvalidNumberOfGuestsError):
        _table(occupied=True, number_of_guests=0).change_number_of_guests(value)  # type: ignore[arg-type]
