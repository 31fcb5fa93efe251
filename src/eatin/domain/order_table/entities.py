from __future__ import annotations

from dataclasses import dataclass, replace

from eatin.domain.common.ids import OrderTableId


@dataclass(frozen=True)
class OrderTable:
    order_table_id: OrderTableId
    name: str
    number_of_guests: int
    occupied: bool

    def __post_init__(self) -> None:
        if not is_valid_name(self.name):
            raise ValueError("name must be a non-empty string")
        if self.number_of_guests < 0:
            raise ValueError("number_of_guests must be >= 0")
        if not self.occupied and self.number_of_guests != 0:
            raise ValueError("number_of_guests must be 0 when table is not occupied")

    def sit(self) -> OrderTable:
        if self.occupied:
            return self
        return replace(self, occupied=True)

    def clear(self) -> OrderTable:
        if not self.occupied and self.number_of_guests == 0:
            return self
        return replace(self, number_of_guests=0, occupied=False)

    def change_number_of_guests(self, number_of_guests: int) -> OrderTable:
        if not is_valid_number_of_guests(number_of_guests):
            raise InvalidNumberOfGuestsError(
                f"number of guests must be a non-negative integer, got {number_of_guests!r}"
            )
        self.ensure_occupied()
        return replace(self, number_of_guests=number_of_guests)

    def ensure_occupied(self) -> None:
        if not self.occupied:
            raise OrderTableEmptyError(f"order table {self.order_table_id} is empty")


def create_empty_order_table(order_table_id: OrderTableId, name: str) -> OrderTable:
    return OrderTable(
        order_table_id=order_table_id,
        name=name,
        number_of_guests=0,
        occupied=False,
    )


def is_valid_name(name: object) -> bool:
    return isinstance(name, str) and bool(name.strip())


def is_valid_number_of_guests(value: object) -> bool:
    # bool is an int subclass; True guests is not a count
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class OrderTableEmptyError(Exception):
    pass


class InvalidNumberOfGuestsError(ValueError):
    pass
