from __future__ import annotations

from typing import Protocol

from eatin.domain.common.ids import OrderTableId
from eatin.domain.order_table.entities import OrderTable


class OrderTableRepository(Protocol):
    def save(self, order_table: OrderTable) -> OrderTable: ...

    def find_by_id(self, order_table_id: OrderTableId) -> OrderTable | None: ...

    def find_all(self) -> list[OrderTable]: ...


class OrderLookup(Protocol):
    def has_open_order(self, order_table_id: OrderTableId) -> bool: ...
