"""Process-local adapters for the order table ports.

Used when no database is configured and by tests. Both are guarded by a lock
so they can be shared between threads.
"""

from __future__ import annotations

import threading

from eatin.application.ports.repositories import OrderLookup, OrderTableRepository
from eatin.domain.common.ids import OrderTableId
from eatin.domain.order.entities import EatInOrder
from eatin.domain.order_table.entities import OrderTable


class InMemoryOrderTableRepository(OrderTableRepository):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tables: dict[str, OrderTable] = {}

    def save(self, order_table: OrderTable) -> OrderTable:
        with self._lock:
            # re-saving keeps the original insertion position
            self._tables[str(order_table.order_table_id)] = order_table
        return order_table

    def find_by_id(self, order_table_id: OrderTableId) -> OrderTable | None:
        with self._lock:
            return self._tables.get(str(order_table_id))

    def find_all(self) -> list[OrderTable]:
        with self._lock:
            return list(self._tables.values())


class InMemoryEatInOrderRepository(OrderLookup):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._orders: dict[str, EatInOrder] = {}

    def add(self, order: EatInOrder) -> EatInOrder:
        with self._lock:
            self._orders[str(order.order_id)] = order
        return order

    def has_open_order(self, order_table_id: OrderTableId) -> bool:
        with self._lock:
            return any(
                order.is_open
                for order in self._orders.values()
                if order.order_table_id == order_table_id
            )
