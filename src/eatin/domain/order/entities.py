from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from eatin.domain.common.ids import OrderId, OrderTableId


class OrderStatus(str, Enum):
    WAITING = "WAITING"
    ACCEPTED = "ACCEPTED"
    SERVED = "SERVED"
    COMPLETED = "COMPLETED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_ORDER_STATUSES


TERMINAL_ORDER_STATUSES: frozenset[OrderStatus] = frozenset({OrderStatus.COMPLETED})


@dataclass(frozen=True)
class EatInOrder:
    """Read model of an eat-in order, as far as table occupancy cares."""

    order_id: OrderId
    order_table_id: OrderTableId
    status: OrderStatus
    ordered_at: datetime

    @property
    def is_open(self) -> bool:
        return not self.status.is_terminal
