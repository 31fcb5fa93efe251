from __future__ import annotations

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from eatin.application.ports.repositories import OrderLookup
from eatin.domain.common.ids import OrderTableId
from eatin.domain.order.entities import TERMINAL_ORDER_STATUSES
from eatin.infrastructure.db.models.order import EatInOrderModel
from eatin.infrastructure.db.session import get_engine


class SqlAlchemyOrderLookup(OrderLookup):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def has_open_order(self, order_table_id: OrderTableId) -> bool:
        terminal = [status.value for status in TERMINAL_ORDER_STATUSES]
        statement = (
            select(EatInOrderModel.id)
            .where(
                EatInOrderModel.order_table_id == str(order_table_id),
                EatInOrderModel.status.not_in(terminal),
            )
            .limit(1)
        )
        with Session(self._engine) as session:
            value = session.execute(statement).scalar_one_or_none()
        return value is not None
