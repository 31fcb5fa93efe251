from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from eatin.application.ports.repositories import OrderTableRepository
from eatin.domain.common.ids import OrderTableId
from eatin.domain.order_table.entities import OrderTable
from eatin.infrastructure.db.models.order_table import OrderTableModel
from eatin.infrastructure.db.session import get_engine


class SqlAlchemyOrderTableRepository(OrderTableRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def save(self, order_table: OrderTable) -> OrderTable:
        with Session(self._engine) as session:
            model = session.get(OrderTableModel, str(order_table.order_table_id))
            if model is None:
                session.add(
                    OrderTableModel(
                        id=str(order_table.order_table_id),
                        name=order_table.name,
                        number_of_guests=order_table.number_of_guests,
                        occupied=order_table.occupied,
                        created_at=datetime.now(timezone.utc),
                    )
                )
            else:
                model.name = order_table.name
                model.number_of_guests = order_table.number_of_guests
                model.occupied = order_table.occupied
            session.commit()
        return order_table

    def find_by_id(self, order_table_id: OrderTableId) -> OrderTable | None:
        with Session(self._engine) as session:
            model = session.get(OrderTableModel, str(order_table_id))
            if model is None:
                return None
            return self._to_domain(model)

    def find_all(self) -> list[OrderTable]:
        statement = select(OrderTableModel).order_by(
            OrderTableModel.created_at.asc(),
            OrderTableModel.id.asc(),
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
            return [self._to_domain(model) for model in models]

    def _to_domain(self, model: OrderTableModel) -> OrderTable:
        return OrderTable(
            order_table_id=OrderTableId(model.id),
            name=model.name,
            number_of_guests=model.number_of_guests,
            occupied=model.occupied,
        )
