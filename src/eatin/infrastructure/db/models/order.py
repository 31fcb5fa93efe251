from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from eatin.infrastructure.db.models.base import Base


class EatInOrderModel(Base):
    __tablename__ = "eat_in_orders"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    order_table_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("order_tables.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    order_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (Index("ix_eat_in_orders_table_status", "order_table_id", "status"),)
