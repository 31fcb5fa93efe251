from __future__ import annotations

from eatin.application.dto.responses import OrderTableResponse
from eatin.domain.order_table.entities import OrderTable


def to_order_table_response(order_table: OrderTable) -> OrderTableResponse:
    return OrderTableResponse(
        id=str(order_table.order_table_id),
        name=order_table.name,
        numberOfGuests=order_table.number_of_guests,
        occupied=order_table.occupied,
    )
