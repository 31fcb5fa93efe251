from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from eatin.domain.order_table.entities import OrderTable

ORDER_TABLE_EVENTS_CHANNEL = "events:order-tables"


def _serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    payload: dict[str, Any],
    trace_id: str | None,
    request_id: str | None,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": request_id,
        "trace_id": trace_id,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def serialize_order_table_event(
    *,
    event_type: str,
    occurred_at: datetime,
    order_table: OrderTable,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    return _serialize_event(
        event_type=event_type,
        occurred_at=occurred_at,
        trace_id=trace_id,
        request_id=request_id,
        payload={
            "orderTableId": str(order_table.order_table_id),
            "name": order_table.name,
            "numberOfGuests": order_table.number_of_guests,
            "occupied": order_table.occupied,
        },
    )
