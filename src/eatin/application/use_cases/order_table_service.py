from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from uuid import uuid4

from opentelemetry import trace
from opentelemetry.trace import Span, Tracer

from eatin.application.errors import ConflictError, NotFoundError, ValidationError
from eatin.application.mappers.event_envelope import (
    ORDER_TABLE_EVENTS_CHANNEL,
    serialize_order_table_event,
)
from eatin.application.metrics.order_table_lifecycle import (
    record_guest_count_changed,
    record_order_table_clear_blocked,
    record_order_table_cleared,
    record_order_table_created,
    record_order_table_seated,
)
from eatin.application.ports.publisher import EventPublisher
from eatin.application.ports.repositories import OrderLookup, OrderTableRepository
from eatin.application.use_cases.context import EMPTY_TRACE_CONTEXT, TraceContext
from eatin.application.use_cases.locks import KeyedLocks
from eatin.domain.common.ids import OrderTableId
from eatin.domain.order_table.entities import (
    OrderTable,
    OrderTableEmptyError,
    create_empty_order_table,
    is_valid_name,
    is_valid_number_of_guests,
)

logger = logging.getLogger(__name__)

HAS_UNCOMPLETED_ORDERS = "HAS_UNCOMPLETED_ORDERS"
ORDER_TABLE_EMPTY = "ORDER_TABLE_EMPTY"

ORDER_TABLE_ID_ATTRIBUTE = "eatin.order_table.id"
NUMBER_OF_GUESTS_ATTRIBUTE = "eatin.order_table.number_of_guests"
CHANGED_ATTRIBUTE = "eatin.order_table.changed"
BLOCKED_REASON_ATTRIBUTE = "eatin.order_table.blocked_reason"


class OrderTableService:
    """Applies the occupancy and guest-count transitions of order tables.

    Every mutating call reads the table, checks the transition and writes the
    result while holding the table's lock from ``locks``. Callers that build a
    service per request must share one ``KeyedLocks`` between them.

    Each transition runs in an ``order_table.<operation>`` span carrying the
    table id and whether anything was written.
    """

    def __init__(
        self,
        order_table_repository: OrderTableRepository,
        order_lookup: OrderLookup,
        publisher: EventPublisher | None = None,
        locks: KeyedLocks | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        self._order_table_repository = order_table_repository
        self._order_lookup = order_lookup
        self._publisher = publisher
        self._locks = locks if locks is not None else KeyedLocks()
        self._tracer = tracer or trace.get_tracer(__name__)

    def create(
        self,
        name: str | None,
        trace_ctx: TraceContext = EMPTY_TRACE_CONTEXT,
    ) -> OrderTable:
        with self._span("create") as span:
            if name is None or not is_valid_name(name):
                raise ValidationError(
                    "order table name must not be empty",
                    code="INVALID_ORDER_TABLE_NAME",
                )

            order_table = create_empty_order_table(
                order_table_id=OrderTableId(f"tbl_{uuid4().hex[:12]}"),
                name=name,
            )
            saved = self._order_table_repository.save(order_table)
            span.set_attribute(ORDER_TABLE_ID_ATTRIBUTE, str(saved.order_table_id))
            span.set_attribute(CHANGED_ATTRIBUTE, True)

        record_order_table_created()
        logger.info("order_table_created", extra={"order_table_id": saved.order_table_id})
        self._publish("order_table.created", saved, trace_ctx)
        return saved

    def get(self, order_table_id: OrderTableId) -> OrderTable:
        return self._get_existing(order_table_id)

    def sit(
        self,
        order_table_id: OrderTableId,
        trace_ctx: TraceContext = EMPTY_TRACE_CONTEXT,
    ) -> OrderTable:
        with self._span("sit", order_table_id) as span, self._locks.hold(str(order_table_id)):
            order_table = self._get_existing(order_table_id)
            if order_table.occupied:
                return order_table

            saved = self._order_table_repository.save(order_table.sit())
            span.set_attribute(CHANGED_ATTRIBUTE, True)

        record_order_table_seated()
        logger.info("order_table_seated", extra={"order_table_id": order_table_id})
        self._publish("order_table.seated", saved, trace_ctx)
        return saved

    def clear(
        self,
        order_table_id: OrderTableId,
        trace_ctx: TraceContext = EMPTY_TRACE_CONTEXT,
    ) -> OrderTable:
        with self._span("clear", order_table_id) as span, self._locks.hold(str(order_table_id)):
            order_table = self._get_existing(order_table_id)
            if self._order_lookup.has_open_order(order_table_id):
                record_order_table_clear_blocked(reason=HAS_UNCOMPLETED_ORDERS)
                logger.warning(
                    "order_table_clear_blocked",
                    extra={"order_table_id": order_table_id, "reason": HAS_UNCOMPLETED_ORDERS},
                )
                span.set_attribute(BLOCKED_REASON_ATTRIBUTE, HAS_UNCOMPLETED_ORDERS)
                raise ConflictError(
                    f"order table {order_table_id} has an uncompleted order",
                    code="ORDER_TABLE_HAS_UNCOMPLETED_ORDERS",
                    reason=HAS_UNCOMPLETED_ORDERS,
                )

            cleared = order_table.clear()
            if cleared is order_table:
                return order_table
            saved = self._order_table_repository.save(cleared)
            span.set_attribute(CHANGED_ATTRIBUTE, True)

        record_order_table_cleared()
        logger.info("order_table_cleared", extra={"order_table_id": order_table_id})
        self._publish("order_table.cleared", saved, trace_ctx)
        return saved

    def change_number_of_guests(
        self,
        order_table_id: OrderTableId,
        number_of_guests: int,
        trace_ctx: TraceContext = EMPTY_TRACE_CONTEXT,
    ) -> OrderTable:
        with self._span("change_number_of_guests", order_table_id) as span:
            if not is_valid_number_of_guests(number_of_guests):
                raise ValidationError(
                    f"number of guests must be a non-negative integer, got {number_of_guests!r}",
                    code="INVALID_NUMBER_OF_GUESTS",
                )
            span.set_attribute(NUMBER_OF_GUESTS_ATTRIBUTE, number_of_guests)

            with self._locks.hold(str(order_table_id)):
                order_table = self._get_existing(order_table_id)
                try:
                    changed = order_table.change_number_of_guests(number_of_guests)
                except OrderTableEmptyError as exc:
                    span.set_attribute(BLOCKED_REASON_ATTRIBUTE, ORDER_TABLE_EMPTY)
                    raise ConflictError(
                        f"cannot set guest count on an empty table: {exc}",
                        code="ORDER_TABLE_EMPTY",
                        reason=ORDER_TABLE_EMPTY,
                    ) from exc

                saved = self._order_table_repository.save(changed)
                span.set_attribute(CHANGED_ATTRIBUTE, True)

        record_guest_count_changed()
        logger.info(
            "order_table_guests_changed",
            extra={"order_table_id": order_table_id, "number_of_guests": number_of_guests},
        )
        self._publish("order_table.guests_changed", saved, trace_ctx)
        return saved

    def find_all(self) -> list[OrderTable]:
        return self._order_table_repository.find_all()

    @contextmanager
    def _span(
        self,
        operation: str,
        order_table_id: OrderTableId | None = None,
    ) -> Iterator[Span]:
        with self._tracer.start_as_current_span(f"order_table.{operation}") as span:
            span.set_attribute(CHANGED_ATTRIBUTE, False)
            if order_table_id is not None:
                span.set_attribute(ORDER_TABLE_ID_ATTRIBUTE, str(order_table_id))
            yield span

    def _get_existing(self, order_table_id: OrderTableId) -> OrderTable:
        order_table = self._order_table_repository.find_by_id(order_table_id)
        if order_table is None:
            raise NotFoundError(f"order table {order_table_id} not found")
        return order_table

    def _publish(self, event_type: str, order_table: OrderTable, trace_ctx: TraceContext) -> None:
        if self._publisher is None:
            return
        message = serialize_order_table_event(
            event_type=event_type,
            occurred_at=datetime.now(timezone.utc),
            order_table=order_table,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        try:
            self._publisher.publish(channel=ORDER_TABLE_EVENTS_CHANNEL, message=message)
        except Exception:
            logger.warning(
                "order_table_event_publish_failed",
                exc_info=True,
                extra={"order_table_id": order_table.order_table_id},
            )
