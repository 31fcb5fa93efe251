from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, status

from eatin.api.middleware.request_id import get_request_id
from eatin.application.dto.requests import ChangeNumberOfGuestsRequest, CreateOrderTableRequest
from eatin.application.dto.responses import OrderTableResponse
from eatin.application.mappers.order_table_mapper import to_order_table_response
from eatin.application.ports.publisher import EventPublisher
from eatin.application.use_cases.context import TraceContext
from eatin.application.use_cases.locks import KeyedLocks
from eatin.application.use_cases.order_table_service import OrderTableService
from eatin.domain.common.ids import OrderTableId
from eatin.infrastructure.db.repositories.order_lookup import SqlAlchemyOrderLookup
from eatin.infrastructure.db.repositories.order_table_repo import SqlAlchemyOrderTableRepository
from eatin.infrastructure.db.session import database_url
from eatin.infrastructure.memory.repositories import (
    InMemoryEatInOrderRepository,
    InMemoryOrderTableRepository,
)
from eatin.infrastructure.messaging.redis_publisher import RedisEventPublisher, redis_url
from eatin.infrastructure.observability.logging_config import current_trace_id

router = APIRouter()

# shared by every per-request service so concurrent requests serialize per table
_ORDER_TABLE_LOCKS = KeyedLocks()


@lru_cache(maxsize=1)
def _in_memory_adapters() -> tuple[InMemoryOrderTableRepository, InMemoryEatInOrderRepository]:
    return InMemoryOrderTableRepository(), InMemoryEatInOrderRepository()


def _publisher() -> EventPublisher | None:
    if redis_url() is None:
        return None
    return RedisEventPublisher()


def _order_table_service() -> OrderTableService:
    if database_url() is None:
        repository, lookup = _in_memory_adapters()
        return OrderTableService(
            order_table_repository=repository,
            order_lookup=lookup,
            publisher=_publisher(),
            locks=_ORDER_TABLE_LOCKS,
        )
    return OrderTableService(
        order_table_repository=SqlAlchemyOrderTableRepository(),
        order_lookup=SqlAlchemyOrderLookup(),
        publisher=_publisher(),
        locks=_ORDER_TABLE_LOCKS,
    )


def _trace_ctx() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())


@router.post(
    "/v1/order-tables",
    response_model=OrderTableResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_order_table(request_dto: CreateOrderTableRequest) -> OrderTableResponse:
    order_table = _order_table_service().create(request_dto.name, trace_ctx=_trace_ctx())
    return to_order_table_response(order_table)


@router.get("/v1/order-tables", response_model=list[OrderTableResponse])
def list_order_tables() -> list[OrderTableResponse]:
    return [to_order_table_response(table) for table in _order_table_service().find_all()]


@router.get("/v1/order-tables/{order_table_id}", response_model=OrderTableResponse)
def get_order_table(order_table_id: str) -> OrderTableResponse:
    return to_order_table_response(_order_table_service().get(OrderTableId(order_table_id)))


@router.put("/v1/order-tables/{order_table_id}/sit", response_model=OrderTableResponse)
def sit_order_table(order_table_id: str) -> OrderTableResponse:
    order_table = _order_table_service().sit(OrderTableId(order_table_id), trace_ctx=_trace_ctx())
    return to_order_table_response(order_table)


@router.put("/v1/order-tables/{order_table_id}/clear", response_model=OrderTableResponse)
def clear_order_table(order_table_id: str) -> OrderTableResponse:
    order_table = _order_table_service().clear(
        OrderTableId(order_table_id),
        trace_ctx=_trace_ctx(),
    )
    return to_order_table_response(order_table)


@router.put(
    "/v1/order-tables/{order_table_id}/number-of-guests",
    response_model=OrderTableResponse,
)
def change_number_of_guests(
    order_table_id: str,
    request_dto: ChangeNumberOfGuestsRequest,
) -> OrderTableResponse:
    order_table = _order_table_service().change_number_of_guests(
        OrderTableId(order_table_id),
        request_dto.number_of_guests,
        trace_ctx=_trace_ctx(),
    )
    return to_order_table_response(order_table)
