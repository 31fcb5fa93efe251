from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from eatin.api.error_handling import register_exception_handlers
from eatin.api.middleware.request_id import RequestIDMiddleware
from eatin.api.routes.health import router as health_router
from eatin.api.routes.metrics import router as metrics_router
from eatin.api.routes.order_tables import router as order_tables_router
from eatin.infrastructure.db.session import create_schema, database_url, get_engine
from eatin.infrastructure.observability.logging_config import configure_logging
from eatin.infrastructure.observability.otel import configure_otel

logger = logging.getLogger("eatin.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)
UNMATCHED_ROUTE_LABEL = "<unmatched>"


def _cors_allow_origins() -> list[str]:
    env = os.getenv("APP_ENV", "dev").lower()
    if env in {"dev", "test"}:
        return ["*"]

    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def _route_label(request: Request) -> str:
    # route template keeps the label set bounded; unmatched paths share one label
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE_LABEL)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        path = request.url.path
        method = request.method
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            route = _route_label(request)
            REQUEST_COUNT.labels(method=method, path=route, status_code="500").inc()
            REQUEST_LATENCY.labels(method=method, path=route).observe(duration_ms / 1000)
            logger.exception(
                "request_error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        route = _route_label(request)
        REQUEST_COUNT.labels(method=method, path=route, status_code=str(response.status_code)).inc()
        REQUEST_LATENCY.labels(method=method, path=route).observe(duration_ms / 1000)
        logger.info(
            "request_complete",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    url = database_url()
    if url is not None and url.startswith("sqlite"):
        create_schema(get_engine())
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Eat-in Order Tables", version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(order_tables_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app)
    return app


app = create_app()
