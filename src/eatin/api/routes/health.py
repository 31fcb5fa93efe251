from __future__ import annotations

from fastapi import APIRouter, Response, status

from eatin.infrastructure.db.session import database_url, ping_database
from eatin.infrastructure.messaging.redis_publisher import ping_redis, redis_url

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response) -> dict[str, object]:
    # an unconfigured backend is not a dependency, so it cannot make us unready
    checks: dict[str, bool] = {}
    if database_url() is not None:
        checks["database"] = ping_database(timeout_seconds=1.0)
    if redis_url() is not None:
        checks["redis"] = ping_redis(timeout_seconds=1.0)

    if all(checks.values()):
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "unavailable", "checks": checks}
