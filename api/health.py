from __future__ import annotations

import logging
from datetime import UTC, datetime

from redis import Redis
from redis import exceptions as redis_exceptions

from api.errors import HealthStatusError
from api.models import HealthResponse
from core.models import SCRIPTS


def compute_health(redis: Redis, logger: logging.Logger) -> HealthResponse:
    """Compute service health.

    Transliteration and normalization need no storage, so a Redis outage only
    degrades the service. On failure raises HealthStatusError, which is handled
    centrally to return a 200 OK with a structured payload.
    """
    try:
        redis_ok = bool(redis.ping())
    except redis_exceptions.RedisError as exc:
        logger.warning("Redis health check failed", exc_info=exc)
        raise HealthStatusError(redis=False, scripts=len(SCRIPTS)) from exc

    return HealthResponse(
        status="healthy" if redis_ok else "degraded",
        redis=redis_ok,
        scripts=len(SCRIPTS),
        timestamp=datetime.now(UTC),
    )
