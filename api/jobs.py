from __future__ import annotations

import logging
from datetime import UTC, datetime

from redis import Redis

from api.config import Settings
from api.logging import get_logger
from api.services import QuoteService
from core.cirth_compat import has_legacy_glyphs, normalize_legacy_glyphs
from core.models import SCRIPTS, RunicScript, is_script
from core.translit import transliterate

_PROGRESS_EVERY = 25


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _mark_failed(redis: Redis, job_id: str, error: str) -> None:
    redis.hset(
        f"job:{job_id}",
        mapping={
            "status": "failed",
            "updated_at": _now(),
            "message": "invalid_params",
            "error": error,
        },
    )


def _parse_params(
    redis: Redis, job_id: str, params: dict[str, object]
) -> tuple[list[RunicScript], bool]:
    scripts_val = params.get("scripts", list(SCRIPTS))
    legacy_val = params.get("normalize_legacy", True)

    if not isinstance(scripts_val, list):
        _mark_failed(redis, job_id, "scripts_type")
        raise TypeError("scripts must be a list of script ids")
    scripts: list[RunicScript] = []
    for item in scripts_val:
        if not isinstance(item, str) or not is_script(item):
            _mark_failed(redis, job_id, "scripts_value")
            raise ValueError(
                f"Invalid script {item!r}; expected one of {', '.join(SCRIPTS)}"
            )
        if item not in scripts:
            scripts.append(item)

    if not isinstance(legacy_val, bool):
        _mark_failed(redis, job_id, "normalize_legacy_type")
        raise TypeError("normalize_legacy must be bool")
    return scripts, legacy_val


def backfill_runic_fields_impl(
    job_id: str,
    params: dict[str, object],
    *,
    redis: Redis,
    logger: logging.Logger,
) -> dict[str, object]:
    """Fill missing pre-computed runic fields and migrate legacy Cirth text.

    Missing fields for the requested scripts are computed with the
    transliterator. When ``normalize_legacy`` is set, Cirth text that carries
    private use glyphs, whether stored earlier or filled in this run, is stored
    as standard runes, so a second run with the same params changes nothing.
    Quotes deleted while the job runs are skipped.
    """
    redis.hset(
        f"job:{job_id}",
        mapping={
            "status": "processing",
            "updated_at": _now(),
            "progress": "0",
            "message": "started",
        },
    )
    scripts, normalize_legacy = _parse_params(redis, job_id, params)

    service = QuoteService(redis=redis, logger=logger)
    quotes = service.list_quotes()
    total = len(quotes)
    updated = 0
    for index, quote in enumerate(quotes, start=1):
        fields: dict[RunicScript, str] = {}
        for script in scripts:
            if quote.precomputed(script) is None:
                fields[script] = transliterate(quote.text_latin, script)
        cirth = fields.get("cirth", quote.runic_cirth)
        if normalize_legacy and cirth is not None and has_legacy_glyphs(cirth):
            fields["cirth"] = normalize_legacy_glyphs(cirth)
        if fields and service.store_runic_fields(quote.id, fields):
            updated += 1
            logger.debug(
                "Backfilled quote",
                extra={"job_id": job_id, "quote_id": quote.id},
            )
        if index % _PROGRESS_EVERY == 0:
            redis.hset(
                f"job:{job_id}",
                mapping={
                    "progress": str(min(99, index * 100 // total)),
                    "updated": str(updated),
                    "updated_at": _now(),
                    "message": "processing",
                },
            )

    redis.hset(
        f"job:{job_id}",
        mapping={
            "status": "completed",
            "updated_at": _now(),
            "progress": "100",
            "updated": str(updated),
            "message": "done",
        },
    )
    logger.info("Job completed", extra={"job_id": job_id})
    return {"job_id": job_id, "status": "completed", "updated": updated}


def backfill_runic_fields(job_id: str, params: dict[str, object]) -> dict[str, object]:
    """RQ job entry point. Loads deps from env and delegates to the impl."""
    from api.logging import setup_logging

    settings = Settings.from_env()
    setup_logging(settings.log_level)  # Initialize logging for worker process
    logger = get_logger(__name__)
    client = Redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
    try:
        return backfill_runic_fields_impl(job_id, params, redis=client, logger=logger)
    finally:
        client.close()
