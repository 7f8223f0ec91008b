from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Final
from uuid import uuid4

from redis import Redis
from redis.client import Pipeline

from api.errors import QuoteNotEditableError, QuoteNotFoundError
from api.models import (
    BackfillCreate,
    JobResponse,
    JobStatus,
    Preferences,
    PreferencesUpdate,
)
from api.types import QueueProtocol
from core.models import (
    DEFAULT_SCRIPT,
    Quote,
    QuoteFilter,
    RunicScript,
    is_quote_filter,
    is_script,
)
from core.seed import initial_quotes
from core.translit import transliterate_all

QUOTE_IDS_KEY: Final[str] = "quotes:ids"
QUOTE_NEXT_ID_KEY: Final[str] = "quotes:next_id"
PREFERENCES_KEY: Final[str] = "preferences"

# Hash field holding the pre-computed text for each script.
RUNIC_FIELDS: Final[Mapping[RunicScript, str]] = {
    "elder_futhark": "runic_elder",
    "younger_futhark": "runic_younger",
    "cirth": "runic_cirth",
}


def quote_key(quote_id: int) -> str:
    return f"quote:{quote_id}"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _flag(value: bool) -> str:
    return "1" if value else "0"


def quote_to_mapping(quote: Quote) -> dict[str, str]:
    """Flatten a quote into a Redis hash; absent runic fields are omitted."""
    mapping = {
        "id": str(quote.id),
        "text_latin": quote.text_latin,
        "author": quote.author,
        "is_user_created": _flag(quote.is_user_created),
        "is_favorite": _flag(quote.is_favorite),
        "created_at": str(quote.created_at),
    }
    for script, field in RUNIC_FIELDS.items():
        value = quote.precomputed(script)
        if value is not None:
            mapping[field] = value
    return mapping


def quote_from_mapping(data: Mapping[str, str]) -> Quote:
    return Quote(
        id=int(data["id"]),
        text_latin=data.get("text_latin", ""),
        author=data.get("author", ""),
        runic_elder=data.get("runic_elder"),
        runic_younger=data.get("runic_younger"),
        runic_cirth=data.get("runic_cirth"),
        is_user_created=data.get("is_user_created") == "1",
        is_favorite=data.get("is_favorite") == "1",
        created_at=int(data.get("created_at", "0")),
    )


class QuoteService:
    """Quote storage on Redis; all dependencies are injected explicitly.

    Each quote is a hash under ``quote:{id}``; the set ``quotes:ids`` indexes
    them and ``quotes:next_id`` hands out ids.
    """

    def __init__(
        self,
        *,
        redis: Redis,
        logger: logging.Logger,
        clock: Callable[[], datetime] = _utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self._redis = redis
        self._logger = logger
        self._clock = clock
        self._rng = rng or random.Random()

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def _next_id(self) -> int:
        return int(self._redis.incr(QUOTE_NEXT_ID_KEY))

    def _write(self, quote: Quote) -> None:
        key = quote_key(quote.id)
        # Replace the whole hash so cleared runic fields do not linger
        with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(key)
            pipe.hset(key, mapping=quote_to_mapping(quote))
            pipe.sadd(QUOTE_IDS_KEY, str(quote.id))
            pipe.execute()

    def _update_existing(self, quote_id: int, mapping: dict[str, str]) -> bool:
        """Merge ``mapping`` into a stored quote; False when the quote is gone.

        The key is watched so a delete racing the write aborts and retries
        instead of leaving a partial hash behind.
        """
        key = quote_key(quote_id)

        def _apply(pipe: Pipeline) -> bool:
            if not pipe.exists(key):
                return False
            pipe.multi()
            pipe.hset(key, mapping=mapping)
            return True

        return bool(self._redis.transaction(_apply, key, value_from_callable=True))

    def count(self) -> int:
        return int(self._redis.scard(QUOTE_IDS_KEY))

    def seed_if_needed(self) -> int:
        """Insert the starter quotes into an empty store; returns how many."""
        if self.count() > 0:
            return 0
        seeded = 0
        for quote in initial_quotes(self._now_ms()):
            self._write(replace(quote, id=self._next_id()))
            seeded += 1
        self._logger.info("Seeded quote store with %d quotes", seeded)
        return seeded

    def get(self, quote_id: int) -> Quote | None:
        data = self._redis.hgetall(quote_key(quote_id))
        if "id" not in data:
            # Empty, or a partial hash left by an older writer
            return None
        return quote_from_mapping(data)

    def require(self, quote_id: int) -> Quote:
        quote = self.get(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote

    def list_quotes(self, quote_filter: QuoteFilter = "all") -> list[Quote]:
        """All stored quotes matching ``quote_filter``, newest first."""
        quotes: list[Quote] = []
        for raw_id in self._redis.smembers(QUOTE_IDS_KEY):
            quote = self.get(int(raw_id))
            if quote is None:
                continue
            if quote_filter == "favorites" and not quote.is_favorite:
                continue
            if quote_filter == "user_created" and not quote.is_user_created:
                continue
            if quote_filter == "system" and quote.is_user_created:
                continue
            quotes.append(quote)
        quotes.sort(key=lambda q: (q.created_at, q.id), reverse=True)
        return quotes

    def quote_of_the_day(self) -> Quote | None:
        """Same quote for the whole calendar day, rotating by day of year."""
        self.seed_if_needed()
        quotes = self.list_quotes()
        if not quotes:
            return None
        day_of_year = self._clock().timetuple().tm_yday
        return quotes[day_of_year % len(quotes)]

    def random_quote(self) -> Quote | None:
        self.seed_if_needed()
        quotes = self.list_quotes()
        if not quotes:
            return None
        return self._rng.choice(quotes)

    def save_user_quote(
        self, text_latin: str, author: str, quote_id: int | None = None
    ) -> Quote:
        """Create or edit a user quote, pre-computing every runic field."""
        text = text_latin.strip()
        name = author.strip()
        if not text or not name:
            raise ValueError("Text and author cannot be empty")
        previews = transliterate_all(text)
        if quote_id is None:
            quote = Quote(
                id=self._next_id(),
                text_latin=text,
                author=name,
                runic_elder=previews["elder_futhark"],
                runic_younger=previews["younger_futhark"],
                runic_cirth=previews["cirth"],
                is_user_created=True,
                created_at=self._now_ms(),
            )
        else:
            existing = self.require(quote_id)
            if not existing.is_user_created:
                raise QuoteNotEditableError(quote_id)
            quote = replace(
                existing,
                text_latin=text,
                author=name,
                runic_elder=previews["elder_futhark"],
                runic_younger=previews["younger_futhark"],
                runic_cirth=previews["cirth"],
            )
        self._write(quote)
        self._logger.info("Saved user quote", extra={"quote_id": quote.id})
        return quote

    def delete_user_quote(self, quote_id: int) -> None:
        existing = self.require(quote_id)
        if not existing.is_user_created:
            raise QuoteNotEditableError(quote_id)
        with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(quote_key(quote_id))
            pipe.srem(QUOTE_IDS_KEY, str(quote_id))
            pipe.execute()
        self._logger.info("Deleted user quote", extra={"quote_id": quote_id})

    def set_favorite(self, quote_id: int, is_favorite: bool) -> Quote:
        existing = self.require(quote_id)
        if not self._update_existing(quote_id, {"is_favorite": _flag(is_favorite)}):
            raise QuoteNotFoundError(quote_id)
        return replace(existing, is_favorite=is_favorite)

    def store_runic_fields(
        self, quote_id: int, fields: Mapping[RunicScript, str]
    ) -> bool:
        """Overwrite the stored runic text for the given scripts only.

        Returns False without writing when the quote was deleted meanwhile.
        """
        if not fields:
            return False
        mapping = {RUNIC_FIELDS[script]: text for script, text in fields.items()}
        return self._update_existing(quote_id, mapping)


class PreferenceService:
    """User preferences kept in a single Redis hash."""

    def __init__(self, *, redis: Redis) -> None:
        self._redis = redis

    def get(self) -> Preferences:
        data = self._redis.hgetall(PREFERENCES_KEY)
        script_raw = data.get("selected_script", "")
        filter_raw = data.get("quote_list_filter", "")
        return Preferences(
            selected_script=script_raw if is_script(script_raw) else DEFAULT_SCRIPT,
            show_transliteration=data.get("show_transliteration", "1") != "0",
            quote_list_filter=filter_raw if is_quote_filter(filter_raw) else "all",
        )

    def selected_script(self) -> RunicScript:
        return self.get().selected_script

    def update(self, changes: PreferencesUpdate) -> Preferences:
        mapping: dict[str, str] = {}
        if changes.selected_script is not None:
            mapping["selected_script"] = changes.selected_script
        if changes.show_transliteration is not None:
            mapping["show_transliteration"] = _flag(changes.show_transliteration)
        if changes.quote_list_filter is not None:
            mapping["quote_list_filter"] = changes.quote_list_filter
        if mapping:
            self._redis.hset(PREFERENCES_KEY, mapping=mapping)
        return self.get()


class JobService:
    """Service for job lifecycle; all dependencies are injected explicitly."""

    def __init__(
        self,
        *,
        redis: Redis,
        logger: logging.Logger,
        queue: QueueProtocol,
    ) -> None:
        self._redis = redis
        self._logger = logger
        self._queue = queue

    async def create_backfill_job(self, job: BackfillCreate) -> JobResponse:
        """Create a backfill job and enqueue background processing."""
        job_id = str(uuid4())
        now = datetime.now(UTC)

        self._logger.debug("Enqueuing backfill job", extra={"job_id": job_id})

        # Persist job metadata snapshot
        self._redis.hset(
            f"job:{job_id}",
            mapping={
                "status": "queued",
                "kind": "backfill",
                "scripts": ",".join(job.scripts),
                "created_at": now.isoformat(),
            },
        )

        # RQ serializes callables by import path
        self._queue.enqueue(
            "api.jobs.backfill_runic_fields", job_id, job.model_dump(mode="json")
        )

        return JobResponse(job_id=job_id, status="queued", created_at=now)

    def get_job_status(self, job_id: str) -> JobStatus | None:
        """Read a job hash into a typed status; None when the job is unknown."""
        data = self._redis.hgetall(f"job:{job_id}")
        if not data:
            return None

        created_at_raw = data.get("created_at")
        updated_at_raw = data.get("updated_at", created_at_raw)
        created_at = (
            datetime.fromisoformat(created_at_raw)
            if created_at_raw
            else datetime.now(UTC)
        )
        updated_at = (
            datetime.fromisoformat(updated_at_raw) if updated_at_raw else created_at
        )

        return JobStatus.model_validate(
            {
                "job_id": job_id,
                "status": data.get("status", "queued"),
                "progress": int(data.get("progress", "0")),
                "message": data.get("message"),
                "updated": int(data.get("updated", "0")),
                "created_at": created_at,
                "updated_at": updated_at,
                "error": data.get("error"),
            }
        )
