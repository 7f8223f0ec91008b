from __future__ import annotations

import logging
import sys
from types import ModuleType

import pytest
from conftest import QueueStub, RedisStub

import api.dependencies as deps
from api.config import Settings
from api.services import JobService, PreferenceService, QuoteService


def test_get_settings_reads_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RUNIC_REDIS_URL", " redis://cache:6379/1 ")
    monkeypatch.setenv("RUNIC_ENV", "")
    monkeypatch.setenv("RUNIC_LOG_LEVEL", "debug")
    settings = deps.get_settings()
    assert settings == Settings(
        redis_url="redis://cache:6379/1", environment="local", log_level="DEBUG"
    )


def test_get_redis_closes_client(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[RedisStub] = []

    def _from_url(
        _url: str, *, encoding: str, decode_responses: bool, **_kwargs: object
    ) -> RedisStub:
        stub = RedisStub()
        created.append(stub)
        return stub

    monkeypatch.setattr(
        deps, "Redis", type("R", (), {"from_url": staticmethod(_from_url)})
    )

    gen = deps.get_redis(deps.get_settings())
    client = next(gen)
    assert isinstance(client, RedisStub)
    with pytest.raises(StopIteration):
        gen.send(None)
    assert created
    assert created[0].closed is True


def test_get_queue_returns_queue(monkeypatch: pytest.MonkeyPatch) -> None:
    class _Q:
        def __init__(self, *, connection: object) -> None:
            self.connection = connection

    class _RQModule(ModuleType):
        Queue: type[_Q]

    dummy = _RQModule("rq")
    dummy.Queue = _Q
    monkeypatch.setitem(sys.modules, "rq", dummy)

    redis = RedisStub()
    q = deps.get_queue(redis)
    assert isinstance(q, _Q)
    assert q.connection is redis


def test_service_providers_wire_injected_deps(
    redis_stub: RedisStub, queue_stub: QueueStub
) -> None:
    logger = logging.getLogger("test")
    assert isinstance(deps.get_quote_service(redis_stub, logger), QuoteService)
    assert isinstance(deps.get_preference_service(redis_stub), PreferenceService)
    assert isinstance(deps.get_job_service(redis_stub, logger, queue_stub), JobService)
