from __future__ import annotations

from collections.abc import Callable

import pytest


class RedisStub:
    """In-memory stand-in for the handful of Redis commands the services use."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.sets: dict[str, set[str]] = {}
        self.counters: dict[str, int] = {}
        self.closed = False
        # Command names of each executed MULTI block, in order
        self.transactions: list[list[str]] = []

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        self.closed = True

    def incr(self, key: str) -> int:
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    def hset(self, key: str, mapping: dict[str, str]) -> int:
        # Merge mapping into existing hash to mimic Redis semantics
        cur = self.hashes.get(key, {})
        added = len(set(mapping) - set(cur))
        cur.update(mapping)
        self.hashes[key] = cur
        return added

    def hgetall(self, key: str) -> dict[str, str]:
        return self.hashes.get(key, {}).copy()

    def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            for store in (self.hashes, self.sets, self.counters):
                if key in store:
                    del store[key]
                    removed += 1
        return removed

    def sadd(self, key: str, *members: str) -> int:
        cur = self.sets.setdefault(key, set())
        added = len(set(members) - cur)
        cur.update(members)
        return added

    def srem(self, key: str, *members: str) -> int:
        cur = self.sets.get(key, set())
        removed = len(cur & set(members))
        cur.difference_update(members)
        return removed

    def smembers(self, key: str) -> set[str]:
        return set(self.sets.get(key, set()))

    def scard(self, key: str) -> int:
        return len(self.sets.get(key, set()))

    def exists(self, *keys: str) -> int:
        return sum(
            1 for k in keys if k in self.hashes or k in self.sets or k in self.counters
        )

    def pipeline(self, transaction: bool = True) -> PipelineStub:
        return PipelineStub(self)

    def transaction(
        self,
        func: Callable[[PipelineStub], object],
        *watches: str,
        value_from_callable: bool = False,
    ) -> object:
        with self.pipeline() as pipe:
            pipe.watch(*watches)
            value = func(pipe)
            results = pipe.execute()
        return value if value_from_callable else results


class PipelineStub:
    """Queues commands after MULTI and applies them together on execute.

    Like redis-py, a pipeline starts buffered; ``watch`` switches it to
    immediate mode until ``multi`` is called.
    """

    def __init__(self, redis: RedisStub) -> None:
        self._redis = redis
        self._buffered = True
        self._queued: list[tuple[str, tuple[object, ...], dict[str, object]]] = []

    def __enter__(self) -> PipelineStub:
        return self

    def __exit__(self, *exc: object) -> None:
        self._queued.clear()

    def watch(self, *keys: str) -> None:
        self._buffered = False

    def multi(self) -> None:
        self._buffered = True

    def _call(self, name: str, *args: object, **kwargs: object) -> object:
        if self._buffered:
            self._queued.append((name, args, kwargs))
            return self
        return getattr(self._redis, name)(*args, **kwargs)

    def exists(self, *keys: str) -> object:
        return self._call("exists", *keys)

    def hset(self, key: str, mapping: dict[str, str]) -> object:
        return self._call("hset", key, mapping=mapping)

    def delete(self, *keys: str) -> object:
        return self._call("delete", *keys)

    def sadd(self, key: str, *members: str) -> object:
        return self._call("sadd", key, *members)

    def srem(self, key: str, *members: str) -> object:
        return self._call("srem", key, *members)

    def execute(self) -> list[object]:
        queued, self._queued = self._queued, []
        if queued:
            self._redis.transactions.append([name for name, _, _ in queued])
        return [getattr(self._redis, n)(*a, **kw) for n, a, kw in queued]


class QueueStub:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[object, ...], dict[str, object]]] = []

    def enqueue(
        self, func: str, *args: object, **kwargs: object
    ) -> object:  # QueueProtocol
        self.calls.append((func, args, kwargs))
        return {"ok": True}


@pytest.fixture
def redis_stub() -> RedisStub:
    return RedisStub()


@pytest.fixture
def queue_stub() -> QueueStub:
    return QueueStub()
