"""Store handle contracts used by codecs and pipelines.

These protocols name the subset of the redis-py client API that keysnap
calls, so pipelines accept a live client or an in-memory double.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Protocol


class StoreReader(Protocol):
    """Read commands issued while decoding one key."""

    def type(self, name: str) -> str: ...

    def ttl(self, name: str) -> int: ...

    def get(self, name: str) -> str | None: ...

    def llen(self, name: str) -> int: ...

    def lrange(self, name: str, start: int, end: int) -> list[str]: ...

    def smembers(self, name: str) -> set[str]: ...

    def zrangebyscore(
        self,
        name: str,
        min: str,
        max: str,
        withscores: bool = False,
    ) -> list[Any]: ...

    def hgetall(self, name: str) -> dict[str, str]: ...


class StoreBatch(Protocol):
    """Deferred write commands staged during import."""

    def delete(self, *names: str) -> Any: ...

    def set(self, name: str, value: str) -> Any: ...

    def rpush(self, name: str, *values: str) -> Any: ...

    def sadd(self, name: str, *values: str) -> Any: ...

    def zadd(self, name: str, mapping: Mapping[str, float]) -> Any: ...

    def hset(self, name: str, mapping: Mapping[str, str]) -> Any: ...

    def expire(self, name: str, time: int) -> Any: ...

    def execute(self) -> list[Any]: ...


class StoreConnection(StoreReader, Protocol):
    """Full connection handle consumed by the export and import pipelines."""

    def scan_iter(self, match: str | None = None, count: int | None = None) -> Iterator[str]: ...

    def dbsize(self) -> int: ...

    def flushdb(self) -> Any: ...

    def pipeline(self, transaction: bool = True) -> StoreBatch: ...
