"""In-memory response cache with per-namespace size bound and max age."""

import logging
import time
from enum import Enum
from typing import Any, Callable, NamedTuple

from cachetools import FIFOCache

logger = logging.getLogger(__name__)


class Namespace(str, Enum):
    TRACK_LIST = "track-list"
    SUBTITLE_BODY = "subtitle-body"


class CacheEntry(NamedTuple):
    value: Any
    inserted_at: float


class ResponseCache:
    """Cache of upstream responses, partitioned by namespace.

    Each namespace is a FIFO partition: once it holds ``max_size`` entries,
    storing a new key evicts the earliest inserted one. Entries older than
    ``max_age`` seconds are dropped when read and by :meth:`sweep`.
    """

    def __init__(
        self,
        max_size: int = 1000,
        max_age: float = 86400,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._max_size = max_size
        self._max_age = max_age
        self._clock = clock
        self._partitions: dict[Namespace, FIFOCache] = {
            ns: FIFOCache(maxsize=max_size) for ns in Namespace
        }
        self._hits = {ns: 0 for ns in Namespace}
        self._misses = {ns: 0 for ns in Namespace}

    @property
    def max_age(self) -> float:
        return self._max_age

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.inserted_at > self._max_age

    def put(self, namespace: Namespace, key: str, value: Any) -> None:
        # Overwriting re-inserts: the key moves to the newest position.
        ns = Namespace(namespace)
        self._partitions[ns][key] = CacheEntry(value, self._clock())

    def get(self, namespace: Namespace, key: str, default: Any = None) -> Any:
        ns = Namespace(namespace)
        partition = self._partitions[ns]
        entry = partition.get(key)
        if entry is not None and self._is_expired(entry, self._clock()):
            del partition[key]
            logger.debug(f"Expired {ns.value} entry {key}")
            entry = None
        if entry is None:
            self._misses[ns] += 1
            return default
        self._hits[ns] += 1
        return entry.value

    def sweep(self) -> int:
        """Remove every expired entry. Returns the number removed."""
        now = self._clock()
        removed = 0
        for partition in self._partitions.values():
            expired = [
                key for key, entry in partition.items()
                if self._is_expired(entry, now)
            ]
            for key in expired:
                del partition[key]
            removed += len(expired)
        return removed

    def clear(self) -> None:
        for partition in self._partitions.values():
            partition.clear()

    def __len__(self) -> int:
        return sum(len(p) for p in self._partitions.values())

    def stats(self) -> dict:
        result = {}
        for ns, partition in self._partitions.items():
            hits, misses = self._hits[ns], self._misses[ns]
            result[ns.value] = {
                "size": len(partition),
                "max_size": self._max_size,
                "hits": hits,
                "misses": misses,
                "hit_rate": round(hits / max(hits + misses, 1) * 100, 1),
            }
        return result
