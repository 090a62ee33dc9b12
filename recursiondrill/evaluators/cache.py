from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable


@dataclass
class EvaluationCache:
    """In-memory cache for previously computed results.

    The cache key is whatever hashable value the owning evaluator derives
    from the argument tuple, usually ``(tag, args)``. Entries are only ever
    added: a key goes from absent to present once and stays there until
    :meth:`clear` is called.

    Lookups and inserts are guarded by a lock so that several evaluators
    may share one cache across threads. Two threads missing on the same key
    may both compute it; the second insert overwrites the first with an
    equal value.
    """

    _store: Dict[Hashable, Any] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    hits: int = 0
    misses: int = 0

    def lookup(self, key: Hashable) -> tuple[bool, Any]:
        """Return ``(found, value)`` for ``key``; ``None`` is a valid cached value."""
        with self._lock:
            if key in self._store:
                self.hits += 1
                return True, self._store[key]
            self.misses += 1
            return False, None

    def set(self, key: Hashable, value: Any) -> None:
        """Store ``value`` for ``key``."""
        with self._lock:
            self._store[key] = value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "entries": len(self._store),
                "hits": self.hits,
                "misses": self.misses,
            }

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
