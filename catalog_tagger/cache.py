from __future__ import annotations

import threading
import time
from typing import Any, Dict, Optional, Tuple

DEFAULT_TTL = 60000  # seconds


class MemoryCache:
    """Key/value store with per-entry expiry, kept in process memory.

    Stands in for a file or network cache: anything exposing the same
    ``get``/``set`` pair can be passed to the reconciler instead. Safe to
    share between threads; expired entries are dropped on read and swept
    on every ``set``.
    """

    def __init__(self, default_ttl: int = DEFAULT_TTL, clock=time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                self._entries.pop(key, None)
                return None
            return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            now = self._clock()
            self._sweep(now)
            self._entries[key] = (now + ttl, value)

    def _sweep(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for k in expired:
            self._entries.pop(k, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
