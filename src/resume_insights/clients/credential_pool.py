"""Round-robin pool of generative-language API keys."""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from resume_insights.config import CredentialsConfig
from resume_insights.errors import ConfigurationError

logger = logging.getLogger(__name__)


class CredentialPool:
    """Ordered API keys handed out in round-robin order.

    Selection is an atomic fetch-and-increment under a lock, so concurrent
    requests (threads or asyncio tasks) never observe the same cursor.
    Keys are never evicted; a failing key is only skipped by the retry loop
    of the request that saw it fail.
    """

    def __init__(self, keys: Iterable[str | None]):
        self._keys: tuple[str, ...] = tuple(k for k in keys if k)
        if not self._keys:
            raise ConfigurationError("No Gemini API keys configured")
        self._cursor = 0
        self._lock = threading.Lock()
        logger.info("Initialized with %d Gemini API keys", len(self._keys))

    @classmethod
    def from_env(cls, config: CredentialsConfig | None = None) -> CredentialPool:
        config = config or CredentialsConfig()
        return cls(config.read_keys())

    def next(self) -> str:
        """Return the key at the cursor and advance the cursor (wrapping)."""
        return self.acquire()[1]

    def acquire(self) -> tuple[int, str]:
        """Like next(), but also return the pool index for logging."""
        with self._lock:
            index = self._cursor
            self._cursor = (index + 1) % len(self._keys)
        return index, self._keys[index]

    def size(self) -> int:
        return len(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def current_index(self) -> int:
        with self._lock:
            return self._cursor

    def reset(self) -> None:
        with self._lock:
            self._cursor = 0

    def __repr__(self) -> str:
        # Never expose key material
        return f"CredentialPool(size={len(self._keys)}, cursor={self._cursor})"
