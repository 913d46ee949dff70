"""nodecred.security.mac_pool

Reusable keyed HMAC-SHA256 contexts.

Keying an HMAC means hashing the padded key into inner/outer states. The pool
does that once, keeps a pristine keyed template, and hands out copies of it.
A context that has seen a message is never handed out again: releasing it
"resets" the slot by refilling it from the template.

Contexts cannot be rewound, so every digest still costs one template copy,
made either on release or on a miss. The pool saves re-keying, not copying.

Exhaustion never blocks. An empty pool makes a new copy; a full pool drops the
surplus on release.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from cryptography.hazmat.primitives import hashes, hmac


class MacContextPool:
    """Thread-safe pool of keyed HMAC-SHA256 contexts."""

    def __init__(self, key: bytes, *, max_idle: int = 32):
        self._template = hmac.HMAC(key, hashes.SHA256())
        self._max_idle = int(max_idle)
        self._idle: list[hmac.HMAC] = []
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _fresh(self) -> hmac.HMAC:
        # Copying reads the template's state; keep it off concurrent paths.
        with self._lock:
            self._misses += 1
            return self._template.copy()

    def acquire(self) -> hmac.HMAC:
        with self._lock:
            if self._idle:
                self._hits += 1
                return self._idle.pop()
        return self._fresh()

    def release(self, ctx: hmac.HMAC) -> None:
        """Return a slot to the pool.

        `ctx` is spent (finalized or mid-message) and is discarded; the slot is
        refilled with a clean copy of the keyed template.
        """

        with self._lock:
            if len(self._idle) >= self._max_idle:
                return
            self._idle.append(self._template.copy())

    @contextmanager
    def lease(self) -> Iterator[hmac.HMAC]:
        ctx = self.acquire()
        try:
            yield ctx
        finally:
            self.release(ctx)

    def digest(self, message: bytes) -> bytes:
        with self.lease() as ctx:
            ctx.update(message)
            return ctx.finalize()

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"hits": self._hits, "misses": self._misses, "idle": len(self._idle)}
