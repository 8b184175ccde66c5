"""Request pacing around a single "next allowed send time" cursor.

Every request issued through one :class:`~pacedhttp.client.AsyncClient`
asks the client's :class:`PacingScheduler` how long to wait before it may
touch the network.  The scheduler answers from one cursor,
``next_allowed_send_at``:

1. The first request ever scheduled has no mandatory wait; only its
   jitter applies.
2. Every later request is due ``min_timeout_per_request`` after the
   cursor.  It waits until then (``max(0, cursor - now + T)``), plus its
   own jitter.
3. The cursor is then moved to ``now + wait``.

Back-to-back calls therefore receive waits of ``0, T, 2T, ...`` for a
minimum spacing ``T``, and the cursor never moves backwards.  Once the
queue has been idle for at least ``T`` the mandatory wait drops back to
zero.

All durations are in milliseconds.  The clock returns seconds and must be
monotonic.
"""

from __future__ import annotations

import random
import threading
import time
from typing import Callable, Optional

from pacedhttp.models import ClientConfig


class PacingScheduler:
    """Computes per-request dispatch delays from a shared cursor.

    :meth:`schedule` contains no suspension point, so within one event
    loop each call is atomic.  A lock additionally serialises callers on
    different threads.

    Args:
        config: Minimum spacing and jitter bound, in milliseconds.
        clock: Monotonic clock returning seconds.
        rng: Random source for jitter.

    Example::

        scheduler = PacingScheduler(ClientConfig(min_timeout_per_request=100))
        scheduler.schedule(0)  # 0.0
        scheduler.schedule(0)  # ~100.0
        scheduler.schedule(0)  # ~200.0
    """

    def __init__(
        self,
        config: ClientConfig,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._config = config
        self._clock = clock
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._next_allowed_send_at: Optional[float] = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def next_allowed_send_at(self) -> Optional[float]:
        """Cursor in clock seconds, or ``None`` before the first schedule."""
        return self._next_allowed_send_at

    def draw_jitter(self) -> float:
        """Return a jitter in ``[0, max_random_pre_request_timeout]`` milliseconds."""
        if not self._config.jitter_enabled:
            return 0.0
        return self._rng.uniform(0, self._config.max_random_pre_request_timeout)

    def schedule(self, jitter_ms: float = 0.0) -> float:
        """Reserve the next dispatch slot and return the wait before it.

        Args:
            jitter_ms: Extra delay for this request, in milliseconds.

        Returns:
            Milliseconds the caller must wait before dispatching.  Never
            negative.
        """
        jitter_ms = max(0.0, jitter_ms)
        with self._lock:
            now = self._clock()
            if self._next_allowed_send_at is None:
                wait_ms = jitter_ms
            else:
                queue_offset_ms = (self._next_allowed_send_at - now) * 1000
                wait_ms = (
                    max(0.0, queue_offset_ms + self._config.min_timeout_per_request)
                    + jitter_ms
                )
            self._next_allowed_send_at = now + wait_ms / 1000
            return wait_ms

    def reserve(self) -> float:
        """Draw a jitter and :meth:`schedule` with it."""
        return self.schedule(self.draw_jitter())
