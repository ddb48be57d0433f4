"""Utility helpers for web routes."""

from __future__ import annotations

import math
import os
import time

from aiolimiter import AsyncLimiter

# Requests allowed per client within ``RATE_PERIOD`` seconds.
RATE_LIMIT = int(os.environ.get("WEPAR_RATE_LIMIT", "30"))
RATE_PERIOD = float(os.environ.get("WEPAR_RATE_PERIOD", "60"))

# Response bodies shared by the routes.
JSONDict = dict[str, object]


def error_body(message: str, **extra: object) -> JSONDict:
    """Return the error envelope used by every endpoint."""

    return {"success": False, "error": message, **extra}


class ClientRateLimiter:
    """Per-client leaky bucket limiting parse requests.

    Args:
        max_rate: Requests allowed per ``time_period``.
        time_period: Window length in seconds.
    """

    def __init__(
        self, max_rate: int = RATE_LIMIT, time_period: float = RATE_PERIOD
    ) -> None:
        self.max_rate = max_rate
        self.time_period = time_period
        self._limiters: dict[str, AsyncLimiter] = {}
        self._last_sweep = time.monotonic()

    @property
    def retry_after(self) -> int:
        """Seconds until a rejected client regains one request."""

        return max(1, math.ceil(self.time_period / self.max_rate))

    async def consume(self, client: str) -> bool:
        """Take one request from ``client``'s budget.

        Args:
            client: Key identifying the caller, usually its IP address.

        Returns:
            ``False`` when the budget is exhausted.
        """

        self._sweep()

        limiter = self._limiters.get(client)
        if limiter is None:
            limiter = AsyncLimiter(self.max_rate, self.time_period)
            self._limiters[client] = limiter

        if not limiter.has_capacity():
            return False
        await limiter.acquire()
        return True

    def _sweep(self) -> None:
        """Drop clients whose bucket has fully drained.

        Runs at most once per ``time_period``.
        """

        now = time.monotonic()
        if now - self._last_sweep < self.time_period:
            return
        self._last_sweep = now

        drained = [
            client
            for client, limiter in self._limiters.items()
            if limiter.has_capacity(limiter.max_rate)
        ]
        for client in drained:
            del self._limiters[client]

    def reset(self) -> None:
        """Forget every client budget."""

        self._limiters.clear()
        self._last_sweep = time.monotonic()


rate_limiter = ClientRateLimiter()
