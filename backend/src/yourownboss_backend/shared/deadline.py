"""Per-request deadlines checked at store boundaries."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from yourownboss_backend.shared.errors import RequestTimeoutError


@dataclass(frozen=True, slots=True)
class Deadline:
    """Absolute point on a monotonic clock after which work must stop."""

    expires_at: float
    clock: Callable[[], float] = field(default=time.monotonic, compare=False)

    @classmethod
    def after(
        cls, seconds: float, *, clock: Callable[[], float] = time.monotonic
    ) -> Deadline:
        return cls(expires_at=clock() + seconds, clock=clock)

    @property
    def expired(self) -> bool:
        return self.clock() >= self.expires_at

    def check(self, step: str = "operation") -> None:
        """Raise :class:`RequestTimeoutError` when the deadline has passed."""
        if self.expired:
            msg = f"Deadline exceeded before {step}"
            raise RequestTimeoutError(msg)


__all__ = ["Deadline"]
