"""Tests for the background refresh token sweep."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Iterator
from types import SimpleNamespace

import pytest

from yourownboss_backend.api.app import _sweep_refresh_tokens


class FlakyTokens:
    """Fails the first sweep, succeeds afterwards."""

    def __init__(self) -> None:
        self.calls = 0

    def sweep_expired(self, session: object) -> int:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("clock skew")
        return 0


class NullDatabase:
    @contextlib.contextmanager
    def session(self) -> Iterator[None]:
        yield None


def test_sweeper_survives_a_failed_run(caplog: pytest.LogCaptureFixture) -> None:
    tokens = FlakyTokens()
    services = SimpleNamespace(tokens=tokens)

    async def scenario() -> None:
        sweeper = asyncio.create_task(
            _sweep_refresh_tokens(NullDatabase(), services, 0)  # type: ignore[arg-type]
        )
        for _ in range(500):
            if tokens.calls >= 2:
                break
            await asyncio.sleep(0.01)
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper

    with caplog.at_level(logging.ERROR, logger="yourownboss_backend.api.app"):
        asyncio.run(scenario())

    assert tokens.calls >= 2
    assert any(
        record.getMessage() == "Refresh token sweep failed" and record.exc_info
        for record in caplog.records
    )
