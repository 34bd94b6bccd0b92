"""Contributor-statistics poller.

``/stats/contributors`` is computed lazily by GitHub: the first request for
a cold repository kicks off a background job and returns 202.  The poller
keeps asking, with a linearly growing pause, until the list shows up, a
real error occurs, or the attempt budget runs out.

The retry decision lives in :func:`next_poll_state`, a pure function, so it
can be tested without any sleeping.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from profile_harvester.domain.entities import ContributorStat
from profile_harvester.domain.exceptions import StatsNotReadyError
from profile_harvester.domain.ports.remote_source import RepositoryDataSource

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class PollState(str, Enum):
    """Where one statistics request leaves the poll loop."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


def next_poll_state(outcome: object) -> PollState:
    """Map a request outcome (a result or the exception it raised) to a state."""
    if isinstance(outcome, list):
        return PollState.READY
    if isinstance(outcome, StatsNotReadyError):
        return PollState.PENDING
    if isinstance(outcome, BaseException):
        return PollState.FAILED
    # Anything else is a body GitHub has not finished building.
    return PollState.PENDING


class ContributorStatsPoller:
    """Polls contributor statistics with a bounded linear back-off."""

    def __init__(self, source: RepositoryDataSource, sleep: Sleep = asyncio.sleep) -> None:
        self._source = source
        self._sleep = sleep

    async def poll(
        self,
        owner: str,
        name: str,
        max_attempts: int = 6,
        initial_delay: float = 1.5,
    ) -> list[ContributorStat] | None:
        """Return the statistics list, or ``None`` if it could not be had.

        Never raises: a terminal error or an exhausted budget both yield
        ``None``.
        """
        for attempt in range(1, max_attempts + 1):
            outcome: object
            try:
                outcome = await self._source.fetch_contributor_stats(owner, name)
            except Exception as exc:
                outcome = exc

            state = next_poll_state(outcome)
            if state is PollState.READY:
                return outcome  # type: ignore[return-value]
            if state is PollState.FAILED:
                logger.debug(
                    "Contributor stats for %s/%s failed: %s", owner, name, outcome
                )
                return None

            if attempt < max_attempts:
                await self._sleep(initial_delay * attempt)

        logger.info(
            "Contributor stats for %s/%s still pending after %d attempts",
            owner,
            name,
            max_attempts,
        )
        return None
