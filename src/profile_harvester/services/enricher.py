"""Repository enricher — attaches languages, head commit and contributor stats."""

from __future__ import annotations

import asyncio
import logging

from profile_harvester.domain.entities import (
    ContributorStat,
    EnrichedRepository,
    LatestCommit,
    RepositoryRecord,
)
from profile_harvester.domain.ports.remote_source import RepositoryDataSource
from profile_harvester.services.stats_poller import ContributorStatsPoller, Sleep

logger = logging.getLogger(__name__)


class RepositoryEnricher:
    """Runs the three per-repository lookups side by side.

    Parameters
    ----------
    source:
        Adapter providing the per-repository capabilities.
    stats_max_attempts / stats_initial_delay:
        Poll budget and back-off base for contributor statistics.
    throttle_delay:
        Pause taken after every repository to keep the request rate down.
    sleep:
        Injected for tests; shared with the stats poller.
    """

    def __init__(
        self,
        source: RepositoryDataSource,
        stats_max_attempts: int = 6,
        stats_initial_delay: float = 1.5,
        throttle_delay: float = 0.12,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._source = source
        self._poller = ContributorStatsPoller(source, sleep=sleep)
        self._stats_max_attempts = stats_max_attempts
        self._stats_initial_delay = stats_initial_delay
        self._throttle_delay = throttle_delay
        self._sleep = sleep

    async def enrich(self, repository: RepositoryRecord) -> EnrichedRepository:
        """Enrich one repository; every lookup degrades on its own."""
        languages, latest_commit, stats = await asyncio.gather(
            self._languages(repository),
            self._latest_commit(repository),
            self._contributor_stats(repository),
        )

        enriched = EnrichedRepository(
            repository=repository,
            languages=languages,
            latest_commit=latest_commit,
            contributors_stats=stats,
            commit_count_estimate=(
                sum(s.total for s in stats) if stats is not None else None
            ),
        )

        await self._sleep(self._throttle_delay)
        return enriched

    async def _languages(self, repository: RepositoryRecord) -> dict[str, int]:
        try:
            return await self._source.fetch_languages(repository.owner, repository.name)
        except Exception as exc:
            logger.warning("languages failed for %s: %s", repository.full_name, exc)
            return {}

    async def _latest_commit(self, repository: RepositoryRecord) -> LatestCommit | None:
        try:
            return await self._source.fetch_latest_commit(
                repository.owner, repository.name, repository.default_branch
            )
        except Exception as exc:
            logger.warning("latest commit failed for %s: %s", repository.full_name, exc)
            return None

    async def _contributor_stats(
        self, repository: RepositoryRecord
    ) -> list[ContributorStat] | None:
        return await self._poller.poll(
            repository.owner,
            repository.name,
            max_attempts=self._stats_max_attempts,
            initial_delay=self._stats_initial_delay,
        )
