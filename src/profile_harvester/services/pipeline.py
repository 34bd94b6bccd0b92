"""Enrichment pipeline driver."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from profile_harvester.domain.entities import EnrichedRepository, RepositoryRecord
from profile_harvester.services.worker_pool import BoundedWorkerPool, Enricher

_NEVER_PUSHED = datetime.min.replace(tzinfo=timezone.utc)


class EnrichmentPipeline:
    """Runs the worker pool, then orders the results newest push first."""

    def __init__(self, enricher: Enricher, concurrency: int = 8) -> None:
        self._pool = BoundedWorkerPool(enricher)
        self._concurrency = concurrency

    async def drive(
        self, repositories: Sequence[RepositoryRecord]
    ) -> list[EnrichedRepository]:
        results = await self._pool.run(repositories, self._concurrency)
        results.sort(key=_push_time, reverse=True)
        return results


def _push_time(enriched: EnrichedRepository) -> datetime:
    return enriched.repository.pushed_at_datetime or _NEVER_PUSHED
