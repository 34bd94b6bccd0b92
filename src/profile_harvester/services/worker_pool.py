"""Bounded worker pool over a shared, pre-loaded work queue."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, Sequence

from profile_harvester.domain.entities import EnrichedRepository, RepositoryRecord

logger = logging.getLogger(__name__)


class Enricher(Protocol):
    async def enrich(self, repository: RepositoryRecord) -> EnrichedRepository:
        ...


class BoundedWorkerPool:
    """Drains a repository list with a fixed number of concurrent workers.

    Every index goes into one ``asyncio.Queue`` up front.  Workers take the
    next index with ``get_nowait`` (no suspension between the emptiness
    check and the claim), so each repository is processed exactly once.
    """

    def __init__(self, enricher: Enricher) -> None:
        self._enricher = enricher

    async def run(
        self, repositories: Sequence[RepositoryRecord], concurrency: int
    ) -> list[EnrichedRepository]:
        """Enrich every repository; result order is completion order."""
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        if not repositories:
            return []

        queue: asyncio.Queue[int] = asyncio.Queue()
        for index in range(len(repositories)):
            queue.put_nowait(index)

        results: list[EnrichedRepository] = []
        total = len(repositories)

        async def _worker() -> None:
            while True:
                try:
                    index = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                repository = repositories[index]
                logger.info(
                    "Processing repo %d/%d: %s", index + 1, total, repository.full_name
                )
                results.append(await self._enricher.enrich(repository))

        await asyncio.gather(*(_worker() for _ in range(concurrency)))
        return results
