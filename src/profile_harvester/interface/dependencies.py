"""Dependency wiring — builds adapters and the use case from settings."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from profile_harvester.infrastructure.config import Settings
from profile_harvester.infrastructure.github_rest_adapter import GitHubRestAdapter
from profile_harvester.infrastructure.json_store import JsonFileStore
from profile_harvester.services.enricher import RepositoryEnricher
from profile_harvester.services.harvest_profile import HarvestProfileUseCase


def build_use_case(settings: Settings, client: httpx.AsyncClient) -> HarvestProfileUseCase:
    """Wire the concrete adapters into a ready-to-run use case."""
    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(client=client, token=token)

    enricher = RepositoryEnricher(
        github_adapter,
        stats_max_attempts=settings.stats_max_attempts,
        stats_initial_delay=settings.stats_initial_delay,
        throttle_delay=settings.throttle_delay,
    )
    return HarvestProfileUseCase(
        source=github_adapter,
        store=JsonFileStore(settings.output_dir),
        enricher=enricher,
        concurrency=settings.enrich_concurrency,
    )


@asynccontextmanager
async def harvest_session(settings: Settings) -> AsyncIterator[HarvestProfileUseCase]:
    """Own the shared HTTP client for the lifetime of one harvest run."""
    client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))
    try:
        yield build_use_case(settings, client)
    finally:
        await client.aclose()
