"""Harvest-profile use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the two ports (:class:`RemoteDataSource` and :class:`OutputStore`) and the
pure service modules.  The entry point injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from profile_harvester.domain.entities import (
    EnrichedRepository,
    ProfileSummary,
    RepositoryRecord,
)
from profile_harvester.domain.exceptions import ProfileHarvesterError
from profile_harvester.domain.ports.output_store import OutputStore
from profile_harvester.domain.ports.remote_source import RemoteDataSource
from profile_harvester.services.enricher import RepositoryEnricher
from profile_harvester.services.pipeline import EnrichmentPipeline
from profile_harvester.services.summary import compute_summary

logger = logging.getLogger(__name__)

PROFILE_FILE = "profile.json"
ORGS_FILE = "orgs.json"
REPOS_FILE = "repos.json"
SUMMARY_FILE = "summary.json"


@dataclass(slots=True)
class HarvestResult:
    """Everything one run collected, as handed to the output store."""

    profile: dict[str, Any] | None
    organizations: list[dict[str, Any]]
    repositories: list[EnrichedRepository]
    total_public_repos: int
    summary: ProfileSummary | None = None
    written: list[str] = field(default_factory=list)


class HarvestProfileUseCase:
    """Orchestrates profile → repositories → organizations → enrichment → files.

    Parameters
    ----------
    source:
        Adapter that talks to GitHub.
    store:
        Where the JSON documents are written.
    enricher:
        Per-repository enricher; built from *source* when omitted.
    concurrency:
        Worker budget for the enrichment pool.
    """

    def __init__(
        self,
        source: RemoteDataSource,
        store: OutputStore,
        enricher: RepositoryEnricher | None = None,
        concurrency: int = 8,
    ) -> None:
        self._source = source
        self._store = store
        self._pipeline = EnrichmentPipeline(
            enricher or RepositoryEnricher(source), concurrency=concurrency
        )

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, user: str) -> HarvestResult:
        """Run the full harvest for *user* and persist every document."""
        logger.info("Harvesting public data for %s", user)
        written: list[str] = []

        # 1. Profile
        profile = await self._fetch_profile(user)
        if profile is not None and self._write(PROFILE_FILE, profile):
            written.append(PROFILE_FILE)

        # 2. Repositories (all pages)
        raw_repos = await self._list_repositories(user)

        # 3. Organizations
        organizations = await self._list_organizations(user)
        if organizations is not None and self._write(ORGS_FILE, organizations):
            written.append(ORGS_FILE)

        # 4. Enrichment
        records = [RepositoryRecord.from_api(r) for r in raw_repos]
        enriched = await self._pipeline.drive(records)
        if self._write(REPOS_FILE, [e.to_dict() for e in enriched]):
            written.append(REPOS_FILE)

        # 5. Summary
        summary = compute_summary(enriched, total_public_repos=len(raw_repos), profile=profile)
        if self._write(SUMMARY_FILE, summary):
            written.append(SUMMARY_FILE)

        logger.info("Done generating data")
        return HarvestResult(
            profile=profile,
            organizations=organizations or [],
            repositories=enriched,
            total_public_repos=len(raw_repos),
            summary=summary,
            written=written,
        )

    # ── Account fetches ─────────────────────────────────────────────────

    async def _fetch_profile(self, user: str) -> dict[str, Any] | None:
        try:
            return await self._source.fetch_profile(user)
        except ProfileHarvesterError as exc:
            logger.error("Failed fetching profile: %s", exc)
            return None

    async def _list_repositories(self, user: str) -> list[dict[str, Any]]:
        logger.info("Fetching repositories (paginated)")
        try:
            repos = await self._source.list_repositories(user)
        except ProfileHarvesterError as exc:
            logger.error("Failed fetching repos: %s", exc)
            return []
        logger.info("Fetched %d repositories", len(repos))
        return repos

    async def _list_organizations(self, user: str) -> list[dict[str, Any]] | None:
        try:
            return await self._source.list_organizations(user)
        except ProfileHarvesterError as exc:
            logger.error("Failed fetching orgs: %s", exc)
            return None

    # ── Persistence ─────────────────────────────────────────────────────

    def _write(self, filename: str, payload: Any) -> bool:
        try:
            self._store.write(filename, payload)
        except OSError as exc:
            logger.error("Failed writing %s: %s", filename, exc)
            return False
        return True
