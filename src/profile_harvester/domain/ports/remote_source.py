"""Port: remote data source — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from profile_harvester.domain.entities import ContributorStat, LatestCommit


class RepositoryDataSource(Protocol):
    """Per-repository capabilities used by the enrichment pipeline."""

    async def fetch_languages(self, owner: str, name: str) -> dict[str, int]:
        """Return language → byte-count mapping."""
        ...

    async def fetch_latest_commit(
        self, owner: str, name: str, branch: str
    ) -> LatestCommit | None:
        """Return the head commit of *branch*, or ``None`` if it has none."""
        ...

    async def fetch_contributor_stats(
        self, owner: str, name: str
    ) -> list[ContributorStat]:
        """Return contributor totals; raises ``StatsNotReadyError`` while computing."""
        ...


class RemoteDataSource(RepositoryDataSource, Protocol):
    """Full contract, including the account-level listings."""

    async def fetch_profile(self, user: str) -> dict[str, Any]:
        ...

    async def list_repositories(self, user: str) -> list[dict[str, Any]]:
        ...

    async def list_organizations(self, user: str) -> list[dict[str, Any]]:
        ...
