"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class RepositoryRecord:
    """One repository as listed by ``GET /users/{user}/repos``.

    ``raw`` keeps the complete API payload so it can be written back out
    untouched; the typed attributes are the fields the pipeline reads.
    """

    owner: str
    name: str
    default_branch: str
    pushed_at: str | None = None
    fork: bool = False
    stargazers_count: int = 0
    forks_count: int = 0
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> RepositoryRecord:
        owner = data.get("owner") or {}
        return cls(
            owner=owner.get("login", ""),
            name=data["name"],
            default_branch=data.get("default_branch") or "main",
            pushed_at=data.get("pushed_at"),
            fork=bool(data.get("fork", False)),
            stargazers_count=data.get("stargazers_count") or 0,
            forks_count=data.get("forks_count") or 0,
            raw=data,
        )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def pushed_at_datetime(self) -> datetime | None:
        """Parse ``pushed_at`` (ISO-8601); values without an offset are UTC."""
        if not self.pushed_at:
            return None
        parsed = datetime.fromisoformat(self.pushed_at.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


@dataclass(frozen=True, slots=True)
class LatestCommit:
    """Head commit of a repository's default branch."""

    sha: str
    date: str | None
    message: str | None
    url: str | None


@dataclass(frozen=True, slots=True)
class ContributorAuthor:
    login: str
    url: str | None


@dataclass(frozen=True, slots=True)
class ContributorStat:
    """Aggregated commit total for one contributor."""

    total: int
    author: ContributorAuthor | None = None


@dataclass(frozen=True, slots=True)
class EnrichedRepository:
    """A repository plus everything the enricher attached to it.

    Each enrichment field degrades independently: ``languages`` to ``{}``,
    the rest to ``None``.
    """

    repository: RepositoryRecord
    languages: dict[str, int] = field(default_factory=dict)
    latest_commit: LatestCommit | None = None
    contributors_stats: list[ContributorStat] | None = None
    commit_count_estimate: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Original payload with the four enrichment keys appended."""
        out = dict(self.repository.raw)
        out["languages"] = dict(self.languages)
        out["latest_commit"] = self.latest_commit
        out["contributors_stats"] = self.contributors_stats
        out["commit_count_estimate"] = self.commit_count_estimate
        return out


@dataclass(frozen=True, slots=True)
class ProfileSummary:
    """Headline numbers written to ``summary.json``."""

    generated_at: str
    updated_at: str | None
    total_public_repos: int
    source_repos_count: int
    total_stars: int
    total_forks: int
    total_commits: int | None
    followers: int | None
