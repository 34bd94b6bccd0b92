"""Shared test fixtures and in-memory fakes."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from profile_harvester.domain.entities import (
    ContributorStat,
    LatestCommit,
    RepositoryRecord,
)
from profile_harvester.domain.exceptions import ResourceNotFoundError


def make_repo_payload(
    name: str,
    pushed_at: str | None = "2024-01-01T00:00:00Z",
    *,
    owner: str = "octo",
    fork: bool = False,
    stars: int = 0,
    forks: int = 0,
    default_branch: str = "main",
) -> dict[str, Any]:
    """A trimmed ``/users/{user}/repos`` item."""
    return {
        "id": abs(hash(name)) % 10_000,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner},
        "default_branch": default_branch,
        "pushed_at": pushed_at,
        "fork": fork,
        "stargazers_count": stars,
        "forks_count": forks,
        "html_url": f"https://github.com/{owner}/{name}",
    }


def make_repo(name: str, pushed_at: str | None = "2024-01-01T00:00:00Z", **kwargs: Any) -> RepositoryRecord:
    return RepositoryRecord.from_api(make_repo_payload(name, pushed_at, **kwargs))


class FakeSource:
    """Scriptable RemoteDataSource.

    Per-repository outcomes are keyed by repository name.  A value that is an
    exception instance is raised instead of returned.  ``stats`` holds a list
    of outcomes consumed one per call; the last one repeats.
    """

    def __init__(self) -> None:
        self.languages: dict[str, Any] = {}
        self.commits: dict[str, Any] = {}
        self.stats: dict[str, list[Any]] = {}
        self.stats_calls: dict[str, int] = {}
        self.commit_branches: list[str] = []
        self.profile: Any = {"login": "octo", "followers": 42}
        self.repositories: Any = []
        self.organizations: Any = []

    @staticmethod
    def _resolve(value: Any) -> Any:
        if isinstance(value, BaseException):
            raise value
        return value

    async def fetch_languages(self, owner: str, name: str) -> dict[str, int]:
        await asyncio.sleep(0)
        return self._resolve(self.languages.get(name, {"Python": 100}))

    async def fetch_latest_commit(
        self, owner: str, name: str, branch: str
    ) -> LatestCommit | None:
        await asyncio.sleep(0)
        self.commit_branches.append(branch)
        default = LatestCommit(
            sha=f"sha-{name}",
            date="2024-01-01T00:00:00Z",
            message="initial",
            url=f"https://github.com/{owner}/{name}/commit/sha-{name}",
        )
        return self._resolve(self.commits.get(name, default))

    async def fetch_contributor_stats(
        self, owner: str, name: str
    ) -> list[ContributorStat]:
        await asyncio.sleep(0)
        call = self.stats_calls.get(name, 0)
        self.stats_calls[name] = call + 1
        outcomes = self.stats.get(name, [[ContributorStat(total=3)]])
        return self._resolve(outcomes[min(call, len(outcomes) - 1)])

    async def fetch_profile(self, user: str) -> dict[str, Any]:
        return self._resolve(self.profile)

    async def list_repositories(self, user: str) -> list[dict[str, Any]]:
        return self._resolve(self.repositories)

    async def list_organizations(self, user: str) -> list[dict[str, Any]]:
        return self._resolve(self.organizations)


class MemoryStore:
    """OutputStore that keeps documents in a dict."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.documents: dict[str, Any] = {}
        self._fail_on = fail_on or set()

    def write(self, filename: str, payload: Any) -> None:
        if filename in self._fail_on:
            raise OSError(f"disk full writing {filename}")
        self.documents[filename] = payload


class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that records delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def not_found() -> ResourceNotFoundError:
    return ResourceNotFoundError("Not found")
