"""GitHub REST API adapter — implements the RemoteDataSource port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from profile_harvester.domain.entities import (
    ContributorAuthor,
    ContributorStat,
    LatestCommit,
)
from profile_harvester.domain.exceptions import (
    AccessDeniedError,
    GitHubRateLimitError,
    ResourceNotFoundError,
    StatsNotReadyError,
    UpstreamNetworkError,
    UpstreamResponseError,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_PER_PAGE = "100"


class GitHubRestAdapter:
    """Concrete RemoteDataSource backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        base_url: str = _GITHUB_API,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "profile-harvester/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    # ── Account ─────────────────────────────────────────────────────────

    async def fetch_profile(self, user: str) -> dict[str, Any]:
        """GET /users/{user}."""
        resp = await self._api_get(f"/users/{user}")
        return _decode_json(resp)

    async def list_repositories(self, user: str) -> list[dict[str, Any]]:
        """GET /users/{user}/repos, every page, most recently pushed first."""
        return await self._get_all_pages(
            f"/users/{user}/repos",
            params={"per_page": _PER_PAGE, "type": "public", "sort": "pushed"},
        )

    async def list_organizations(self, user: str) -> list[dict[str, Any]]:
        """GET /users/{user}/orgs, every page."""
        return await self._get_all_pages(
            f"/users/{user}/orgs", params={"per_page": _PER_PAGE}
        )

    # ── Per repository ──────────────────────────────────────────────────

    async def fetch_languages(self, owner: str, name: str) -> dict[str, int]:
        """GET /repos/{owner}/{repo}/languages → {lang: bytes}."""
        resp = await self._api_get(f"/repos/{owner}/{name}/languages")
        return _decode_json(resp) or {}

    async def fetch_latest_commit(
        self, owner: str, name: str, branch: str
    ) -> LatestCommit | None:
        """GET /repos/{owner}/{repo}/commits?sha={branch}&per_page=1."""
        resp = await self._api_get(
            f"/repos/{owner}/{name}/commits",
            params={"sha": branch, "per_page": "1"},
        )
        data = _decode_json(resp)
        if not isinstance(data, list) or not data:
            return None

        head = data[0]
        commit = head.get("commit") or {}
        author = commit.get("author") or {}
        committer = commit.get("committer") or {}
        return LatestCommit(
            sha=head["sha"],
            date=author.get("date") or committer.get("date"),
            message=commit.get("message"),
            url=head.get("html_url"),
        )

    async def fetch_contributor_stats(
        self, owner: str, name: str
    ) -> list[ContributorStat]:
        """GET /repos/{owner}/{repo}/stats/contributors.

        GitHub answers 202 while it builds the statistics in the background
        (and 204 for an empty repository); those, and any body that is not a
        list, surface as :class:`StatsNotReadyError` so the caller can poll.
        """
        resp = await self._api_get(f"/repos/{owner}/{name}/stats/contributors")
        if resp.status_code == 202:
            raise StatsNotReadyError(
                f"Contributor statistics for {owner}/{name} are still being computed."
            )

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, list):
            raise StatsNotReadyError(
                f"Contributor statistics for {owner}/{name} are not available yet."
            )

        return [_parse_contributor(item) for item in data]

    # ── HTTP plumbing ───────────────────────────────────────────────────

    async def _get_all_pages(
        self, endpoint: str, params: dict[str, str]
    ) -> list[dict[str, Any]]:
        """Follow ``Link: rel="next"`` until the listing is drained."""
        items: list[dict[str, Any]] = []
        resp = await self._api_get(endpoint, params=params)
        items.extend(_decode_page(resp))

        while "next" in resp.links:
            next_url = resp.links["next"]["url"]
            logger.debug("Following next page %s", next_url)
            resp = await self._api_get(next_url)
            items.extend(_decode_page(resp))

        return items

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = endpoint if endpoint.startswith("http") else f"{self._base_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise UpstreamNetworkError(
                f"Network error fetching {url}: {exc}"
            ) from exc

        if resp.status_code in (200, 202, 204):
            return resp

        if resp.status_code == 404:
            raise ResourceNotFoundError(f"Not found: {url}")

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit."
                )
            raise AccessDeniedError(f"Access denied: {url}")

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        raise UpstreamResponseError(
            f"GitHub API returned HTTP {resp.status_code} for {url}",
            status_code=resp.status_code,
        )


def _parse_contributor(item: dict[str, Any]) -> ContributorStat:
    author = item.get("author")
    return ContributorStat(
        total=item.get("total") or 0,
        author=(
            ContributorAuthor(login=author.get("login", ""), url=author.get("html_url"))
            if author
            else None
        ),
    )


def _decode_json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise UpstreamResponseError(
            f"GitHub API returned a non-JSON body for {resp.request.url}",
            status_code=resp.status_code,
        ) from exc


def _decode_page(resp: httpx.Response) -> list[dict[str, Any]]:
    data = _decode_json(resp)
    if not isinstance(data, list):
        raise UpstreamResponseError(
            f"Expected a JSON list from {resp.request.url}, got {type(data).__name__}",
            status_code=resp.status_code,
        )
    return data
