"""Domain exception hierarchy.

The GitHub adapter translates HTTP outcomes into these; the enrichment
services catch them at per-call boundaries and degrade the affected field.
"""

from __future__ import annotations


class ProfileHarvesterError(Exception):
    """Base exception for the entire application."""


# ── Transient ───────────────────────────────────────────────────────────────


class StatsNotReadyError(ProfileHarvesterError):
    """GitHub is still computing contributor statistics (202)."""


# ── Terminal per call ───────────────────────────────────────────────────────


class ResourceNotFoundError(ProfileHarvesterError):
    """The user, repository or branch does not exist (404)."""


class AccessDeniedError(ProfileHarvesterError):
    """Access to the resource was denied (403)."""


class GitHubRateLimitError(ProfileHarvesterError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class UpstreamNetworkError(ProfileHarvesterError):
    """The request never produced an HTTP response."""


class UpstreamResponseError(ProfileHarvesterError):
    """GitHub answered with an unexpected status code."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
