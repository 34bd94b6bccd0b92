"""Profile summary — headline totals over the enriched repositories."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

from profile_harvester.domain.entities import EnrichedRepository, ProfileSummary


def compute_summary(
    repositories: Sequence[EnrichedRepository],
    total_public_repos: int,
    profile: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> ProfileSummary:
    """Aggregate stars, forks and commits across non-fork repositories.

    ``updated_at`` is the most recent ``pushed_at`` over *all* repositories,
    forks included.  A commit total of zero is reported as ``None`` since it
    almost always means the statistics were unavailable.
    """
    now = now or datetime.now(timezone.utc)
    sources = [r for r in repositories if not r.repository.fork]

    total_commits = sum(r.commit_count_estimate or 0 for r in sources)
    pushed = [r.repository.pushed_at for r in repositories if r.repository.pushed_at]

    return ProfileSummary(
        generated_at=now.isoformat().replace("+00:00", "Z"),
        updated_at=max(pushed) if pushed else None,
        total_public_repos=total_public_repos,
        source_repos_count=len(sources),
        total_stars=sum(r.repository.stargazers_count for r in sources),
        total_forks=sum(r.repository.forks_count for r in sources),
        total_commits=total_commits or None,
        followers=profile.get("followers") if profile else None,
    )
