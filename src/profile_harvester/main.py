from __future__ import annotations
import asyncio
import logging
from profile_harvester.infrastructure.config import Settings, get_settings
from profile_harvester.interface.dependencies import harvest_session

logger = logging.getLogger(__name__)


async def run(settings: Settings) -> None:
    """Harvest the configured account into the output directory."""
    if not settings.github_token:
        logger.warning(
            "No token provided. Public data will still be fetched but may be rate-limited."
        )
    async with harvest_session(settings) as use_case:
        await use_case.execute(settings.github_user)


def main() -> None:
    """Configure logging and run one harvest."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    asyncio.run(run(settings))


if __name__ == "__main__":
    main()
