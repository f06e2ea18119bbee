# volleylive/scrapers/live_scraper.py
from typing import Any, List, Optional

from loguru import logger

from volleylive.config.settings import settings
from volleylive.utils.misc_utils import unwrap_items
from .base_scraper import BaseScraper

LIVE_PATH = "/live"
TEAMS_PATH = "/teams"
PLAYERS_PATH = "/players"


class LiveApiScraper(BaseScraper):
    """Fetches the live snapshot and the two reference collections."""

    source: str = "live-api"

    def __init__(self, *args, page_limit: Optional[int] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.page_limit = page_limit or settings.reference_page_limit

    async def fetch_live(self) -> List[Any]:
        """Current snapshot of live events, in upstream order."""
        data = await self.get_json(LIVE_PATH)
        events = unwrap_items(data)
        if not isinstance(data, (list, dict)):
            logger.warning(f"Unexpected /live payload shape: {type(data).__name__}")
        logger.debug(f"Fetched {len(events)} live event(s).")
        return events

    async def fetch_teams(self) -> List[Any]:
        data = await self.get_json(
            TEAMS_PATH, params={"limit": self.page_limit, "offset": 0}
        )
        teams = unwrap_items(data)
        logger.info(f"Fetched {len(teams)} team record(s).")
        return teams

    async def fetch_players(self) -> List[Any]:
        data = await self.get_json(
            PLAYERS_PATH, params={"limit": self.page_limit, "offset": 0}
        )
        players = unwrap_items(data)
        logger.info(f"Fetched {len(players)} player record(s).")
        return players
