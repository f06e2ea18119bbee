import asyncio
from typing import Callable, Optional, Set

from loguru import logger

from volleylive.config.settings import settings
from volleylive.models.live import ReconcileResult
from volleylive.normalization.reconciler import Reconciler
from volleylive.reference.index import ReferenceStore
from volleylive.scrapers.base_scraper import ScraperError
from volleylive.scrapers.live_scraper import LiveApiScraper

CycleCallback = Callable[[ReconcileResult], None]


class LivePoller:
    """Polls the live snapshot and publishes one ReconcileResult per cycle.

    Only one poll is ever in flight: starting a poll cancels the previous one,
    and a poll that finishes after being superseded is dropped without
    publishing anything, so a slow response can never overwrite newer data.
    """

    def __init__(
        self,
        scraper: LiveApiScraper,
        reconciler: Optional[Reconciler] = None,
        store: Optional[ReferenceStore] = None,
        on_cycle: Optional[CycleCallback] = None,
        interval: Optional[float] = None,
    ):
        self.scraper = scraper
        self.reconciler = reconciler or Reconciler()
        self.store = store or ReferenceStore()
        self.on_cycle = on_cycle
        self.interval = interval or settings.poll_interval_seconds

        self.latest: Optional[ReconcileResult] = None
        self.last_error: Optional[str] = None
        self.cycles = 0

        self._generation = 0
        self._inflight: Optional[asyncio.Task] = None
        self._background: Set[asyncio.Task] = set()
        self._warned_unpopulated = False

    async def poll_once(self) -> Optional[ReconcileResult]:
        """Runs one poll; returns None when it failed or was superseded."""
        if self._inflight is not None and not self._inflight.done():
            logger.debug("Superseding in-flight poll.")
            self._inflight.cancel()

        self._generation += 1
        generation = self._generation
        task = asyncio.create_task(self._poll(generation))
        self._inflight = task

        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and generation != self._generation:
                return None
            raise

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _poll(self, generation: int) -> Optional[ReconcileResult]:
        try:
            events = await self.scraper.fetch_live()
        except ScraperError as e:
            if self._is_current(generation):
                self.last_error = str(e)
                logger.error(f"Live poll failed, keeping previous snapshot: {e}")
            return None
        except Exception as e:
            if self._is_current(generation):
                self.last_error = str(e)
                logger.exception(f"Unexpected error during live poll: {e}")
            return None

        if not self._is_current(generation):
            logger.debug(f"Discarding result of superseded poll #{generation}.")
            return None

        index = self.store.snapshot()
        if not index.is_populated and not self._warned_unpopulated:
            logger.warning(
                "Reference data not loaded yet; all events classified as 'other'."
            )
            self._warned_unpopulated = True

        result = self.reconciler.reconcile(events, index)
        self.latest = result
        self.last_error = None
        self.cycles += 1
        if self.on_cycle is not None:
            self.on_cycle(result)
        return result

    async def refresh_reference(self) -> None:
        """Fetches teams and players independently; a failure of one keeps the other."""
        teams, players = await asyncio.gather(
            self.scraper.fetch_teams(),
            self.scraper.fetch_players(),
            return_exceptions=True,
        )

        if isinstance(teams, BaseException):
            logger.warning(f"Error fetching teams: {teams}")
        else:
            self.store.update_teams(teams)

        if isinstance(players, BaseException):
            logger.warning(f"Error fetching players: {players}")
        else:
            self.store.update_players(players)

    async def run(self, stop: Optional[asyncio.Event] = None) -> None:
        """Starts a poll every `interval` seconds until `stop` is set."""
        stop = stop or asyncio.Event()
        logger.info(f"Starting live polling every {self.interval}s.")
        try:
            while not stop.is_set():
                task = asyncio.create_task(self.poll_once())
                self._background.add(task)
                task.add_done_callback(self._background.discard)
                try:
                    await asyncio.wait_for(stop.wait(), timeout=self.interval)
                except asyncio.TimeoutError:
                    pass
        finally:
            await self.stop()

    async def stop(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        # Invalidate anything still running so it cannot publish
        self._generation += 1
        pending = list(self._background)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.info(f"Live polling stopped after {self.cycles} cycle(s).")
