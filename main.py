import sys
import asyncio
import signal

# --- Settings/Logging ---
from volleylive.logging.setup import setup_logging
from volleylive.config.settings import settings

setup_logging()

from loguru import logger

from volleylive.models.live import ReconcileResult
from volleylive.normalization.reconciler import (
    Reconciler,
    default_group,
    group_counts,
    views_for_group,
)
from volleylive.polling.poller import LivePoller
from volleylive.scrapers.live_scraper import LiveApiScraper

from rich import print
from rich.panel import Panel


def print_cycle(result: ReconcileResult) -> None:
    """Renders a short summary of one reconciliation cycle."""
    counts = group_counts(result.views)
    group = default_group(counts)
    lines = [
        " · ".join(f"{g.value}: {n}" for g, n in counts.items()),
        "",
    ]
    for view in views_for_group(result.views, group)[:10]:
        point = view.point
        serve = ""
        if view.serve.side is not None:
            serve = f" [serve {view.serve.side.value}, run {view.serve.run:g}]"
        label = f" {view.play_label.kind.value}" if view.play_label else ""
        sub = " · ".join(
            x for x in (view.country_label, view.league_label, view.stage_label) if x
        )
        home = f"{point.home:g}" if point.home is not None else "—"
        away = f"{point.away:g}" if point.away is not None else "—"
        lines.append(
            f"{view.home_team_name} {home} - {away} {view.away_team_name}{serve}{label}"
        )
        if sub:
            lines.append(f"  {sub}")
    print(Panel("\n".join(lines), title=f"Live · {group.value}"))


async def main() -> None:
    """Main entry point: load reference data, then poll until interrupted."""
    logger.info(f"Starting live volleyball poller against {settings.api_base_url}")

    scraper = LiveApiScraper()
    poller = LivePoller(scraper, Reconciler(), on_cycle=print_cycle)
    stop = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Signal handlers are unavailable on some platforms (Windows)
            pass

    try:
        await poller.refresh_reference()
        await poller.run(stop)
    except Exception:
        logger.exception("An error occurred during main execution loop.")
    finally:
        await scraper.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
