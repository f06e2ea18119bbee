"""Serve side, point runs and "just scored" signals.

The upstream only reports, per event, how many consecutive points each side
has won on the current serve plus a `new_score` flag for brand-new points.
Everything here is reconstructed from those counters alone.
"""
import threading
import time
from typing import Any, Mapping, Optional

from volleylive.models.enums import PlayKind, ServeEmphasis, Side
from volleylive.models.live import PlayLabel, ServeInfo
from volleylive.utils.misc_utils import as_num, counter

HOT_RUN = 2
BLINKING_HOT_RUN = 4
BREAK_POINT_RUN = 2


def serve_emphasis(run: float) -> ServeEmphasis:
    if run >= BLINKING_HOT_RUN:
        return ServeEmphasis.BLINKING_HOT
    if run >= HOT_RUN:
        return ServeEmphasis.HOT
    return ServeEmphasis.NONE


def derive_serve(ev: Mapping[str, Any]) -> ServeInfo:
    """Serving side is the only side with a non-zero run counter."""
    run_home = counter(ev.get("home_point_run"))
    run_away = counter(ev.get("away_point_run"))

    if run_home > 0 and run_away == 0:
        side, run = Side.HOME, run_home
    elif run_away > 0 and run_home == 0:
        side, run = Side.AWAY, run_away
    else:
        # Both zero, or both non-zero (bad upstream data): no server shown
        return ServeInfo()

    return ServeInfo(side=side, run=run, emphasis=serve_emphasis(run))


def is_new_point(ev: Mapping[str, Any]) -> bool:
    return as_num(ev.get("new_score")) == 1


def derive_play_label(
    ev: Mapping[str, Any], serve: Optional[ServeInfo] = None
) -> Optional[PlayLabel]:
    """Break-point / side-out label, only for a brand-new point with a known server."""
    if not is_new_point(ev):
        return None
    serve = serve if serve is not None else derive_serve(ev)
    if serve.side is None:
        return None
    kind = PlayKind.BREAK_POINT if serve.run >= BREAK_POINT_RUN else PlayKind.SIDE_OUT
    return PlayLabel(side=serve.side, kind=kind)


class FlashClock:
    """Hands out flash timestamps that never repeat.

    Values are wall-clock milliseconds, bumped by STEP whenever the clock
    has not moved past the previous value, so two flashes for the same side
    in consecutive polls always differ.
    """

    STEP = 0.001

    def __init__(self, now=time.time):
        self._now = now
        self._last = 0.0
        self._lock = threading.Lock()

    def next(self) -> float:
        with self._lock:
            value = max(self._now() * 1000.0, self._last + self.STEP)
            self._last = value
            return value


default_flash_clock = FlashClock()
