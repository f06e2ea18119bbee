from typing import Any

from volleylive.utils.misc_utils import as_str

LIVE_MARKERS = ("inprogress", "live", "inplay")
FINISHED_MARKERS = ("finished", "ended")
UPCOMING_MARKERS = ("not", "sched")


def is_live_status(status_type: Any) -> bool:
    t = as_str(status_type).lower()
    return any(m in t for m in LIVE_MARKERS)


def live_label(status_type: Any) -> str:
    t = as_str(status_type).lower()
    if any(m in t for m in LIVE_MARKERS):
        return "LIVE"
    if any(m in t for m in FINISHED_MARKERS):
        return "SLUTT"
    if any(m in t for m in UPCOMING_MARKERS):
        return "KOMMER"
    return as_str(status_type) or "—"


def status_dot(status_type: Any) -> str:
    return "dot" if is_live_status(status_type) else "dot gray"
