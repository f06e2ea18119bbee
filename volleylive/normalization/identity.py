from typing import Any, Mapping, Optional

from volleylive.models.live import CurrentPoint
from volleylive.utils.misc_utils import as_num, first_digits, non_empty

MAX_SETS = 5


def event_id(ev: Mapping[str, Any]) -> Optional[str]:
    """The upstream identifier, `event_id` first and `custom_id` as fallback."""
    raw = ev.get("event_id")
    if raw is None:
        raw = ev.get("custom_id")
    return non_empty(raw)


def event_key(ev: Mapping[str, Any]) -> str:
    """Stable identity of an event across polls.

    The upstream id when one exists, otherwise start time and both team
    names, so two events with the same fields always share a key.
    """
    eid = event_id(ev)
    if eid is not None:
        return eid
    parts = (ev.get("start_ts"), ev.get("home_team_name"), ev.get("away_team_name"))
    return "-".join("" if p is None else str(p) for p in parts)


def home_team_id(ev: Mapping[str, Any]) -> Any:
    value = ev.get("home_team_id")
    return value if value is not None else ev.get("home_teams_id")


def away_team_id(ev: Mapping[str, Any]) -> Any:
    value = ev.get("away_team_id")
    return value if value is not None else ev.get("away_teams_id")


def current_point(ev: Mapping[str, Any]) -> CurrentPoint:
    """Score of the active set.

    An explicit set number in `status_desc` wins even when a later set
    already has scores; otherwise the highest set with any score is active.
    """
    set_no = first_digits(ev.get("status_desc"))
    if not set_no:
        set_no = None
        for i in range(MAX_SETS, 0, -1):
            if ev.get(f"home_p{i}") is not None or ev.get(f"away_p{i}") is not None:
                set_no = i
                break

    if set_no is None:
        return CurrentPoint()

    return CurrentPoint(
        set_number=set_no,
        home=as_num(ev.get(f"home_p{set_no}")),
        away=as_num(ev.get(f"away_p{set_no}")),
    )
