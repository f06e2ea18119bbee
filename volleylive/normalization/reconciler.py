from typing import Any, Dict, Iterable, List, Mapping, Optional

from loguru import logger

from volleylive.models.enums import ClassificationGroup
from volleylive.models.live import (
    EventView,
    FlashState,
    PlayLabelState,
    ReconcileResult,
)
from volleylive.reference.index import ReferenceIndex
from volleylive.utils.misc_utils import as_num, non_empty

from .aliases import DEFAULT_ALIAS_TABLE, CountryAliasTable
from .classifier import classify
from .identity import away_team_id, current_point, event_id, event_key, home_team_id
from .metadata import country_label, league_label, stage_label, tournament_and_season
from .serve import FlashClock, default_flash_clock, derive_play_label, derive_serve
from .status import is_live_status, live_label


class Reconciler:
    """Turns one live snapshot into per-event views and fresh signal maps.

    Nothing is carried over between cycles: the flash and play-label maps are
    rebuilt from the snapshot alone, and events missing from it are gone.
    """

    def __init__(
        self,
        flash_clock: Optional[FlashClock] = None,
        alias_table: CountryAliasTable = DEFAULT_ALIAS_TABLE,
        home_country: Optional[str] = None,
    ):
        self.flash_clock = flash_clock or default_flash_clock
        self.alias_table = alias_table
        self.home_country = home_country
        logger.debug(
            f"Reconciler initialized with alias table version {alias_table.version}."
        )

    def reconcile(
        self, snapshot: Iterable[Any], index: Optional[ReferenceIndex] = None
    ) -> ReconcileResult:
        """Processes one snapshot.

        Args:
            snapshot: The raw events of one poll, in upstream order.
            index: Reference data as of this cycle; None or an unpopulated
                   index degrades every event to the OTHER group.

        Returns:
            A ReconcileResult holding the unchanged events, the new flash and
            play-label maps, and one EventView per mapping-shaped event.
        """
        events = list(snapshot) if snapshot is not None else []
        flash_state: FlashState = {}
        play_label_state: PlayLabelState = {}
        views: List[EventView] = []

        for ev in events:
            if not isinstance(ev, Mapping):
                logger.warning(f"Skipping non-mapping item in snapshot: {type(ev)}")
                continue

            try:
                view = self._build_view(ev, index)
            except Exception as e:
                logger.warning(
                    f"Skipping event {ev.get('event_id')!r}, view could not be built: {e}"
                )
                continue
            if view.flash:
                flash_state[view.identity] = view.flash
            if view.play_label:
                play_label_state[view.identity] = view.play_label
            views.append(view)

        logger.debug(
            f"Reconciled {len(views)} event(s): {len(flash_state)} new point(s)."
        )
        return ReconcileResult(
            events=events,
            flash_state=flash_state,
            play_label_state=play_label_state,
            views=views,
            reference_populated=bool(index is not None and index.is_populated),
        )

    def _build_view(
        self, ev: Mapping[str, Any], index: Optional[ReferenceIndex]
    ) -> EventView:
        key = event_key(ev)
        serve = derive_serve(ev)
        play_label = derive_play_label(ev, serve)
        flash = {serve.side: self.flash_clock.next()} if play_label else None

        group = classify(ev, index, self.home_country)
        ts = tournament_and_season(ev)

        abroad = group == ClassificationGroup.FEDERATION_ABROAD and index is not None
        return EventView(
            identity=key,
            event_id=event_id(ev),
            start_ts=as_num(ev.get("start_ts")),
            home_team_name=non_empty(ev.get("home_team_name")),
            away_team_name=non_empty(ev.get("away_team_name")),
            point=current_point(ev),
            serve=serve,
            flash=flash,
            play_label=play_label,
            group=group,
            tournament=ts.tournament,
            season=ts.season,
            country_label=country_label(ev, index, self.alias_table),
            league_label=league_label(ev, index, group),
            stage_label=stage_label(ev),
            status_label=live_label(ev.get("status_type")),
            is_live=is_live_status(ev.get("status_type")),
            home_federation_players_home=(
                index.home_federation_players(home_team_id(ev)) if abroad else []
            ),
            home_federation_players_away=(
                index.home_federation_players(away_team_id(ev)) if abroad else []
            ),
        )


def group_counts(views: Iterable[EventView]) -> Dict[ClassificationGroup, int]:
    """Live events per group (non-live events are not counted)."""
    counts = {group: 0 for group in ClassificationGroup}
    for view in views:
        if view.is_live:
            counts[view.group] += 1
    return counts


def default_group(counts: Mapping[ClassificationGroup, int]) -> ClassificationGroup:
    """Most relevant non-empty group: home federation, then abroad, then other."""
    if counts.get(ClassificationGroup.HOME_FEDERATION, 0) > 0:
        return ClassificationGroup.HOME_FEDERATION
    if counts.get(ClassificationGroup.FEDERATION_ABROAD, 0) > 0:
        return ClassificationGroup.FEDERATION_ABROAD
    return ClassificationGroup.OTHER


def views_for_group(
    views: Iterable[EventView], group: ClassificationGroup
) -> List[EventView]:
    """Live views of one group, ordered by start time (unknown start first)."""
    selected = [v for v in views if v.is_live and v.group == group]
    return sorted(selected, key=lambda v: v.start_ts or 0)
