"""Tests for the per-poll reconciliation cycle."""

import copy

from volleylive.models.enums import ClassificationGroup, PlayKind, Side
from volleylive.normalization.reconciler import (
    Reconciler,
    default_group,
    group_counts,
    views_for_group,
)
from volleylive.normalization.serve import FlashClock
from volleylive.reference.index import ReferenceIndex

from conftest import NOR_TEAM_ID, POL_TEAM_ID


def _quiet(event):
    ev = dict(event)
    ev["new_score"] = 0
    return ev


class TestReconcile:
    def test_events_are_returned_unchanged(self, index, live_event):
        snapshot = [live_event]
        before = copy.deepcopy(snapshot)
        result = Reconciler().reconcile(snapshot, index)
        assert result.events == before
        assert result.events[0] is live_event
        assert live_event == before[0]

    def test_view_for_live_event(self, index, live_event):
        view = Reconciler().reconcile([live_event], index).views[0]
        assert view.identity == "555001"
        assert view.point.set_number == 3
        assert (view.point.home, view.point.away) == (14, 12)
        assert view.serve.side == Side.HOME
        assert view.serve.run == 2
        assert view.play_label.kind == PlayKind.BREAK_POINT
        assert view.group == ClassificationGroup.FEDERATION_ABROAD
        assert view.tournament == "SuperLega"
        assert view.season == "Serie A1 25/26"
        assert view.country_label.endswith("Italy")
        assert view.league_label == "SuperLega"
        assert view.stage_label == "Seriespill"
        assert view.status_label == "LIVE"
        assert view.is_live is True

    def test_flash_and_label_maps_for_new_point(self, index, live_event):
        result = Reconciler().reconcile([live_event], index)
        assert set(result.flash_state) == {"555001"}
        assert set(result.flash_state["555001"]) == {Side.HOME}
        assert result.play_label_state["555001"].side == Side.HOME

    def test_no_signals_without_new_point(self, index, live_event):
        result = Reconciler().reconcile([_quiet(live_event)], index)
        assert result.flash_state == {}
        assert result.play_label_state == {}
        assert result.views[0].serve.side == Side.HOME

    def test_maps_are_replaced_not_merged(self, index, live_event):
        reconciler = Reconciler()
        first = reconciler.reconcile([live_event], index)
        second = reconciler.reconcile([_quiet(live_event)], index)
        assert first.flash_state
        assert second.flash_state == {}
        assert second.play_label_state == {}

    def test_flash_discriminators_differ_across_cycles(self, index, live_event):
        reconciler = Reconciler(flash_clock=FlashClock(now=lambda: 1760900000.0))
        a = reconciler.reconcile([live_event], index).flash_state["555001"][Side.HOME]
        b = reconciler.reconcile([live_event], index).flash_state["555001"][Side.HOME]
        assert a != b

    def test_idempotent_apart_from_flash(self, index, live_event):
        reconciler = Reconciler()
        snapshot = [live_event, {"custom_id": "x", "status_type": "finished"}]
        one = reconciler.reconcile(snapshot, index)
        two = reconciler.reconcile(snapshot, index)
        assert one.events == two.events
        assert [v.model_dump(exclude={"flash"}) for v in one.views] == [
            v.model_dump(exclude={"flash"}) for v in two.views
        ]
        assert one.play_label_state == two.play_label_state
        assert {k: set(v) for k, v in one.flash_state.items()} == {
            k: set(v) for k, v in two.flash_state.items()
        }

    def test_absent_events_are_dropped(self, index, live_event):
        reconciler = Reconciler()
        reconciler.reconcile([live_event], index)
        result = reconciler.reconcile([], index)
        assert result.events == []
        assert result.views == []
        assert result.flash_state == {}

    def test_non_mapping_items_are_kept_but_not_viewed(self, index, live_event):
        result = Reconciler().reconcile([live_event, None, "junk"], index)
        assert len(result.events) == 3
        assert len(result.views) == 1

    def test_none_snapshot(self, index):
        result = Reconciler().reconcile(None, index)
        assert result.events == []

    def test_unpopulated_reference(self, live_event):
        result = Reconciler().reconcile([live_event], ReferenceIndex.empty())
        assert result.reference_populated is False
        assert result.views[0].group == ClassificationGroup.OTHER
        assert result.views[0].play_label is not None

    def test_home_federation_players_only_on_abroad_events(self, index, live_event):
        abroad = dict(live_event, event_id=1)
        abroad["away_team_id"] = POL_TEAM_ID
        home_fed = dict(live_event, event_id=2, home_team_id=NOR_TEAM_ID)
        views = Reconciler().reconcile([abroad, home_fed], index).views

        assert [p.name for p in views[0].home_federation_players_home] == ["Ola Nordmann"]
        assert [p.name for p in views[0].home_federation_players_away] == ["Kari Nordmann"]
        assert views[1].group == ClassificationGroup.HOME_FEDERATION
        assert views[1].home_federation_players_home == []

    def test_garbage_fields_never_raise(self, index):
        ev = {
            "event_id": {"nested": True},
            "home_team_id": [1],
            "status_desc": 3.5,
            "home_point_run": "lots",
            "away_point_run": float("nan"),
            "new_score": "yes",
            "tournament": "not a dict",
            "roundInfo": 7,
            "raw_json": "{{",
            "start_ts": "soon",
        }
        view = Reconciler().reconcile([ev], index).views[0]
        assert view.serve.side is None
        assert view.group == ClassificationGroup.OTHER
        assert view.start_ts is None

    def test_deeply_nested_blob_does_not_abort_the_cycle(self, index, live_event):
        nested = {"event_id": 1, "raw_json": '{"a":' * 200000}
        result = Reconciler().reconcile([nested, live_event], index)
        assert [v.identity for v in result.views] == ["1", "555001"]
        assert result.views[0].tournament == "—"

    def test_event_whose_view_fails_is_skipped(self, index, live_event):
        class BrokenClock:
            def next(self):
                raise RuntimeError("clock unavailable")

        quiet = _quiet(dict(live_event, event_id=2))
        result = Reconciler(flash_clock=BrokenClock()).reconcile([live_event, quiet], index)
        assert len(result.events) == 2
        assert [v.identity for v in result.views] == ["2"]
        assert result.flash_state == {}


class TestGroupSummary:
    def _views(self, index, live_event):
        events = [
            dict(live_event, event_id=1, start_ts=300, home_team_id=NOR_TEAM_ID),
            dict(live_event, event_id=2, start_ts=100, home_team_id=NOR_TEAM_ID),
            dict(live_event, event_id=3),
            dict(live_event, event_id=4, home_team_id=1, away_team_id=2),
            dict(live_event, event_id=5, home_team_id=NOR_TEAM_ID, status_type="finished"),
        ]
        return Reconciler().reconcile(events, index).views

    def test_counts_only_live_events(self, index, live_event):
        counts = group_counts(self._views(index, live_event))
        assert counts == {
            ClassificationGroup.HOME_FEDERATION: 2,
            ClassificationGroup.FEDERATION_ABROAD: 1,
            ClassificationGroup.OTHER: 1,
        }

    def test_default_group_priority(self):
        assert default_group({ClassificationGroup.HOME_FEDERATION: 1, ClassificationGroup.FEDERATION_ABROAD: 3}) == ClassificationGroup.HOME_FEDERATION
        assert default_group({ClassificationGroup.FEDERATION_ABROAD: 3}) == ClassificationGroup.FEDERATION_ABROAD
        assert default_group({}) == ClassificationGroup.OTHER

    def test_views_for_group_sorted_by_start(self, index, live_event):
        selected = views_for_group(self._views(index, live_event), ClassificationGroup.HOME_FEDERATION)
        assert [v.identity for v in selected] == ["2", "1"]
