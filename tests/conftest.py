"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os

import pytest

# Pin the settings the tests rely on before any volleylive import
os.environ.setdefault("HOME_FEDERATION_COUNTRY", "Norge")
os.environ.setdefault("HOME_FEDERATION_DEMONYM", "nor")
os.environ.setdefault("API_BASE_URL", "https://volley.test")

from volleylive.normalization.serve import FlashClock
from volleylive.reference.index import ReferenceIndex

NOR_TEAM_ID = 1001
ITA_TEAM_ID = 2002
ITA_TEAM_2_ID = 2003
POL_TEAM_ID = 3004


@pytest.fixture
def teams():
    return [
        {"sofascore_team_id": NOR_TEAM_ID, "name": "Randaberg", "country": "Norge", "league": "Eliteserien"},
        {"sofascore_team_id": str(ITA_TEAM_ID), "name": "Perugia", "country": "Italia", "league": "SuperLega"},
        {"sofascore_team_id": ITA_TEAM_2_ID, "name": "Trento", "country": "Italia", "league": "SuperLega"},
        {"sofascore_team_id": POL_TEAM_ID, "name": "Zaksa", "country": "Poland", "league": "PlusLiga"},
        {"sofascore_team_id": None, "name": "No id"},
        {"sofascore_team_id": "abc", "name": "Bad id"},
    ]


@pytest.fixture
def players():
    return [
        {"id": 11, "name": "Ola Nordmann", "nationality": "Norway", "sofascore_team_id": ITA_TEAM_ID},
        {"id": 12, "name": "Kari Nordmann", "nationality": "NOR", "sofascore_team_id": str(POL_TEAM_ID)},
        {"id": 13, "name": "Mario Rossi", "nationality": "Italy", "sofascore_team_id": ITA_TEAM_ID},
        {"id": None, "name": "No id", "nationality": "Norway", "sofascore_team_id": ITA_TEAM_ID},
        {"id": 14, "name": "No team", "nationality": "Norway", "sofascore_team_id": None},
    ]


@pytest.fixture
def index(teams, players):
    return ReferenceIndex(teams, players)


@pytest.fixture
def flash_clock():
    return FlashClock()


@pytest.fixture
def live_event():
    """A live match in the third set with the home side on a two-point serve run."""
    return {
        "event_id": 555001,
        "start_ts": 1760900000,
        "home_team_id": ITA_TEAM_ID,
        "away_team_id": ITA_TEAM_2_ID,
        "home_team_name": "Perugia",
        "away_team_name": "Trento",
        "home_p1": 25, "away_p1": 21,
        "home_p2": 22, "away_p2": 25,
        "home_p3": 14, "away_p3": 12,
        "home_sets": 1, "away_sets": 1,
        "status_type": "inprogress",
        "status_desc": "3rd set",
        "home_point_run": 2,
        "away_point_run": 0,
        "new_score": 1,
        "tournament_name": "SuperLega",
        "season_name": "Serie A1 25/26",
        "round_name": "Regular Season",
    }
