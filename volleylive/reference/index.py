"""Lookup structures over the teams/players reference collections.

The index is immutable once built. ``ReferenceStore`` swaps whole indexes
so a reconciliation cycle that grabbed ``snapshot()`` never observes a
refresh half-way through.
"""
import threading
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from loguru import logger
from pydantic import ValidationError

from volleylive.config.settings import settings
from volleylive.models.reference import Player, Team
from volleylive.utils.misc_utils import as_int, as_str


def _parse_records(model, raw_records: Iterable[Any], kind: str) -> List[Any]:
    parsed = []
    skipped = 0
    for raw in raw_records:
        if not isinstance(raw, dict):
            skipped += 1
            continue
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError as e:
            skipped += 1
            logger.debug(f"Skipping malformed {kind} record: {e}")
    if skipped:
        logger.warning(f"Skipped {skipped} malformed {kind} record(s).")
    return parsed


class ReferenceIndex:
    """Teams by external id, and home-federation players by their team's id."""

    def __init__(
        self,
        teams: Iterable[Any] = (),
        players: Iterable[Any] = (),
        populated: bool = True,
        demonym: Optional[str] = None,
    ):
        demonym = (demonym if demonym is not None else settings.home_federation_demonym)
        demonym = demonym.lower()

        teams_by_id = {}
        for team in _parse_records(Team, teams, "team"):
            if team.sofascore_team_id is None:
                continue
            teams_by_id[team.sofascore_team_id] = team

        players_by_team = {}
        for player in _parse_records(Player, players, "player"):
            if not player.id or player.sofascore_team_id is None:
                continue
            if demonym not in as_str(player.nationality).lower():
                continue
            players_by_team.setdefault(player.sofascore_team_id, []).append(player)

        self._teams = MappingProxyType(teams_by_id)
        self._players = MappingProxyType(
            {k: tuple(v) for k, v in players_by_team.items()}
        )
        self._populated = populated

    @classmethod
    def empty(cls) -> "ReferenceIndex":
        """An index that has never been populated (classification degrades)."""
        return cls(populated=False)

    @property
    def is_populated(self) -> bool:
        return self._populated

    @property
    def teams_by_external_id(self) -> Mapping[int, Team]:
        return self._teams

    @property
    def players_by_team_id(self) -> Mapping[int, Tuple[Player, ...]]:
        return self._players

    def team(self, raw_team_id: Any) -> Optional[Team]:
        """Resolves a raw (possibly string or float) team id to a Team."""
        key = as_int(raw_team_id)
        if key is None:
            return None
        return self._teams.get(key)

    def home_federation_players(self, raw_team_id: Any) -> List[Player]:
        key = as_int(raw_team_id)
        if key is None:
            return []
        return list(self._players.get(key, ()))

    def __len__(self) -> int:
        return len(self._teams)

    def __repr__(self) -> str:
        return (
            f"ReferenceIndex(teams={len(self._teams)}, "
            f"player_teams={len(self._players)}, populated={self._populated})"
        )


class ReferenceStore:
    """Holds the current ReferenceIndex; teams and players refresh independently."""

    def __init__(self, demonym: Optional[str] = None):
        self._lock = threading.Lock()
        self._demonym = demonym
        self._teams: Tuple[Any, ...] = ()
        self._players: Tuple[Any, ...] = ()
        self._teams_loaded = False
        self._players_loaded = False
        self._index = ReferenceIndex.empty()

    def snapshot(self) -> ReferenceIndex:
        with self._lock:
            return self._index

    def update_teams(self, teams: Iterable[Any]) -> ReferenceIndex:
        with self._lock:
            self._teams = tuple(teams)
            self._teams_loaded = True
            return self._rebuild()

    def update_players(self, players: Iterable[Any]) -> ReferenceIndex:
        with self._lock:
            self._players = tuple(players)
            self._players_loaded = True
            return self._rebuild()

    def _rebuild(self) -> ReferenceIndex:
        # Only teams drive classification, so the index counts as populated
        # as soon as a teams payload has arrived.
        self._index = ReferenceIndex(
            self._teams,
            self._players,
            populated=self._teams_loaded,
            demonym=self._demonym,
        )
        logger.info(f"Reference index rebuilt: {self._index!r}")
        return self._index
