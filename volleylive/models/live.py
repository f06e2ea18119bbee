# volleylive/models/live.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .enums import ClassificationGroup, PlayKind, ServeEmphasis, Side
from .reference import Player


class CurrentPoint(BaseModel):
    """Score of the currently active set."""

    model_config = ConfigDict(frozen=True)

    set_number: Optional[int] = None
    home: Optional[float] = None
    away: Optional[float] = None


class ServeInfo(BaseModel):
    """Who is serving and how long their unbroken scoring run is."""

    model_config = ConfigDict(frozen=True)

    side: Optional[Side] = None
    run: float = 0
    emphasis: ServeEmphasis = ServeEmphasis.NONE

    @computed_field  # type: ignore[misc]
    @property
    def hot(self) -> bool:
        return self.emphasis != ServeEmphasis.NONE


class PlayLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    side: Side
    kind: PlayKind


class TournamentSeason(BaseModel):
    model_config = ConfigDict(frozen=True)

    tournament: str = "—"
    season: Optional[str] = None


# Per-cycle ephemeral state, rebuilt from scratch on every reconciliation
FlashState = Dict[str, Dict[Side, float]]
PlayLabelState = Dict[str, PlayLabel]


class EventView(BaseModel):
    """Everything the presentation layer needs for one event in one cycle."""

    model_config = ConfigDict(frozen=True)

    identity: str
    event_id: Optional[str] = None
    start_ts: Optional[float] = None
    home_team_name: Optional[str] = None
    away_team_name: Optional[str] = None
    point: CurrentPoint
    serve: ServeInfo
    flash: Optional[Dict[Side, float]] = None
    play_label: Optional[PlayLabel] = None
    group: ClassificationGroup
    tournament: str
    season: Optional[str] = None
    country_label: Optional[str] = None
    league_label: Optional[str] = None
    stage_label: Optional[str] = None
    status_label: str = "—"
    is_live: bool = False
    home_federation_players_home: List[Player] = Field(default_factory=list)
    home_federation_players_away: List[Player] = Field(default_factory=list)


class ReconcileResult(BaseModel):
    """Output of one reconciliation cycle."""

    model_config = ConfigDict(frozen=True)

    events: List[Any]  # The snapshot, unchanged
    flash_state: FlashState = Field(default_factory=dict)
    play_label_state: PlayLabelState = Field(default_factory=dict)
    views: List[EventView] = Field(default_factory=list)
    reference_populated: bool = False
