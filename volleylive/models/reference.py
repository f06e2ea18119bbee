# volleylive/models/reference.py
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from volleylive.utils.misc_utils import as_int, as_str, non_empty


class Team(BaseModel):
    """A team from the reference collection, keyed by its external (SofaScore) id."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    sofascore_team_id: Optional[int] = None
    name: Optional[str] = None
    country: Optional[str] = None  # Free text, e.g. "Norge"
    league: Optional[str] = None  # Free text tier label

    @field_validator("sofascore_team_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Optional[int]:
        return as_int(v)

    @field_validator("name", "league", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Optional[str]:
        return non_empty(v)

    @field_validator("country", mode="before")
    @classmethod
    def _coerce_country(cls, v: Any) -> Optional[str]:
        # Compared by exact literal, so kept verbatim; only blank becomes None
        if non_empty(v) is None:
            return None
        return v if isinstance(v, str) else str(v)


class Player(BaseModel):
    """A player from the reference collection."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    name: str = "—"
    nationality: Optional[str] = None
    sofascore_team_id: Optional[int] = None  # Owning team's external id

    @field_validator("id", "nationality", mode="before")
    @classmethod
    def _coerce_optional_text(cls, v: Any) -> Optional[str]:
        return non_empty(v)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, v: Any) -> str:
        return as_str(v) or "—"

    @field_validator("sofascore_team_id", mode="before")
    @classmethod
    def _coerce_team_id(cls, v: Any) -> Optional[int]:
        return as_int(v)
