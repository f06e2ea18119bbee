"""Display metadata recovered from inconsistent upstream fields.

Each piece of metadata is a fallback chain: an ordered tuple of small
extractor functions, evaluated by ``first_non_empty`` until one returns
something. The embedded ``raw_json`` blob is always the last resort.
"""
from typing import Any, Callable, Mapping, Optional, Sequence

from volleylive.models.enums import ClassificationGroup
from volleylive.models.live import TournamentSeason
from volleylive.reference.index import ReferenceIndex
from volleylive.utils.misc_utils import as_str, dig, non_empty, parse_raw_json

from .aliases import DEFAULT_ALIAS_TABLE, CountryAliasTable
from .classifier import classify
from .identity import away_team_id, home_team_id

UNKNOWN_TOURNAMENT = "—"

Extractor = Callable[..., Optional[str]]


def first_non_empty(extractors: Sequence[Extractor], *args: Any) -> Optional[str]:
    for extract in extractors:
        value = extract(*args)
        if value:
            return value
    return None


# --- Tournament / season ---

def _blob(ev: Mapping[str, Any], *path: str) -> Optional[str]:
    return non_empty(dig(parse_raw_json(ev), *path))


TOURNAMENT_CHAIN = (
    lambda ev: non_empty(ev.get("tournament_name")),
    lambda ev: non_empty(dig(ev, "tournament", "name")),
    lambda ev: _blob(ev, "tournament", "name"),
    lambda ev: _blob(ev, "uniqueTournament", "name"),
)

SEASON_CHAIN = (
    lambda ev: non_empty(ev.get("season_name")),
    lambda ev: non_empty(dig(ev, "season", "name")),
    lambda ev: non_empty(dig(ev, "tournament", "season", "name")),
    lambda ev: _blob(ev, "season", "name"),
    lambda ev: _blob(ev, "tournament", "season", "name"),
)


def tournament_and_season(ev: Mapping[str, Any]) -> TournamentSeason:
    return TournamentSeason(
        tournament=first_non_empty(TOURNAMENT_CHAIN, ev) or UNKNOWN_TOURNAMENT,
        season=first_non_empty(SEASON_CHAIN, ev),
    )


# --- Country ---

def iso_to_flag(iso: Optional[str]) -> Optional[str]:
    """Two-letter code to its regional-indicator flag, e.g. "NO" -> 🇳🇴."""
    if not iso or len(iso) != 2 or not iso.isascii() or not iso.isalpha():
        return None
    return "".join(chr(0x1F1E6 + ord(c) - ord("A")) for c in iso.upper())


def _tournament_season_text(ev: Mapping[str, Any], index: Optional[ReferenceIndex]) -> str:
    ts = tournament_and_season(ev)
    return f"{ts.tournament or ''} {ts.season or ''}"


def _team_country(team_id_of: Callable[[Mapping[str, Any]], Any]) -> Extractor:
    def extract(ev: Mapping[str, Any], index: Optional[ReferenceIndex]) -> Optional[str]:
        team = index.team(team_id_of(ev)) if index is not None else None
        return team.country if team is not None else None

    return extract


COUNTRY_TEXT_CHAIN = (
    _team_country(home_team_id),
    _team_country(away_team_id),
    lambda ev, index: _blob(ev, "tournament", "category", "country", "name"),
    lambda ev, index: _blob(ev, "tournament", "category", "name"),
    _tournament_season_text,
)


def country_label(
    ev: Mapping[str, Any],
    index: Optional[ReferenceIndex] = None,
    table: CountryAliasTable = DEFAULT_ALIAS_TABLE,
) -> Optional[str]:
    """Label such as "🇳🇴 Norway", or None when no alias matches."""
    text = as_str(first_non_empty(COUNTRY_TEXT_CHAIN, ev, index)).lower()
    if not text:
        return None

    iso = table.match(text)
    if not iso:
        return None

    flag = iso_to_flag(iso)
    label = table.label(iso)
    return f"{flag} {label}" if flag else label


# --- League / tier ---

def league_label(
    ev: Mapping[str, Any],
    index: Optional[ReferenceIndex] = None,
    group: Optional[ClassificationGroup] = None,
) -> Optional[str]:
    ts = tournament_and_season(ev)
    season = ts.season
    tournament = ts.tournament if ts.tournament != UNKNOWN_TOURNAMENT else None

    home = index.team(home_team_id(ev)) if index is not None else None
    away = index.team(away_team_id(ev)) if index is not None else None
    home_league = as_str(home.league if home is not None else None)
    away_league = as_str(away.league if away is not None else None)

    if group is None:
        group = classify(ev, index)

    if group == ClassificationGroup.HOME_FEDERATION:
        return season or tournament or home_league or away_league or None

    if home_league and away_league and home_league == away_league:
        return home_league
    if home_league and not away_league:
        return home_league
    if away_league and not home_league:
        return away_league

    return season or tournament or home_league or away_league or None


# --- Stage ---

STAGE_TEXT_CHAIN = (
    lambda ev: non_empty(ev.get("round_name")),
    lambda ev: non_empty(dig(ev, "roundInfo", "name")),
    lambda ev: _blob(ev, "roundInfo", "name"),
)

# Evaluated in order, first match wins
STAGE_RULES = (
    (lambda s: "final" in s and not any(x in s for x in ("semi", "quarter", "eighth")), "Finale"),
    (lambda s: "semi" in s, "Semifinale"),
    (lambda s: "quarter" in s, "Kvartfinale"),
    (lambda s: "eighth" in s, "Åttendedelsfinale"),
    (lambda s: "playoff" in s or "play-offs" in s, "Sluttspill"),
    (lambda s: "regular" in s, "Seriespill"),
)


def stage_label(ev: Mapping[str, Any]) -> Optional[str]:
    raw_stage = first_non_empty(STAGE_TEXT_CHAIN, ev)
    if not raw_stage:
        return None

    lowered = raw_stage.lower()
    for matches, label in STAGE_RULES:
        if matches(lowered):
            return label
    return raw_stage
