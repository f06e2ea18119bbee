from typing import Any, Mapping, Optional

from volleylive.config.settings import settings
from volleylive.models.enums import ClassificationGroup
from volleylive.reference.index import ReferenceIndex

from .identity import away_team_id, home_team_id


def classify(
    ev: Mapping[str, Any],
    index: Optional[ReferenceIndex],
    home_country: Optional[str] = None,
) -> ClassificationGroup:
    """Assigns exactly one audience group to an event.

    A team of the tracked federation on either side dominates; otherwise any
    recognized team makes it an "abroad" event. Without a populated index
    every event is OTHER.
    """
    if index is None or not index.is_populated:
        return ClassificationGroup.OTHER

    country = home_country if home_country is not None else settings.home_federation_country
    home = index.team(home_team_id(ev))
    away = index.team(away_team_id(ev))

    if any(t is not None and t.country == country for t in (home, away)):
        return ClassificationGroup.HOME_FEDERATION
    if home is not None or away is not None:
        return ClassificationGroup.FEDERATION_ABROAD
    return ClassificationGroup.OTHER
