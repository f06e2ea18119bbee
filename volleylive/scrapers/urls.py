from typing import Any, Optional

from volleylive.config.settings import settings
from volleylive.utils.misc_utils import non_empty


def team_logo_url(team_id: Any, base_url: Optional[str] = None) -> Optional[str]:
    tid = non_empty(team_id)
    if not tid:
        return None
    return f"{base_url or settings.api_base_url}/img/teams/{tid}.png"


def player_photo_url(player_id: Any, base_url: Optional[str] = None) -> Optional[str]:
    pid = non_empty(player_id)
    if not pid:
        return None
    return f"{base_url or settings.api_base_url}/img/players/{pid}.jpg"
