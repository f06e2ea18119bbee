from enum import Enum


class Side(str, Enum):
    HOME = "home"
    AWAY = "away"


class ClassificationGroup(str, Enum):
    HOME_FEDERATION = "home-federation"  # A participant is of the tracked federation
    FEDERATION_ABROAD = "federation-abroad"  # Known team(s), none of the federation
    OTHER = "other"  # Neither participant recognized


class PlayKind(str, Enum):
    SIDE_OUT = "side-out"
    BREAK_POINT = "break-point"


class ServeEmphasis(str, Enum):
    NONE = "none"
    HOT = "hot"  # Run >= 2
    BLINKING_HOT = "blinking-hot"  # Run >= 4


class ImageStatus(str, Enum):
    NONE = "none"
    LOADING = "loading"
    OK = "ok"
    FAIL = "fail"
