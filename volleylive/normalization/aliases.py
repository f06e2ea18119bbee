# volleylive/normalization/aliases.py
"""Country alias data used by the country-label heuristic.

Lookups are substring tests in table order and the first hit wins, so a
name that contains another alias ("south sudan" / "sudan", "somalia" /
"mali") must be listed before it. Bump ``version`` when the data changes.
"""
from typing import Dict, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

COUNTRY_ALIASES: Tuple[Tuple[str, str], ...] = (
    # Europe
    ("norway", "NO"), ("norge", "NO"),
    ("sweden", "SE"), ("sverige", "SE"),
    ("denmark", "DK"), ("danmark", "DK"),
    ("finland", "FI"),
    ("iceland", "IS"), ("island", "IS"),
    ("germany", "DE"), ("tyskland", "DE"),
    ("france", "FR"), ("frankrike", "FR"),
    ("italy", "IT"), ("italia", "IT"),
    ("spain", "ES"), ("spania", "ES"),
    ("portugal", "PT"),
    ("netherlands", "NL"), ("nederland", "NL"),
    ("belgium", "BE"), ("belgia", "BE"),
    ("switzerland", "CH"), ("sveits", "CH"),
    ("austria", "AT"), ("østerrike", "AT"), ("oesterreich", "AT"),
    ("poland", "PL"), ("polen", "PL"),
    ("czech republic", "CZ"), ("czechia", "CZ"),
    ("slovakia", "SK"),
    ("hungary", "HU"), ("ungarn", "HU"),
    ("romania", "RO"),
    ("bulgaria", "BG"),
    ("slovenia", "SI"),
    ("croatia", "HR"),
    ("serbia", "RS"),
    ("bosnia and herzegovina", "BA"), ("bosnia", "BA"),
    ("montenegro", "ME"),
    ("north macedonia", "MK"), ("macedonia", "MK"),
    ("albania", "AL"),
    ("greece", "GR"),
    ("turkey", "TR"), ("tyrkia", "TR"),
    ("ukraine", "UA"),
    ("belarus", "BY"),
    ("moldova", "MD"),
    ("latvia", "LV"),
    ("lithuania", "LT"), ("litauen", "LT"),
    ("estonia", "EE"), ("estland", "EE"),
    ("ireland", "IE"),
    ("scotland", "GB"),
    ("england", "GB"),
    ("wales", "GB"),
    ("kosovo", "XK"),
    ("andorra", "AD"),
    ("monaco", "MC"),
    ("liechtenstein", "LI"),
    ("luxembourg", "LU"),
    ("san marino", "SM"),
    ("malta", "MT"),
    ("cyprus", "CY"),
    # South America
    ("brazil", "BR"), ("brasil", "BR"),
    ("argentina", "AR"),
    ("chile", "CL"),
    ("uruguay", "UY"),
    ("paraguay", "PY"),
    ("bolivia", "BO"),
    ("peru", "PE"),
    ("ecuador", "EC"),
    ("colombia", "CO"),
    ("venezuela", "VE"),
    ("suriname", "SR"),
    ("guyana", "GY"),
    # Africa
    ("south africa", "ZA"),
    ("egypt", "EG"),
    ("tunisia", "TN"),
    ("morocco", "MA"), ("marokko", "MA"),
    ("algeria", "DZ"),
    ("nigeria", "NG"),
    ("ghana", "GH"),
    ("senegal", "SN"),
    ("ivory coast", "CI"), ("cote d'ivoire", "CI"),
    ("cameroon", "CM"),
    ("kenya", "KE"),
    ("uganda", "UG"),
    ("tanzania", "TZ"),
    ("ethiopia", "ET"),
    ("angola", "AO"),
    ("zambia", "ZM"),
    ("zimbabwe", "ZW"),
    ("mozambique", "MZ"),
    ("namibia", "NA"),
    ("botswana", "BW"),
    ("madagascar", "MG"),
    ("somalia", "SO"),
    ("mali", "ML"),
    ("niger", "NE"),
    ("chad", "TD"),
    ("south sudan", "SS"),
    ("sudan", "SD"),
    ("libya", "LY"),
    ("democratic republic of the congo", "CD"),
    ("congo", "CG"),
    ("rwanda", "RW"),
    ("burundi", "BI"),
    ("sierra leone", "SL"),
    ("liberia", "LR"),
    ("benin", "BJ"),
    ("togo", "TG"),
    ("gambia", "GM"),
    ("guinea-bissau", "GW"),
    ("guinea", "GN"),
    ("mauritania", "MR"),
    ("cape verde", "CV"), ("cabo verde", "CV"),
    # Elsewhere
    ("usa", "US"), ("united states", "US"),
    ("canada", "CA"),
    ("japan", "JP"), ("japen", "JP"),
)

ISO_LABELS: Dict[str, str] = {
    "NO": "Norway", "SE": "Sweden", "DK": "Denmark", "FI": "Finland",
    "IS": "Iceland", "DE": "Germany", "FR": "France", "IT": "Italy",
    "ES": "Spain", "PT": "Portugal", "NL": "Netherlands", "BE": "Belgium",
    "CH": "Switzerland", "AT": "Austria", "PL": "Poland", "CZ": "Czechia",
    "SK": "Slovakia", "HU": "Hungary", "RO": "Romania", "BG": "Bulgaria",
    "SI": "Slovenia", "HR": "Croatia", "RS": "Serbia",
    "BA": "Bosnia & Herzegovina", "ME": "Montenegro", "MK": "North Macedonia",
    "AL": "Albania", "GR": "Greece", "TR": "Turkey", "UA": "Ukraine",
    "BY": "Belarus", "MD": "Moldova", "LV": "Latvia", "LT": "Lithuania",
    "EE": "Estonia", "IE": "Ireland", "GB": "United Kingdom", "XK": "Kosovo",
    "AD": "Andorra", "MC": "Monaco", "LI": "Liechtenstein", "LU": "Luxembourg",
    "SM": "San Marino", "MT": "Malta", "CY": "Cyprus",
    "BR": "Brazil", "AR": "Argentina", "CL": "Chile", "UY": "Uruguay",
    "PY": "Paraguay", "BO": "Bolivia", "PE": "Peru", "EC": "Ecuador",
    "CO": "Colombia", "VE": "Venezuela", "SR": "Suriname", "GY": "Guyana",
    "ZA": "South Africa", "EG": "Egypt", "TN": "Tunisia", "MA": "Morocco",
    "DZ": "Algeria", "NG": "Nigeria", "GH": "Ghana", "SN": "Senegal",
    "CI": "Ivory Coast", "CM": "Cameroon", "KE": "Kenya", "UG": "Uganda",
    "TZ": "Tanzania", "ET": "Ethiopia", "AO": "Angola", "ZM": "Zambia",
    "ZW": "Zimbabwe", "MZ": "Mozambique", "NA": "Namibia", "BW": "Botswana",
    "MG": "Madagascar", "ML": "Mali", "NE": "Niger", "TD": "Chad",
    "SD": "Sudan", "SS": "South Sudan", "SO": "Somalia", "LY": "Libya",
    "CD": "DR Congo", "CG": "Congo", "RW": "Rwanda", "BI": "Burundi",
    "SL": "Sierra Leone", "LR": "Liberia", "BJ": "Benin", "TG": "Togo",
    "GM": "Gambia", "GN": "Guinea", "GW": "Guinea-Bissau", "MR": "Mauritania",
    "CV": "Cabo Verde",
    "US": "United States", "CA": "Canada", "JP": "Japan",
}


class CountryAliasTable(BaseModel):
    """Versioned alias data: ordered (alias, ISO code) pairs plus display labels."""

    model_config = ConfigDict(frozen=True)

    version: str
    aliases: Tuple[Tuple[str, str], ...]
    labels: Mapping[str, str]

    def match(self, text: str) -> Optional[str]:
        """ISO code of the first alias (in table order) contained in `text`."""
        lowered = text.lower()
        for alias, code in self.aliases:
            if alias in lowered:
                return code
        return None

    def label(self, code: str) -> str:
        return self.labels.get(code, code)

    def extended(
        self,
        aliases: Iterable[Tuple[str, str]] = (),
        labels: Optional[Mapping[str, str]] = None,
        version: Optional[str] = None,
    ) -> "CountryAliasTable":
        """New table with extra aliases checked before the existing ones."""
        extra = tuple((a.lower(), c.upper()) for a, c in aliases)
        return CountryAliasTable(
            version=version or f"{self.version}+local",
            aliases=extra + self.aliases,
            labels={**self.labels, **(labels or {})},
        )


DEFAULT_ALIAS_TABLE = CountryAliasTable(
    version="2026.1",
    aliases=COUNTRY_ALIASES,
    labels=ISO_LABELS,
)
