import re
import unicodedata
from functools import lru_cache

# Words that carry no signal when matching place names
GENERIC_TOKENS = frozenset({
    "airport", "international", "intl", "station", "terminal", "square",
})

ABBREVIATIONS: dict[str, str] = {
    "intl.": "international",
    "int'l": "international",
    "st.": "saint",
    "sq.": "square",
    "apt.": "airport",
}

LOCATION_CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{3,}$")


@lru_cache(maxsize=4096)
def remove_accents(text: str) -> str:
    """Remove accents from text.

    Example: "İstanbul Sabiha Gökçen" -> "Istanbul Sabiha Gokcen"
    """
    normalized = unicodedata.normalize("NFD", text)
    return "".join(c for c in normalized if unicodedata.category(c) != "Mn")


@lru_cache(maxsize=4096)
def normalize_text(text: str) -> str:
    """Normalize text for fuzzy matching.

    - Converts to lowercase
    - Removes accents
    - Expands abbreviations
    - Normalizes whitespace

    Example: "Heathrow  Intl." -> "heathrow international"
    """
    result = remove_accents(text.lower().strip())

    for abbrev, expanded in ABBREVIATIONS.items():
        result = result.replace(abbrev, expanded)

    return " ".join(result.split())


def get_meaningful_tokens(text: str) -> set[str]:
    """Tokens of normalized text without generic place words.

    Example: "Istanbul Airport" -> {"istanbul"}
    """
    raw_tokens = re.split(r"[\s/\-,()]+", normalize_text(text))
    return {t for t in raw_tokens if len(t) > 1 and t not in GENERIC_TOKENS}


def looks_like_location_code(query: str) -> bool:
    """True for short alphanumeric queries such as "IST" or "CCIST".

    Examples:
        "IST" -> True
        "lhr" -> True
        "Istanbul Airport" -> False
    """
    query = query.strip()
    return bool(LOCATION_CODE_PATTERN.match(query)) and len(query) <= 8


def extract_location_id(query: str) -> int | None:
    """Parse a numeric location id, accepting "12" or "#12".

    Examples:
        "12" -> 12
        "#12" -> 12
        "IST" -> None
    """
    query = query.strip().lstrip("#")
    if query.isdigit():
        return int(query)
    return None
