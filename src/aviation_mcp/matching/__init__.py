"""Fuzzy matching for locations in the search form."""

from aviation_mcp.matching.location_matcher import resolve_location
from aviation_mcp.matching.models import (
    LocationMatch,
    LocationResolutionResponse,
    MatchConfidence,
    MatchType,
)
from aviation_mcp.matching.normalizers import (
    extract_location_id,
    looks_like_location_code,
    normalize_text,
    remove_accents,
)

__all__ = [
    # Matchers
    "resolve_location",
    # Models
    "MatchConfidence",
    "MatchType",
    "LocationMatch",
    "LocationResolutionResponse",
    # Normalizers
    "normalize_text",
    "remove_accents",
    "looks_like_location_code",
    "extract_location_id",
]
