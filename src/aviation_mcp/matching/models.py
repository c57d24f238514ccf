from enum import Enum

from pydantic import BaseModel, Field

HIGH_CONFIDENCE_SCORE = 85.0
MEDIUM_CONFIDENCE_SCORE = 70.0


class MatchConfidence(str, Enum):
    """How safely a location match can be used without asking the user.

    Code and id hits are always EXACT. Fuzzy hits are HIGH from 85,
    MEDIUM from 70 and LOW below that.
    """

    EXACT = "exact"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MatchType(str, Enum):
    CODE_EXACT = "code_exact"
    ID_EXACT = "id_exact"
    FUZZY_NAME = "fuzzy_name"  # name, city or "name city country"


def confidence_from_score(score: float, match_type: MatchType) -> MatchConfidence:
    if match_type is not MatchType.FUZZY_NAME:
        return MatchConfidence.EXACT
    if score >= HIGH_CONFIDENCE_SCORE:
        return MatchConfidence.HIGH
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return MatchConfidence.MEDIUM
    return MatchConfidence.LOW


class LocationMatch(BaseModel):
    """A candidate location for a free-text query."""

    id: int | None = None
    name: str
    city: str
    country: str
    location_code: str
    score: float = Field(description="Match score (0-100)")
    confidence: MatchConfidence
    match_type: MatchType


class LocationResolutionResponse(BaseModel):
    """Response from resolve_location tool."""

    query: str
    matches: list[LocationMatch] = Field(description="Candidates, best first")
    best_match: LocationMatch | None = None
    resolved: bool = Field(
        description="True when best_match is EXACT or HIGH confidence and can be used as-is"
    )
