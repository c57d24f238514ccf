from rapidfuzz import fuzz

from aviation_mcp.matching.models import (
    LocationMatch,
    LocationResolutionResponse,
    MatchConfidence,
    MatchType,
    confidence_from_score,
)
from aviation_mcp.matching.normalizers import (
    extract_location_id,
    get_meaningful_tokens,
    looks_like_location_code,
    normalize_text,
)
from aviation_mcp.models.domain import Location

# Score given when every meaningful query token appears in the location
TOKEN_COVERAGE_SCORE = 90.0


def _compute_fuzzy_score(query_normalized: str, target_normalized: str) -> float:
    """Compute fuzzy match score for location text."""
    token_score = fuzz.token_set_ratio(query_normalized, target_normalized)
    partial_score = fuzz.partial_ratio(query_normalized, target_normalized)
    return (token_score * 0.7 + partial_score * 0.3)


def _location_to_match(location: Location, score: float, match_type: MatchType) -> LocationMatch:
    """Convert Location to LocationMatch with computed confidence."""
    return LocationMatch(
        id=location.id,
        name=location.name,
        city=location.city,
        country=location.country,
        location_code=location.location_code,
        score=score,
        confidence=confidence_from_score(score, match_type),
        match_type=match_type,
    )


def _score_location(query: str, location: Location) -> float:
    query_normalized = normalize_text(query)
    best_score = max(
        _compute_fuzzy_score(query_normalized, normalize_text(location.name)),
        _compute_fuzzy_score(query_normalized, normalize_text(location.city)),
        _compute_fuzzy_score(
            query_normalized,
            normalize_text(f"{location.name} {location.city} {location.country}"),
        ),
    )

    query_tokens = get_meaningful_tokens(query)
    location_tokens = get_meaningful_tokens(
        f"{location.name} {location.city} {location.country}"
    )
    if query_tokens and query_tokens <= location_tokens:
        best_score = max(best_score, TOKEN_COVERAGE_SCORE)

    return min(best_score, 99.0)  # 100 is reserved for exact matches


def resolve_location(
    query: str,
    locations: list[Location],
    limit: int = 5,
    min_score: float = 60.0,
) -> LocationResolutionResponse:
    """Resolve a query to matching locations.

    Resolution strategy (priority order):
    1. Exact location code ("IST", "ist") -> score=100, confidence=EXACT
    2. Exact location ID ("12", "#12") -> score=100, confidence=EXACT
    3. Fuzzy match on name, city and country -> score from rapidfuzz

    Args:
        query: Location code, ID, or name
        locations: Candidate locations
        limit: Maximum number of results to return
        min_score: Minimum score threshold (0-100)

    Returns:
        LocationResolutionResponse with matches and resolution status
    """
    query = query.strip()
    if not query:
        return LocationResolutionResponse(query=query, matches=[], best_match=None, resolved=False)

    matches: list[LocationMatch] = []
    matched: set[int] = set()

    # 1. Exact location code
    if looks_like_location_code(query):
        for idx, location in enumerate(locations):
            if location.location_code.lower() == query.lower():
                matches.append(_location_to_match(location, 100.0, MatchType.CODE_EXACT))
                matched.add(idx)

    # 2. Exact location ID
    location_id = extract_location_id(query)
    if location_id is not None:
        for idx, location in enumerate(locations):
            if idx not in matched and location.id == location_id:
                matches.append(_location_to_match(location, 100.0, MatchType.ID_EXACT))
                matched.add(idx)

    # 3. Fuzzy matching
    fuzzy_candidates: list[tuple[Location, float]] = []
    for idx, location in enumerate(locations):
        if idx in matched:
            continue
        score = _score_location(query, location)
        if score >= min_score:
            fuzzy_candidates.append((location, score))

    fuzzy_candidates.sort(key=lambda item: (-item[1], item[0].name))
    for location, score in fuzzy_candidates:
        matches.append(_location_to_match(location, round(score, 1), MatchType.FUZZY_NAME))

    matches = matches[:limit]
    best_match = matches[0] if matches else None
    resolved = best_match is not None and best_match.confidence in (
        MatchConfidence.EXACT,
        MatchConfidence.HIGH,
    )

    return LocationResolutionResponse(
        query=query,
        matches=matches,
        best_match=best_match,
        resolved=resolved,
    )
