"""Tests for fuzzy location matching."""

import pytest

from aviation_mcp.matching.location_matcher import resolve_location
from aviation_mcp.matching.models import MatchConfidence, MatchType
from aviation_mcp.matching.normalizers import (
    extract_location_id,
    get_meaningful_tokens,
    looks_like_location_code,
    normalize_text,
    remove_accents,
)
from aviation_mcp.models.domain import Location


@pytest.fixture
def locations() -> list[Location]:
    return [
        Location(id=1, name="Taksim Square", country="Turkey", city="Istanbul", locationCode="CCIST"),
        Location(id=2, name="Istanbul Airport", country="Turkey", city="Istanbul", locationCode="IST"),
        Location(id=3, name="Sabiha Gökçen Airport", country="Turkey", city="Istanbul", locationCode="SAW"),
        Location(id=4, name="Heathrow Airport", country="UK", city="London", locationCode="LHR"),
        Location(id=5, name="Wembley Stadium", country="UK", city="London", locationCode="WEMB"),
    ]


# =============================================================================
# Normalizers
# =============================================================================


def test_remove_accents():
    assert remove_accents("Sabiha Gökçen") == "Sabiha Gokcen"


def test_normalize_text():
    assert normalize_text("  Heathrow   Intl. ") == "heathrow international"


def test_get_meaningful_tokens_drops_generic_words():
    assert get_meaningful_tokens("Istanbul Airport") == {"istanbul"}


@pytest.mark.parametrize(
    "query,expected",
    [("IST", True), ("lhr", True), ("CCIST", True), ("Istanbul Airport", False), ("AB", False)],
)
def test_looks_like_location_code(query, expected):
    assert looks_like_location_code(query) is expected


def test_extract_location_id():
    assert extract_location_id("12") == 12
    assert extract_location_id("#12") == 12
    assert extract_location_id("IST") is None


# =============================================================================
# resolve_location
# =============================================================================


def test_exact_code_match(locations):
    result = resolve_location("IST", locations)

    assert result.resolved is True
    assert result.best_match.location_code == "IST"
    assert result.best_match.score == 100.0
    assert result.best_match.confidence == MatchConfidence.EXACT
    assert result.best_match.match_type == MatchType.CODE_EXACT


def test_exact_code_match_case_insensitive(locations):
    result = resolve_location("lhr", locations)

    assert result.best_match.id == 4
    assert result.best_match.match_type == MatchType.CODE_EXACT


def test_exact_id_match(locations):
    result = resolve_location("5", locations)

    assert result.best_match.name == "Wembley Stadium"
    assert result.best_match.match_type == MatchType.ID_EXACT
    assert result.resolved is True


def test_fuzzy_name_match(locations):
    result = resolve_location("Heathrow", locations)

    assert result.best_match.location_code == "LHR"
    assert result.best_match.match_type == MatchType.FUZZY_NAME
    assert result.best_match.confidence in (MatchConfidence.HIGH, MatchConfidence.MEDIUM)


def test_fuzzy_match_ignores_accents(locations):
    result = resolve_location("sabiha gokcen", locations)

    assert result.best_match.location_code == "SAW"
    assert result.resolved is True


def test_fuzzy_match_with_typo(locations):
    result = resolve_location("Wembly Stadium", locations)

    assert result.best_match.location_code == "WEMB"


def test_exact_match_listed_before_fuzzy(locations):
    result = resolve_location("IST", locations, limit=5)

    assert result.matches[0].match_type == MatchType.CODE_EXACT
    assert all(m.match_type == MatchType.FUZZY_NAME for m in result.matches[1:])


def test_limit_applied(locations):
    result = resolve_location("Istanbul", locations, limit=2)

    assert len(result.matches) <= 2


def test_empty_query(locations):
    result = resolve_location("   ", locations)

    assert result.matches == []
    assert result.best_match is None
    assert result.resolved is False


def test_no_match_below_threshold(locations):
    result = resolve_location("Zzyzx", locations, min_score=90)

    assert result.matches == []
    assert result.resolved is False


def test_fuzzy_scores_below_exact(locations):
    result = resolve_location("Taksim Square", locations)

    assert result.best_match.location_code == "CCIST"
    assert result.best_match.score < 100.0
