import math

import pytest

from cityhealth.suggestions.models import Candidate, Coordinate, ProviderCategory, Reason
from cityhealth.suggestions.scoring import SCORING_RULES, score_candidate

USER = Coordinate(latitude=35.1903, longitude=-0.6308)


def _north_of(origin: Coordinate, km: float) -> Coordinate:
    return Coordinate(latitude=origin.latitude + math.degrees(km / 6371.0), longitude=origin.longitude)


def _candidate(**overrides) -> Candidate:
    fields = {
        "id": "c-1",
        "name": "Cabinet Medical",
        "category": ProviderCategory.doctor,
        "address": "1 Rue Principale",
    }
    fields.update(overrides)
    return Candidate(**fields)


ATLAS = _candidate(
    name="Clinique Atlas",
    category=ProviderCategory.laboratory,
    description="analyses médicales",
    ratings=(5, 4, 5),
)


def test_atlas_scenario_with_query():
    scored = score_candidate(ATLAS, query="atlas")
    assert scored.score == pytest.approx(20.8333, abs=1e-3)
    assert scored.reason == Reason.relevant


def test_atlas_scenario_without_query_is_popular():
    scored = score_candidate(ATLAS)
    assert scored.score == pytest.approx(10.8333, abs=1e-3)
    assert scored.reason == Reason.popular


def test_no_signal_scores_zero_with_default_reason():
    scored = score_candidate(_candidate(), query="pharmacie", location=USER)
    assert scored.score == 0.0
    assert scored.reason == Reason.popular
    assert scored.candidate is not None


def test_each_matching_field_adds_its_bonus():
    candidate = _candidate(
        name="Laboratoire Central",
        category=ProviderCategory.laboratory,
        description="laboratoire d'analyses",
    )
    assert score_candidate(candidate, query="labo").score == 10 + 5 + 7
    assert score_candidate(candidate, query="central").score == 10
    assert score_candidate(candidate, query="analyses").score == 5
    assert score_candidate(candidate, query="lab").score == 10 + 5 + 7


def test_category_label_match_alone_is_relevant():
    scored = score_candidate(_candidate(category=ProviderCategory.pharmacy), query="pharm")
    assert scored.score == 7
    assert scored.reason == Reason.relevant


def test_matching_is_case_insensitive():
    assert score_candidate(ATLAS, query="ATLAS").score == score_candidate(ATLAS, query="atlas").score


def test_name_match_adds_at_least_ten():
    plain = _candidate(name="Cabinet Medical", ratings=(3,))
    matching = _candidate(name="Cabinet Medical Atlas", ratings=(3,))
    diff = score_candidate(matching, query="atlas").score - score_candidate(plain, query="atlas").score
    assert diff >= 10


def test_ratings_under_query_keep_default_reason():
    scored = score_candidate(_candidate(ratings=(4, 4)), query="dentiste")
    assert scored.score == pytest.approx(4 * 2 + 2 * 0.5)
    assert scored.reason == Reason.popular


@pytest.mark.parametrize("km, bonus, reason", [
    (3, 15, Reason.nearby),
    (4, 15, Reason.nearby),
    (8, 10, Reason.nearby),
    (12, 5, Reason.popular),
    (15, 5, Reason.popular),
    (25, 0, Reason.popular),
])
def test_proximity_tiers(km, bonus, reason):
    scored = score_candidate(_candidate(coordinate=_north_of(USER, km)), location=USER)
    assert scored.score == pytest.approx(bonus)
    assert scored.reason == reason


def test_proximity_scores_are_monotonic():
    scores = [
        score_candidate(_candidate(coordinate=_north_of(USER, km), ratings=(4,)), location=USER).score
        for km in (4, 8, 15, 25)
    ]
    assert scores == sorted(scores, reverse=True)


def test_nearby_overrides_relevant():
    candidate = _candidate(name="Clinique Atlas", coordinate=_north_of(USER, 2))
    scored = score_candidate(candidate, query="atlas", location=USER)
    assert scored.score == 10 + 15
    assert scored.reason == Reason.nearby


def test_outer_tier_keeps_relevant():
    candidate = _candidate(name="Clinique Atlas", coordinate=_north_of(USER, 15))
    scored = score_candidate(candidate, query="atlas", location=USER)
    assert scored.score == 10 + 5
    assert scored.reason == Reason.relevant


def test_nearby_overrides_popular():
    candidate = _candidate(ratings=(5,), coordinate=_north_of(USER, 6))
    scored = score_candidate(candidate, location=USER)
    assert scored.reason == Reason.nearby


def test_missing_coordinate_skips_proximity():
    assert score_candidate(_candidate(), location=USER).score == 0.0
    assert score_candidate(_candidate(coordinate=USER)).score == 0.0


def test_emergency_and_amenities_do_not_change_reason():
    candidate = _candidate(is_emergency=True, amenities=("wheelchair", "parking"))
    scored = score_candidate(candidate)
    assert scored.score == 3 + 2
    assert scored.reason == Reason.popular

    relevant = score_candidate(candidate.model_copy(update={"name": "Urgences Atlas"}), query="atlas")
    assert relevant.score == 10 + 3 + 2
    assert relevant.reason == Reason.relevant


def test_rules_run_in_fixed_order():
    names = [rule.__name__ for rule in SCORING_RULES]
    assert names == ["_query_relevance", "_popularity", "_proximity", "_emergency", "_amenities"]


def test_custom_rule_list_last_reason_wins():
    def always_nearby(candidate, ctx):
        return 1.0, Reason.nearby

    def always_relevant(candidate, ctx):
        return 1.0, Reason.relevant

    scored = score_candidate(_candidate(), rules=(always_relevant, always_nearby))
    assert scored.score == 2.0
    assert scored.reason == Reason.nearby
