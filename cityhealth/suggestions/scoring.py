from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .distance import distance_km
from .models import Candidate, Coordinate, Reason, ScoredCandidate

NAME_MATCH_BONUS = 10.0
DESCRIPTION_MATCH_BONUS = 5.0
CATEGORY_MATCH_BONUS = 7.0

RATING_MEAN_WEIGHT = 2.0
RATING_COUNT_WEIGHT = 0.5

# (exclusive upper bound in km, bonus, reason); first matching tier wins.
PROXIMITY_TIERS: tuple[tuple[float, float, Reason | None], ...] = (
    (5.0, 15.0, Reason.nearby),
    (10.0, 10.0, Reason.nearby),
    (20.0, 5.0, None),
)

EMERGENCY_BONUS = 3.0
AMENITIES_BONUS = 2.0


@dataclass(frozen=True)
class ScoringContext:
    query: str | None = None
    location: Coordinate | None = None


RuleOutcome = tuple[float, Reason | None]
ScoringRule = Callable[[Candidate, ScoringContext], RuleOutcome]


def _query_relevance(candidate: Candidate, ctx: ScoringContext) -> RuleOutcome:
    if not ctx.query:
        return 0.0, None

    query = ctx.query.lower()
    bonus = 0.0
    if query in candidate.name.lower():
        bonus += NAME_MATCH_BONUS
    if query in (candidate.description or "").lower():
        bonus += DESCRIPTION_MATCH_BONUS
    if query in candidate.category.value.lower():
        bonus += CATEGORY_MATCH_BONUS

    return bonus, Reason.relevant if bonus > 0 else None


def _popularity(candidate: Candidate, ctx: ScoringContext) -> RuleOutcome:
    ratings = candidate.ratings
    if not ratings:
        return 0.0, None

    mean = sum(ratings) / len(ratings)
    bonus = mean * RATING_MEAN_WEIGHT + len(ratings) * RATING_COUNT_WEIGHT
    # With an active query the relevance tag is kept.
    return bonus, None if ctx.query else Reason.popular


def _proximity(candidate: Candidate, ctx: ScoringContext) -> RuleOutcome:
    if ctx.location is None or candidate.coordinate is None:
        return 0.0, None

    distance = distance_km(ctx.location, candidate.coordinate)
    for upper_km, bonus, reason in PROXIMITY_TIERS:
        if distance < upper_km:
            return bonus, reason
    return 0.0, None


def _emergency(candidate: Candidate, ctx: ScoringContext) -> RuleOutcome:
    return (EMERGENCY_BONUS if candidate.is_emergency else 0.0), None


def _amenities(candidate: Candidate, ctx: ScoringContext) -> RuleOutcome:
    return (AMENITIES_BONUS if candidate.amenities else 0.0), None


# Evaluation order matters: a later rule's reason overwrites an earlier one.
SCORING_RULES: tuple[ScoringRule, ...] = (
    _query_relevance,
    _popularity,
    _proximity,
    _emergency,
    _amenities,
)


def score_candidate(
    candidate: Candidate,
    query: str | None = None,
    location: Coordinate | None = None,
    rules: tuple[ScoringRule, ...] = SCORING_RULES,
) -> ScoredCandidate:
    """Apply every scoring rule to one candidate.

    Bonuses are summed. The reason starts as ``popular`` and each rule that
    reports a reason replaces it, so the last reporting rule decides. A
    candidate scoring zero or less is still returned; filtering belongs to
    the pipeline.
    """
    ctx = ScoringContext(query=query or None, location=location)
    score = 0.0
    reason = Reason.popular

    for rule in rules:
        bonus, rule_reason = rule(candidate, ctx)
        score += bonus
        if rule_reason is not None:
            reason = rule_reason

    return ScoredCandidate(candidate=candidate, score=score, reason=reason)
