from __future__ import annotations

import logging
import time
from collections import Counter
from typing import Callable, Iterable, Sequence

from ..analytics.store import SUGGESTIONS_EVENT, record_event
from .config import DEFAULT_SUGGESTION_CONFIG, SuggestionConfig
from .models import Candidate, Coordinate, ScoredCandidate, SuggestionResult
from .scoring import score_candidate

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 6

CandidateSource = Callable[[], Sequence[Candidate] | None]


def normalize_query(query: str | None) -> str | None:
    """Trim and lowercase a free-text query; blank queries count as no query."""
    if query is None:
        return None
    normalized = query.strip().lower()
    return normalized or None


def fetch_candidates(source: CandidateSource) -> list[Candidate]:
    """
    Call a candidate source, degrading any failure to "no candidates".

    Retrying is the source's own concern.
    """
    try:
        candidates = source()
    except Exception:
        logger.warning("Candidate source failed, showing no suggestions", exc_info=True)
        return []
    return list(candidates or [])


def rank(scored: Iterable[ScoredCandidate], limit: int = MAX_SUGGESTIONS) -> list[ScoredCandidate]:
    """Keep positive scores, best first, at most *limit* of them.

    ``sorted`` is stable, so equal scores keep their input order.
    """
    positive = [s for s in scored if s.score > 0]
    positive = sorted(positive, key=lambda s: s.score, reverse=True)
    return positive[:limit]


def compute_suggestions(
    candidates: Sequence[Candidate] | None,
    query: str | None = None,
    location: Coordinate | None = None,
    config: SuggestionConfig = DEFAULT_SUGGESTION_CONFIG,
) -> SuggestionResult:
    start_time = time.perf_counter()
    candidates = list(candidates or [])
    normalized_query = normalize_query(query)

    scored = [score_candidate(c, normalized_query, location) for c in candidates]
    top = rank(scored)

    elapsed_ms = round((time.perf_counter() - start_time) * 1000, 3)
    over_budget = elapsed_ms > config.compute_budget_ms
    if over_budget:
        logger.warning(
            "Smart suggestions took %.1fms for %d candidates (budget %.0fms)",
            elapsed_ms, len(candidates), config.compute_budget_ms,
        )
    logger.debug(
        "Ranked %d candidates into %d suggestions in %.3fms",
        len(candidates), len(top), elapsed_ms,
    )

    if config.analytics_enabled:
        record_event(SUGGESTIONS_EVENT, {
            "query": normalized_query,
            "has_location": location is not None,
            "total_candidates": len(candidates),
            "results_returned": len(top),
            "response_time_ms": elapsed_ms,
            "over_budget": over_budget,
            "reasons": dict(Counter(s.reason.value for s in top)),
        })

    return SuggestionResult(
        suggestions=tuple(top),
        generated_at=time.time(),
        query=normalized_query,
        location=location,
        total_candidates=len(candidates),
        elapsed_ms=elapsed_ms,
    )
