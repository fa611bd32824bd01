from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Sequence

from ..analytics.store import DISMISSED_EVENT, record_event
from .config import DEFAULT_SUGGESTION_CONFIG, SuggestionConfig
from .models import Candidate, Coordinate, ScoredCandidate, SuggestionResult
from .pipeline import CandidateSource, compute_suggestions, fetch_candidates, normalize_query

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    active = "active"
    dismissed = "dismissed"


class SuggestionSession:
    """
    Suggestions for one display context.

    While active, any change of query, location or candidate catalog re-runs
    the pipeline and replaces the held result wholesale. ``dismiss()`` is
    terminal: the session never computes or shows suggestions again, and a
    new session is needed to get them back.
    """

    def __init__(self, config: SuggestionConfig = DEFAULT_SUGGESTION_CONFIG) -> None:
        self.config = config
        self._state = SessionState.active
        self._result: SuggestionResult | None = None
        self._inputs: tuple[tuple[Candidate, ...], str | None, Coordinate | None] | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def result(self) -> SuggestionResult | None:
        """The currently displayed result, or ``None`` when dismissed or never run."""
        if self._state is SessionState.dismissed:
            return None
        return self._result

    def suggestions(self) -> list[ScoredCandidate]:
        result = self.result
        return list(result.suggestions) if result is not None else []

    def is_dismissed(self) -> bool:
        return self._state is SessionState.dismissed

    def dismiss(self) -> None:
        if self._state is SessionState.dismissed:
            return
        visible = len(self._result) if self._result is not None else 0
        self._state = SessionState.dismissed
        self._result = None
        self._inputs = None
        logger.debug("Suggestions dismissed with %d visible", visible)
        if self.config.analytics_enabled:
            record_event(DISMISSED_EVENT, {"results_visible": visible})

    def update(
        self,
        candidates: Sequence[Candidate] | None,
        query: str | None = None,
        location: Coordinate | None = None,
    ) -> SuggestionResult | None:
        """Re-run the pipeline if any input changed since the last run."""
        if self._state is SessionState.dismissed:
            return None

        inputs = (tuple(candidates or ()), normalize_query(query), location)
        if self._result is not None and inputs == self._inputs:
            return self._result
        return self._run(inputs)

    def refresh(self, candidates: Sequence[Candidate] | None) -> SuggestionResult | None:
        """Catalog refresh: always produce a new result for the current query and location."""
        if self._state is SessionState.dismissed:
            return None

        query, location = (self._inputs[1], self._inputs[2]) if self._inputs else (None, None)
        return self._run((tuple(candidates or ()), query, location))

    def update_from_source(
        self,
        source: CandidateSource,
        query: str | None = None,
        location: Coordinate | None = None,
    ) -> SuggestionResult | None:
        """Fetch candidates from *source* and update; a failing source yields no suggestions."""
        if self._state is SessionState.dismissed:
            return None

        start_time = time.perf_counter()
        candidates = fetch_candidates(source)
        result = self.update(candidates, query, location)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        if elapsed_ms > self.config.end_to_end_budget_ms:
            logger.warning(
                "Smart suggestions took %.0fms to load (budget %.0fms)",
                elapsed_ms, self.config.end_to_end_budget_ms,
            )
        return result

    def _run(
        self,
        inputs: tuple[tuple[Candidate, ...], str | None, Coordinate | None],
    ) -> SuggestionResult:
        candidates, query, location = inputs
        result = compute_suggestions(candidates, query, location, config=self.config)
        self._inputs = inputs
        self._result = result
        logger.debug("Session recomputed %d suggestions", len(result))
        return result
