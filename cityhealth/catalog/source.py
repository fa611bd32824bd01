from __future__ import annotations

import pandas as pd

from ..suggestions.models import Candidate
from ..suggestions.pipeline import CandidateSource
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .data_store import get_dataframe, row_to_candidate


def eligible_candidates(df: pd.DataFrame, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[Candidate]:
    """
    Providers publicly eligible for suggestions.

    Keeps rows whose verification status matches ``config.eligible_status``,
    in catalog order, and stops once ``config.limit`` candidates are built.
    """
    eligible = df.loc[df["status_lower"] == config.eligible_status.lower()]

    candidates: list[Candidate] = []
    for _, row in eligible.iterrows():
        if len(candidates) >= config.limit:
            break
        candidate = row_to_candidate(row)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def csv_candidate_source(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> CandidateSource:
    """Candidate source backed by the offline catalog snapshot at ``config.catalog_path``."""

    def _source() -> list[Candidate]:
        return eligible_candidates(get_dataframe(config), config)

    return _source
