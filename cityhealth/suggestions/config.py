from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class SuggestionConfig:
    """
    Runtime settings for the suggestion engine.

    The compute budget covers scoring and ranking only. The end-to-end budget
    also covers fetching candidates and is measured by the host.
    The default coordinate (Sidi Bel Abbes) is used when the device gives none.
    """

    compute_budget_ms: float = float(os.getenv("SUGGESTIONS_COMPUTE_BUDGET_MS", "100"))
    end_to_end_budget_ms: float = float(os.getenv("SUGGESTIONS_BUDGET_MS", "2000"))
    default_latitude: float = float(os.getenv("SUGGESTIONS_DEFAULT_LAT", "35.1903"))
    default_longitude: float = float(os.getenv("SUGGESTIONS_DEFAULT_LNG", "-0.6308"))
    analytics_enabled: bool = _env_flag("SUGGESTIONS_ANALYTICS", "true")


DEFAULT_SUGGESTION_CONFIG = SuggestionConfig()
