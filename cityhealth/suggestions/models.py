from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class ProviderCategory(str, Enum):
    doctor = "doctor"
    clinic = "clinic"
    hospital = "hospital"
    pharmacy = "pharmacy"
    laboratory = "laboratory"


class Reason(str, Enum):
    relevant = "relevant"
    nearby = "nearby"
    popular = "popular"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


Rating = Annotated[float, Field(ge=1.0, le=5.0)]


class Candidate(BaseModel):
    """A verified provider as supplied by the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    category: ProviderCategory
    description: str | None = None
    address: str = ""
    coordinate: Coordinate | None = None
    is_emergency: bool = False
    amenities: tuple[str, ...] = ()
    ratings: tuple[Rating, ...] = ()


class ScoredCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate: Candidate
    score: float = 0.0
    reason: Reason = Reason.popular


class SuggestionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    suggestions: tuple[ScoredCandidate, ...] = ()
    generated_at: float
    query: str | None = None
    location: Coordinate | None = None
    total_candidates: int = 0
    elapsed_ms: float = 0.0

    def __len__(self) -> int:
        return len(self.suggestions)
