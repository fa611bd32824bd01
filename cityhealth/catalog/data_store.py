from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from ..suggestions.models import Candidate, Coordinate, ProviderCategory
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

logger = logging.getLogger(__name__)

CATALOG_COLUMNS: list[str] = [
    "id",
    "name",
    "category",
    "description",
    "address",
    "latitude",
    "longitude",
    "is_emergency",
    "amenities",
    "ratings",
    "verification_status",
]

_TEXT_COLUMNS = ["id", "name", "category", "description", "address",
                 "is_emergency", "amenities", "ratings", "verification_status"]

_CATEGORIES = {c.value for c in ProviderCategory}

_frames: dict[Path, pd.DataFrame] = {}


def _split_tags(value: Any) -> list[str]:
    if value is None or pd.isna(value):
        return []
    return [t.strip() for t in str(value).split(";") if t.strip()]


def _parse_ratings(value: Any) -> list[float]:
    """Parse ``"5;4;4.5"`` into floats, dropping anything outside [1, 5]."""
    ratings: list[float] = []
    for raw in _split_tags(value):
        # Accept "4/5" as exported by review widgets
        if "/" in raw:
            raw = raw.split("/")[0].strip()
        try:
            rating = float(raw)
        except (TypeError, ValueError):
            continue
        if 1.0 <= rating <= 5.0:
            ratings.append(rating)
    return ratings


def _parse_flag(value: Any) -> bool:
    if value is None or pd.isna(value):
        return False
    return str(value).strip().lower() in ("1", "true", "yes", "y")


def _coordinate(latitude: Any, longitude: Any) -> Coordinate | None:
    # Both or neither: a half coordinate is no coordinate.
    if pd.isna(latitude) or pd.isna(longitude):
        return None
    lat, lng = float(latitude), float(longitude)
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None
    return Coordinate(latitude=lat, longitude=lng)


def _load(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path, dtype={col: str for col in _TEXT_COLUMNS})

    for col in CATALOG_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA

    df["latitude"] = pd.to_numeric(df["latitude"], errors="coerce")
    df["longitude"] = pd.to_numeric(df["longitude"], errors="coerce")

    # Pre-parse list columns and lowercase the enumerations
    df["amenities_list"] = df["amenities"].apply(_split_tags)
    df["ratings_list"] = df["ratings"].apply(_parse_ratings)
    df["emergency_flag"] = df["is_emergency"].apply(_parse_flag)
    df["category_lower"] = df["category"].fillna("").str.strip().str.lower()
    df["status_lower"] = df["verification_status"].fillna("").str.strip().str.lower()

    return df


def get_dataframe(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> pd.DataFrame:
    """Return the in-memory catalog DataFrame, loading it on first call."""
    path = Path(config.catalog_path)
    if path not in _frames:
        _frames[path] = _load(path)
    return _frames[path]


def reload(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> pd.DataFrame:
    """Drop the cached snapshot and read the catalog file again."""
    _frames.pop(Path(config.catalog_path), None)
    return get_dataframe(config)


def row_to_candidate(row: pd.Series) -> Candidate | None:
    """Build a Candidate from a normalized row, or ``None`` if the row is unusable."""
    candidate_id = row.get("id")
    if pd.isna(candidate_id) or not str(candidate_id).strip():
        logger.warning("Skipping catalog row without id: %r", row.get("name"))
        return None

    category = row.get("category_lower", "")
    if category not in _CATEGORIES:
        logger.warning("Skipping provider %s with unknown category %r", candidate_id, category)
        return None

    description = row.get("description")
    address = row.get("address")
    name = row.get("name")
    return Candidate(
        id=str(candidate_id).strip(),
        name="" if pd.isna(name) else str(name),
        category=ProviderCategory(category),
        description=None if pd.isna(description) else str(description),
        address="" if pd.isna(address) else str(address),
        coordinate=_coordinate(row.get("latitude"), row.get("longitude")),
        is_emergency=bool(row.get("emergency_flag", False)),
        amenities=tuple(row.get("amenities_list", [])),
        ratings=tuple(row.get("ratings_list", [])),
    )
