from __future__ import annotations

from .config import DEFAULT_SUGGESTION_CONFIG, SuggestionConfig
from .models import Coordinate


def default_location(config: SuggestionConfig = DEFAULT_SUGGESTION_CONFIG) -> Coordinate:
    return Coordinate(latitude=config.default_latitude, longitude=config.default_longitude)


def resolve_location(
    device_location: Coordinate | None,
    config: SuggestionConfig = DEFAULT_SUGGESTION_CONFIG,
) -> Coordinate:
    """Return the device coordinate, or the configured fallback when it is unavailable."""
    if device_location is not None:
        return device_location
    return default_location(config)
