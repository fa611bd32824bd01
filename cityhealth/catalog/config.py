from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_BUNDLED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "providers.csv"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Configuration for the offline provider catalog.
    """

    catalog_path: Path = Path(os.getenv("CITYHEALTH_CATALOG_PATH", str(_BUNDLED_CATALOG)))
    limit: int = 50
    eligible_status: str = "verified"


DEFAULT_CATALOG_CONFIG = CatalogConfig()
