from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class PlacesConfig:
    api_key: str = os.getenv("FOURSQUARE_API_KEY", "")
    base_url: str = os.getenv("FOURSQUARE_BASE_URL", "https://api.foursquare.com/v3")
    timeout: float = float(os.getenv("FOURSQUARE_TIMEOUT", "10"))

    @property
    def search_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/places/search"


DEFAULT_PLACES_CONFIG = PlacesConfig()
