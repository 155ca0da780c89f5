"""
Central configuration loaded from environment variables with sensible defaults.
The resolver itself is pure; only thresholds and the dataset path live here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

_DEFAULT_GAZETTEER = Path(__file__).resolve().parents[1] / "data" / "ph_admin_divisions.json"


@dataclass(frozen=True)
class GazetteerConfig:
    path: str = os.getenv("GAZETTEER_PATH", str(_DEFAULT_GAZETTEER))


@dataclass(frozen=True)
class ResolverConfig:
    # Minimum confidence for a barangay- or city-level result
    min_confidence: float = float(os.getenv("RESOLVER_MIN_CONFIDENCE", "0.2"))
    # Province-only fallback has its own, lower bar
    province_min_confidence: float = float(os.getenv("RESOLVER_PROVINCE_MIN_CONFIDENCE", "0.15"))
    min_candidate_length: int = int(os.getenv("RESOLVER_MIN_CANDIDATE_LENGTH", "3"))


@dataclass(frozen=True)
class APIConfig:
    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("API_PORT", "8000"))
    max_batch: int = int(os.getenv("API_MAX_BATCH", "500"))


@dataclass(frozen=True)
class Settings:
    gazetteer: GazetteerConfig = field(default_factory=GazetteerConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    env: str = os.getenv("APP_ENV", "development")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
