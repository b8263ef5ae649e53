"""
Promocheck Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    VERSION: str = "0.4.0"
    CATALOG_VERSION: str = "2024.2"

    # --- Input limits ---
    MIN_CONTENT_CHARS: int = int(os.getenv("PROMOCHECK_MIN_CONTENT_CHARS", "100"))
    MAX_CONTENT_CHARS: int = int(os.getenv("PROMOCHECK_MAX_CONTENT_CHARS", "150000"))

    # --- Session ---
    HISTORY_SIZE: int = int(os.getenv("PROMOCHECK_HISTORY_SIZE", "10"))

    # --- Scoring (deduction per issue) ---
    WEIGHT_CRITICAL: int = int(os.getenv("PROMOCHECK_WEIGHT_CRITICAL", "25"))
    WEIGHT_HIGH: int = int(os.getenv("PROMOCHECK_WEIGHT_HIGH", "15"))
    WEIGHT_MEDIUM: int = int(os.getenv("PROMOCHECK_WEIGHT_MEDIUM", "8"))
    WEIGHT_LOW: int = int(os.getenv("PROMOCHECK_WEIGHT_LOW", "3"))
    WEIGHT_INFO: int = int(os.getenv("PROMOCHECK_WEIGHT_INFO", "1"))

    # --- Audit ---
    # "not_verifiable" (deterministic) or "simulated" (random split)
    AUDIT_FALLBACK: str = os.getenv("PROMOCHECK_AUDIT_FALLBACK", "not_verifiable")

    # --- Server ---
    HOST: str = os.getenv("PROMOCHECK_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PROMOCHECK_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("PROMOCHECK_CORS_ORIGINS", "*")

    @property
    def severity_weights(self) -> dict[str, int]:
        return {
            "critical": self.WEIGHT_CRITICAL,
            "high": self.WEIGHT_HIGH,
            "medium": self.WEIGHT_MEDIUM,
            "low": self.WEIGHT_LOW,
            "info": self.WEIGHT_INFO,
        }


settings = Settings()
