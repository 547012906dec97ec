"""
Configuration module for the KidTube backend.

Loads environment variables and validates the pipeline limits.
"""
import os
from typing import List, Optional
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to the default."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return int(raw)


def _optional_int_env(name: str, default: Optional[int]) -> Optional[int]:
    """Read an integer variable where 0 or "none" disables the limit."""
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in ("0", "none", "off"):
        return None
    return int(raw)


class Settings:
    """Application settings loaded from environment variables."""

    # Google Gemini API (query synthesis)
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # YouTube Data API v3 (video search)
    YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "")
    YOUTUBE_SAFE_SEARCH: str = os.getenv("YOUTUBE_SAFE_SEARCH", "moderate")

    # Pipeline limits
    QUERY_COUNT: int = _int_env("QUERY_COUNT", 3)
    RESULTS_PER_QUERY: int = _int_env("RESULTS_PER_QUERY", 4)
    MAX_RECOMMENDATIONS: int = _int_env("MAX_RECOMMENDATIONS", 9)
    # Real results below this count get topped up with fallback entries
    MIN_REAL_RECOMMENDATIONS: int = _int_env("MIN_REAL_RECOMMENDATIONS", 3)
    DESCRIPTION_MAX_LENGTH: Optional[int] = _optional_int_env("DESCRIPTION_MAX_LENGTH", 150)

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

    # Shared password for the UI gate (empty = gate open)
    ACCESS_PASSWORD: str = os.getenv("ACCESS_PASSWORD", "")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (production only; other environments allow all origins)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @classmethod
    def validate(cls) -> None:
        """
        Validate that the pipeline limits are consistent.

        Raises:
            ValueError: If any limit is out of range.
        """
        problems = []

        if not 3 <= cls.QUERY_COUNT <= 10:
            problems.append(f"QUERY_COUNT must be between 3 and 10 (got {cls.QUERY_COUNT})")
        if not 1 <= cls.RESULTS_PER_QUERY <= 50:
            problems.append(
                f"RESULTS_PER_QUERY must be between 1 and 50 (got {cls.RESULTS_PER_QUERY})"
            )
        if cls.MAX_RECOMMENDATIONS < 1:
            problems.append(
                f"MAX_RECOMMENDATIONS must be positive (got {cls.MAX_RECOMMENDATIONS})"
            )
        if not 0 <= cls.MIN_REAL_RECOMMENDATIONS <= cls.MAX_RECOMMENDATIONS:
            problems.append(
                "MIN_REAL_RECOMMENDATIONS must be between 0 and MAX_RECOMMENDATIONS "
                f"(got {cls.MIN_REAL_RECOMMENDATIONS})"
            )
        if cls.DESCRIPTION_MAX_LENGTH is not None and cls.DESCRIPTION_MAX_LENGTH < 1:
            problems.append(
                f"DESCRIPTION_MAX_LENGTH must be positive (got {cls.DESCRIPTION_MAX_LENGTH})"
            )

        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            # In production or staging, fail immediately
            raise
