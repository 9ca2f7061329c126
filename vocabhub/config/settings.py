"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root before reading the environment
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass
class Config:
    """Application-wide configuration."""

    APP_NAME: str = "VocabHub"

    # Supabase project (Settings -> API in the Supabase dashboard)
    # Store in environment variables or .env file, never in source code
    SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
    SUPABASE_ANON_KEY: str = os.environ.get("SUPABASE_ANON_KEY", "")

    # Remote schema
    VOCAB_TABLE: str = "vocab"
    PROFILES_TABLE: str = "profiles"

    # Storage
    AUDIO_BUCKET: str = "vocab-audio"
    AUDIO_PREFIX: str = "audio"
    AUDIO_CACHE_CONTROL: str = "3600"
    MAX_AUDIO_SIZE_MB: int = 10

    # Listing
    USERS_LIMIT: int = 100

    # Seconds to wait before re-checking that a deleted row is gone
    DELETE_VERIFY_DELAY: float = 1.0

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Cross-platform paths using pathlib
    # BASE_DIR is the project root (parent of vocabhub/)
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()
    SETTINGS_FILE: str = str(BASE_DIR / "settings.json")

    @classmethod
    def max_audio_bytes(cls) -> int:
        """Upload limit in bytes."""
        return int(cls.MAX_AUDIO_SIZE_MB) * 1024 * 1024

    @classmethod
    def apply(cls, settings) -> None:
        """
        Copy persisted settings onto the class attributes.

        Args:
            settings: SettingsManager instance
        """
        cls.SUPABASE_URL = settings.get("SUPABASE_URL", cls.SUPABASE_URL) or ""
        cls.SUPABASE_ANON_KEY = settings.get("SUPABASE_ANON_KEY", cls.SUPABASE_ANON_KEY) or ""
        cls.AUDIO_BUCKET = settings.get("AUDIO_BUCKET", cls.AUDIO_BUCKET) or cls.AUDIO_BUCKET
        cls.MAX_AUDIO_SIZE_MB = int(settings.get("MAX_AUDIO_SIZE_MB", cls.MAX_AUDIO_SIZE_MB))
        cls.USERS_LIMIT = int(settings.get("USERS_LIMIT", cls.USERS_LIMIT))
        cls.DELETE_VERIFY_DELAY = float(settings.get("DELETE_VERIFY_DELAY", cls.DELETE_VERIFY_DELAY))
        cls.LOG_LEVEL = settings.get("LOG_LEVEL", cls.LOG_LEVEL) or "INFO"
