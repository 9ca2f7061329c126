"""
Application context - the services every view shares.

Built once per process and passed to the views explicitly.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Config, SettingsManager
from .services import (
    BaseBackend,
    MediaService,
    SessionGate,
    UserService,
    VocabularyService,
)
from .services.supabase_backend import SupabaseBackend

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Shared services for one running application."""

    settings: SettingsManager
    backend: BaseBackend
    session: SessionGate
    vocabulary: VocabularyService
    media: MediaService
    users: UserService

    @classmethod
    def from_backend(cls, backend: BaseBackend, settings: Optional[SettingsManager] = None) -> "AppContext":
        """
        Wire services around an existing backend.

        Args:
            backend: Remote data client
            settings: Settings manager (defaults to the singleton)
        """
        return cls(
            settings=settings or SettingsManager(),
            backend=backend,
            session=SessionGate(backend),
            vocabulary=VocabularyService(backend),
            media=MediaService(backend),
            users=UserService(backend),
        )


def create_app_context(settings: Optional[SettingsManager] = None) -> AppContext:
    """
    Apply persisted settings and connect to Supabase.

    Raises:
        ConfigurationError: If the Supabase URL or anon key is missing
    """
    settings = settings or SettingsManager()
    Config.apply(settings)
    backend = SupabaseBackend.from_config()
    logger.info("Connected to Supabase project %s", Config.SUPABASE_URL)
    return AppContext.from_backend(backend, settings)
