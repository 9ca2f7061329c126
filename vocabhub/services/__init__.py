"""Services module - Business logic and remote data access."""

from .backend import AuthResult, BaseBackend, RowQuery
from .media_service import MediaService, StoredAsset
from .session import SessionGate
from .user_service import PLACEHOLDER_USERS, UserService
from .vocabulary_service import VocabularyService

__all__ = [
    'AuthResult',
    'BaseBackend',
    'RowQuery',
    'MediaService',
    'StoredAsset',
    'SessionGate',
    'PLACEHOLDER_USERS',
    'UserService',
    'VocabularyService',
]
