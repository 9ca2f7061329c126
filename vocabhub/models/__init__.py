"""Data models for VocabHub."""

from .entry import AudioUpload, VocabularyEntry, derive_categories
from .notice import Notice, NoticeLevel
from .user import Identity, UserProfile

__all__ = [
    'AudioUpload',
    'VocabularyEntry',
    'derive_categories',
    'Notice',
    'NoticeLevel',
    'Identity',
    'UserProfile',
]
