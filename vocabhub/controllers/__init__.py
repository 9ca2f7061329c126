"""Controllers - view state and user flows, independent of the UI toolkit."""

from .browser import ViewMode, VocabularyBrowser
from .editor import VocabularyEditor
from .remover import VocabularyRemover

__all__ = [
    'ViewMode',
    'VocabularyBrowser',
    'VocabularyEditor',
    'VocabularyRemover',
]
