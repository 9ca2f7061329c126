"""UI module - Flet views."""

from .add_vocabulary import AddVocabularyView
from .audio_player import FletAudioPlayer
from .delete_vocabulary import DeleteVocabularyView
from .home import HomeView
from .login import LoginView
from .settings import SettingsView
from .theme import DesignTokens
from .users import UsersView
from .vocabulary import VocabularyView

__all__ = [
    'AddVocabularyView',
    'FletAudioPlayer',
    'DeleteVocabularyView',
    'HomeView',
    'LoginView',
    'SettingsView',
    'DesignTokens',
    'UsersView',
    'VocabularyView',
]
