"""Audio playback module."""

from .player import AudioPlayer
from .playback import AudioPlaybackController, AudioSession, PlaybackState

__all__ = [
    'AudioPlayer',
    'AudioPlaybackController',
    'AudioSession',
    'PlaybackState',
]
