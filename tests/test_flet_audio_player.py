from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import flet_audio as fta
import pytest

from vocabhub.audio import AudioPlaybackController, PlaybackState
from vocabhub.ui.audio_player import FletAudioPlayer


class LoadedFletAudioPlayer(FletAudioPlayer):
    """FletAudioPlayer whose control is a mock instead of a page service."""

    async def play(self) -> None:
        self._audio = AsyncMock()


def state_event(state):
    return SimpleNamespace(state=state)


@pytest.mark.asyncio
async def test_disposed_player_reports_error():
    player = LoadedFletAudioPlayer(MagicMock(), "https://cdn/dog.mp3")
    errors = []

    async def on_error(message):
        errors.append(message)

    player.on_error = on_error
    await player.play()
    await player._on_state_change(state_event(fta.AudioState.DISPOSED))

    assert len(errors) == 1
    assert "dog.mp3" in errors[0]


@pytest.mark.asyncio
async def test_dispose_after_release_is_silent():
    player = LoadedFletAudioPlayer(MagicMock(), "https://cdn/dog.mp3")
    errors = []

    async def on_error(message):
        errors.append(message)

    player.on_error = on_error
    await player.play()
    player._audio = None
    await player._on_state_change(state_event(fta.AudioState.DISPOSED))

    assert errors == []


@pytest.mark.asyncio
async def test_disposed_player_returns_controller_to_idle():
    players = []

    def factory(url):
        player = LoadedFletAudioPlayer(MagicMock(), url)
        players.append(player)
        return player

    controller = AudioPlaybackController(factory)
    assert await controller.play("https://cdn/dog.mp3")
    assert controller.state is PlaybackState.PLAYING

    await players[0]._on_state_change(state_event(fta.AudioState.DISPOSED))

    assert controller.state is PlaybackState.IDLE
    assert controller.notice.is_error
    assert "Audio playback failed" in controller.notice.text
