"""AudioPlayer backed by the flet-audio extension."""

import logging
from typing import Any, Optional

import flet as ft
import flet_audio as fta

from ..audio import AudioPlayer
from ..errors import PlaybackError

logger = logging.getLogger(__name__)


def _seconds(value: Any) -> float:
    """Convert a Flet duration (or milliseconds) to seconds."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return value / 1000.0
    return value.in_milliseconds / 1000.0


class FletAudioPlayer(AudioPlayer):
    """
    One flet_audio.Audio service bound to a page.

    The control is registered in ``page.services`` on play() and removed
    again on release().

    flet-audio reports no load errors. A failure raised by play() is a
    PlaybackError; a player disposed by the client while still bound here
    is reported through ``on_error``. A source that silently never plays
    is not detected.
    """

    def __init__(self, page: ft.Page, url: str) -> None:
        super().__init__(url)
        self.page = page
        self._audio: Optional[fta.Audio] = None
        self._position = 0.0

    def _require(self) -> fta.Audio:
        if self._audio is None:
            raise PlaybackError("Audio is not loaded")
        return self._audio

    async def _on_state_change(self, e) -> None:
        if e.state == fta.AudioState.COMPLETED and self.on_completed:
            await self.on_completed()
        elif e.state == fta.AudioState.DISPOSED and self._audio is not None and self.on_error:
            logger.warning("Audio player for %s was disposed by the client", self.url)
            await self.on_error(f"Playback of {self.url} stopped unexpectedly")

    def _on_position_change(self, e) -> None:
        self._position = _seconds(e.position)

    async def play(self) -> None:
        self._audio = fta.Audio(
            src=self.url,
            autoplay=False,
            on_state_change=self._on_state_change,
            on_position_change=self._on_position_change,
        )
        self.page.services.append(self._audio)
        self.page.update()
        try:
            await self._audio.play()
        except Exception as exc:
            raise PlaybackError(f"Could not load {self.url}: {exc}") from exc

    async def pause(self) -> None:
        try:
            await self._require().pause()
        except PlaybackError:
            raise
        except Exception as exc:
            raise PlaybackError(str(exc)) from exc

    async def resume(self) -> None:
        try:
            await self._require().resume()
        except PlaybackError:
            raise
        except Exception as exc:
            raise PlaybackError(str(exc)) from exc

    async def seek(self, position: float) -> None:
        try:
            await self._require().seek(ft.Duration(milliseconds=int(position * 1000)))
        except PlaybackError:
            raise
        except Exception as exc:
            raise PlaybackError(str(exc)) from exc
        self._position = position

    async def get_position(self) -> float:
        if self._audio is None:
            return 0.0
        try:
            current = await self._audio.get_current_position()
        except Exception as exc:
            logger.debug("Position query failed, using last event: %s", exc)
            return self._position
        return _seconds(current)

    async def release(self) -> None:
        audio, self._audio = self._audio, None
        if audio is None:
            return
        try:
            await audio.release()
        except Exception as exc:
            raise PlaybackError(str(exc)) from exc
        finally:
            if audio in self.page.services:
                self.page.services.remove(audio)
            self.page.update()
