"""
Audio Playback Controller.

Owns the single live playback session. Starting new audio always tears
down the previous session first, so two sources never play at once.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..errors import PlaybackError
from ..models import Notice
from .player import AudioPlayer

logger = logging.getLogger(__name__)

PlayerFactory = Callable[[str], AudioPlayer]


class PlaybackState(Enum):
    """Controller states."""
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass
class AudioSession:
    """The live player and the URL it was created for."""

    session_id: int
    source_url: str
    player: AudioPlayer


class AudioPlaybackController:
    """
    State machine over at most one AudioSession.

    idle -> playing (play), playing -> paused (pause), paused -> playing
    (resume), any -> idle (stop, natural completion, load error).

    Usage:
        controller = AudioPlaybackController(lambda url: FletAudioPlayer(page, url))
        await controller.play(entry.audio_url)
        await controller.pause()
    """

    def __init__(
        self,
        player_factory: PlayerFactory,
        on_notice: Optional[Callable[[Notice], None]] = None,
    ) -> None:
        """
        Initialize controller.

        Args:
            player_factory: Creates a player for a URL
            on_notice: Receives error notices (no audio, playback failures)
        """
        self._player_factory = player_factory
        self._on_notice = on_notice
        self._session: Optional[AudioSession] = None
        self._state = PlaybackState.IDLE
        self._next_session_id = 0
        self._listeners: List[Callable[[PlaybackState], None]] = []
        self.notice: Optional[Notice] = None

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def session(self) -> Optional[AudioSession]:
        return self._session

    @property
    def source_url(self) -> Optional[str]:
        return self._session.source_url if self._session else None

    def on_change(self, callback: Callable[[PlaybackState], None]) -> None:
        """Register a callback for state changes."""
        self._listeners.append(callback)

    def _set_state(self, state: PlaybackState) -> None:
        if state is self._state:
            return
        self._state = state
        for callback in list(self._listeners):
            try:
                callback(state)
            except Exception:
                logger.exception("Playback state callback failed")

    def _report(self, notice: Notice) -> None:
        self.notice = notice
        if self._on_notice:
            self._on_notice(notice)

    def _is_current(self, session_id: int) -> bool:
        return self._session is not None and self._session.session_id == session_id

    async def _teardown(self) -> None:
        """Pause, rewind and release the live session without reporting."""
        session, self._session = self._session, None
        if session is None:
            return
        player = session.player
        player.on_completed = None
        player.on_error = None
        for step in (player.pause, player.rewind, player.release):
            try:
                await step()
            except PlaybackError as exc:
                logger.debug("Ignoring error while stopping %s: %s", session.source_url, exc)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    async def play(self, url: Optional[str]) -> bool:
        """
        Stop whatever is playing and start ``url``.

        Returns:
            True if playback started
        """
        if not url:
            self._report(Notice.error("No audio available for this word."))
            return False

        await self._teardown()
        self._set_state(PlaybackState.IDLE)
        self._next_session_id += 1
        session_id = self._next_session_id
        player = self._player_factory(url)
        self._session = AudioSession(session_id, url, player)

        async def completed() -> None:
            await self.handle_completed(session_id)

        async def failed(message: str) -> None:
            await self.handle_error(session_id, message)

        player.on_completed = completed
        player.on_error = failed

        try:
            await player.play()
        except PlaybackError as exc:
            if not self._is_current(session_id):
                return False
            logger.warning("Playback of %s failed: %s", url, exc)
            await self._teardown()
            self._report(Notice.error(f"Audio playback failed: {exc}"))
            return False

        if not self._is_current(session_id):
            # Completed or failed before play() returned
            return False
        self.notice = None
        self._set_state(PlaybackState.PLAYING)
        return True

    async def pause(self) -> bool:
        """Pause the live session. No-op unless playing."""
        if self._state is not PlaybackState.PLAYING or self._session is None:
            return False
        try:
            await self._session.player.pause()
        except PlaybackError as exc:
            self._report(Notice.error(f"Could not pause audio: {exc}"))
            return False
        self._set_state(PlaybackState.PAUSED)
        return True

    async def resume(self) -> bool:
        """Continue a paused session from its position. No-op unless paused."""
        if self._state is not PlaybackState.PAUSED or self._session is None:
            return False
        try:
            await self._session.player.resume()
        except PlaybackError as exc:
            self._report(Notice.error(f"Could not resume audio: {exc}"))
            return False
        self._set_state(PlaybackState.PLAYING)
        return True

    async def stop(self) -> None:
        """Stop from any state, resetting the position and releasing the player."""
        await self._teardown()
        self._set_state(PlaybackState.IDLE)

    async def position(self) -> float:
        """Position of the live session in seconds (0.0 when idle)."""
        if self._session is None:
            return 0.0
        try:
            return await self._session.player.get_position()
        except PlaybackError:
            return 0.0

    # ------------------------------------------------------------------
    # Player events
    # ------------------------------------------------------------------
    async def handle_completed(self, session_id: int) -> None:
        """Natural end of the source. Events of superseded sessions are ignored."""
        if not self._is_current(session_id):
            logger.debug("Ignoring completion of stale session %s", session_id)
            return
        await self.stop()

    async def handle_error(self, session_id: int, message: str) -> None:
        """Load or decode error reported after play() returned."""
        if not self._is_current(session_id):
            logger.debug("Ignoring error of stale session %s: %s", session_id, message)
            return
        logger.warning("Playback error: %s", message)
        await self.stop()
        self._report(Notice.error(f"Audio playback failed: {message}"))
