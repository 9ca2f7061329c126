"""Base audio player."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

CompletedHandler = Callable[[], Awaitable[None]]
ErrorHandler = Callable[[str], Awaitable[None]]


class AudioPlayer(ABC):
    """
    Abstract base class for one loaded audio source.

    A player is created per playback session and released afterwards;
    it is never reused for another URL. Implementations raise
    PlaybackError when the source cannot be loaded or controlled, and
    call ``on_completed`` / ``on_error`` for events that arrive later.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.on_completed: Optional[CompletedHandler] = None
        self.on_error: Optional[ErrorHandler] = None

    @abstractmethod
    async def play(self) -> None:
        """Load the source and start playing from the beginning."""
        pass

    @abstractmethod
    async def pause(self) -> None:
        """Pause, keeping the current position."""
        pass

    @abstractmethod
    async def resume(self) -> None:
        """Continue from the paused position."""
        pass

    @abstractmethod
    async def seek(self, position: float) -> None:
        """
        Move to a position.

        Args:
            position: Seconds from the start
        """
        pass

    @abstractmethod
    async def get_position(self) -> float:
        """Current position in seconds."""
        pass

    async def rewind(self) -> None:
        """Move back to the start."""
        await self.seek(0.0)

    async def release(self) -> None:
        """
        Free the underlying media resources.

        Subclasses should override this to detach their control.
        """
        pass
