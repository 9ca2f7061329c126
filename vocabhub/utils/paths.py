"""
Storage path generation utilities - Single source of truth for object naming.

Every uploaded audio asset gets a collision-avoiding object path built
from the upload time, a random token and the original file extension.
"""

import secrets
import time
from pathlib import PurePosixPath
from typing import Callable, Optional

from ..config import Config


class StoragePathGenerator:
    """
    Centralized storage object path generator.

    Ensures consistent naming conventions for uploaded assets:
    ``audio/<epoch-ms>_<token>.<ext>``.
    """

    # Length of the random token (characters)
    TOKEN_LENGTH = 10

    # Used when the original name has no extension
    DEFAULT_AUDIO_EXT = "mp3"

    def __init__(
        self,
        prefix: Optional[str] = None,
        clock: Callable[[], float] = time.time,
        token_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            prefix: Folder inside the bucket (defaults to Config.AUDIO_PREFIX)
            clock: Returns the current time in seconds
            token_factory: Returns a random token
        """
        self.prefix = (prefix if prefix is not None else Config.AUDIO_PREFIX).strip("/")
        self._clock = clock
        self._token_factory = token_factory or self._random_token

    @classmethod
    def _random_token(cls) -> str:
        return secrets.token_hex(cls.TOKEN_LENGTH)[:cls.TOKEN_LENGTH]

    @classmethod
    def extension_of(cls, filename: str) -> str:
        """
        Get the lower-case extension of a file name, without the dot.

        Args:
            filename: Original file name

        Returns:
            Extension like "mp3"
        """
        suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower()
        return suffix or cls.DEFAULT_AUDIO_EXT

    def audio_path(self, filename: str) -> str:
        """
        Generate the object path for an audio upload.

        Args:
            filename: Original file name (only its extension is kept)

        Returns:
            Path like "audio/1718000000000_3f9a1c2b7d.mp3"
        """
        millis = int(self._clock() * 1000)
        name = f"{millis}_{self._token_factory()}.{self.extension_of(filename)}"
        return f"{self.prefix}/{name}" if self.prefix else name
