"""
Media Service - Audio asset validation and storage.

Checks picked files against the type and size constraints, uploads them
under a generated object path and resolves their public URL.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import Config
from ..errors import AssetError, VocabHubError
from ..models import AudioUpload
from ..utils.helpers import format_file_size_mb
from ..utils.paths import StoragePathGenerator
from .backend import BaseBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredAsset:
    """An uploaded object and the URL it is served from."""

    path: str
    public_url: str


class MediaService:
    """
    Service for uploading and managing audio assets.

    Usage:
        media = MediaService(backend)
        media.validate(upload)
        asset = await media.upload_audio(upload)
    """

    def __init__(
        self,
        backend: BaseBackend,
        bucket: Optional[str] = None,
        max_size_bytes: Optional[int] = None,
        path_generator: Optional[StoragePathGenerator] = None,
    ) -> None:
        """
        Initialize media service.

        Args:
            backend: Remote data client
            bucket: Storage bucket (defaults to Config.AUDIO_BUCKET)
            max_size_bytes: Upload limit (defaults to Config.max_audio_bytes())
            path_generator: Object path generator
        """
        self.backend = backend
        self.bucket = bucket or Config.AUDIO_BUCKET
        self.max_size_bytes = max_size_bytes or Config.max_audio_bytes()
        self.paths = path_generator or StoragePathGenerator()

    @property
    def max_size_mb(self) -> float:
        return self.max_size_bytes / (1024 * 1024)

    def validate(self, upload: Optional[AudioUpload]) -> AudioUpload:
        """
        Check an audio file before anything is sent to the backend.

        Args:
            upload: The picked file

        Returns:
            The same upload, for chaining

        Raises:
            AssetError: Missing, non-audio, empty or oversized file
        """
        if upload is None:
            raise AssetError("Please choose an audio file.")
        if not upload.is_audio:
            raise AssetError(
                f"'{upload.filename}' is not an audio file. "
                "Please choose an audio file (MP3, WAV, OGG, ...)."
            )
        if upload.size == 0:
            raise AssetError(f"'{upload.filename}' is empty.")
        if upload.size > self.max_size_bytes:
            raise AssetError(
                f"File size must not exceed {self.max_size_mb:g} MB "
                f"('{upload.filename}' is {format_file_size_mb(upload.size)})."
            )
        return upload

    async def upload_audio(self, upload: AudioUpload) -> StoredAsset:
        """
        Validate and upload an audio file.

        Args:
            upload: The picked file

        Returns:
            Stored path and public URL

        Raises:
            AssetError: Validation failed
            StorageConfigurationError: Bucket missing
            UploadError: Any other storage failure
        """
        self.validate(upload)
        path = self.paths.audio_path(upload.filename)
        options = {
            "cache-control": Config.AUDIO_CACHE_CONTROL,
            "content-type": upload.content_type,
            "upsert": "false",
        }

        logger.info("Uploading %s (%s) to %s/%s",
                    upload.filename, format_file_size_mb(upload.size), self.bucket, path)
        stored_path = await asyncio.to_thread(
            self.backend.upload_blob, self.bucket, path, upload.data, options
        )
        public_url = await asyncio.to_thread(self.backend.get_public_url, self.bucket, path)
        return StoredAsset(path=stored_path or path, public_url=public_url)

    async def discard(self, asset: StoredAsset) -> bool:
        """
        Remove an uploaded object that no record references.

        Failure is logged and reported, never raised: the object is then
        left as orphaned storage.

        Returns:
            True if the object was removed
        """
        try:
            await asyncio.to_thread(self.backend.remove_blob, self.bucket, asset.path)
        except VocabHubError as exc:
            logger.warning("Orphaned upload %s/%s could not be removed: %s",
                           self.bucket, asset.path, exc)
            return False
        logger.info("Removed orphaned upload %s/%s", self.bucket, asset.path)
        return True
