"""
Error taxonomy for VocabHub.

Services raise these; controllers catch them at the operation boundary
and turn them into a user-visible Notice.
"""

from typing import Any, Optional


class VocabHubError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(VocabHubError):
    """Required configuration (Supabase URL / key) is missing or invalid."""


class ValidationError(VocabHubError):
    """Invalid user input. Handled locally, never reaches the backend."""


class BackendError(VocabHubError):
    """
    Failure reported by the hosted backend.

    Carries the diagnostic fields Postgres/PostgREST return alongside
    the message so the UI can show as much detail as is available.
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        hint: Optional[str] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.details = details
        self.hint = hint
        self.code = code

    @classmethod
    def from_exception(cls, exc: BaseException) -> "BackendError":
        """
        Build a BackendError from a client library exception.

        Args:
            exc: Exception raised by the Supabase client

        Returns:
            Error carrying message, details, hint and code when present
        """
        message = _first_text(getattr(exc, "message", None), str(exc), exc.__class__.__name__)
        return cls(
            message,
            details=_first_text(getattr(exc, "details", None)),
            hint=_first_text(getattr(exc, "hint", None)),
            code=_first_text(getattr(exc, "code", None)),
        )

    def describe(self) -> str:
        """Human readable message including the secondary fields."""
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.code:
            parts.append(f"Code: {self.code}")
        return "\n".join(parts)


class AuthenticationError(BackendError):
    """Sign-in / sign-up rejected by the auth service."""


class AssetError(VocabHubError):
    """Problem with an audio asset (type, size, storage)."""


class UploadError(AssetError):
    """Storage upload failed for a transient or unknown reason."""


class StorageConfigurationError(AssetError):
    """The storage bucket does not exist or is not accessible."""


class PlaybackError(VocabHubError):
    """Audio failed to load or play."""


def _first_text(*values: Any) -> Optional[str]:
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None
