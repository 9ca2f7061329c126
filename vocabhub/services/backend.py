"""
Backend contract - Abstract remote data access layer.

Views and services only talk to this interface; SupabaseBackend is the
production implementation and tests substitute an in-memory one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..models import Identity

AuthListener = Callable[[Optional[Identity]], None]


@dataclass
class RowQuery:
    """
    Filters, ordering and limit for a select.

    ``search`` matches ``keyword`` case-insensitively as a substring
    against any of ``search_columns``.
    """

    columns: str = "*"
    equals: Dict[str, Any] = field(default_factory=dict)
    search: str = ""
    search_columns: Sequence[str] = ("word", "meaning")
    order_by: Optional[str] = None
    ascending: bool = True
    limit: Optional[int] = None


@dataclass
class AuthResult:
    """Outcome of sign-in / sign-up."""

    identity: Optional[Identity]
    # False when sign-up needs e-mail confirmation before a session exists
    has_session: bool = True


class BaseBackend(ABC):
    """
    Abstract base class for the hosted backend.

    Defines the contract for auth, row access and blob storage.
    Every method may block; callers run them in a worker thread.
    All failures are raised as VocabHubError subclasses.
    """

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------
    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with e-mail and password."""
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str) -> AuthResult:
        """Register a new account."""
        pass

    @abstractmethod
    def sign_out(self) -> None:
        """End the current session."""
        pass

    @abstractmethod
    def current_identity(self) -> Optional[Identity]:
        """Identity of the restored session, if any."""
        pass

    def on_auth_change(self, listener: AuthListener) -> None:
        """
        Register a listener for session changes made outside the app
        (token expiry, sign-out in another tab).
        """
        pass

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------
    @abstractmethod
    def select_rows(self, table: str, query: Optional[RowQuery] = None) -> List[Dict[str, Any]]:
        """Get rows matching query, in the requested order."""
        pass

    @abstractmethod
    def insert_row(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row. Returns it with server-assigned fields."""
        pass

    @abstractmethod
    def delete_row(self, table: str, row_id: Any) -> List[Dict[str, Any]]:
        """Delete a row by id. Returns the deleted rows the server reports."""
        pass

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    @abstractmethod
    def upload_blob(
        self,
        bucket: str,
        path: str,
        data: bytes,
        options: Optional[Dict[str, str]] = None,
    ) -> str:
        """Store bytes at path. Returns the stored path."""
        pass

    @abstractmethod
    def get_public_url(self, bucket: str, path: str) -> str:
        """Publicly resolvable URL of a stored object."""
        pass

    @abstractmethod
    def remove_blob(self, bucket: str, path: str) -> None:
        """Delete a stored object."""
        pass
