"""
Supabase implementation of the backend contract.

Thin pass-through to supabase-py: auth, PostgREST queries and storage.
Client exceptions are translated into the application error types.
"""

import logging
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from ..config import Config
from ..errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    StorageConfigurationError,
    UploadError,
)
from ..models import Identity
from ..utils.parsing import TextParser
from .backend import AuthListener, AuthResult, BaseBackend, RowQuery

logger = logging.getLogger(__name__)

# Auth events after which no session exists any more
_SIGNED_OUT_EVENTS = {"SIGNED_OUT", "USER_DELETED"}


class SupabaseBackend(BaseBackend):
    """
    Backend backed by a hosted Supabase project.

    Usage:
        backend = SupabaseBackend.from_config()
        rows = backend.select_rows("vocab", RowQuery(order_by="word"))
    """

    def __init__(self, client: Client) -> None:
        """
        Initialize with an existing client.

        Args:
            client: supabase-py client
        """
        self.client = client
        self._auth_listeners: List[AuthListener] = []
        self._auth_subscription: Any = None

    @classmethod
    def from_config(
        cls,
        url: Optional[str] = None,
        anon_key: Optional[str] = None,
    ) -> "SupabaseBackend":
        """
        Create a backend from the configured project URL and anon key.

        Raises:
            ConfigurationError: If URL or key is missing
        """
        url = (url if url is not None else Config.SUPABASE_URL).strip()
        anon_key = (anon_key if anon_key is not None else Config.SUPABASE_ANON_KEY).strip()
        if not url or not anon_key:
            raise ConfigurationError(
                "Missing Supabase configuration. Set SUPABASE_URL and SUPABASE_ANON_KEY "
                "in your environment or .env file."
            )
        return cls(create_client(url, anon_key))

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------
    @staticmethod
    def _identity_of(user: Any) -> Optional[Identity]:
        if user is None:
            return None
        return Identity(id=str(user.id), email=str(user.email or ""))

    def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            raise AuthenticationError.from_exception(exc) from exc
        return AuthResult(identity=self._identity_of(response.user))

    def sign_up(self, email: str, password: str) -> AuthResult:
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except Exception as exc:
            raise AuthenticationError.from_exception(exc) from exc
        return AuthResult(
            identity=self._identity_of(response.user),
            has_session=response.session is not None,
        )

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as exc:
            raise AuthenticationError.from_exception(exc) from exc

    def current_identity(self) -> Optional[Identity]:
        try:
            session = self.client.auth.get_session()
        except Exception as exc:
            logger.warning("Could not restore session: %s", exc)
            return None
        return self._identity_of(session.user) if session else None

    def on_auth_change(self, listener: AuthListener) -> None:
        self._auth_listeners.append(listener)
        if self._auth_subscription is None:
            self._auth_subscription = self.client.auth.on_auth_state_change(self._on_auth_event)

    def _on_auth_event(self, event: Any, session: Any) -> None:
        name = str(getattr(event, "value", event))
        identity = None
        if session is not None and name not in _SIGNED_OUT_EVENTS:
            identity = self._identity_of(session.user)
        logger.debug("Auth event %s (signed in: %s)", name, identity is not None)
        for listener in list(self._auth_listeners):
            listener(identity)

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------
    def select_rows(self, table: str, query: Optional[RowQuery] = None) -> List[Dict[str, Any]]:
        query = query or RowQuery()
        request = self.client.table(table).select(query.columns)

        for column, value in query.equals.items():
            request = request.eq(column, value)

        keyword = TextParser.sanitize_search_term(query.search)
        if keyword:
            request = request.or_(
                ",".join(f"{column}.ilike.%{keyword}%" for column in query.search_columns)
            )

        if query.order_by:
            request = request.order(query.order_by, desc=not query.ascending)

        if query.limit:
            request = request.limit(query.limit)

        try:
            response = request.execute()
        except Exception as exc:
            raise BackendError.from_exception(exc) from exc
        return list(response.data or [])

    def insert_row(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.client.table(table).insert(record).execute()
        except Exception as exc:
            raise BackendError.from_exception(exc) from exc
        if not response.data:
            raise BackendError(
                f"Insert into '{table}' returned no row",
                hint="Check the table's row-level security insert policy.",
            )
        return response.data[0]

    def delete_row(self, table: str, row_id: Any) -> List[Dict[str, Any]]:
        try:
            response = self.client.table(table).delete().eq("id", row_id).execute()
        except Exception as exc:
            raise BackendError.from_exception(exc) from exc
        return list(response.data or [])

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    @staticmethod
    def _is_missing_bucket(exc: BaseException) -> bool:
        text = f"{getattr(exc, 'message', '')} {exc}".lower()
        return "bucket not found" in text or (
            "bucket" in text and ("not found" in text or "does not exist" in text)
        )

    def upload_blob(
        self,
        bucket: str,
        path: str,
        data: bytes,
        options: Optional[Dict[str, str]] = None,
    ) -> str:
        try:
            response = self.client.storage.from_(bucket).upload(
                path=path,
                file=data,
                file_options=options or {},
            )
        except Exception as exc:
            if self._is_missing_bucket(exc):
                raise StorageConfigurationError(
                    f"Storage bucket '{bucket}' is not set up. Create a public bucket named "
                    f"'{bucket}' in the Supabase dashboard (Storage) and try again."
                ) from exc
            raise UploadError(BackendError.from_exception(exc).message) from exc
        return getattr(response, "path", None) or path

    def get_public_url(self, bucket: str, path: str) -> str:
        try:
            return self.client.storage.from_(bucket).get_public_url(path)
        except Exception as exc:
            raise BackendError.from_exception(exc) from exc

    def remove_blob(self, bucket: str, path: str) -> None:
        try:
            self.client.storage.from_(bucket).remove([path])
        except Exception as exc:
            raise BackendError.from_exception(exc) from exc
