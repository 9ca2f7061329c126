"""
Session Gate - the signed-in identity and its change notifications.

Credential checks are delegated to the backend; this class only keeps
the current identity and tells subscribers (views, navigation) when it
changes.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from ..errors import ValidationError
from ..models import Identity
from .backend import BaseBackend

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Identity]], None]

MIN_PASSWORD_LENGTH = 6


class SessionGate:
    """
    Holds the current identity (or None) and notifies subscribers.

    Usage:
        gate = SessionGate(backend)
        unsubscribe = gate.subscribe(lambda identity: print(identity))
        await gate.sign_in("me@example.com", "secret")
    """

    def __init__(self, backend: BaseBackend) -> None:
        self._backend = backend
        self._identity: Optional[Identity] = None
        self._listeners: List[SessionListener] = []
        backend.on_auth_change(self._on_backend_change)

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a callback for identity changes.

        Args:
            listener: Called with the new identity (None when signed out)

        Returns:
            Function that removes the subscription
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_identity(self, identity: Optional[Identity]) -> None:
        if identity == self._identity:
            return
        self._identity = identity
        logger.info("Session changed: %s", identity.email if identity else "signed out")
        for listener in list(self._listeners):
            try:
                listener(identity)
            except Exception:
                logger.exception("Session listener failed")

    def _on_backend_change(self, identity: Optional[Identity]) -> None:
        self._set_identity(identity)

    @staticmethod
    def _validate_credentials(email: str, password: str) -> str:
        email = (email or "").strip()
        if not email or "@" not in email:
            raise ValidationError("Please enter a valid e-mail address.")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        return email

    async def restore(self) -> Optional[Identity]:
        """Pick up a session persisted by the backend client."""
        identity = await asyncio.to_thread(self._backend.current_identity)
        self._set_identity(identity)
        return identity

    async def sign_in(self, email: str, password: str) -> Identity:
        """
        Sign in with e-mail and password.

        Raises:
            ValidationError: Malformed input
            AuthenticationError: Credentials rejected
        """
        email = self._validate_credentials(email, password)
        result = await asyncio.to_thread(self._backend.sign_in, email, password)
        self._set_identity(result.identity)
        return result.identity

    async def sign_up(self, email: str, password: str) -> str:
        """
        Register a new account.

        Returns:
            Message for the user (confirmation e-mail or signed in)
        """
        email = self._validate_credentials(email, password)
        result = await asyncio.to_thread(self._backend.sign_up, email, password)
        if result.has_session and result.identity is not None:
            self._set_identity(result.identity)
            return f"Account created. Signed in as {result.identity.email}."
        return "Sign-up successful! Check your e-mail to confirm the account."

    async def sign_out(self) -> None:
        """Sign out. The local identity is cleared even if the call fails."""
        try:
            await asyncio.to_thread(self._backend.sign_out)
        finally:
            self._set_identity(None)
