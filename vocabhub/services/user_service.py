"""
User Service - Lists registered user profiles.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from ..config import Config
from ..errors import BackendError
from ..models import UserProfile
from .backend import BaseBackend, RowQuery

logger = logging.getLogger(__name__)

# Shown when the profiles table is missing or unreadable
PLACEHOLDER_USERS = [
    UserProfile(id="demo-1", email="alice@example.com", name="Alice"),
    UserProfile(id="demo-2", email="bob@example.com", name="Bob"),
    UserProfile(id="demo-3", email="carol@example.com", name="Carol"),
]


class UserService:
    """
    Read access to the ``profiles`` table.

    Usage:
        users, is_placeholder = await UserService(backend).list_users()
    """

    def __init__(self, backend: BaseBackend, table: Optional[str] = None) -> None:
        self.backend = backend
        self.table = table or Config.PROFILES_TABLE

    async def list_users(self, limit: Optional[int] = None) -> Tuple[List[UserProfile], bool]:
        """
        Get up to ``limit`` user profiles.

        Args:
            limit: Maximum rows (defaults to Config.USERS_LIMIT)

        Returns:
            Tuple of (profiles, is_placeholder). Placeholder profiles are
            returned when the query fails.
        """
        query = RowQuery(limit=limit or Config.USERS_LIMIT)
        try:
            rows = await asyncio.to_thread(self.backend.select_rows, self.table, query)
        except BackendError as exc:
            logger.warning("Could not read '%s', showing placeholder users: %s",
                           self.table, exc.describe())
            return list(PLACEHOLDER_USERS), True
        return [UserProfile.from_row(row) for row in rows], False
