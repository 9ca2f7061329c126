"""
Vocabulary Editor: Delete.

Lists entries newest first, asks for confirmation and removes the
confirmed entry from the local list once the backend accepts the delete.
"""

import logging
from typing import Any, List, Optional

from ..errors import BackendError, VocabHubError
from ..models import Notice, VocabularyEntry
from ..services import VocabularyService

logger = logging.getLogger(__name__)


class VocabularyRemover:
    """
    Filter / confirm / delete flow.

    Usage:
        remover = VocabularyRemover(service)
        await remover.refresh()
        remover.request_delete(remover.entries[0])
        await remover.confirm_delete()
    """

    def __init__(self, service: VocabularyService) -> None:
        self.service = service

        self.entries: List[VocabularyEntry] = []
        self.categories: List[str] = []
        self.category_filter = ""
        self.search_keyword = ""
        self.pending: Optional[VocabularyEntry] = None
        self.loading = False
        self.deleting = False
        self.notice: Optional[Notice] = None

        self._request_token = 0

    async def refresh(self) -> None:
        """
        Reload entries (filtered by category and keyword) and categories.

        A reload started later supersedes this one; its results are dropped.
        """
        self._request_token += 1
        token = self._request_token
        self.loading = True
        self.notice = None
        try:
            entries = await self.service.fetch_entries(
                self.category_filter or None, self.search_keyword
            )
            categories = await self.service.fetch_categories()
        except VocabHubError as exc:
            if token != self._request_token:
                return
            logger.error("Failed to load entries: %s", exc)
            self.loading = False
            self.notice = Notice.error(f"Could not load entries: {exc}")
            return
        if token != self._request_token:
            logger.debug("Dropping stale entry list (token %s)", token)
            return
        self.entries = entries
        self.categories = categories
        self.loading = False

    async def set_filter(self, category: Optional[str] = None, keyword: Optional[str] = None) -> None:
        """Change the filters and reload."""
        if category is not None:
            self.category_filter = category
        if keyword is not None:
            self.search_keyword = keyword
        await self.refresh()

    def request_delete(self, entry: VocabularyEntry) -> None:
        """Ask for confirmation before deleting ``entry``."""
        self.pending = entry

    def cancel_delete(self) -> None:
        self.pending = None

    async def confirm_delete(self) -> bool:
        """
        Delete the pending entry.

        Returns:
            True if the backend accepted the delete
        """
        entry = self.pending
        if entry is None or self.deleting:
            return False

        self.deleting = True
        try:
            await self.service.delete_entry(entry.id)
        except VocabHubError as exc:
            detail = exc.describe() if isinstance(exc, BackendError) else exc.message
            logger.error("Delete of id=%s failed: %s", entry.id, detail)
            self.notice = Notice.error(f"Could not delete '{entry.word}': {detail}")
            return False
        finally:
            self.deleting = False
            self.pending = None

        self.entries = [item for item in self.entries if item.id != entry.id]
        self.notice = Notice.success(f"Deleted '{entry.word}'.")
        return True

    async def verify_deleted(self, entry_id: Any) -> bool:
        """
        Check that a deleted row is really gone.

        A row that survives an accepted delete was filtered out by a
        row-level security policy.

        Returns:
            True if the row no longer exists
        """
        try:
            still_there = await self.service.exists(entry_id)
        except VocabHubError as exc:
            logger.warning("Could not verify delete of id=%s: %s", entry_id, exc)
            return False
        if still_there:
            logger.warning("Row id=%s still present after delete", entry_id)
            self.notice = Notice.warning(
                "The entry still exists after deleting. The delete was probably "
                "blocked by a row-level security policy on the table."
            )
            return False
        return True
