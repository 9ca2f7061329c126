"""
Vocabulary Service - CRUD operations for vocabulary data.

Separates data access logic from UI layer, enabling:
- Clean architecture
- Swappable backends (Supabase, in-memory test doubles)
- Testable business logic
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional

from ..config import Config
from ..errors import ValidationError
from ..models import VocabularyEntry, derive_categories
from ..utils.parsing import TextParser
from .backend import BaseBackend, RowQuery

logger = logging.getLogger(__name__)


class VocabularyService:
    """
    Service for reading and writing vocabulary entries.

    Remote calls run in a worker thread so the UI event loop stays
    responsive. Categories are always derived from the rows, never cached.

    Usage:
        service = VocabularyService(backend)
        categories = await service.fetch_categories()
        words = await service.fetch_by_category(categories[0])
    """

    def __init__(self, backend: BaseBackend, table: Optional[str] = None) -> None:
        """
        Initialize vocabulary service.

        Args:
            backend: Remote data client
            table: Table name (defaults to Config.VOCAB_TABLE)
        """
        self.backend = backend
        self.table = table or Config.VOCAB_TABLE
        self._change_callbacks: List[Callable[[], None]] = []

    def on_change(self, callback: Callable[[], None]) -> None:
        """
        Register a callback for data changes (insert / delete).

        Args:
            callback: Function to call when data changes
        """
        self._change_callbacks.append(callback)

    def _notify_change(self) -> None:
        """Notify all registered callbacks of data change."""
        for callback in self._change_callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Vocabulary change callback failed")

    async def _select(self, query: RowQuery) -> List[VocabularyEntry]:
        rows = await asyncio.to_thread(self.backend.select_rows, self.table, query)
        return [VocabularyEntry.from_row(row) for row in rows]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    async def fetch_categories(self) -> List[str]:
        """
        Get the distinct categories, sorted ascending.

        Returns:
            List of category labels (empty when the table is empty)
        """
        rows = await asyncio.to_thread(
            self.backend.select_rows,
            self.table,
            RowQuery(columns="cat", order_by="cat"),
        )
        return derive_categories(rows)

    async def fetch_by_category(self, category: str) -> List[VocabularyEntry]:
        """
        Get all entries of one category, ordered by word.

        Args:
            category: Category label

        Returns:
            Entries ordered by word ascending
        """
        return await self._select(
            RowQuery(equals={"cat": category}, order_by="word")
        )

    async def search(self, keyword: str, category: Optional[str] = None) -> List[VocabularyEntry]:
        """
        Search word and meaning for a keyword (case-insensitive substring).

        A blank keyword returns the unfiltered list instead of nothing.

        Args:
            keyword: Search text
            category: Restrict to this category when given

        Returns:
            Matching entries ordered by word
        """
        equals = {"cat": category} if category else {}
        return await self._select(
            RowQuery(
                equals=equals,
                search=TextParser.sanitize_search_term(keyword),
                order_by="word",
            )
        )

    async def fetch_entries(
        self,
        category: Optional[str] = None,
        keyword: str = "",
    ) -> List[VocabularyEntry]:
        """
        Get all entries, newest first, optionally filtered.

        Args:
            category: Only this category ("" or None for all)
            keyword: Optional search text

        Returns:
            Entries ordered by creation time descending
        """
        equals = {"cat": category} if category else {}
        return await self._select(
            RowQuery(
                equals=equals,
                search=TextParser.sanitize_search_term(keyword),
                order_by="created_at",
                ascending=False,
            )
        )

    async def exists(self, entry_id: Any) -> bool:
        """Check whether a row with this id is still stored."""
        rows = await asyncio.to_thread(
            self.backend.select_rows,
            self.table,
            RowQuery(columns="id", equals={"id": entry_id}),
        )
        return bool(rows)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    async def create_entry(
        self,
        word: str,
        meaning: str,
        category: str,
        audio_url: Optional[str] = None,
    ) -> VocabularyEntry:
        """
        Insert a new entry.

        Args:
            word: The word or phrase
            meaning: Its meaning
            category: Category label
            audio_url: Public URL of the uploaded pronunciation

        Returns:
            The stored entry with server-assigned id and timestamp

        Raises:
            ValidationError: If a required field is blank
            BackendError: If the insert is rejected
        """
        entry = VocabularyEntry(
            id=None,
            word=TextParser.clean_field(word),
            meaning=TextParser.clean_field(meaning),
            category=TextParser.clean_field(category),
            audio_url=audio_url or None,
        )
        if not (entry.word and entry.meaning and entry.category):
            raise ValidationError("Word, meaning and category are required.")

        row = await asyncio.to_thread(self.backend.insert_row, self.table, entry.to_record())
        stored = VocabularyEntry.from_row(row)
        logger.info("Added '%s' to category '%s' (id=%s)", stored.word, stored.category, stored.id)
        self._notify_change()
        return stored

    async def delete_entry(self, entry_id: Any) -> None:
        """
        Delete an entry by id.

        Raises:
            BackendError: If the delete is rejected
        """
        await asyncio.to_thread(self.backend.delete_row, self.table, entry_id)
        logger.info("Deleted vocabulary entry id=%s", entry_id)
        self._notify_change()
