"""
Vocabulary Browser - category -> word list -> word detail drill-down.

Holds the browsing state the view renders. Every operation catches
service errors and turns them into a Notice; nothing raises to the view.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from ..audio import AudioPlaybackController
from ..errors import BackendError, VocabHubError
from ..models import Notice, VocabularyEntry
from ..services import VocabularyService

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    """Which level of the drill-down is shown."""
    CATEGORY = "category"
    WORD = "word"
    DETAIL = "detail"


def _describe(exc: VocabHubError) -> str:
    return exc.describe() if isinstance(exc, BackendError) else exc.message


class VocabularyBrowser:
    """
    Browsing state over a VocabularyService.

    Each fetch takes a request token; a response that arrives after a
    newer fetch or a navigation is discarded.

    Usage:
        browser = VocabularyBrowser(service, playback)
        await browser.load_categories()
        await browser.select_category("animals")
        browser.select_entry(browser.entries[0])
    """

    def __init__(
        self,
        service: VocabularyService,
        playback: Optional[AudioPlaybackController] = None,
    ) -> None:
        self.service = service
        self.playback = playback

        self.mode = ViewMode.CATEGORY
        self.categories: List[str] = []
        self.selected_category: Optional[str] = None
        self.entries: List[VocabularyEntry] = []
        self.selected_entry: Optional[VocabularyEntry] = None
        self.search_keyword = ""
        self.loading = False
        self.notice: Optional[Notice] = None

        self._request_token = 0
        self._categories_stale = True
        service.on_change(self._mark_stale)

    @property
    def categories_stale(self) -> bool:
        return self._categories_stale

    def _mark_stale(self) -> None:
        self._categories_stale = True

    def _next_token(self) -> int:
        self._request_token += 1
        return self._request_token

    def _invalidate(self) -> None:
        """Drop any fetch still in flight."""
        self._request_token += 1
        self.loading = False

    async def _fetch(self, token: int, fetch: Callable[[], Awaitable[list]], what: str) -> Optional[list]:
        """
        Run a fetch under a request token.

        Returns:
            The result, or None if it failed or was superseded
        """
        self.loading = True
        self.notice = None
        try:
            result = await fetch()
        except VocabHubError as exc:
            if token != self._request_token:
                return None
            logger.error("Failed to load %s: %s", what, _describe(exc))
            self.loading = False
            self.notice = Notice.error(f"Could not load {what}: {_describe(exc)}")
            return None
        if token != self._request_token:
            logger.debug("Dropping stale %s response (token %s)", what, token)
            return None
        self.loading = False
        return result

    # ------------------------------------------------------------------
    # Category level
    # ------------------------------------------------------------------
    async def load_categories(self) -> None:
        """Fetch the derived category list."""
        token = self._next_token()
        categories = await self._fetch(token, self.service.fetch_categories, "categories")
        if categories is not None:
            self.categories = categories
            self._categories_stale = False

    async def select_category(self, category: str) -> None:
        """Open a category: word mode, keyword cleared, entries by word."""
        self.mode = ViewMode.WORD
        self.selected_category = category
        self.selected_entry = None
        self.search_keyword = ""
        self.entries = []
        await self._load_entries()

    async def _load_entries(self) -> None:
        category = self.selected_category
        if category is None:
            return
        keyword = self.search_keyword.strip()
        token = self._next_token()
        if keyword:
            entries = await self._fetch(
                token, lambda: self.service.search(keyword, category), "words"
            )
        else:
            entries = await self._fetch(
                token, lambda: self.service.fetch_by_category(category), "words"
            )
        if entries is not None:
            self.entries = entries

    # ------------------------------------------------------------------
    # Word level
    # ------------------------------------------------------------------
    async def search(self, keyword: Optional[str] = None) -> None:
        """
        Search word and meaning within the selected category.

        Args:
            keyword: New keyword; the stored keyword is used when omitted.
                A blank keyword reloads the unfiltered list.
        """
        if keyword is not None:
            self.search_keyword = keyword
        await self._load_entries()

    async def on_search_input(self, value: str) -> bool:
        """
        Store typed text; clearing the box reloads the full list.

        Returns:
            True if the list was reloaded
        """
        was_filtered = bool(self.search_keyword.strip())
        self.search_keyword = value or ""
        if was_filtered and not self.search_keyword.strip():
            await self._load_entries()
            return True
        return False

    def select_entry(self, entry: VocabularyEntry) -> None:
        """Show one entry in detail mode."""
        self.selected_entry = entry
        self.mode = ViewMode.DETAIL

    # ------------------------------------------------------------------
    # Navigation back
    # ------------------------------------------------------------------
    async def back_to_words(self) -> None:
        """Return to the loaded word list without fetching. Stops audio."""
        if self.playback is not None:
            await self.playback.stop()
        self.selected_entry = None
        self.mode = ViewMode.WORD

    async def back_to_categories(self) -> None:
        """Return to the category list and re-derive it."""
        if self.playback is not None:
            await self.playback.stop()
        self._invalidate()
        self.mode = ViewMode.CATEGORY
        self.selected_category = None
        self.selected_entry = None
        self.search_keyword = ""
        self.entries = []
        await self.load_categories()
