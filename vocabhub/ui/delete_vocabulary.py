"""
Delete Vocabulary View - Filter, confirm and delete entries
----------------------------------------------------------
"""

import asyncio
from typing import Optional

import flet as ft

from ..config import Config
from ..context import AppContext
from ..controllers import VocabularyRemover
from ..models import VocabularyEntry
from ..utils import format_date, truncate_text
from .components import card, show_confirm_dialog, show_notice, view_header
from .theme import DesignTokens

ALL_CATEGORIES = "__all__"


class DeleteVocabularyView:
    """Newest-first entry list with a confirmed delete per row."""

    def __init__(self, page: ft.Page, context: AppContext) -> None:
        """
        Initialize the Delete view.

        Args:
            page: Flet page instance
            context: Shared services
        """
        self.page = page
        self.remover = VocabularyRemover(context.vocabulary)

        # UI References
        self._category_dropdown: Optional[ft.Dropdown] = None
        self._search_field: Optional[ft.TextField] = None
        self._list = ft.ListView(expand=True, spacing=4)
        self._count_text = ft.Text("", size=13, color=DesignTokens.TEXT_TERTIARY)
        self._progress = ft.ProgressRing(width=20, height=20, visible=False)

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        self._category_dropdown = ft.Dropdown(
            label="Category",
            value=ALL_CATEGORIES,
            options=[ft.dropdown.Option(key=ALL_CATEGORIES, text="All categories")],
            on_select=self._on_filter_change,
            width=240,
        )
        self._search_field = ft.TextField(
            hint_text="Search word or meaning",
            prefix_icon=ft.Icons.SEARCH,
            on_submit=self._on_filter_change,
            expand=True,
        )
        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[
                            view_header("Delete Vocabulary", "Remove entries, newest first",
                                        ft.Icons.DELETE_SWEEP_OUTLINED),
                            self._progress,
                        ],
                    ),
                    ft.Row(
                        controls=[
                            self._category_dropdown,
                            self._search_field,
                            ft.IconButton(ft.Icons.REFRESH, tooltip="Reload",
                                          on_click=self._on_filter_change),
                        ],
                        spacing=12,
                    ),
                    self._count_text,
                    card(self._list, expand=True),
                ],
                expand=True,
            ),
            expand=True,
            padding=10,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def refresh(self) -> None:
        """Called when the view is shown."""
        self._progress.visible = True
        self.page.update()
        await self.remover.refresh()
        self._render()

    def _render(self) -> None:
        self._progress.visible = self.remover.loading or self.remover.deleting
        self._category_dropdown.options = [
            ft.dropdown.Option(key=ALL_CATEGORIES, text="All categories"),
            *[ft.dropdown.Option(key=category, text=category) for category in self.remover.categories],
        ]
        entries = self.remover.entries
        self._count_text.value = f"{len(entries)} entries"
        self._list.controls = [self._build_row(entry) for entry in entries] or [
            ft.Text("No entries found.", color=DesignTokens.TEXT_TERTIARY)
        ]
        self.page.update()
        if self.remover.notice:
            show_notice(self.page, self.remover.notice)
            self.remover.notice = None

    def _build_row(self, entry: VocabularyEntry) -> ft.Control:
        return ft.ListTile(
            title=ft.Text(entry.word, weight=ft.FontWeight.W_600),
            subtitle=ft.Text(
                f"{truncate_text(entry.meaning, 60)}  ·  {entry.category}  ·  {format_date(entry.created_at)}",
                color=DesignTokens.TEXT_SECONDARY,
            ),
            trailing=ft.IconButton(
                ft.Icons.DELETE_OUTLINE,
                icon_color=DesignTokens.ACCENT_DANGER,
                tooltip="Delete",
                disabled=self.remover.deleting,
                on_click=lambda e, item=entry: self._on_delete_click(item),
            ),
        )

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _on_filter_change(self, e: ft.ControlEvent) -> None:
        self.page.run_task(self._apply_filter)

    async def _apply_filter(self) -> None:
        category = self._category_dropdown.value
        self._progress.visible = True
        self.page.update()
        await self.remover.set_filter(
            category="" if category in (None, ALL_CATEGORIES) else category,
            keyword=self._search_field.value or "",
        )
        self._render()

    def _on_delete_click(self, entry: VocabularyEntry) -> None:
        self.remover.request_delete(entry)
        show_confirm_dialog(
            self.page,
            "Delete this word?",
            [
                f"Word: {entry.word}",
                f"Meaning: {truncate_text(entry.meaning, 120)}",
                f"Category: {entry.category}",
            ],
            on_confirm=lambda: self.page.run_task(self._confirm_delete),
            on_cancel=self.remover.cancel_delete,
        )

    async def _confirm_delete(self) -> None:
        entry = self.remover.pending
        self._progress.visible = True
        self.page.update()
        deleted = await self.remover.confirm_delete()
        self._render()
        if deleted and entry is not None:
            await asyncio.sleep(Config.DELETE_VERIFY_DELAY)
            await self.remover.verify_deleted(entry.id)
            self._render()
