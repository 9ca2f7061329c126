"""
Vocabulary View - Category, word list and word detail
-----------------------------------------------------

Renders VocabularyBrowser state. Every handler schedules the controller
coroutine with page.run_task() and re-renders when it returns.
"""

import asyncio
from typing import Optional

import flet as ft

from ..audio import AudioPlaybackController, PlaybackState
from ..context import AppContext
from ..controllers import ViewMode, VocabularyBrowser
from ..models import Notice, VocabularyEntry
from ..utils import format_date, truncate_text
from .audio_player import FletAudioPlayer
from .components import card, show_notice, view_header
from .theme import DesignTokens, primary_button_style


class VocabularyView:
    """Three-level drill-down over the vocabulary table."""

    # Seconds between position label refreshes while playing
    POSITION_POLL_INTERVAL: float = 0.5

    def __init__(self, page: ft.Page, context: AppContext) -> None:
        """
        Initialize the Vocabulary view.

        Args:
            page: Flet page instance
            context: Shared services
        """
        self.page = page
        self.playback = AudioPlaybackController(
            lambda url: FletAudioPlayer(page, url),
            on_notice=self._show_notice,
        )
        self.browser = VocabularyBrowser(context.vocabulary, self.playback)
        self.playback.on_change(self._on_playback_change)

        # UI References
        self._body = ft.Container(expand=True)
        self._progress = ft.ProgressRing(width=20, height=20, visible=False)
        self._search_field: Optional[ft.TextField] = None
        self._position_text: Optional[ft.Text] = None
        self._polling = False

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[
                            view_header("Vocabulary", "Browse words by category", ft.Icons.MENU_BOOK_ROUNDED),
                            self._progress,
                        ],
                    ),
                    self._body,
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
        if self.browser.mode is ViewMode.CATEGORY:
            await self._run(self.browser.load_categories())
        else:
            self._render()

    async def hide(self) -> None:
        """Called when another view is shown."""
        await self.playback.stop()

    def _show_notice(self, notice: Notice) -> None:
        show_notice(self.page, notice)

    async def _run(self, operation) -> None:
        """Await a controller operation with the progress ring shown."""
        self._progress.visible = True
        self.page.update()
        await operation
        self._progress.visible = self.browser.loading
        self._render()
        if self.browser.notice:
            show_notice(self.page, self.browser.notice)
            self.browser.notice = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render(self) -> None:
        mode = self.browser.mode
        if mode is ViewMode.CATEGORY:
            self._body.content = self._build_categories()
        elif mode is ViewMode.WORD:
            self._body.content = self._build_words()
        else:
            self._body.content = self._build_detail()
        self.page.update()

    def _build_categories(self) -> ft.Control:
        categories = self.browser.categories
        if not categories:
            return card(ft.Text(
                "No vocabulary yet." if not self.browser.loading else "Loading...",
                color=DesignTokens.TEXT_TERTIARY,
            ))
        return ft.GridView(
            controls=[
                ft.Container(
                    content=ft.Column(
                        controls=[
                            ft.Icon(ft.Icons.FOLDER_ROUNDED, color=DesignTokens.ACCENT_PRIMARY_HOVER, size=32),
                            ft.Text(category, size=15, weight=ft.FontWeight.W_600,
                                    text_align=ft.TextAlign.CENTER),
                        ],
                        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                        alignment=ft.MainAxisAlignment.CENTER,
                    ),
                    bgcolor=DesignTokens.BG_CARD,
                    border_radius=DesignTokens.RADIUS_MD,
                    ink=True,
                    on_click=lambda e, cat=category: self.page.run_task(
                        self._run, self.browser.select_category(cat)
                    ),
                )
                for category in categories
            ],
            max_extent=180,
            child_aspect_ratio=1.4,
            spacing=12,
            run_spacing=12,
            expand=True,
        )

    def _build_words(self) -> ft.Control:
        self._search_field = ft.TextField(
            value=self.browser.search_keyword,
            hint_text="Search word or meaning",
            prefix_icon=ft.Icons.SEARCH,
            on_change=self._on_search_change,
            on_submit=self._on_search_submit,
            expand=True,
        )
        entries = self.browser.entries
        if entries:
            items = [
                ft.ListTile(
                    leading=ft.Icon(
                        ft.Icons.VOLUME_UP_OUTLINED if entry.has_audio else ft.Icons.VOLUME_OFF_OUTLINED,
                        color=DesignTokens.TEXT_TERTIARY,
                    ),
                    title=ft.Text(entry.word, weight=ft.FontWeight.W_600),
                    subtitle=ft.Text(truncate_text(entry.meaning, 80), color=DesignTokens.TEXT_SECONDARY),
                    on_click=lambda e, item=entry: self._on_entry_click(item),
                )
                for entry in entries
            ]
        else:
            items = [ft.Text(
                "Loading..." if self.browser.loading else "No words found.",
                color=DesignTokens.TEXT_TERTIARY,
            )]

        return ft.Column(
            controls=[
                ft.Row(
                    controls=[
                        ft.IconButton(
                            ft.Icons.ARROW_BACK,
                            tooltip="Back to categories",
                            on_click=lambda e: self.page.run_task(self._run, self.browser.back_to_categories()),
                        ),
                        ft.Text(self.browser.selected_category or "", size=20, weight=ft.FontWeight.BOLD),
                        ft.Text(f"{len(entries)} words", size=13, color=DesignTokens.TEXT_TERTIARY),
                    ],
                ),
                ft.Row(
                    controls=[
                        self._search_field,
                        ft.IconButton(ft.Icons.SEARCH, tooltip="Search", on_click=self._on_search_submit),
                    ],
                ),
                card(ft.ListView(controls=items, spacing=4, expand=True), expand=True),
            ],
            expand=True,
        )

    def _build_detail(self) -> ft.Control:
        entry: VocabularyEntry = self.browser.selected_entry
        state = self.playback.state
        self._position_text = ft.Text("0:00", size=13, color=DesignTokens.TEXT_TERTIARY)

        controls = [
            ft.ElevatedButton(
                "Play" if state is PlaybackState.IDLE else "Restart",
                icon=ft.Icons.PLAY_ARROW_ROUNDED,
                on_click=lambda e: self.page.run_task(self._play, entry.audio_url),
                disabled=not entry.has_audio,
                style=primary_button_style(),
            ),
        ]
        if state is PlaybackState.PLAYING:
            controls.append(ft.IconButton(
                ft.Icons.PAUSE_ROUNDED, tooltip="Pause",
                on_click=lambda e: self.page.run_task(self.playback.pause),
            ))
        if state is PlaybackState.PAUSED:
            controls.append(ft.IconButton(
                ft.Icons.PLAY_CIRCLE_OUTLINE, tooltip="Resume",
                on_click=lambda e: self.page.run_task(self._resume),
            ))
        if state is not PlaybackState.IDLE:
            controls.append(ft.IconButton(
                ft.Icons.STOP_ROUNDED, tooltip="Stop",
                on_click=lambda e: self.page.run_task(self.playback.stop),
            ))
        controls.append(self._position_text)

        return ft.Column(
            controls=[
                ft.Row(
                    controls=[
                        ft.IconButton(
                            ft.Icons.ARROW_BACK,
                            tooltip="Back to word list",
                            on_click=lambda e: self.page.run_task(self._run, self.browser.back_to_words()),
                        ),
                        ft.Text(entry.category, size=14, color=DesignTokens.TEXT_TERTIARY),
                    ],
                ),
                card(ft.Column(
                    controls=[
                        ft.Text(entry.word, size=32, weight=ft.FontWeight.BOLD, selectable=True),
                        ft.Text(entry.meaning, size=18, color=DesignTokens.TEXT_SECONDARY, selectable=True),
                        ft.Text(f"Added {format_date(entry.created_at)}", size=12,
                                color=DesignTokens.TEXT_MUTED),
                        ft.Divider(height=1, color=ft.Colors.WHITE10),
                        ft.Row(controls=controls, spacing=10) if entry.has_audio else ft.Text(
                            "No audio for this word.", color=DesignTokens.TEXT_TERTIARY
                        ),
                    ],
                    spacing=12,
                )),
            ],
        )

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _on_entry_click(self, entry: VocabularyEntry) -> None:
        self.browser.select_entry(entry)
        self._render()

    def _on_search_change(self, e: ft.ControlEvent) -> None:
        value = e.control.value or ""
        if value.strip():
            self.browser.search_keyword = value
        else:
            self.page.run_task(self._run, self.browser.on_search_input(value))

    def _on_search_submit(self, e: ft.ControlEvent) -> None:
        value = self._search_field.value if self._search_field else ""
        self.page.run_task(self._run, self.browser.search(value))

    async def _play(self, url: Optional[str]) -> None:
        if await self.playback.play(url):
            self._start_position_polling()

    async def _resume(self) -> None:
        if await self.playback.resume():
            self._start_position_polling()

    def _on_playback_change(self, state: PlaybackState) -> None:
        if self.browser.mode is ViewMode.DETAIL:
            self._render()

    def _start_position_polling(self) -> None:
        if self._polling:
            return
        self._polling = True
        self.page.run_task(self._poll_position)

    async def _poll_position(self) -> None:
        """Refresh the position label while audio plays."""
        try:
            while self.playback.state is PlaybackState.PLAYING:
                seconds = int(await self.playback.position())
                if self._position_text is not None:
                    self._position_text.value = f"{seconds // 60}:{seconds % 60:02d}"
                    self.page.update()
                await asyncio.sleep(self.POSITION_POLL_INTERVAL)
        finally:
            self._polling = False
