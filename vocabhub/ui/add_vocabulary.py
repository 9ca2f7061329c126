"""
Add Vocabulary View - Word form with audio upload
-------------------------------------------------

Collects word, meaning, category and an audio file, then hands them to
VocabularyEditor which uploads the file before inserting the record.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import flet as ft

from ..config import Config
from ..context import AppContext
from ..controllers import VocabularyEditor
from ..models import AudioUpload, Notice
from ..utils import format_file_size_mb
from .components import card, show_notice, view_header
from .theme import DesignTokens, primary_button_style

logger = logging.getLogger(__name__)


class AddVocabularyView:
    """Form for creating a vocabulary entry."""

    def __init__(self, page: ft.Page, context: AppContext) -> None:
        """
        Initialize the Add view.

        Args:
            page: Flet page instance
            context: Shared services
        """
        self.page = page
        self.editor = VocabularyEditor(context.vocabulary, context.media)

        self._file_picker = ft.FilePicker()
        self.page.services.append(self._file_picker)

        # UI References
        self._word_field: Optional[ft.TextField] = None
        self._meaning_field: Optional[ft.TextField] = None
        self._category_dropdown: Optional[ft.Dropdown] = None
        self._new_category_field: Optional[ft.TextField] = None
        self._file_text: Optional[ft.Text] = None
        self._submit_button: Optional[ft.ElevatedButton] = None
        self._uploaded_url: Optional[ft.Text] = None
        self._progress = ft.ProgressRing(width=20, height=20, visible=False)

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        self._word_field = ft.TextField(label="Word", autofocus=True)
        self._meaning_field = ft.TextField(label="Meaning", multiline=True, min_lines=2, max_lines=4)
        self._category_dropdown = ft.Dropdown(
            label="Category",
            options=[],
            on_select=self._on_category_select,
            expand=True,
        )
        self._new_category_field = ft.TextField(
            label="New category",
            on_submit=self._on_add_category,
            expand=True,
        )
        self._file_text = ft.Text(
            f"No file selected (audio, max {Config.MAX_AUDIO_SIZE_MB} MB)",
            size=13,
            color=DesignTokens.TEXT_TERTIARY,
        )
        self._submit_button = ft.ElevatedButton(
            "Add word",
            icon=ft.Icons.ADD_ROUNDED,
            on_click=self._on_submit_click,
            style=primary_button_style(),
        )
        self._uploaded_url = ft.Text("", size=12, color=DesignTokens.TEXT_TERTIARY,
                                     selectable=True, visible=False)

        form = card(ft.Column(
            controls=[
                self._word_field,
                self._meaning_field,
                ft.Row(controls=[self._category_dropdown]),
                ft.Row(
                    controls=[
                        self._new_category_field,
                        ft.OutlinedButton("Add category", icon=ft.Icons.CREATE_NEW_FOLDER_OUTLINED,
                                          on_click=self._on_add_category),
                    ],
                ),
                ft.Row(
                    controls=[
                        ft.OutlinedButton("Choose audio", icon=ft.Icons.AUDIO_FILE_OUTLINED,
                                          on_click=self._on_pick_click),
                        self._file_text,
                    ],
                    spacing=12,
                ),
                ft.Row(controls=[self._submit_button, self._progress], spacing=12),
                self._uploaded_url,
            ],
            spacing=14,
        ))

        return ft.Container(
            content=ft.Column(
                controls=[
                    view_header("Add Vocabulary", "New word with pronunciation", ft.Icons.ADD_CIRCLE_OUTLINE),
                    form,
                ],
                scroll=ft.ScrollMode.AUTO,
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
        await self.editor.load_categories()
        self._sync()

    def _sync(self) -> None:
        """Copy editor state into the controls."""
        self._category_dropdown.options = [
            ft.dropdown.Option(key=category, text=category) for category in self.editor.categories
        ]
        self._category_dropdown.value = self.editor.category or None
        audio = self.editor.audio
        if audio is None:
            self._file_text.value = f"No file selected (audio, max {Config.MAX_AUDIO_SIZE_MB} MB)"
        else:
            self._file_text.value = f"{audio.filename} ({format_file_size_mb(audio.size)})"
        self._submit_button.disabled = self.editor.submitting
        self._progress.visible = self.editor.submitting
        self._uploaded_url.value = f"Audio URL: {self.editor.uploaded_url}"
        self._uploaded_url.visible = bool(self.editor.uploaded_url)
        self.page.update()
        self._flush_notice()

    def _flush_notice(self) -> None:
        if self.editor.notice:
            show_notice(self.page, self.editor.notice)
            self.editor.notice = None

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _on_category_select(self, e: ft.ControlEvent) -> None:
        self.editor.category = e.control.value or ""

    def _on_add_category(self, e: ft.ControlEvent) -> None:
        if self.editor.add_category(self._new_category_field.value or ""):
            self._new_category_field.value = ""
        self._sync()

    def _on_pick_click(self, e: ft.ControlEvent) -> None:
        self.page.run_task(self._pick_audio)

    async def _pick_audio(self) -> None:
        files = await self._file_picker.pick_files(
            dialog_title="Choose an audio file",
            file_type=ft.FilePickerFileType.AUDIO,
            allow_multiple=False,
            with_data=True,
        )
        if not files:
            return
        picked = files[0]
        try:
            data = picked.bytes
            if data is None and picked.path:
                data = await asyncio.to_thread(Path(picked.path).read_bytes)
        except OSError as exc:
            logger.error("Could not read %s: %s", picked.name, exc)
            show_notice(self.page, Notice.error(f"Could not read '{picked.name}': {exc}"))
            return
        self.editor.select_audio(AudioUpload(filename=picked.name, data=data or b""))
        self._sync()

    def _on_submit_click(self, e: ft.ControlEvent) -> None:
        if self.editor.submitting:
            return
        self.page.run_task(self._submit)

    async def _submit(self) -> None:
        self._submit_button.disabled = True
        self._progress.visible = True
        self.page.update()

        entry = await self.editor.submit(
            self._word_field.value or "",
            self._meaning_field.value or "",
            self._category_dropdown.value or self.editor.category,
        )
        if entry is not None:
            self._word_field.value = ""
            self._meaning_field.value = ""
        self._sync()
