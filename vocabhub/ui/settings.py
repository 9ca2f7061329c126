"""
Settings View - Connection and upload configuration
---------------------------------------------------

Edits the values persisted by SettingsManager. Changes take effect the
next time the application starts.
"""

from typing import Dict, List, Optional

import flet as ft

from ..config import SettingsManager
from ..models import Notice
from .components import card, show_notice, view_header
from .theme import DesignTokens, primary_button_style


class SettingsView:
    """
    Settings view for the Supabase connection, storage and diagnostics.

    Binds to SettingsManager for persistent storage.
    """

    LOG_LEVELS: List[str] = ["DEBUG", "INFO", "WARNING", "ERROR"]

    def __init__(self, page: ft.Page, settings: Optional[SettingsManager] = None) -> None:
        """
        Initialize the Settings view.

        Args:
            page: Flet page instance for updates
            settings: Settings manager (defaults to the singleton)
        """
        self.page = page
        self.settings = settings or SettingsManager()

        # UI References
        self._fields: Dict[str, ft.TextField] = {}
        self._log_level_dropdown: Optional[ft.Dropdown] = None

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _text_field(self, key: str, label: str, secret: bool = False, numeric: bool = False,
                    width: Optional[int] = None) -> ft.TextField:
        field = ft.TextField(
            value=str(self.settings.get(key, "") or ""),
            label=label,
            password=secret,
            can_reveal_password=secret,
            width=width,
            border_color=ft.Colors.WHITE24,
            focused_border_color=DesignTokens.ACCENT_PRIMARY_HOVER,
            label_style=ft.TextStyle(color=ft.Colors.WHITE54),
            text_style=ft.TextStyle(color=ft.Colors.WHITE),
            input_filter=ft.NumbersOnlyInputFilter() if numeric else None,
        )
        self._fields[key] = field
        return field

    def _build_view(self) -> ft.Container:
        """Build the settings layout."""
        connection = card(ft.Column(
            controls=[
                ft.Text("Supabase Project", size=16, weight=ft.FontWeight.BOLD),
                ft.Text(
                    "Project URL and anon key from Settings > API in the Supabase dashboard.",
                    size=12,
                    color=DesignTokens.TEXT_TERTIARY,
                ),
                self._text_field("SUPABASE_URL", "Project URL"),
                self._text_field("SUPABASE_ANON_KEY", "Anon key", secret=True),
            ],
            spacing=12,
        ))

        storage = card(ft.Column(
            controls=[
                ft.Text("Storage & Limits", size=16, weight=ft.FontWeight.BOLD),
                self._text_field("AUDIO_BUCKET", "Audio bucket", width=300),
                ft.Row(
                    controls=[
                        self._text_field("MAX_AUDIO_SIZE_MB", "Max audio size (MB)", numeric=True, width=200),
                        self._text_field("USERS_LIMIT", "User list limit", numeric=True, width=200),
                    ],
                    spacing=15,
                    wrap=True,
                ),
            ],
            spacing=12,
        ))

        self._log_level_dropdown = ft.Dropdown(
            value=str(self.settings.get("LOG_LEVEL", "INFO")).upper(),
            options=[ft.dropdown.Option(key=level, text=level) for level in self.LOG_LEVELS],
            label="Log level",
            width=200,
        )
        diagnostics = card(ft.Column(
            controls=[
                ft.Text("Diagnostics", size=16, weight=ft.FontWeight.BOLD),
                self._log_level_dropdown,
            ],
            spacing=12,
        ))

        actions = ft.Row(
            controls=[
                ft.TextButton(
                    content=ft.Text("Reset to Defaults", color=ft.Colors.WHITE54),
                    on_click=self._on_reset_click,
                ),
                ft.Container(expand=True),
                ft.ElevatedButton(
                    "Save Settings",
                    icon=ft.Icons.SAVE_ROUNDED,
                    on_click=self._on_save_click,
                    style=primary_button_style(),
                ),
            ],
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    view_header("Settings", "Changes apply after restarting the app", ft.Icons.SETTINGS_ROUNDED),
                    ft.Column(
                        controls=[connection, storage, diagnostics, actions],
                        spacing=20,
                        scroll=ft.ScrollMode.AUTO,
                        expand=True,
                    ),
                ],
                expand=True,
            ),
            expand=True,
            padding=10,
        )

    def _on_save_click(self, e: ft.ControlEvent) -> None:
        """Handle save button click."""
        try:
            self.settings.set("SUPABASE_URL", self._fields["SUPABASE_URL"].value.strip())
            self.settings.set("SUPABASE_ANON_KEY", self._fields["SUPABASE_ANON_KEY"].value.strip())
            self.settings.set("AUDIO_BUCKET", self._fields["AUDIO_BUCKET"].value.strip() or "vocab-audio")
            self.settings.set("MAX_AUDIO_SIZE_MB", int(self._fields["MAX_AUDIO_SIZE_MB"].value or 10))
            self.settings.set("USERS_LIMIT", int(self._fields["USERS_LIMIT"].value or 100))
            self.settings.set("LOG_LEVEL", self._log_level_dropdown.value or "INFO")
        except (ValueError, OSError) as ex:
            show_notice(self.page, Notice.error(f"Error saving settings: {ex}"))
            return
        show_notice(self.page, Notice.success("Settings saved. Restart the app to apply them."))

    def _on_reset_click(self, e: ft.ControlEvent) -> None:
        """Handle reset button click."""
        self.settings.reset()
        for key, field in self._fields.items():
            field.value = str(self.settings.get(key, "") or "")
        self._log_level_dropdown.value = str(self.settings.get("LOG_LEVEL", "INFO")).upper()
        self.page.update()
        show_notice(self.page, Notice.info("Settings reset to defaults"))
