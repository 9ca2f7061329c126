"""
VocabHub: Vocabulary Learning App
---------------------------------

Flet shell with a navigation rail over the VocabHub views.
"""

import logging
import sys
import traceback
from pathlib import Path

# Ensure project root is on sys.path for absolute imports
_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import flet as ft
from typing import Any, Callable, Dict, List, Optional, Set

from vocabhub import __version__
from vocabhub.context import AppContext, create_app_context
from vocabhub.errors import AuthenticationError, BackendError, ConfigurationError
from vocabhub.models import Identity, Notice
from vocabhub.ui import (
    AddVocabularyView,
    DeleteVocabularyView,
    DesignTokens,
    HomeView,
    LoginView,
    SettingsView,
    UsersView,
    VocabularyView,
)
from vocabhub.ui.components import auth_required_panel, show_error_dialog, show_notice
from vocabhub.utils import setup_logger

logger = logging.getLogger("vocabhub.main")

HOME, VOCABULARY, USERS, ADD, DELETE, SETTINGS, ACCOUNT = range(7)

# Views that need a signed-in user
GATED_VIEWS: Set[int] = {VOCABULARY, USERS, ADD, DELETE}

# Disabled in the rail while signed out
EDITOR_VIEWS: Set[int] = {ADD, DELETE}


# =============================================================================
# NAVIGATION RAIL (SIDEBAR)
# =============================================================================

def create_navigation_rail(
    on_change: Callable[[int], None],
    signed_in: bool,
    selected_index: int = 0,
) -> ft.NavigationRail:
    """
    Create the main navigation sidebar.

    Args:
        on_change: Callback when navigation selection changes
        signed_in: Whether editor destinations are enabled
        selected_index: Currently selected index

    Returns:
        Configured NavigationRail control
    """
    items = [
        (ft.Icons.HOME_OUTLINED, ft.Icons.HOME_ROUNDED, "Home"),
        (ft.Icons.MENU_BOOK_OUTLINED, ft.Icons.MENU_BOOK_ROUNDED, "Vocabulary"),
        (ft.Icons.PEOPLE_OUTLINE, ft.Icons.PEOPLE_ROUNDED, "Users"),
        (ft.Icons.ADD_CIRCLE_OUTLINE, ft.Icons.ADD_CIRCLE, "Add"),
        (ft.Icons.DELETE_OUTLINE, ft.Icons.DELETE_ROUNDED, "Delete"),
        (ft.Icons.SETTINGS_OUTLINED, ft.Icons.SETTINGS_ROUNDED, "Settings"),
        (ft.Icons.LOGOUT if signed_in else ft.Icons.LOGIN,
         ft.Icons.LOGOUT if signed_in else ft.Icons.LOGIN,
         "Sign out" if signed_in else "Sign in"),
    ]
    return ft.NavigationRail(
        selected_index=selected_index,
        label_type=ft.NavigationRailLabelType.ALL,
        min_width=100,
        min_extended_width=200,
        extended=True,
        group_alignment=-0.9,  # Align items toward top
        destinations=[
            ft.NavigationRailDestination(
                icon=icon,
                selected_icon=selected_icon,
                label=label,
                disabled=index in EDITOR_VIEWS and not signed_in,
                padding=ft.Padding.symmetric(vertical=8),
            )
            for index, (icon, selected_icon, label) in enumerate(items)
        ],
        on_change=lambda e: on_change(e.control.selected_index),
        bgcolor="transparent",
    )


# =============================================================================
# MAIN APPLICATION
# =============================================================================

class VocabHubApp:
    """Main application controller."""

    def __init__(self, page: ft.Page, context: AppContext) -> None:
        """
        Initialize the application.

        Args:
            page: Flet page instance
            context: Shared services
        """
        self.page = page
        self.context = context
        self._setup_page()
        self._init_views()
        self._build_ui()
        self._unsubscribe = context.session.subscribe(self._on_session_change)
        self.page.run_task(self._restore_session)

    def _setup_page(self) -> None:
        """Configure page settings and theme."""
        self.page.title = "VocabHub"
        self.page.theme_mode = ft.ThemeMode.DARK
        self.page.bgcolor = DesignTokens.BG_PRIMARY
        self.page.theme = ft.Theme(
            color_scheme_seed=DesignTokens.ACCENT_PRIMARY,
            font_family=DesignTokens.FONT_SANS,
        )
        self.page.padding = 0
        self.page.spacing = 0
        self.page.window.min_width = 900
        self.page.window.min_height = 600
        self.page.window.width = 1200
        self.page.window.height = 800

    def _init_views(self) -> None:
        """Initialize all views."""
        self.home = HomeView(self.page, self.context, on_sign_in=lambda: self.navigate_to(ACCOUNT))
        self.vocabulary = VocabularyView(self.page, self.context)
        self.users = UsersView(self.page, self.context)
        self.add_view = AddVocabularyView(self.page, self.context)
        self.delete_view = DeleteVocabularyView(self.page, self.context)
        self.settings = SettingsView(self.page, self.context.settings)
        self.login = LoginView(self.page, self.context, on_signed_in=lambda: self.navigate_to(HOME))

        self.views: Dict[int, Any] = {
            HOME: self.home,
            VOCABULARY: self.vocabulary,
            USERS: self.users,
            ADD: self.add_view,
            DELETE: self.delete_view,
            SETTINGS: self.settings,
            ACCOUNT: self.login,
        }
        self.current_view_index: int = HOME

    def _build_ui(self) -> None:
        """Build the main UI layout."""
        self.content_area = ft.Container(
            content=self.home.container,
            expand=True,
            padding=24,
            border_radius=ft.BorderRadius.only(top_left=16, bottom_left=16),
            bgcolor=DesignTokens.BG_SURFACE,
        )
        self.rail_holder = ft.Container(
            content=create_navigation_rail(self._on_nav_change, signed_in=False),
            expand=True,
        )
        self.identity_text = ft.Text("Not signed in", size=11, color=ft.Colors.WHITE38,
                                     text_align=ft.TextAlign.CENTER)

        sidebar = ft.Container(
            content=ft.Column(
                controls=[
                    # App branding header
                    ft.Container(
                        content=ft.Row(
                            controls=[
                                ft.Icon(ft.Icons.TRANSLATE_ROUNDED, color=DesignTokens.ACCENT_PRIMARY_HOVER, size=28),
                                ft.Text("VocabHub", size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.WHITE),
                            ],
                            alignment=ft.MainAxisAlignment.CENTER,
                            spacing=10,
                        ),
                        padding=ft.Padding.only(top=20, bottom=10),
                    ),
                    ft.Divider(height=1, color=ft.Colors.WHITE10),
                    self.rail_holder,
                    ft.Container(
                        content=ft.Column(
                            controls=[
                                self.identity_text,
                                ft.Text(f"v{__version__}", size=11, color=ft.Colors.WHITE24),
                            ],
                            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                            spacing=4,
                        ),
                        padding=ft.Padding.only(bottom=20),
                        alignment=ft.Alignment(0, 0),
                    ),
                ],
                spacing=0,
            ),
            width=220,
            bgcolor=DesignTokens.BG_SIDEBAR,
        )

        self.page.add(
            ft.Row(
                controls=[
                    sidebar,
                    ft.VerticalDivider(width=1, color=ft.Colors.WHITE10),
                    self.content_area,
                ],
                spacing=0,
                expand=True,
            )
        )

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    async def _restore_session(self) -> None:
        await self.context.session.restore()
        self._apply_session(self.context.session.identity)

    def _on_session_change(self, identity: Optional[Identity]) -> None:
        """Session listener; may be called from the auth client's thread."""
        self.page.run_task(self._apply_session_async, identity)

    async def _apply_session_async(self, identity: Optional[Identity]) -> None:
        self._apply_session(identity)

    def _apply_session(self, identity: Optional[Identity]) -> None:
        """Re-render everything that depends on the signed-in user."""
        self.rail_holder.content = create_navigation_rail(
            self._on_nav_change,
            signed_in=identity is not None,
            selected_index=self.current_view_index,
        )
        self.identity_text.value = identity.email if identity else "Not signed in"
        self.home.render(identity)
        if identity is None and self.current_view_index in EDITOR_VIEWS:
            self.navigate_to(HOME)
            return
        self.page.run_task(self._show_view, self.current_view_index)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _on_nav_change(self, index: int) -> None:
        """
        Handle navigation selection change.

        Args:
            index: Selected navigation index
        """
        if index == ACCOUNT and self.context.session.is_authenticated:
            self.page.run_task(self._sign_out)
            return
        if index == self.current_view_index:
            return
        previous = self.current_view_index
        self.current_view_index = index
        self.page.run_task(self._switch, previous, index)

    async def _switch(self, previous: int, index: int) -> None:
        if previous == VOCABULARY:
            await self.vocabulary.hide()
        await self._show_view(index)

    async def _show_view(self, index: int) -> None:
        """Put a view into the content area and let it load its data."""
        view = self.views[index]
        if index in GATED_VIEWS and not self.context.session.is_authenticated:
            self.content_area.content = auth_required_panel(
                "Please sign in to use this page.",
                on_sign_in=lambda: self.navigate_to(ACCOUNT),
            )
            self.page.update()
            return

        if index == ACCOUNT:
            self.login.reset()
        self.content_area.content = view.container
        self.page.update()

        refresh = getattr(view, "refresh", None)
        if refresh is None:
            return
        try:
            await refresh()
        except Exception as exc:
            logger.exception("View %s failed to load", type(view).__name__)
            message = exc.describe() if isinstance(exc, BackendError) else str(exc)
            show_error_dialog(self.page, "Something went wrong", message)

    async def _sign_out(self) -> None:
        try:
            await self.context.session.sign_out()
        except AuthenticationError as exc:
            logger.warning("Sign-out failed: %s", exc)
            show_notice(self.page, Notice.warning(f"Signed out locally. {exc.message}"))
            return
        show_notice(self.page, Notice.info("Signed out."))

    def navigate_to(self, index: int) -> None:
        """
        Programmatically navigate to a view.

        Args:
            index: View index to navigate to
        """
        if 0 <= index < len(self.views):
            self.rail_holder.content.selected_index = index
            previous = self.current_view_index
            self.current_view_index = index
            self.page.run_task(self._switch, previous, index)


def _show_startup_error(page: ft.Page, title: str, lines: List[str], detail: str = "") -> None:
    page.add(
        ft.Container(
            content=ft.Column(
                controls=[
                    ft.Text(title, size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.RED_400),
                    *[ft.Text(line, size=13, color=ft.Colors.WHITE70) for line in lines],
                    ft.Container(
                        content=ft.Text(detail, size=11, selectable=True, color=ft.Colors.WHITE70),
                        padding=10,
                        bgcolor=ft.Colors.with_opacity(0.08, ft.Colors.WHITE),
                        border_radius=8,
                        visible=bool(detail),
                    ),
                ],
                spacing=10,
            ),
            padding=20,
        )
    )
    page.update()


def main(page: ft.Page) -> None:
    """
    Main entry point for Flet application.

    Args:
        page: Flet page instance
    """
    setup_logger()

    try:
        context = create_app_context()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        page.title = "VocabHub - configuration required"
        _show_startup_error(page, "Supabase is not configured", [
            exc.message,
            "Enter the project URL and anon key below, save, then restart the app.",
        ])
        page.add(SettingsView(page).container)
        page.update()
        return

    try:
        VocabHubApp(page, context)
    except Exception:
        logger.exception("UI failed to start")
        _show_startup_error(
            page,
            "UI failed to start",
            ["Copy this error into a bug report:"],
            traceback.format_exc(),
        )


def run() -> None:
    """Console entry point."""
    ft.run(main)


if __name__ == "__main__":
    run()
