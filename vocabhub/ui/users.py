"""
Users View - Registered user profiles
-------------------------------------
"""

import flet as ft

from ..context import AppContext
from ..utils import format_date
from .components import card, view_header
from .theme import DesignTokens


class UsersView:
    """Lists rows of the profiles table (or placeholder users)."""

    def __init__(self, page: ft.Page, context: AppContext) -> None:
        self.page = page
        self.users = context.users
        self._list = ft.ListView(expand=True, spacing=6)
        self._banner = ft.Container(visible=False)
        self._progress = ft.ProgressRing(width=20, height=20, visible=False)
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
                            view_header("Users", "Registered learners", ft.Icons.PEOPLE_ALT_ROUNDED),
                            self._progress,
                        ],
                    ),
                    self._banner,
                    card(self._list, expand=True),
                ],
                expand=True,
            ),
            expand=True,
            padding=10,
        )

    async def refresh(self) -> None:
        """Reload the user list."""
        self._progress.visible = True
        self.page.update()

        profiles, is_placeholder = await self.users.list_users()

        self._banner.visible = is_placeholder
        self._banner.content = ft.Row(
            controls=[
                ft.Icon(ft.Icons.INFO_OUTLINE, color=DesignTokens.ACCENT_WARNING, size=18),
                ft.Text(
                    "The profiles table could not be read. Showing sample users.",
                    size=13,
                    color=DesignTokens.ACCENT_WARNING,
                ),
            ],
            spacing=8,
        )
        self._list.controls = [
            ft.ListTile(
                leading=ft.CircleAvatar(content=ft.Text(profile.display_name[:1].upper() or "?")),
                title=ft.Text(profile.display_name),
                subtitle=ft.Text(
                    f"{profile.email}  ·  joined {format_date(profile.created_at)}"
                    if profile.created_at else profile.email,
                    color=DesignTokens.TEXT_TERTIARY,
                ),
            )
            for profile in profiles
        ] or [ft.Text("No users yet.", color=DesignTokens.TEXT_TERTIARY)]
        self._progress.visible = False
        self.page.update()
