"""
Home View - Welcome screen and current identity
-----------------------------------------------
"""

from typing import Callable, Optional

import flet as ft

from ..context import AppContext
from ..models import Identity
from .components import card, view_header
from .theme import DesignTokens, primary_button_style


class HomeView:
    """Shows who is signed in, or invites the user to sign in."""

    def __init__(self, page: ft.Page, context: AppContext, on_sign_in: Callable[[], None]) -> None:
        """
        Initialize the Home view.

        Args:
            page: Flet page instance
            context: Shared services
            on_sign_in: Navigates to the login view
        """
        self.page = page
        self.context = context
        self._on_sign_in = on_sign_in
        self._body = ft.Container()
        self._container = self._build_view()
        self.render(context.session.identity)

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        return ft.Container(
            content=ft.Column(
                controls=[
                    view_header("VocabHub", "Learn vocabulary with pronunciation", ft.Icons.HOME_ROUNDED),
                    self._body,
                ],
            ),
            expand=True,
            padding=10,
        )

    def render(self, identity: Optional[Identity]) -> None:
        """Rebuild the body for the given identity."""
        if identity is None:
            self._body.content = card(ft.Column(
                controls=[
                    ft.Text("You are not signed in.", size=16, color=DesignTokens.TEXT_SECONDARY),
                    ft.Text(
                        "Sign in to add or delete vocabulary.",
                        size=13,
                        color=DesignTokens.TEXT_TERTIARY,
                    ),
                    ft.ElevatedButton(
                        "Sign in",
                        icon=ft.Icons.LOGIN,
                        on_click=lambda e: self._on_sign_in(),
                        style=primary_button_style(),
                    ),
                ],
                spacing=12,
            ))
            return

        self._body.content = card(ft.Column(
            controls=[
                ft.Text(f"Welcome, {identity.email}", size=20, weight=ft.FontWeight.BOLD),
                ft.Row(
                    controls=[
                        ft.Icon(ft.Icons.EMAIL_OUTLINED, size=16, color=DesignTokens.TEXT_TERTIARY),
                        ft.Text(identity.email, size=14, color=DesignTokens.TEXT_SECONDARY, selectable=True),
                    ],
                ),
                ft.Row(
                    controls=[
                        ft.Icon(ft.Icons.BADGE_OUTLINED, size=16, color=DesignTokens.TEXT_TERTIARY),
                        ft.Text(f"User ID: {identity.id}", size=14, color=DesignTokens.TEXT_SECONDARY,
                                selectable=True),
                    ],
                ),
            ],
            spacing=10,
        ))
