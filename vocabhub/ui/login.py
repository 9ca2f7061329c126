"""
Login View - E-mail / password sign-in and sign-up
--------------------------------------------------
"""

from typing import Callable, Optional

import flet as ft

from ..context import AppContext
from ..errors import AuthenticationError, ValidationError
from ..models import Notice
from ..services.session import MIN_PASSWORD_LENGTH
from .components import card, show_notice, view_header
from .theme import DesignTokens, primary_button_style


class LoginView:
    """Sign-in form that can switch to sign-up mode."""

    def __init__(self, page: ft.Page, context: AppContext, on_signed_in: Callable[[], None]) -> None:
        """
        Initialize the Login view.

        Args:
            page: Flet page instance
            context: Shared services
            on_signed_in: Called after a successful sign-in
        """
        self.page = page
        self.session = context.session
        self._on_signed_in = on_signed_in
        self.sign_up_mode = False
        self.busy = False

        # UI References
        self._email_field: Optional[ft.TextField] = None
        self._password_field: Optional[ft.TextField] = None
        self._submit_button: Optional[ft.ElevatedButton] = None
        self._toggle_button: Optional[ft.TextButton] = None
        self._message: Optional[ft.Text] = None

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        self._email_field = ft.TextField(
            label="E-mail",
            prefix_icon=ft.Icons.EMAIL_OUTLINED,
            keyboard_type=ft.KeyboardType.EMAIL,
            autofocus=True,
            width=360,
        )
        self._password_field = ft.TextField(
            label="Password",
            prefix_icon=ft.Icons.LOCK_OUTLINE,
            password=True,
            can_reveal_password=True,
            hint_text=f"At least {MIN_PASSWORD_LENGTH} characters",
            on_submit=self._on_submit_click,
            width=360,
        )
        self._message = ft.Text("", size=13, visible=False, width=360)
        self._submit_button = ft.ElevatedButton(
            "Sign in",
            icon=ft.Icons.LOGIN,
            on_click=self._on_submit_click,
            style=primary_button_style(),
            width=360,
        )
        self._toggle_button = ft.TextButton(
            "No account yet? Sign up",
            on_click=self._on_toggle_mode,
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    view_header("Sign in", "Use your VocabHub account", ft.Icons.ACCOUNT_CIRCLE),
                    card(ft.Column(
                        controls=[
                            self._email_field,
                            self._password_field,
                            self._message,
                            self._submit_button,
                            self._toggle_button,
                        ],
                        spacing=14,
                        tight=True,
                    )),
                ],
            ),
            expand=True,
            padding=10,
        )

    def reset(self) -> None:
        """Clear the form (called when the view is shown)."""
        self._password_field.value = ""
        self._message.visible = False

    def _set_message(self, notice: Optional[Notice]) -> None:
        if notice is None:
            self._message.visible = False
            return
        self._message.value = notice.text
        self._message.color = (
            DesignTokens.ACCENT_DANGER if notice.is_error else DesignTokens.ACCENT_SUCCESS
        )
        self._message.visible = True

    def _on_toggle_mode(self, e: ft.ControlEvent) -> None:
        self.sign_up_mode = not self.sign_up_mode
        self._submit_button.content = "Create account" if self.sign_up_mode else "Sign in"
        self._toggle_button.content = (
            "Already have an account? Sign in" if self.sign_up_mode else "No account yet? Sign up"
        )
        self._set_message(None)
        self.page.update()

    def _on_submit_click(self, e: ft.ControlEvent) -> None:
        if self.busy:
            return
        self.page.run_task(self._submit)

    async def _submit(self) -> None:
        self.busy = True
        self._submit_button.disabled = True
        self._set_message(None)
        self.page.update()

        email = self._email_field.value or ""
        password = self._password_field.value or ""
        try:
            if self.sign_up_mode:
                message = await self.session.sign_up(email, password)
                self._set_message(Notice.success(message))
            else:
                identity = await self.session.sign_in(email, password)
                self._password_field.value = ""
                show_notice(self.page, Notice.success(f"Signed in as {identity.email}"))
                self._on_signed_in()
        except ValidationError as exc:
            self._set_message(Notice.error(exc.message))
        except AuthenticationError as exc:
            self._set_message(Notice.error(exc.message))
        finally:
            self.busy = False
            self._submit_button.disabled = False
            self.page.update()
