"""Dialogs, snackbars and small building blocks shared by the views."""

from typing import Callable, List, Optional

import flet as ft

from ..models import Notice
from .theme import NOTICE_COLORS, NOTICE_ICONS, DesignTokens, primary_button_style


def _close(page: ft.Page, dialog: ft.AlertDialog) -> None:
    dialog.open = False
    page.update()
    if dialog in page.overlay:
        page.overlay.remove(dialog)
    page.update()


def show_notice(page: ft.Page, notice: Optional[Notice]) -> None:
    """Show a notice as a snackbar, replacing any visible one."""
    if notice is None:
        return
    snackbar = ft.SnackBar(
        content=ft.Row(
            controls=[
                ft.Icon(NOTICE_ICONS[notice.level], color=DesignTokens.TEXT_PRIMARY, size=20),
                ft.Text(notice.text, color=DesignTokens.TEXT_PRIMARY, size=14, expand=True),
            ],
            spacing=12,
        ),
        bgcolor=NOTICE_COLORS[notice.level],
        duration=5000 if notice.is_error else 3500,
    )
    # Clean up old snackbars
    for ctrl in list(page.overlay):
        if isinstance(ctrl, ft.SnackBar):
            page.overlay.remove(ctrl)
    page.overlay.append(snackbar)
    snackbar.open = True
    page.update()


def show_error_dialog(page: ft.Page, title: str, message: str) -> None:
    """Show a modal error dialog."""
    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Row(
            controls=[
                ft.Icon(ft.Icons.ERROR_OUTLINE, color=DesignTokens.ACCENT_DANGER, size=28),
                ft.Text(title, weight=ft.FontWeight.W_700, size=18),
            ],
            spacing=12,
        ),
        content=ft.Text(message, size=14, color=DesignTokens.TEXT_SECONDARY, selectable=True),
        actions=[
            ft.ElevatedButton(
                "Close",
                on_click=lambda e: _close(page, dialog),
                style=primary_button_style(danger=True),
            ),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
    )
    page.overlay.append(dialog)
    dialog.open = True
    page.update()


def show_confirm_dialog(
    page: ft.Page,
    title: str,
    lines: List[str],
    on_confirm: Callable[[], None],
    on_cancel: Optional[Callable[[], None]] = None,
    confirm_label: str = "Delete",
) -> None:
    """
    Ask for confirmation of a destructive action.

    Args:
        page: Flet page
        title: Dialog title
        lines: Body lines (key fields of the affected item)
        on_confirm: Called after the dialog closes with "confirm"
        on_cancel: Called after the dialog closes with "cancel"
        confirm_label: Label of the confirm button
    """
    def confirm(e):
        _close(page, dialog)
        on_confirm()

    def cancel(e):
        _close(page, dialog)
        if on_cancel:
            on_cancel()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title, weight=ft.FontWeight.W_600),
        content=ft.Column(
            controls=[ft.Text(line, size=14, color=DesignTokens.TEXT_SECONDARY) for line in lines],
            tight=True,
            spacing=6,
        ),
        actions=[
            ft.TextButton("Cancel", on_click=cancel),
            ft.ElevatedButton(confirm_label, on_click=confirm, style=primary_button_style(danger=True)),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
    )
    page.overlay.append(dialog)
    dialog.open = True
    page.update()


def view_header(title: str, subtitle: str, icon: str) -> ft.Container:
    """Title row used at the top of every view."""
    return ft.Container(
        content=ft.Row(
            controls=[
                ft.Icon(icon, size=32, color=DesignTokens.ACCENT_PRIMARY_HOVER),
                ft.Column(
                    controls=[
                        ft.Text(title, size=28, weight=ft.FontWeight.BOLD, color=DesignTokens.TEXT_PRIMARY),
                        ft.Text(subtitle, size=14, color=DesignTokens.TEXT_TERTIARY),
                    ],
                    spacing=2,
                ),
            ],
            spacing=15,
        ),
        padding=ft.Padding.only(bottom=DesignTokens.SPACING_LG),
    )


def card(content: ft.Control, expand: bool = False) -> ft.Container:
    """Rounded surface around a group of controls."""
    return ft.Container(
        content=content,
        padding=20,
        border_radius=DesignTokens.RADIUS_MD,
        bgcolor=DesignTokens.BG_CARD,
        expand=expand,
    )


def auth_required_panel(message: str, on_sign_in: Callable[[], None]) -> ft.Container:
    """Placeholder shown by gated views while signed out."""
    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Icon(ft.Icons.LOCK_OUTLINE, size=48, color=DesignTokens.TEXT_TERTIARY),
                ft.Text("Sign-in required", size=20, weight=ft.FontWeight.BOLD, color=DesignTokens.TEXT_PRIMARY),
                ft.Text(message, size=14, color=DesignTokens.TEXT_SECONDARY, text_align=ft.TextAlign.CENTER),
                ft.ElevatedButton("Sign in", on_click=lambda e: on_sign_in(), style=primary_button_style()),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=12,
        ),
        alignment=ft.Alignment(0, 0),
        expand=True,
    )
