"""Design tokens shared by all views."""

import flet as ft

from ..models import NoticeLevel


class DesignTokens:
    """Centralized design tokens for consistent styling."""
    # Colors - Deep dark theme
    BG_PRIMARY = "#121212"
    BG_SURFACE = "#1A1A1B"
    BG_CARD = "#242426"
    BG_CARD_HOVER = "#2A2A2C"
    BG_SIDEBAR = "#161617"

    # Text colors
    TEXT_PRIMARY = "#FFFFFF"
    TEXT_SECONDARY = "#B3B3B3"
    TEXT_TERTIARY = "#808080"
    TEXT_MUTED = "#5C5C5C"

    # Accent colors (desaturated)
    ACCENT_PRIMARY = "#26A69A"  # Teal CTA
    ACCENT_PRIMARY_HOVER = "#4DB6AC"
    ACCENT_SECONDARY = "#536DFE"
    ACCENT_DANGER = "#E57373"
    ACCENT_SUCCESS = "#81C784"
    ACCENT_WARNING = "#FFB74D"
    ACCENT_INFO = "#64B5F6"

    # Spacing
    SPACING_XS = 4
    SPACING_SM = 8
    SPACING_MD = 16
    SPACING_LG = 24

    # Border radius
    RADIUS_SM = 8
    RADIUS_MD = 12
    RADIUS_LG = 16

    BUTTON_HEIGHT_MD = 44

    FONT_SANS = "Inter, Roboto, Segoe UI, sans-serif"


NOTICE_COLORS = {
    NoticeLevel.INFO: DesignTokens.ACCENT_INFO,
    NoticeLevel.SUCCESS: DesignTokens.ACCENT_SUCCESS,
    NoticeLevel.WARNING: DesignTokens.ACCENT_WARNING,
    NoticeLevel.ERROR: DesignTokens.ACCENT_DANGER,
}

NOTICE_ICONS = {
    NoticeLevel.INFO: ft.Icons.INFO_OUTLINE,
    NoticeLevel.SUCCESS: ft.Icons.CHECK_CIRCLE_OUTLINE,
    NoticeLevel.WARNING: ft.Icons.WARNING_AMBER,
    NoticeLevel.ERROR: ft.Icons.ERROR_OUTLINE,
}


def primary_button_style(danger: bool = False) -> ft.ButtonStyle:
    """Filled button style used for the main action of a view."""
    base = DesignTokens.ACCENT_DANGER if danger else DesignTokens.ACCENT_PRIMARY
    return ft.ButtonStyle(
        color={
            ft.ControlState.DEFAULT: DesignTokens.TEXT_PRIMARY,
            ft.ControlState.DISABLED: ft.Colors.WHITE38,
        },
        bgcolor={
            ft.ControlState.DEFAULT: base,
            ft.ControlState.DISABLED: ft.Colors.with_opacity(0.3, base),
        },
        padding=ft.Padding.symmetric(horizontal=24, vertical=14),
        shape=ft.RoundedRectangleBorder(radius=DesignTokens.RADIUS_SM),
    )
