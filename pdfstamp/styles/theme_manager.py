"""
Theme management and styling for the application.
"""
from PyQt5.QtWidgets import QWidget

from .models import ThemeColors


class ThemeManager:
    """Manages application themes and styling."""

    DARK_THEME = ThemeColors(
        bg_primary="#2e2e2e",
        bg_secondary="#3e3e3e",
        bg_tertiary="#4e4e4e",
        text_primary="#f0f0f0",
        text_muted="#8899AA",
        accent="#4a9eff",
        border="#555555",
        annotation_text="#111827",
        annotation_hover_border="#93c5fd",
        annotation_focus_bg="rgba(255, 255, 255, 128)",
        delete_hover="#dc2626",
    )

    LIGHT_THEME = ThemeColors(
        bg_primary="#f0f0f0",
        bg_secondary="#ffffff",
        bg_tertiary="#e0e0e0",
        text_primary="#2e2e2e",
        text_muted="#7A899C",
        accent="#4a9eff",
        border="#cccccc",
        annotation_text="#111827",
        annotation_hover_border="#93c5fd",
        annotation_focus_bg="rgba(255, 255, 255, 128)",
        delete_hover="#dc2626",
    )

    @classmethod
    def apply_theme(cls, widget: QWidget, dark_mode: bool) -> None:
        """
        Apply theme to a widget and its children.

        Args:
            widget: Widget to style
            dark_mode: Whether to use dark theme
        """
        theme = cls.DARK_THEME if dark_mode else cls.LIGHT_THEME
        widget.setStyleSheet(cls._generate_stylesheet(theme))

    @classmethod
    def _generate_stylesheet(cls, theme: ThemeColors) -> str:
        return f"""
            QMainWindow, QWidget, QLabel, QFrame {{
                background-color: {theme.bg_primary};
                color: {theme.text_primary};
                border: none;
            }}

            QToolButton {{
                background-color: transparent;
                color: {theme.text_primary};
                border: none;
                border-radius: 4px;
                padding: 4px 8px;
            }}
            QToolButton:hover {{
                background-color: {theme.bg_tertiary};
            }}
            QToolButton:disabled {{
                color: {theme.text_muted};
            }}

            QLineEdit {{
                background-color: {theme.bg_secondary};
                border: 1px solid {theme.border};
                border-radius: 6px;
                padding: 4px 8px;
                color: {theme.text_primary};
            }}
            QLineEdit:focus {{
                border: 1px solid {theme.accent};
            }}
            QLineEdit[objectName="page_input"] {{
                min-width: 50px;
                max-width: 50px;
            }}

            #TopFrame {{
                border-bottom: 1px solid {theme.border};
            }}
            QScrollArea {{
                background-color: {theme.bg_primary};
            }}

            /* --- PAGE OVERLAY --- */
            AnnotatedPageLabel, AnnotationBox {{
                background-color: transparent;
            }}
            QLineEdit#AnnotationInput {{
                background-color: transparent;
                border: 1px solid transparent;
                border-radius: 4px;
                padding: 2px 6px;
                color: {theme.annotation_text};
            }}
            QLineEdit#AnnotationInput:hover {{
                border: 1px solid {theme.annotation_hover_border};
            }}
            QLineEdit#AnnotationInput:focus {{
                border: 1px solid {theme.accent};
                background-color: {theme.annotation_focus_bg};
            }}
            QLabel#AnnotationHandle, QToolButton#AnnotationDelete {{
                background-color: white;
                color: #6b7280;
                border-radius: 3px;
                padding: 0px;
            }}
            QLabel#AnnotationHandle:hover {{
                color: {theme.accent};
            }}
            QToolButton#AnnotationDelete:hover {{
                color: {theme.delete_hover};
            }}
        """
