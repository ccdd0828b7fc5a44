from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a theme."""
    # Window chrome
    bg_primary: str
    bg_secondary: str
    bg_tertiary: str
    text_primary: str
    text_muted: str
    accent: str
    border: str

    # Annotation overlay, drawn over the page so independent of the theme
    annotation_text: str
    annotation_hover_border: str
    annotation_focus_bg: str
    delete_hover: str
