"""
Application configuration.

Every collaborator receives its settings at construction time; nothing here
is read implicitly at import.
"""
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


DEFAULT_SCALE = 1.5


class FontSizeUnits(Enum):
    """How an annotation's font size is interpreted when compositing."""
    DISPLAY = "display"    # pixels at the session scale, divided by scale on export
    DOCUMENT = "document"  # already in PDF points, drawn unchanged


@dataclass(frozen=True)
class EditorDefaults:
    """Values used for annotations created by a double-click."""
    box_width: float = 200.0
    box_height: float = 30.0
    font_size: float = 16.0
    placeholder_text: str = "Nouveau texte"
    # Shifts the new box up so its text sits roughly centred on the click
    vertical_click_offset: float = 10.0


@dataclass(frozen=True)
class RasterizerConfig:
    """Settings for page rendering."""
    alpha: bool = False
    dark_mode: bool = False
    cache_size: int = 3


@dataclass(frozen=True)
class CompositorConfig:
    """Settings for drawing annotations into the output document."""
    font_name: str = "helv"
    color: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    font_size_units: FontSizeUnits = FontSizeUnits.DISPLAY
    garbage: int = 4
    deflate: bool = True


@dataclass
class AppConfig:
    """Top level configuration for a pdfstamp session."""
    scale: float = DEFAULT_SCALE
    debug: bool = False
    log_path: Optional[Path] = None
    editor: EditorDefaults = field(default_factory=EditorDefaults)
    rasterizer: RasterizerConfig = field(default_factory=RasterizerConfig)
    compositor: CompositorConfig = field(default_factory=CompositorConfig)

    def __post_init__(self):
        if self.scale <= 0:
            raise ValueError(f"Display scale must be positive, got {self.scale}")

    @classmethod
    def from_env(cls, environ=None) -> "AppConfig":
        """
        Build a configuration from ``PDFSTAMP_*`` environment variables.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``

        Returns:
            AppConfig with any overrides applied
        """
        environ = os.environ if environ is None else environ

        scale = float(environ.get("PDFSTAMP_SCALE", DEFAULT_SCALE))
        debug = environ.get("PDFSTAMP_DEBUG", "").lower() in ("1", "true", "yes", "on")
        log_file = environ.get("PDFSTAMP_LOG_FILE")

        return cls(
            scale=scale,
            debug=debug,
            log_path=Path(log_file) if log_file else None,
        )
