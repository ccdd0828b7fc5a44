"""Entry point for the pdfstamp GUI application."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from pdfstamp import __version__
from pdfstamp.config import AppConfig
from pdfstamp.logging_utils import configure_logging

logger = logging.getLogger(__name__)


@click.command()
@click.argument("pdf", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--scale", type=click.FloatRange(min=0.1, max=8.0), envvar="PDFSTAMP_SCALE",
              default=None, help="Display scale for the page preview.")
@click.option("--debug/--no-debug", default=None, help="Verbose logging to the console.")
@click.option("--log-file", type=click.Path(file_okay=True, dir_okay=False),
              envvar="PDFSTAMP_LOG_FILE")
@click.version_option(__version__, prog_name="pdfstamp")
def main(pdf: Optional[str], scale: Optional[float], debug: Optional[bool],
         log_file: Optional[str]) -> None:
    """Open PDF (optional) and place text annotations on it."""
    config = AppConfig.from_env()
    if scale is not None:
        config.scale = scale
    if debug is not None:
        config.debug = debug
    if log_file:
        config.log_path = Path(log_file)

    configure_logging(debug=config.debug, log_path=config.log_path)
    logger.info("Starting pdfstamp %s at scale %.2f", __version__, config.scale)

    # Qt is only needed for the GUI
    from PyQt5.QtWidgets import QApplication
    from pdfstamp.ui.windows.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    window = MainWindow(config, pdf)
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == "__main__":  # pragma: no cover
    main()
