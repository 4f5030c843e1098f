"""Application entry point for the ImageProcessing desktop UI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from .. import __version__, config
from ..core.filters import resolve_backend
from ..library.photo_library import PhotoLibrary
from ..settings import SettingsManager
from ..utils.logging import get_logger, set_verbose
from .ui.controllers import ImageLoader, MainController, ProcessingController
from .ui.main_window import MainWindow


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="image-processing", description="Apply simple filters to photos.")
    parser.add_argument("--library", type=Path, default=None, help="directory receiving saved images")
    parser.add_argument("--backend", choices=config.FILTER_BACKENDS, default=None, help="filter executor")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    # Qt consumes its own switches (``-platform`` and friends) from the remaining argv.
    args, _unknown = parser.parse_known_args(list(argv))
    return args


def build_main_window(
    settings: SettingsManager,
    *,
    library_root: Optional[Path] = None,
    backend: Optional[str] = None,
) -> tuple[MainWindow, MainController]:
    """Create the window and its controller graph."""

    stored_root = settings.get("library.root")
    root = library_root or (Path(stored_root) if stored_root else config.LIBRARY_DIR)
    selected_backend = resolve_backend(backend or settings.get("filters.backend"))

    window = MainWindow()
    processing = ProcessingController(backend=selected_backend, parent=window)
    loader = ImageLoader(parent=window)
    controller = MainController(
        window,
        processing=processing,
        loader=loader,
        library=PhotoLibrary(root),
        settings=settings,
        parent=window,
    )
    return window, controller


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Launch the application and return its exit code."""

    arguments = list(sys.argv if argv is None else argv)
    args = _parse_args(arguments[1:])
    logger = get_logger()
    set_verbose(args.verbose)

    app = QApplication.instance() or QApplication(arguments)
    app.setApplicationName(config.APP_NAME)
    app.setApplicationVersion(__version__)

    settings = SettingsManager(config.SETTINGS_FILE)
    settings.load()
    if args.library is not None:
        settings.set("library.root", str(args.library))
    if args.backend is not None:
        settings.set("filters.backend", args.backend)

    window, _controller = build_main_window(settings, library_root=args.library, backend=args.backend)
    window.show()
    logger.info("ImageProcessing %s started", __version__)
    return app.exec()


__all__ = ["build_main_window", "main"]
