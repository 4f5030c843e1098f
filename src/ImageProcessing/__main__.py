"""Allow ``python -m ImageProcessing`` to launch the desktop application."""

from __future__ import annotations

from .gui.main import main

if __name__ == "__main__":  # pragma: no cover - entry point
    raise SystemExit(main())
