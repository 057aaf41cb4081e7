"""Executable entrypoint for Scoreworks."""

from __future__ import annotations

from .app import ScoreApp
from .logger_setup import setup_logging
from .settings import SettingsManager


def main() -> None:
    """Launch the score display."""
    settings = SettingsManager().settings
    setup_logging(settings.logging)
    ScoreApp(settings).run()


if __name__ == "__main__":
    main()
