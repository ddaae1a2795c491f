"""Shared logging helpers for homekit-catalog."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(
    *,
    level: int = logging.WARNING,
    console: Console | None = None,
    force: bool = False,
) -> None:
    """Initialise the root logger once with a Rich handler.

    Parameters mirror ``logging.basicConfig``. The CLI passes ``INFO`` when
    ``--verbose`` is given. Pass ``force=True`` to reconfigure during tests.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            RichHandler(
                console=console or Console(stderr=True),
                show_path=False,
                markup=False,
            )
        ],
        force=force,
    )
