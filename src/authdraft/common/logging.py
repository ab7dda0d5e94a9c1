"""Shared logging helpers for authdraft."""

from __future__ import annotations

import logging


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Set up root logging for the CLI; modules below it only call ``getLogger``.

    ``force=True`` replaces handlers installed by an earlier call.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(logging.getLogger().level, logging.WARNING))
