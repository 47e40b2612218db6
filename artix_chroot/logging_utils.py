from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure logging.

    Console output goes to stderr so it never mixes with what the chrooted
    command prints. When log_path is given, the log is also written there;
    if that directory is not writable we fall back to a file in the working
    directory.

    Returns the actual file path being used, or None for console only.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_artix_chroot_configured", False):
        return getattr(logger, "_artix_chroot_log_path", log_path)

    chosen_path: Optional[str] = None
    handlers: list[logging.Handler] = []

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(fmt="==> %(levelname)s: %(message)s"))
        handlers.append(console)

    if log_path:
        fmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler: logging.Handler = logging.FileHandler(log_path)
            chosen_path = log_path
        except OSError:
            fallback = str(Path.cwd() / "artix-chroot.log")
            file_handler = logging.FileHandler(fallback)
            chosen_path = fallback
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_artix_chroot_configured", True)
    setattr(logger, "_artix_chroot_log_path", chosen_path)

    if chosen_path:
        logging.getLogger(__name__).debug(
            "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
        )
    return chosen_path
