from __future__ import annotations

import logging
import os

from ..errors import PreconditionError

logger = logging.getLogger(__name__)


def require_root() -> None:
    euid = os.geteuid()
    if euid != 0:
        raise PreconditionError("This program must be run as root")
    logger.debug("Running as euid=%d", euid)


def require_chroot_dir(chroot_dir: str) -> None:
    if not os.path.exists(chroot_dir):
        raise PreconditionError(f"Chroot directory does not exist: {chroot_dir}")
    if not os.path.isdir(chroot_dir):
        raise PreconditionError(f"Chroot directory is not a directory: {chroot_dir}")


def check_preconditions(chroot_dir: str, *, skip_root_check: bool = False) -> None:
    """Fail before any mutation if the run cannot possibly succeed."""

    if not skip_root_check:
        require_root()
    require_chroot_dir(chroot_dir)
