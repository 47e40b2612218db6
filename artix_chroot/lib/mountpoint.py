from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def check_mountpoint(chroot_dir: str) -> bool:
    """Best-effort advisory; only ever logs.

    A chroot that is a plain directory on the host's root filesystem works,
    but is usually a mistake (e.g. the target partition was never mounted).
    """

    try:
        is_mount = os.path.ismount(chroot_dir)
    except OSError as e:
        logger.warning("Could not check whether %s is a mountpoint: %s", chroot_dir, e)
        return False

    if not is_mount:
        logger.warning("%s is not a mountpoint", chroot_dir)
    else:
        logger.debug("%s is a mountpoint", chroot_dir)
    return is_mount
