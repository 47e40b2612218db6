from __future__ import annotations

import logging
import os
import shutil

from ..errors import SetupError
from .env import PATHS

logger = logging.getLogger(__name__)


def setup_resolv_conf(
    chroot_dir: str,
    *,
    host_resolv: str = PATHS.host_resolv_conf,
    dry_run: bool = False,
) -> str:
    """Make the host's DNS configuration visible inside the chroot.

    A symlink is tried first so the chroot follows later host changes.
    If that fails (usually because a file is already there), whatever is at
    the destination is removed and the host file is copied in instead.

    Returns "symlink" or "copy".
    """

    etc_dir = os.path.join(chroot_dir, "etc")
    chroot_resolv = os.path.join(etc_dir, "resolv.conf")

    if dry_run:
        logger.info("Would link or copy %s -> %s", host_resolv, chroot_resolv)
        return "symlink"

    try:
        os.makedirs(etc_dir, mode=0o755, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Failed to create /etc in chroot: {e}") from e

    try:
        os.symlink(host_resolv, chroot_resolv)
    except OSError as e:
        logger.debug("symlink %s -> %s failed: %s", host_resolv, chroot_resolv, e)
    else:
        logger.info("resolv.conf: symlinked %s -> %s", host_resolv, chroot_resolv)
        return "symlink"

    # lexists: a dangling symlink would otherwise be followed by the copy.
    if os.path.lexists(chroot_resolv):
        try:
            os.remove(chroot_resolv)
        except OSError as e:
            raise SetupError(f"Failed to remove existing {chroot_resolv}: {e}") from e
        logger.info("Removed existing %s", chroot_resolv)

    logger.info("resolv.conf: copying %s -> %s", host_resolv, chroot_resolv)
    try:
        shutil.copyfile(host_resolv, chroot_resolv)
    except OSError as e:
        raise SetupError(f"Failed to copy resolv.conf: {e}") from e

    logger.info("resolv.conf: copied %s -> %s", host_resolv, chroot_resolv)
    return "copy"
