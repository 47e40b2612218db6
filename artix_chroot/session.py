from __future__ import annotations

import logging

from .config import Settings
from .lib.chroot import ExecutionRequest, run_chroot
from .lib.mountpoint import check_mountpoint
from .lib.mounts import MountStack, mount_essentials
from .lib.preflight import check_preconditions
from .lib.resolv import setup_resolv_conf
from .lib.signals import CLEANUP_SIGNALS, raise_on_signals

logger = logging.getLogger(__name__)

__all__ = ["CLEANUP_SIGNALS", "raise_on_signals", "run_session"]


def run_session(
    req: ExecutionRequest,
    settings: Settings,
    *,
    skip_resolv_conf: bool = False,
    dry_run: bool = False,
) -> None:
    """Mount, provision, run the command, unmount.

    Whatever escapes from setup or from the chrooted command, the mounts
    made so far are released on the way out. Signals arriving during the
    unmounts are held until they are done, then surface as
    SessionInterrupted.
    """

    # dry_run never mutates anything, so it doesn't need root.
    check_preconditions(req.chroot_dir, skip_root_check=dry_run)

    with raise_on_signals():
        with MountStack(
            req.chroot_dir,
            mount_bin=settings.mount_bin,
            umount_bin=settings.umount_bin,
            dry_run=dry_run,
        ) as stack:
            mount_essentials(stack)

            if not (skip_resolv_conf or settings.skip_resolv_conf):
                setup_resolv_conf(req.chroot_dir, host_resolv=settings.host_resolv_conf, dry_run=dry_run)
            else:
                logger.debug("Leaving resolv.conf alone")

            check_mountpoint(req.chroot_dir)

            run_chroot(
                req,
                chroot_bin=settings.chroot_bin,
                default_shell=settings.default_shell,
                dry_run=dry_run,
            )
