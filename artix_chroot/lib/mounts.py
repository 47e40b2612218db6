from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..errors import SetupError
from .command import CommandError, run_cmd
from .signals import deferred_signals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MountSpec:
    source: str
    name: str

    def target_in(self, chroot_dir: str) -> str:
        return os.path.join(chroot_dir, self.name)


# Mount order. Teardown walks it backwards so nothing is busy underneath.
ESSENTIAL_MOUNTS: Sequence[MountSpec] = (
    MountSpec("/proc", "proc"),
    MountSpec("/sys", "sys"),
    MountSpec("/dev", "dev"),
)


@dataclass
class BindMount:
    source: str
    target: str
    released: bool = False


class MountStack:
    """Bind mounts established by this process, released in LIFO order.

    The host mount table has no other owner while we run, so every mount
    acquired here must be released here, whatever happens in between.
    """

    def __init__(
        self,
        chroot_dir: str,
        *,
        mount_bin: str = "mount",
        umount_bin: str = "umount",
        dry_run: bool = False,
    ) -> None:
        self.chroot_dir = chroot_dir
        self.mount_bin = mount_bin
        self.umount_bin = umount_bin
        self.dry_run = dry_run
        self._stack: List[BindMount] = []

    def acquire(self, spec: MountSpec) -> BindMount:
        target = spec.target_in(self.chroot_dir)

        if self.dry_run:
            if not os.path.isdir(target):
                logger.info("Would create directory %s", target)
        else:
            try:
                os.makedirs(target, mode=0o755, exist_ok=True)
            except OSError as e:
                raise SetupError(f"Failed to create directory {target}: {e}") from e

        # A mount that succeeded must be on the stack before any signal lands.
        with deferred_signals():
            try:
                run_cmd([self.mount_bin, "--bind", spec.source, target], dry_run=self.dry_run)
            except CommandError as e:
                raise SetupError(f"Failed to bind mount {spec.source} -> {target}: {e}") from e

            handle = BindMount(source=spec.source, target=target)
            self._stack.append(handle)
        return handle

    def release(self, handle: BindMount) -> bool:
        """Unmount one handle. Returns False if umount failed."""

        if handle.released:
            return True
        try:
            run_cmd([self.umount_bin, handle.target], dry_run=self.dry_run)
        except CommandError as e:
            logger.warning("Failed to unmount %s: %s", handle.target, e)
            return False
        handle.released = True
        logger.info("Unmounted %s", handle.target)
        return True

    def release_all(self) -> List[str]:
        """Release everything still held, newest first.

        Every handle gets its umount attempt even if an earlier one was
        interrupted; the first interruption is re-raised at the end.
        Returns the targets that could not be unmounted.
        """

        failed: List[str] = []
        interrupted: Optional[BaseException] = None
        while self._stack:
            handle = self._stack.pop()
            try:
                ok = self.release(handle)
            except BaseException as e:
                logger.warning("Interrupted while unmounting %s: %r", handle.target, e)
                interrupted = interrupted or e
                ok = False
            if not ok:
                failed.append(handle.target)
        if interrupted is not None:
            raise interrupted
        return failed

    def __enter__(self) -> "MountStack":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        with deferred_signals():
            failed = self.release_all()
        if failed:
            logger.warning("Still mounted, unmount by hand: %s", ", ".join(failed))
        return None


def mount_essentials(stack: MountStack, specs: Sequence[MountSpec] = ESSENTIAL_MOUNTS) -> List[BindMount]:
    """Bind mount proc, sys and dev into the chroot, in that order."""

    return [stack.acquire(spec) for spec in specs]
