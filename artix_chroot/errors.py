from __future__ import annotations

import signal


class ChrootError(RuntimeError):
    """Base class for failures that end an artix-chroot run."""


class PreconditionError(ChrootError):
    """Checked before anything on the host is touched."""


class SetupError(ChrootError):
    """Preparing the chroot (directories, bind mounts, resolv.conf) failed."""


class ExecutionError(ChrootError):
    """The chrooted command could not be run or exited non-zero."""


class SessionInterrupted(ChrootError):
    def __init__(self, signum: int) -> None:
        self.signum = signum
        super().__init__(f"interrupted by {signal.Signals(signum).name}")

    @property
    def exit_status(self) -> int:
        return 128 + self.signum
