from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..errors import ExecutionError
from .command import CommandError, run_interactive
from .env import PATHS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionRequest:
    chroot_dir: str
    command: List[str] = field(default_factory=list)
    userspec: Optional[str] = None


def chroot_argv(req: ExecutionRequest, *, default_shell: str = PATHS.default_shell) -> List[str]:
    """Arguments for chroot(8), without the program name itself."""

    args: List[str] = []
    if req.userspec:
        args += ["--userspec", req.userspec]
    args.append(req.chroot_dir)
    args += list(req.command) or [default_shell]
    return args


def run_chroot(
    req: ExecutionRequest,
    *,
    chroot_bin: str = "chroot",
    default_shell: str = PATHS.default_shell,
    dry_run: bool = False,
) -> None:
    argv: Sequence[str] = [chroot_bin, *chroot_argv(req, default_shell=default_shell)]

    try:
        rc = run_interactive(argv, dry_run=dry_run)
    except CommandError as e:
        raise ExecutionError(f"chroot failed: {e}") from e

    if rc != 0:
        raise ExecutionError(f"chroot failed: exit status {rc}")
