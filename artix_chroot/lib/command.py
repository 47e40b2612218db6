from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    def __init__(self, argv: Sequence[str], returncode: Optional[int], detail: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.detail = detail
        if returncode is None:
            msg = f"{_fmt_argv(self.argv)}: {detail}"
        else:
            msg = f"exit status {returncode}"
            if detail:
                msg = f"{msg}: {detail}"
        super().__init__(msg)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(argv: Sequence[str], *, check: bool = True, dry_run: bool = False) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - stdout/stderr are inherited, so mount errors reach the terminal as-is.
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0)

    try:
        p = subprocess.run(argv_list)
    except OSError as e:
        raise CommandError(argv_list, None, e.strerror or str(e)) from e

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode)

    return CmdResult(argv=argv_list, returncode=p.returncode)


def run_interactive(argv: Sequence[str], *, dry_run: bool = False) -> int:
    """Run a command that owns the terminal until it exits.

    stdin/stdout/stderr are inherited. A Ctrl+C on the terminal reaches the
    child directly; here it only interrupts the wait, so keep waiting.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return 0

    try:
        proc = subprocess.Popen(argv_list)
    except OSError as e:
        raise CommandError(argv_list, None, e.strerror or str(e)) from e

    try:
        while True:
            try:
                return proc.wait()
            except KeyboardInterrupt:
                logger.debug("SIGINT while waiting for %s; left to the child", argv_list[0])
    except BaseException:
        # Unwinding for another reason (e.g. SIGTERM): don't leave the child behind.
        if proc.poll() is None:
            proc.terminate()
            proc.wait()
        raise
