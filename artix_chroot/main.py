from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
from typing import Optional

from .config import ConfigError, load_settings
from .errors import ChrootError, SessionInterrupted
from .lib.chroot import ExecutionRequest
from .logging_utils import configure_logging
from .session import run_session

logger = logging.getLogger(__name__)


def _error(msg: str) -> int:
    print(f"error: {msg}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="artix-chroot",
        usage="%(prog)s [options] chroot-dir [command...]",
        description="Bind mount /proc, /sys and /dev into chroot-dir, then chroot into it.",
        epilog="If command is unspecified, runs /bin/bash.",
    )
    p.add_argument("-u", dest="userspec", metavar="<user>[:group]", default=None, help="Run as specified user")
    p.add_argument("-r", dest="skip_resolv_conf", action="store_true", help="Do not update resolv.conf")
    p.add_argument("-c", "--config", default=None, help="Path to settings file (yaml)")
    p.add_argument("--log", default=None, help="Also write the log to this file")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("-n", "--dry-run", action="store_true", help="Log commands instead of running them")
    p.add_argument("chroot_dir", nargs="?", default=None, help=argparse.SUPPRESS)
    # Everything after chroot-dir belongs to the chrooted command, flags included.
    p.add_argument("command", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        return _error(str(e))

    configure_logging(
        log_path=args.log or settings.log_path,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    if not args.chroot_dir:
        return _error("No chroot directory specified")

    req = ExecutionRequest(
        chroot_dir=os.path.abspath(args.chroot_dir),
        command=list(args.command),
        userspec=args.userspec or None,
    )

    try:
        run_session(req, settings, skip_resolv_conf=bool(args.skip_resolv_conf), dry_run=bool(args.dry_run))
    except SessionInterrupted as e:
        logger.debug("Session interrupted", exc_info=True)
        _error(str(e))
        return e.exit_status
    except KeyboardInterrupt:
        logger.debug("Session interrupted", exc_info=True)
        _error("interrupted")
        return 128 + signal.SIGINT
    except ChrootError as e:
        logger.debug("Session failed", exc_info=True)
        return _error(str(e))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
