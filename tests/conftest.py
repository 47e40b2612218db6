from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

import pytest

from artix_chroot.lib import chroot as chroot_mod
from artix_chroot.lib import mounts as mounts_mod
from artix_chroot.lib.command import CmdResult, CommandError


class CommandRecorder:
    """Stands in for the external mount/umount/chroot commands."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.fail_on: Set[Tuple[str, ...]] = set()
        self.chroot_rc = 0
        self.chroot_exc: Optional[BaseException] = None
        # Called while the matching command "runs", e.g. to deliver a signal.
        self.hooks: Dict[Tuple[str, ...], Callable[[], None]] = {}

    def run_cmd(self, argv: Sequence[str], *, check: bool = True, dry_run: bool = False):
        argv = list(argv)
        self.calls.append(argv)
        hook = self.hooks.get(tuple(argv))
        if hook is not None:
            hook()
        rc = 32 if tuple(argv) in self.fail_on else 0
        if check and rc:
            raise CommandError(argv, rc, "simulated failure")
        return CmdResult(argv=argv, returncode=rc)

    def run_interactive(self, argv: Sequence[str], *, dry_run: bool = False) -> int:
        self.calls.append(list(argv))
        if self.chroot_exc is not None:
            raise self.chroot_exc
        return self.chroot_rc

    def commands(self, name: str) -> List[List[str]]:
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def recorder(monkeypatch) -> CommandRecorder:
    rec = CommandRecorder()
    monkeypatch.setattr(mounts_mod, "run_cmd", rec.run_cmd)
    monkeypatch.setattr(chroot_mod, "run_interactive", rec.run_interactive)
    return rec


@pytest.fixture
def as_root(monkeypatch) -> None:
    monkeypatch.setattr(os, "geteuid", lambda: 0)


@pytest.fixture
def host_resolv(tmp_path) -> str:
    p = tmp_path / "host" / "resolv.conf"
    p.parent.mkdir()
    p.write_text("nameserver 192.0.2.53\nsearch example.org\n", encoding="utf-8")
    return str(p)


@pytest.fixture
def rootfs(tmp_path) -> str:
    p = tmp_path / "rootfs"
    p.mkdir()
    return str(p)


@pytest.fixture(autouse=True)
def _reset_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        # pytest's own capture handlers are subclasses; leave them alone.
        if h not in handlers and type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_artix_chroot_configured", "_artix_chroot_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
