from __future__ import annotations

import logging

from artix_chroot.lib.mountpoint import check_mountpoint


def test_plain_directory_warns(rootfs, caplog):
    with caplog.at_level(logging.WARNING):
        assert check_mountpoint(rootfs) is False
    assert f"{rootfs} is not a mountpoint" in caplog.text


def test_filesystem_root_is_a_mountpoint(caplog):
    with caplog.at_level(logging.WARNING):
        assert check_mountpoint("/") is True
    assert caplog.text == ""
