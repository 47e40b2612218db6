from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    host_resolv_conf: str = "/etc/resolv.conf"
    default_shell: str = "/bin/bash"
    config_default: str = "/etc/artix-chroot.yaml"


PATHS = Paths()
