from __future__ import annotations

import pytest

from artix_chroot import config as config_mod
from artix_chroot.config import ConfigError, Settings, load_settings
from artix_chroot.lib.env import Paths


def test_defaults_when_system_file_absent(monkeypatch, tmp_path):
    monkeypatch.setattr(config_mod, "PATHS", Paths(config_default=str(tmp_path / "none.yaml")))
    assert load_settings() == Settings()


def test_load_yaml(tmp_path):
    p = tmp_path / "artix-chroot.yaml"
    p.write_text(
        "default_shell: /bin/zsh\n"
        "skip_resolv_conf: true\n"
        "chroot_bin: /usr/sbin/chroot\n",
        encoding="utf-8",
    )
    s = load_settings(str(p))
    assert s.default_shell == "/bin/zsh"
    assert s.skip_resolv_conf is True
    assert s.chroot_bin == "/usr/sbin/chroot"
    assert s.mount_bin == "mount"


def test_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yml"
    p.write_text("", encoding="utf-8")
    assert load_settings(str(p)) == Settings()


def test_explicit_path_must_exist(tmp_path):
    with pytest.raises(ConfigError, match="does not exist"):
        load_settings(str(tmp_path / "missing.yaml"))


def test_must_be_yaml(tmp_path):
    p = tmp_path / "config.json"
    p.write_text("{}", encoding="utf-8")
    with pytest.raises(ConfigError, match="YAML"):
        load_settings(str(p))


def test_must_be_mapping(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_settings(str(p))


def test_unknown_keys_rejected():
    with pytest.raises(ConfigError, match="binds"):
        Settings.from_mapping({"binds": ["/tmp"]})


def test_type_checks():
    with pytest.raises(ConfigError):
        Settings.from_mapping({"skip_resolv_conf": "yes"})
    with pytest.raises(ConfigError):
        Settings.from_mapping({"default_shell": ""})
