from __future__ import annotations

import os

import pytest

from services.installer import default_minecraft_dir, resolve_platform_token


@pytest.mark.parametrize(
    ("system", "machine", "expected"),
    [
        ("Windows", "AMD64", "win"),
        ("Windows", "ARM64", "win"),
        ("Darwin", "x86_64", "mac"),
        ("Darwin", "arm64", "mac-aarch64"),
        ("Darwin", "aarch64", "mac-aarch64"),
        ("Linux", "x86_64", "linux"),
        ("Linux", "aarch64", "linux"),
        ("FreeBSD", "amd64", "linux"),
    ],
)
def test_resolve_platform_token(system: str, machine: str, expected: str) -> None:
    assert resolve_platform_token(system, machine) == expected


def test_resolve_platform_token_uses_running_platform(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("services.installer.platforms.platform.system", lambda: "Darwin")
    monkeypatch.setattr("services.installer.platforms.platform.machine", lambda: "arm64")

    assert resolve_platform_token() == "mac-aarch64"


def test_default_dir_on_windows_uses_appdata() -> None:
    environ = {"APPDATA": "C:\\Users\\steve\\AppData\\Roaming", "HOME": "/ignored"}

    assert default_minecraft_dir("Windows", environ) == os.path.join(
        "C:\\Users\\steve\\AppData\\Roaming", ".minecraft"
    )


def test_default_dir_on_mac_uses_application_support() -> None:
    assert default_minecraft_dir("Darwin", {"HOME": "/Users/steve"}) == os.path.join(
        "/Users/steve", "Library", "Application Support", "minecraft"
    )


def test_default_dir_elsewhere_uses_dot_minecraft() -> None:
    assert default_minecraft_dir("Linux", {"HOME": "/home/steve"}) == os.path.join(
        "/home/steve", ".minecraft"
    )


@pytest.mark.parametrize(
    ("system", "environ"),
    [
        ("Windows", {"HOME": "/home/steve"}),
        ("Windows", {"APPDATA": ""}),
        ("Darwin", {}),
        ("Linux", {"HOME": ""}),
    ],
)
def test_default_dir_is_empty_without_environment(system: str, environ: dict[str, str]) -> None:
    assert default_minecraft_dir(system, environ) == ""


def test_default_dir_reads_process_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_minecraft_dir("Linux") == os.path.join(str(tmp_path), ".minecraft")
