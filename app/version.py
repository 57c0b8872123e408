from __future__ import annotations

"""Installer version helpers."""

from functools import lru_cache
import os
import subprocess
from pathlib import Path
from importlib import resources

from packaging.version import InvalidVersion, Version

_FALLBACK_VERSION = "0.0.0.dev0"


def _read_version_file() -> str | None:
    try:
        text = resources.files(__package__).joinpath("VERSION").read_text(encoding="utf-8")
    except (OSError, ModuleNotFoundError):
        # Namespace packages under an editable install expose no single directory.
        try:
            text = Path(__file__).with_name("VERSION").read_text(encoding="utf-8")
        except OSError:
            return None
    version = text.strip()
    return _normalize(version) if version else None


def _version_from_env() -> str | None:
    env_version = os.environ.get("MELDMC_INSTALLER_VERSION")
    if not env_version:
        return None
    return _normalize(env_version)


def _version_from_git() -> str | None:
    try:
        output = subprocess.check_output(
            ["git", "describe", "--tags", "--dirty"],
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return _normalize(output.strip())


def _normalize(raw_version: str) -> str:
    version = raw_version.strip()
    if version.startswith("v"):
        version = version[1:]
    try:
        return str(Version(version))
    except InvalidVersion:
        return version


@lru_cache(maxsize=1)
def get_app_version() -> str:
    """Return the installer version.

    The order of precedence is:
    1. The ``MELDMC_INSTALLER_VERSION`` environment variable.
    2. Embedded ``VERSION`` file packaged with the app.
    3. ``git describe`` output when running from a source checkout.
    4. A fallback development version string.

    PEP 440 versions are returned in canonical form; anything else is passed
    through unchanged.
    """

    for resolver in (_version_from_env, _read_version_file, _version_from_git):
        version = resolver()
        if version:
            return version
    return _FALLBACK_VERSION


__all__ = ["get_app_version"]
