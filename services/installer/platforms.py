"""Map the running operating system to artifact tokens and default directories."""

from __future__ import annotations

import os
import platform
from typing import Mapping

from services.installer.constants import (
    PLATFORM_LINUX,
    PLATFORM_MAC,
    PLATFORM_MAC_ARM64,
    PLATFORM_WINDOWS,
)


__all__ = ["default_minecraft_dir", "resolve_platform_token"]

_ARM64_MACHINES = {"arm64", "aarch64"}


def _os_family(system: str | None) -> str:
    value = system if system is not None else platform.system()
    lowered = value.strip().lower()
    if lowered.startswith("win") or lowered.startswith("cygwin") or lowered.startswith("msys"):
        return "windows"
    if lowered == "darwin":
        return "darwin"
    return "other"


def resolve_platform_token(system: str | None = None, machine: str | None = None) -> str:
    """Return the short platform token used in client artifact file names.

    ``system`` and ``machine`` default to the values reported by :mod:`platform`
    for the current interpreter.
    """

    family = _os_family(system)
    if family == "windows":
        return PLATFORM_WINDOWS
    if family == "darwin":
        arch = machine if machine is not None else platform.machine()
        if arch.strip().lower() in _ARM64_MACHINES:
            return PLATFORM_MAC_ARM64
        return PLATFORM_MAC
    return PLATFORM_LINUX


def default_minecraft_dir(
    system: str | None = None, environ: Mapping[str, str] | None = None
) -> str:
    """Suggest the standard Minecraft directory, or ``""`` when none can be derived."""

    env = os.environ if environ is None else environ
    family = _os_family(system)
    if family == "windows":
        appdata = env.get("APPDATA")
        return os.path.join(appdata, ".minecraft") if appdata else ""

    home = env.get("HOME")
    if not home:
        return ""
    if family == "darwin":
        return os.path.join(home, "Library", "Application Support", "minecraft")
    return os.path.join(home, ".minecraft")
