"""Read-modify-write access to the launcher's ``launcher_profiles.json``.

The registry file belongs to the Minecraft launcher, so anything the installer
does not understand is carried through untouched. A missing or unreadable
registry is not an error: installation proceeds with an empty one and the
file is rewritten from scratch.

There is no file locking. Two installs writing the same registry at once can
lose one of the updates; callers are expected to run one install at a time.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from services.installer.constants import (
    ARTIFACT_PREFIX,
    PRODUCT_NAME,
    PROFILE_EPOCH_TIMESTAMP,
    PROFILE_ICON,
    PROFILE_TYPE,
)
from services.installer.models import (
    LauncherProfile,
    ProfileSerializationError,
    ProfileWriteError,
    Version,
)


_LOGGER = logging.getLogger(__name__)

__all__ = [
    "build_profile",
    "empty_registry",
    "load_registry",
    "profile_name",
    "upsert_profile",
]

_PROFILES_KEY = "profiles"


def profile_name(version: Version | str) -> str:
    return f"{PRODUCT_NAME} {_identifier(version)}"


def build_profile(version: Version | str) -> LauncherProfile:
    """Return the launcher entry pointing at the installed ``version``."""

    identifier = _identifier(version)
    return LauncherProfile(
        name=profile_name(identifier),
        type=PROFILE_TYPE,
        created=PROFILE_EPOCH_TIMESTAMP,
        last_used=PROFILE_EPOCH_TIMESTAMP,
        icon=PROFILE_ICON,
        last_version_id=f"{ARTIFACT_PREFIX}-{identifier}",
    )


def empty_registry() -> Dict[str, Any]:
    return {_PROFILES_KEY: {}}


def load_registry(registry_path: Path) -> Dict[str, Any]:
    """Return the registry stored at ``registry_path``.

    A missing or corrupt registry is treated as empty. Corrupt covers unreadable
    files, invalid JSON, a top-level value that is not an object, and a
    ``profiles`` member that is not an object.
    """

    path = Path(registry_path)
    if not path.exists():
        _LOGGER.debug("No launcher profile registry at %s; starting fresh", path)
        return empty_registry()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        _LOGGER.warning("Ignoring unreadable launcher profile registry %s: %s", path, exc)
        return empty_registry()

    if not isinstance(data, dict):
        _LOGGER.warning("Ignoring launcher profile registry %s: top level is not an object", path)
        return empty_registry()

    profiles = data.get(_PROFILES_KEY)
    if profiles is None:
        data[_PROFILES_KEY] = {}
    elif not isinstance(profiles, dict):
        _LOGGER.warning("Ignoring launcher profile registry %s: 'profiles' is not an object", path)
        return empty_registry()
    return data


def upsert_profile(registry_path: Path, version: Version | str) -> LauncherProfile:
    """Insert or replace the profile for ``version`` and rewrite the registry.

    Raises
    ------
    ProfileSerializationError
        When the updated registry cannot be encoded as JSON.
    ProfileWriteError
        When the registry file cannot be written.
    """

    path = Path(registry_path)
    registry = load_registry(path)
    profile = build_profile(version)
    registry[_PROFILES_KEY][profile.name] = profile.to_json()

    try:
        payload = json.dumps(registry, indent=2)
    except (TypeError, ValueError) as exc:
        raise ProfileSerializationError(f"failed to marshal profiles: {exc}") from exc

    try:
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise ProfileWriteError(f"failed to write profiles: {exc}") from exc

    _LOGGER.info("Saved launcher profile '%s' to %s", profile.name, path)
    return profile


def _identifier(version: Version | str) -> str:
    return version.identifier if isinstance(version, Version) else str(version)
