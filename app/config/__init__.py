"""Installer configuration loaded from a bundled JSON resource."""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from math import isfinite
from pathlib import Path
from typing import Any, Mapping

_CONFIG_RESOURCE = "app.json"
_REPOSITORY_HOST = "https://repo.coosanta.net"
RELEASES_METADATA_URL = f"{_REPOSITORY_HOST}/releases/net/coosanta/meldmc/maven-metadata.xml"
SNAPSHOTS_METADATA_URL = f"{_REPOSITORY_HOST}/snapshots/net/coosanta/meldmc/maven-metadata.xml"
REPOSITORY_BASE_URL = f"{_REPOSITORY_HOST}/releases/net/coosanta/meldmc"
REQUEST_TIMEOUT_SECONDS = 30.0
_INSTALLER_CONFIG_CACHE: InstallerConfig | None = None


@dataclass(frozen=True)
class InstallerConfig:
    """Repository endpoints and request limits used by the installer core."""

    releases_url: str = RELEASES_METADATA_URL
    snapshots_url: str = SNAPSHOTS_METADATA_URL
    repository_base_url: str = REPOSITORY_BASE_URL
    request_timeout: float = REQUEST_TIMEOUT_SECONDS


def get_installer_config() -> InstallerConfig:
    """Return the cached installer configuration."""

    global _INSTALLER_CONFIG_CACHE
    if _INSTALLER_CONFIG_CACHE is None:
        _INSTALLER_CONFIG_CACHE = load_installer_config()
    return _INSTALLER_CONFIG_CACHE


def reset_installer_config_cache() -> None:
    """Reset the cached configuration for subsequent reloads."""

    global _INSTALLER_CONFIG_CACHE
    _INSTALLER_CONFIG_CACHE = None


def load_installer_config(path: str | Path | None = None) -> InstallerConfig:
    """Load configuration from ``path`` or the bundled JSON resource."""

    data = _read_config_data(path)
    section = data.get("repository") if isinstance(data, Mapping) else None
    if not isinstance(section, Mapping):
        return InstallerConfig()
    defaults = InstallerConfig()
    return InstallerConfig(
        releases_url=_coerce_url(section.get("releases_url"), default=defaults.releases_url),
        snapshots_url=_coerce_url(section.get("snapshots_url"), default=defaults.snapshots_url),
        repository_base_url=_coerce_url(
            section.get("base_url"), default=defaults.repository_base_url
        ),
        request_timeout=_coerce_positive_float(
            section.get("timeout_seconds"), default=defaults.request_timeout
        ),
    )


def _read_config_data(path: str | Path | None) -> Mapping[str, Any]:
    if path is not None:
        return _load_json_from_path(Path(path).expanduser())
    return _load_default_config_data()


def _load_json_from_path(path: Path) -> Mapping[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    return _parse_json(raw)


def _load_default_config_data() -> Mapping[str, Any]:
    try:
        resource = resources.files(__package__).joinpath(_CONFIG_RESOURCE)
        raw = resource.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return {}
    return _parse_json(raw)


def _parse_json(raw: str) -> Mapping[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    if isinstance(parsed, Mapping):
        return parsed
    return {}


def _coerce_url(value: Any, *, default: str) -> str:
    if not isinstance(value, str):
        return default
    candidate = value.strip()
    if not candidate.startswith(("https://", "http://")):
        return default
    return candidate


def _coerce_positive_float(value: Any, *, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        candidate = float(value)
    elif isinstance(value, str):
        try:
            candidate = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    if not isfinite(candidate) or candidate <= 0:
        return default
    return candidate


__all__ = [
    "RELEASES_METADATA_URL",
    "REPOSITORY_BASE_URL",
    "REQUEST_TIMEOUT_SECONDS",
    "SNAPSHOTS_METADATA_URL",
    "InstallerConfig",
    "get_installer_config",
    "load_installer_config",
    "reset_installer_config_cache",
]
