"""Data models used by the installer service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Tuple


class VersionChannel(str, Enum):
    """Independent version streams published by the repository."""

    RELEASE = "release"
    SNAPSHOT = "snapshot"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_label(cls, label: str) -> "VersionChannel":
        lowered = label.strip().lower()
        for channel in cls:
            if channel.value == lowered:
                return channel
        raise ValueError(f"Unknown version channel: {label}")


@dataclass(frozen=True)
class Version:
    """A published build identifier tagged with the channel it came from."""

    identifier: str
    channel: VersionChannel = VersionChannel.RELEASE

    @property
    def is_snapshot(self) -> bool:
        return self.channel is VersionChannel.SNAPSHOT

    def __str__(self) -> str:
        return self.identifier


def sort_versions(versions: list[Version]) -> list[Version]:
    """Return ``versions`` ordered newest-looking first by plain identifier comparison."""

    return sorted(versions, key=lambda version: version.identifier, reverse=True)


@dataclass(frozen=True)
class VersionCatalog:
    """Release and snapshot listings from a single catalog load."""

    releases: Tuple[Version, ...] = ()
    snapshots: Tuple[Version, ...] = ()

    def for_channel(self, channel: VersionChannel) -> Tuple[Version, ...]:
        if channel is VersionChannel.SNAPSHOT:
            return self.snapshots
        return self.releases

    @property
    def is_empty(self) -> bool:
        return not self.releases and not self.snapshots


@dataclass(frozen=True)
class InstallProgress:
    """One event of the installation progress stream."""

    step: str = ""
    progress: float = 0.0
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return bool(self.error)

    @property
    def is_complete(self) -> bool:
        return not self.is_error and self.progress >= 100.0

    @property
    def fraction(self) -> float:
        return max(0.0, min(1.0, self.progress / 100.0))


@dataclass(frozen=True)
class LauncherProfile:
    """Entry stored under ``profiles`` in ``launcher_profiles.json``."""

    name: str
    type: str
    created: str
    last_used: str
    icon: str
    last_version_id: str

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "created": self.created,
            "lastUsed": self.last_used,
            "icon": self.icon,
            "lastVersionId": self.last_version_id,
        }


@dataclass(frozen=True)
class InstallOutcome:
    """Structured result of a pipeline run, kept for logging and tests."""

    version: Version
    target_directory: str
    error: "InstallerError | None" = None
    events: Tuple[InstallProgress, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.error is None


class InstallerError(RuntimeError):
    """Base class for failures raised by the installer core."""


class NetworkError(InstallerError):
    """Raised when a repository request cannot be completed."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class TransportError(NetworkError):
    """The connection failed or timed out before a response arrived."""


class HttpStatusError(NetworkError):
    """The server answered with a non-success status code."""

    def __init__(self, status: int, *, url: str | None = None) -> None:
        super().__init__(f"request failed with status: {status}", url=url)
        self.status = status


class BodyReadError(NetworkError):
    """The response started but its body could not be read."""


class CatalogParseError(InstallerError):
    """Raised when a metadata document is not valid Maven metadata XML."""


class CatalogUnavailableError(InstallerError):
    """Raised when neither version channel produced any versions."""


class ValidationError(InstallerError):
    """Raised when required user input is missing."""


class FilesystemError(InstallerError):
    """Raised when a directory or file cannot be created or written."""


class ProfileWriteError(FilesystemError):
    """Raised when the launcher profile registry cannot be written."""


class ProfileSerializationError(InstallerError):
    """Raised when the launcher profile registry cannot be serialised."""
