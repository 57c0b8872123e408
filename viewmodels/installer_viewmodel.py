"""View-model backing the installer window."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock
from typing import Tuple

from services.installer import (
    InstallerError,
    InstallerService,
    InstallProgress,
    Version,
    VersionCatalog,
    VersionChannel,
)
from services.installer.constants import (
    MESSAGE_MISSING_DIRECTORY,
    MESSAGE_MISSING_VERSION,
    PRODUCT_NAME,
)
from shared.result import Result

logger = logging.getLogger(__name__)

STATUS_LOADING = "Loading versions..."
STATUS_LOADED = "Versions loaded successfully"
STATUS_LOAD_FAILED = "Error: Failed to load versions from repository"
STATUS_INSTALL_FAILED = "Installation failed"
LOAD_FAILED_DETAIL = (
    "Could not connect to the MeldMC repository.\n\n"
    "Please check your internet connection and try again.\n"
    "If the problem persists, the repository may be temporarily unavailable."
)


def completion_message(version: str) -> str:
    return (
        f"{PRODUCT_NAME} {version} has been installed successfully!\n\n"
        f"You can now select the {PRODUCT_NAME} profile in your Minecraft launcher."
    )


@dataclass(slots=True)
class InstallerViewModelState:
    channel: VersionChannel = VersionChannel.RELEASE
    version_options: Tuple[str, ...] = field(default_factory=tuple)
    selected_version: str = ""
    minecraft_dir: str = ""
    status_message: str = STATUS_LOADING
    progress: float = 0.0
    versions_loaded: bool = False
    installing: bool = False


class InstallerViewModel:
    """Expose window-ready state and commands for the installer.

    The catalog fetched by :meth:`load_versions` is kept until the next call;
    switching channels only re-filters it and never goes back to the network.
    """

    def __init__(self, service: InstallerService, *, default_dir: str | None = None) -> None:
        self._service = service
        self._state_lock = RLock()
        self._catalog: VersionCatalog | None = None
        self.state = InstallerViewModelState(
            minecraft_dir=default_dir if default_dir is not None else service.default_install_dir()
        )

    @property
    def channel_labels(self) -> Tuple[str, ...]:
        return tuple(channel.label for channel in VersionChannel)

    @property
    def can_install(self) -> bool:
        with self._state_lock:
            return self.state.versions_loaded and not self.state.installing

    def load_versions(self) -> Result[VersionCatalog, str]:
        with self._state_lock:
            self.state.status_message = STATUS_LOADING
        try:
            catalog = self._service.load_catalog()
        except InstallerError as exc:
            logger.warning("Version catalog load failed: %s", exc)
            with self._state_lock:
                self.state.status_message = STATUS_LOAD_FAILED
            return Result.err(LOAD_FAILED_DETAIL)
        self.apply_catalog(catalog)
        return Result.ok(catalog)

    def apply_catalog(self, catalog: VersionCatalog) -> None:
        with self._state_lock:
            self._catalog = catalog
            self.state.versions_loaded = True
            self.state.status_message = STATUS_LOADED
            self._refresh_version_options()

    def select_channel(self, channel: VersionChannel | str) -> None:
        if not isinstance(channel, VersionChannel):
            channel = VersionChannel.from_label(channel)
        with self._state_lock:
            self.state.channel = channel
            self._refresh_version_options()

    def select_version(self, identifier: str) -> None:
        with self._state_lock:
            self.state.selected_version = identifier

    def set_minecraft_dir(self, path: str | Path) -> None:
        with self._state_lock:
            self.state.minecraft_dir = str(path)

    def install(self) -> Result[str, str]:
        """Install the selected version, updating state from each progress event."""

        with self._state_lock:
            version = self._selected_version()
            minecraft_dir = self.state.minecraft_dir
            if version is None:
                return Result.err(MESSAGE_MISSING_VERSION)
            if not minecraft_dir:
                return Result.err(MESSAGE_MISSING_DIRECTORY)
            self.state.installing = True
            self.state.progress = 0.0

        error: str | None = None
        try:
            for event in self._service.install(version, minecraft_dir):
                self.apply_progress(event)
                if event.is_error:
                    error = event.error
        finally:
            with self._state_lock:
                self.state.installing = False

        if error is not None:
            return Result.err(error)
        logger.info("Installed MeldMC %s", version.identifier)
        return Result.ok(completion_message(version.identifier))

    def apply_progress(self, event: InstallProgress) -> None:
        with self._state_lock:
            if event.is_error:
                self.state.status_message = STATUS_INSTALL_FAILED
                self.state.progress = 0.0
                return
            self.state.status_message = event.step
            self.state.progress = event.fraction

    def _refresh_version_options(self) -> None:
        if self._catalog is None:
            self.state.version_options = ()
            self.state.selected_version = ""
            return
        versions = self._catalog.for_channel(self.state.channel)
        self.state.version_options = tuple(version.identifier for version in versions)
        self.state.selected_version = self.state.version_options[0] if versions else ""

    def _selected_version(self) -> Version | None:
        if self._catalog is None or not self.state.selected_version:
            return None
        for version in self._catalog.for_channel(self.state.channel):
            if version.identifier == self.state.selected_version:
                return version
        return None


__all__ = [
    "InstallerViewModel",
    "InstallerViewModelState",
    "completion_message",
]
