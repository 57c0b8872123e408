"""Facade exposing the installer core to a presentation shell."""

from __future__ import annotations

import logging
from pathlib import Path

from services.installer.models import (
    CatalogParseError,
    CatalogUnavailableError,
    InstallerError,
    InstallOutcome,
    NetworkError,
    Version,
    VersionCatalog,
    VersionChannel,
)
from services.installer.pipeline import InstallationPipeline
from services.installer.platforms import default_minecraft_dir
from services.installer.progress import ProgressSink, ProgressStream
from services.installer.repository import RepositoryClient


_LOGGER = logging.getLogger(__name__)


class InstallerService:
    """Coordinate catalog loading and installation for one repository."""

    def __init__(
        self,
        client: RepositoryClient | None = None,
        *,
        pipeline: InstallationPipeline | None = None,
    ) -> None:
        self._client = client or RepositoryClient()
        self._pipeline = pipeline or InstallationPipeline(self._client)

    def load_catalog(self) -> VersionCatalog:
        """Fetch both channels and return them as one catalog.

        A failing channel is logged and treated as empty as long as the other
        one produced versions.

        Raises
        ------
        CatalogUnavailableError
            When neither channel produced any versions.
        """

        listings: dict[VersionChannel, list[Version]] = {}
        errors: list[InstallerError] = []
        for channel in (VersionChannel.RELEASE, VersionChannel.SNAPSHOT):
            try:
                listings[channel] = self._client.list_versions(channel)
            except (NetworkError, CatalogParseError) as exc:
                _LOGGER.warning("Failed to load %s versions: %s", channel.value, exc)
                errors.append(exc)
                listings[channel] = []

        catalog = VersionCatalog(
            releases=tuple(listings[VersionChannel.RELEASE]),
            snapshots=tuple(listings[VersionChannel.SNAPSHOT]),
        )
        if catalog.is_empty:
            if errors:
                raise CatalogUnavailableError(
                    f"failed to load any versions: {errors[0]}"
                ) from errors[0]
            raise CatalogUnavailableError("no versions available")

        _LOGGER.info(
            "Loaded %d release and %d snapshot versions",
            len(catalog.releases),
            len(catalog.snapshots),
        )
        return catalog

    def install(self, version: Version | str, target_directory: str | Path | None) -> ProgressStream:
        """Install ``version`` synchronously and return its closed progress stream."""

        stream = ProgressStream()
        self.install_into(version, target_directory, stream)
        return stream

    def install_into(
        self,
        version: Version | str,
        target_directory: str | Path | None,
        sink: ProgressSink,
    ) -> InstallOutcome:
        _LOGGER.info("Installing MeldMC %s into %s", version, target_directory or "<unset>")
        return self._pipeline.install(version, target_directory, sink)

    def default_install_dir(self) -> str:
        """Return the suggested Minecraft directory, possibly ``""``."""

        return default_minecraft_dir()


__all__ = ["InstallerService"]
