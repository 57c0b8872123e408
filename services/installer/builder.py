"""Helpers for constructing the installer service and running it off the UI thread."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

from app.config import InstallerConfig, get_installer_config
from services.installer.models import InstallerError, InstallOutcome, Version, VersionCatalog
from services.installer.progress import ProgressStream
from services.installer.repository import RepositoryClient
from services.installer.service import InstallerService
from shared.logging_config import ensure_app_logging


_LOGGER = logging.getLogger(__name__)


def build_installer_service(config: InstallerConfig | None = None) -> InstallerService:
    """Construct an :class:`InstallerService` for the configured repository."""

    ensure_app_logging()
    config = config or get_installer_config()
    _LOGGER.debug(
        "Building installer service (releases=%s, snapshots=%s, base=%s)",
        config.releases_url,
        config.snapshots_url,
        config.repository_base_url,
    )
    return InstallerService(RepositoryClient(config))


def _run_catalog_load(
    service: InstallerService,
    on_loaded: Callable[[VersionCatalog], None],
    on_failed: Callable[[InstallerError], None] | None,
) -> None:
    try:
        catalog = service.load_catalog()
    except InstallerError as exc:
        _LOGGER.warning("Version catalog unavailable: %s", exc)
        if on_failed is not None:
            on_failed(exc)
        return
    on_loaded(catalog)


def schedule_catalog_load(
    service: InstallerService,
    on_loaded: Callable[[VersionCatalog], None],
    on_failed: Callable[[InstallerError], None] | None = None,
) -> threading.Thread:
    """Load the version catalog on a background thread.

    Callbacks run on that background thread; a shell must marshal them back
    onto its own event loop. A second load started before the first finishes
    is not coalesced.
    """

    thread = threading.Thread(
        target=_run_catalog_load,
        args=(service, on_loaded, on_failed),
        name="meldmc-catalog",
        daemon=True,
    )
    thread.start()
    return thread


def _run_install(
    service: InstallerService,
    version: Version | str,
    target_directory: str | Path | None,
    stream: ProgressStream,
    on_finished: Callable[[InstallOutcome], None] | None,
) -> None:
    outcome = service.install_into(version, target_directory, stream)
    if on_finished is not None:
        on_finished(outcome)


def schedule_install(
    service: InstallerService,
    version: Version | str,
    target_directory: str | Path | None,
    *,
    on_finished: Callable[[InstallOutcome], None] | None = None,
) -> ProgressStream:
    """Start an install on a background thread and return its progress stream.

    Iterate the returned stream to observe events; iteration ends when the
    pipeline closes it. Installs cannot be cancelled once started.
    """

    stream = ProgressStream()
    thread = threading.Thread(
        target=_run_install,
        args=(service, version, target_directory, stream, on_finished),
        name="meldmc-install",
        daemon=True,
    )
    thread.start()
    return stream


__all__ = [
    "build_installer_service",
    "schedule_catalog_load",
    "schedule_install",
]
