"""Public API for the installer service package."""

from __future__ import annotations

from services.installer.builder import (
    build_installer_service,
    schedule_catalog_load,
    schedule_install,
)
from services.installer.catalog import parse_version_metadata
from services.installer.models import (
    BodyReadError,
    CatalogParseError,
    CatalogUnavailableError,
    FilesystemError,
    HttpStatusError,
    InstallerError,
    InstallOutcome,
    InstallProgress,
    LauncherProfile,
    NetworkError,
    ProfileSerializationError,
    ProfileWriteError,
    TransportError,
    ValidationError,
    Version,
    VersionCatalog,
    VersionChannel,
)
from services.installer.pipeline import InstallationPipeline
from services.installer.platforms import default_minecraft_dir, resolve_platform_token
from services.installer.profiles import load_registry, upsert_profile
from services.installer.progress import ProgressSink, ProgressStream, ProgressStreamClosed
from services.installer.repository import RepositoryClient
from services.installer.service import InstallerService

__all__ = [
    "BodyReadError",
    "CatalogParseError",
    "CatalogUnavailableError",
    "FilesystemError",
    "HttpStatusError",
    "InstallationPipeline",
    "InstallerError",
    "InstallerService",
    "InstallOutcome",
    "InstallProgress",
    "LauncherProfile",
    "NetworkError",
    "ProfileSerializationError",
    "ProfileWriteError",
    "ProgressSink",
    "ProgressStream",
    "ProgressStreamClosed",
    "RepositoryClient",
    "TransportError",
    "ValidationError",
    "Version",
    "VersionCatalog",
    "VersionChannel",
    "build_installer_service",
    "default_minecraft_dir",
    "load_registry",
    "parse_version_metadata",
    "resolve_platform_token",
    "schedule_catalog_load",
    "schedule_install",
    "upsert_profile",
]
