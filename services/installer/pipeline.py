"""Installation pipeline writing a MeldMC version into a Minecraft directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from services.installer.constants import (
    ARTIFACT_PREFIX,
    MESSAGE_DIRECTORY_FAILED,
    MESSAGE_DOWNLOAD_FAILED,
    MESSAGE_MISSING_DIRECTORY,
    MESSAGE_PROFILE_FAILED,
    MESSAGE_SAVE_FAILED,
    MESSAGE_UNEXPECTED_FAILURE,
    PROFILES_FILENAME,
    PROGRESS_COMPLETE,
    PROGRESS_CREATING_DIRECTORIES,
    PROGRESS_CREATING_PROFILE,
    PROGRESS_DOWNLOADING,
    STEP_COMPLETE,
    STEP_CREATING_DIRECTORIES,
    STEP_CREATING_PROFILE,
    STEP_DOWNLOADING,
    VERSIONS_DIRNAME,
)
from services.installer.models import (
    FilesystemError,
    InstallerError,
    InstallOutcome,
    InstallProgress,
    NetworkError,
    ValidationError,
    Version,
)
from services.installer.profiles import upsert_profile
from services.installer.progress import ProgressSink
from services.installer.repository import RepositoryClient


_LOGGER = logging.getLogger(__name__)

__all__ = ["InstallationPipeline", "version_directory"]


def version_directory(target_directory: Path, version: Version) -> Path:
    return Path(target_directory) / VERSIONS_DIRNAME / f"{ARTIFACT_PREFIX}-{version.identifier}"


class InstallationPipeline:
    """Run the fixed install sequence and report it through a progress sink.

    Steps emit 10, 50, 90 and 100 percent in that order. The first failure
    emits a single error event and ends the run; files written by earlier
    steps are left in place. The sink is closed exactly once whatever the
    outcome.
    """

    def __init__(self, client: RepositoryClient | None = None) -> None:
        self._client = client or RepositoryClient()

    def install(
        self,
        version: Version | str,
        target_directory: str | Path | None,
        sink: ProgressSink,
    ) -> InstallOutcome:
        if not isinstance(version, Version):
            version = Version(str(version))

        events: list[InstallProgress] = []

        def emit(event: InstallProgress) -> None:
            events.append(event)
            sink.emit(event)

        try:
            error = self._run_steps(version, target_directory, emit)
        except Exception as exc:
            _LOGGER.exception("Unexpected failure installing MeldMC %s", version.identifier)
            error = InstallerError(f"unexpected installation failure: {exc}")
            error.__cause__ = exc
            if not events or not (events[-1].is_error or events[-1].is_complete):
                emit(InstallProgress(error=MESSAGE_UNEXPECTED_FAILURE))
        finally:
            sink.close()

        if error is None:
            _LOGGER.info("Installed MeldMC %s into %s", version.identifier, target_directory)
        return InstallOutcome(
            version=version,
            target_directory=str(target_directory or ""),
            error=error,
            events=tuple(events),
        )

    def _run_steps(
        self,
        version: Version,
        target_directory: str | Path | None,
        emit: Callable[[InstallProgress], None],
    ) -> InstallerError | None:
        if target_directory is None or not str(target_directory).strip():
            return _fail(
                emit,
                MESSAGE_MISSING_DIRECTORY,
                ValidationError("minecraft directory not specified"),
            )

        minecraft_dir = Path(target_directory)
        version_dir = version_directory(minecraft_dir, version)

        emit(InstallProgress(step=STEP_CREATING_DIRECTORIES, progress=PROGRESS_CREATING_DIRECTORIES))
        try:
            version_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as exc:
            return _fail(
                emit,
                MESSAGE_DIRECTORY_FAILED,
                FilesystemError(f"failed to create version directory {version_dir}: {exc}"),
                exc,
            )

        emit(InstallProgress(step=STEP_DOWNLOADING, progress=PROGRESS_DOWNLOADING))
        artifact_url = self._client.build_platform_artifact_url(version)
        try:
            payload = self._client.fetch(artifact_url)
        except NetworkError as exc:
            return _fail(emit, MESSAGE_DOWNLOAD_FAILED, exc)

        artifact_path = version_dir / f"{ARTIFACT_PREFIX}-{version.identifier}.json"
        try:
            artifact_path.write_bytes(payload)
        except (OSError, ValueError) as exc:
            return _fail(
                emit,
                MESSAGE_SAVE_FAILED,
                FilesystemError(f"failed to save client configuration {artifact_path}: {exc}"),
                exc,
            )
        _LOGGER.debug("Saved client configuration to %s", artifact_path)

        emit(InstallProgress(step=STEP_CREATING_PROFILE, progress=PROGRESS_CREATING_PROFILE))
        try:
            upsert_profile(minecraft_dir / PROFILES_FILENAME, version)
        except InstallerError as exc:
            return _fail(emit, MESSAGE_PROFILE_FAILED, exc)

        emit(InstallProgress(step=STEP_COMPLETE, progress=PROGRESS_COMPLETE))
        return None


def _fail(
    emit: Callable[[InstallProgress], None],
    message: str,
    error: InstallerError,
    cause: BaseException | None = None,
) -> InstallerError:
    if cause is not None:
        error.__cause__ = cause
    _LOGGER.error("%s: %s", message, error)
    emit(InstallProgress(error=message))
    return error
