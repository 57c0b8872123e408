from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from services.installer import InstallerService, InstallProgress, VersionChannel
from tests.unit.installer_test_utils import (
    RELEASES_URL,
    SNAPSHOTS_URL,
    FakeRepositoryClient,
    artifact_url,
    metadata_xml,
)
from viewmodels.installer_viewmodel import InstallerViewModel, completion_message


def _viewmodel(responses: dict[str, bytes | Exception], default_dir: str = "") -> tuple[InstallerViewModel, FakeRepositoryClient]:
    client = FakeRepositoryClient(responses)
    return InstallerViewModel(InstallerService(client), default_dir=default_dir), client


def _catalog_responses() -> dict[str, bytes | Exception]:
    return {
        RELEASES_URL: metadata_xml("1.0.0", "1.1.0"),
        SNAPSHOTS_URL: metadata_xml("1.2.0-SNAPSHOT"),
    }


def test_initial_state_waits_for_versions() -> None:
    viewmodel, _ = _viewmodel({}, default_dir="/games/.minecraft")

    assert viewmodel.state.status_message == "Loading versions..."
    assert viewmodel.state.minecraft_dir == "/games/.minecraft"
    assert viewmodel.channel_labels == ("Release", "Snapshot")
    assert not viewmodel.can_install


def test_load_versions_preselects_newest_release() -> None:
    viewmodel, _ = _viewmodel(_catalog_responses())

    result = viewmodel.load_versions()

    assert result.is_ok()
    assert viewmodel.state.versions_loaded
    assert viewmodel.state.status_message == "Versions loaded successfully"
    assert viewmodel.state.version_options == ("1.1.0", "1.0.0")
    assert viewmodel.state.selected_version == "1.1.0"
    assert viewmodel.can_install


def test_switching_channel_reuses_loaded_catalog() -> None:
    viewmodel, client = _viewmodel(_catalog_responses())
    viewmodel.load_versions()
    requests_after_load = list(client.requested)

    viewmodel.select_channel("Snapshot")

    assert viewmodel.state.channel is VersionChannel.SNAPSHOT
    assert viewmodel.state.version_options == ("1.2.0-SNAPSHOT",)
    assert viewmodel.state.selected_version == "1.2.0-SNAPSHOT"
    assert client.requested == requests_after_load


def test_failed_load_reports_repository_problem() -> None:
    viewmodel, _ = _viewmodel({})

    result = viewmodel.load_versions()

    assert result.is_err()
    assert "Could not connect to the MeldMC repository" in result.error
    assert viewmodel.state.status_message == "Error: Failed to load versions from repository"
    assert not viewmodel.can_install


def test_install_requires_selected_version(tmp_path: Path) -> None:
    viewmodel, client = _viewmodel({}, default_dir=str(tmp_path))

    result = viewmodel.install()

    assert result.unwrap_err() == "Please select a version"
    assert client.requested == []


def test_install_requires_directory() -> None:
    viewmodel, _ = _viewmodel(_catalog_responses())
    viewmodel.load_versions()
    viewmodel.set_minecraft_dir("")

    result = viewmodel.install()

    assert result.unwrap_err() == "Please select a Minecraft directory"


def test_install_selected_version_updates_state(tmp_path: Path) -> None:
    responses = _catalog_responses()
    responses[artifact_url("1.1.0")] = b'{"id": "meldmc-1.1.0"}'
    viewmodel, _ = _viewmodel(responses, default_dir=str(tmp_path))
    viewmodel.load_versions()

    result = viewmodel.install()

    assert result.is_ok()
    assert result.unwrap() == completion_message("1.1.0")
    assert viewmodel.state.status_message == "Installation complete!"
    assert viewmodel.state.progress == pytest.approx(1.0)
    assert not viewmodel.state.installing
    registry = json.loads((tmp_path / "launcher_profiles.json").read_text(encoding="utf-8"))
    assert "MeldMC 1.1.0" in registry["profiles"]


def test_install_failure_resets_progress(tmp_path: Path) -> None:
    viewmodel, _ = _viewmodel(_catalog_responses(), default_dir=str(tmp_path))
    viewmodel.load_versions()

    result = viewmodel.install()

    assert result.unwrap_err() == "Failed to download client configuration"
    assert viewmodel.state.status_message == "Installation failed"
    assert viewmodel.state.progress == 0.0
    assert viewmodel.can_install


def test_apply_progress_tracks_step_and_fraction() -> None:
    viewmodel, _ = _viewmodel({})

    viewmodel.apply_progress(InstallProgress(step="Downloading client configuration...", progress=50))

    assert viewmodel.state.status_message == "Downloading client configuration..."
    assert viewmodel.state.progress == pytest.approx(0.5)


def test_completion_message_mentions_profile() -> None:
    message = completion_message("1.2.3")

    assert message.startswith("MeldMC 1.2.3 has been installed successfully!")
    assert "select the MeldMC profile" in message


def test_unexpected_install_error_is_reported_as_failure(tmp_path: Path) -> None:
    responses = _catalog_responses()
    responses[artifact_url("1.1.0")] = RuntimeError("resolver exploded")
    viewmodel, _ = _viewmodel(responses, default_dir=str(tmp_path))
    viewmodel.load_versions()

    result = viewmodel.install()

    assert result.unwrap_err() == "Installation failed"
    assert viewmodel.state.status_message == "Installation failed"
    assert not viewmodel.state.installing


def test_successful_install_logs_version(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    responses = _catalog_responses()
    responses[artifact_url("1.1.0")] = b'{"id": "meldmc-1.1.0"}'
    viewmodel, _ = _viewmodel(responses, default_dir=str(tmp_path))
    viewmodel.load_versions()
    caplog.set_level(logging.INFO, logger="viewmodels.installer_viewmodel")

    viewmodel.install()

    assert "Installed MeldMC 1.1.0" in caplog.text
