"""Pytest configuration applied to the entire test suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_path() -> None:
    """Guarantee the repository root is discoverable for absolute imports."""

    root = Path(__file__).resolve().parent.parent
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    tests_dir = root / "tests"
    tests_str = str(tests_dir)
    if tests_str not in sys.path:
        sys.path.insert(1, tests_str)


_ensure_project_root_on_path()

from app.config import reset_installer_config_cache  # noqa: E402
from shared import logging_config  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_log_dir(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory):
    """Keep installer logs out of the real home directory during tests."""

    log_dir = tmp_path_factory.mktemp("logs")
    monkeypatch.setenv("MELDMC_INSTALLER_LOG_DIR", str(log_dir))
    monkeypatch.delenv("MELDMC_INSTALLER_LOG_FILE", raising=False)
    logging_config._reset_for_tests()
    reset_installer_config_cache()

    yield log_dir

    logging_config._reset_for_tests()
    reset_installer_config_cache()
