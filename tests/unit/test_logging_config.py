from __future__ import annotations

import logging
from pathlib import Path

import pytest

from shared import logging_config


def _flush_managed_handlers() -> None:
    for handler in logging.getLogger().handlers:
        if getattr(handler, logging_config._HANDLER_TAG, False):  # type: ignore[attr-defined]
            handler.flush()


def test_logging_creates_file_and_respects_default_verbosity(tmp_path, monkeypatch):
    monkeypatch.setenv("MELDMC_INSTALLER_LOG_DIR", str(tmp_path))

    log_path = logging_config.ensure_app_logging()
    assert log_path == tmp_path / "installer.log"
    assert logging_config.get_file_log_verbosity() == logging_config.LogVerbosity.INFO
    logging.getLogger("services.installer.pipeline").debug("debug message")
    logging.getLogger("services.installer.pipeline").error("error message")
    _flush_managed_handlers()

    contents = log_path.read_text(encoding="utf-8")
    assert "debug message" not in contents
    assert "error message" in contents


def test_log_file_env_takes_precedence(tmp_path, monkeypatch):
    target = tmp_path / "custom" / "meldmc.log"
    monkeypatch.setenv("MELDMC_INSTALLER_LOG_FILE", str(target))
    monkeypatch.setenv("MELDMC_INSTALLER_LOG_DIR", str(tmp_path / "ignored"))

    assert logging_config.ensure_app_logging() == target
    assert target.parent.is_dir()


def test_logging_configuration_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setenv("MELDMC_INSTALLER_LOG_DIR", str(tmp_path))

    first_path = logging_config.ensure_app_logging()
    second_path = logging_config.ensure_app_logging()

    assert first_path == second_path
    managed_handlers = [
        handler
        for handler in logging.getLogger().handlers
        if getattr(handler, logging_config._HANDLER_TAG, False)  # type: ignore[attr-defined]
    ]

    # Only the file handler should be installed during tests (stderr is not a tty).
    assert len(managed_handlers) == 1
    assert isinstance(managed_handlers[0], logging.FileHandler)
    assert Path(managed_handlers[0].baseFilename) == first_path


def test_home_directory_is_redacted(tmp_path, monkeypatch):
    home = tmp_path / "home" / "steve"
    home.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("MELDMC_INSTALLER_LOG_DIR", str(tmp_path / "logs"))

    log_path = logging_config.ensure_app_logging()
    logging.getLogger("services.installer.profiles").warning(
        "Saved profile to %s", home / ".minecraft" / "launcher_profiles.json"
    )
    _flush_managed_handlers()

    contents = log_path.read_text(encoding="utf-8")
    assert str(home) not in contents
    assert "<user_home>" in contents


def test_can_adjust_file_log_verbosity(tmp_path, monkeypatch):
    monkeypatch.setenv("MELDMC_INSTALLER_LOG_DIR", str(tmp_path))

    log_path = logging_config.ensure_app_logging()
    logging_config.set_file_log_verbosity("verbose")
    logging.getLogger("tests.logging").debug("debug message")
    logging.getLogger("tests.logging").info("info message")
    _flush_managed_handlers()

    contents = log_path.read_text(encoding="utf-8")
    assert "debug message" in contents
    assert "info message" in contents
    assert logging_config.get_file_log_verbosity() == logging_config.LogVerbosity.VERBOSE


def test_unknown_verbosity_is_rejected():
    with pytest.raises(ValueError, match="Unsupported log verbosity"):
        logging_config.set_file_log_verbosity("chatty")


def test_disabling_file_logging_suppresses_output(tmp_path, monkeypatch):
    monkeypatch.setenv("MELDMC_INSTALLER_LOG_DIR", str(tmp_path))

    log_path = logging_config.ensure_app_logging()
    logging_config.set_file_log_verbosity(logging_config.LogVerbosity.DISABLED)
    _flush_managed_handlers()
    initial_size = log_path.stat().st_size

    logging.getLogger("tests.logging").critical("critical message")
    _flush_managed_handlers()

    assert log_path.stat().st_size == initial_size
