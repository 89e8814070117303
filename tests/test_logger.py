# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/avocado_core

import importlib
from pathlib import Path

import pytest

import avocado_core.utils.logger as logger_module


@pytest.fixture
def log_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "logs"
    monkeypatch.setenv("AVOCADO_LOG_DIR", str(path))
    return path


def test_logger_creates_log_directory(log_dir: Path) -> None:
    """
    Verify that reloading the logger module re-runs the setup logic.
    """
    # GIVEN the logs directory does not exist
    assert not log_dir.exists()

    # WHEN the logger module is reloaded
    importlib.reload(logger_module)

    # THEN the logs directory and log file should exist
    assert log_dir.is_dir()
    assert len(list(log_dir.glob("app.log*"))) > 0

    # and the logger should have two sinks configured (stderr and file)
    # Note: Accessing internal attributes like this is for testing purposes.
    assert len(logger_module.logger._core.handlers) == 2


def test_logger_sink_configuration(log_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """
    Verify the logger's sinks are configured as expected.
    """
    importlib.reload(logger_module)

    # WHEN we log a message
    test_message = "This is a test message."
    logger_module.logger.info(test_message)

    # THEN the message should appear in stderr
    captured = capsys.readouterr()
    assert test_message in captured.err

    # AND the message should be written to the log file (in JSON format)
    # We must remove the logger to ensure the async file sink is flushed before reading.
    logger_module.logger.remove()

    log_content = (log_dir / "app.log").read_text()
    assert '"message": "' + test_message + '"' in log_content


def test_logger_level_from_config(log_dir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("AVOCADO_LOG_LEVEL", "WARNING")
    importlib.reload(logger_module)

    logger_module.logger.info("hidden message")
    logger_module.logger.warning("visible message")

    captured = capsys.readouterr()
    assert "hidden message" not in captured.err
    assert "visible message" in captured.err

    logger_module.logger.remove()


def test_logger_exports() -> None:
    """Test that logger is exported."""
    assert logger_module.logger is not None
    assert logger_module.__all__ == ["logger"]
