"""Tests for logging setup"""
import logging

import pytest

from worktree_kit.logging_config import get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestGetLogger:

    @pytest.mark.parametrize("module, expected", [
        ("worktree_kit.services.git_service", "git_service"),
        ("worktree_kit.core.hooks", "core.hooks"),
        ("worktree_kit.cli.main", "cli.main"),
        ("other.module", "other.module"),
    ])
    def test_strips_package_prefix(self, module, expected):
        assert get_logger(module).name == expected


class TestSetupLogging:

    @pytest.mark.parametrize("verbose, level", [(False, logging.WARNING), (True, logging.INFO)])
    def test_levels(self, restore_root_logger, verbose, level):
        setup_logging(verbose=verbose)

        assert restore_root_logger.level == level
        assert len(restore_root_logger.handlers) == 1

    def test_debug_writes_log_file(self, restore_root_logger, temp_dir, monkeypatch):
        monkeypatch.setattr("worktree_kit.logging_config.log_file_path", lambda: temp_dir / "logs" / "wt.log")

        setup_logging(debug=True)
        get_logger("worktree_kit.core.hooks").debug("hello")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert restore_root_logger.level == logging.DEBUG
        assert "hello" in (temp_dir / "logs" / "wt.log").read_text()
        for handler in restore_root_logger.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()
