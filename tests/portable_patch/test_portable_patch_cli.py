"""Tests for the portable patcher command-line interface."""

import logging
from logging.handlers import RotatingFileHandler
import os
import re
import sys

import pytest

from portable_patch import portable_patch_cli
from portable_patch.portable_patch_cli import cleanup_old_logs, main, parse_arguments, setup_logging
from portable_patch.portable_patch_config import DEFAULT_CONFIG_NAME
from portable_patch.portable_patch_snippets import PATCH_MARKER


@pytest.fixture
def clean_root_logger():
    """Give a test an unconfigured root logger and put the original back afterwards."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers = []

    yield root

    for handler in root.handlers:
        handler.close()

    root.handlers = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def logging_calls(monkeypatch):
    """Replace setup_logging so tests don't reconfigure the root logger."""
    calls = []

    def fake_setup_logging(log_dir, verbose=False):
        calls.append((log_dir, verbose))

    monkeypatch.setattr(portable_patch_cli, "setup_logging", fake_setup_logging)
    return calls


class TestParseArguments:
    """Test argument parsing."""

    def test_no_arguments(self):
        """Test that the tool runs with no arguments at all."""
        args = parse_arguments([])

        assert args.root == os.getcwd()
        assert args.config is None
        assert args.strict is False
        assert args.verbose is False
        assert args.no_color is False

    def test_all_arguments(self, tmp_path):
        """Test every option."""
        args = parse_arguments([
            '--root', str(tmp_path),
            '--config', 'x.yaml',
            '--strict',
            '--log-dir', 'logs',
            '--verbose',
            '--no-color',
        ])

        assert args.root == str(tmp_path)
        assert args.config == 'x.yaml'
        assert args.strict is True
        assert args.log_dir == 'logs'
        assert args.verbose is True
        assert args.no_color is True


class TestMain:
    """Test the main entry point."""

    def test_patch_then_revert(self, app_root, main_js, original_main_js, make_session, output_of, logging_calls):
        """Test two runs of the tool: patch, then revert."""
        session = make_session()
        assert main(['--root', str(app_root)], session) == 0

        output = output_of(session)
        assert "=== EchoAPI Portable Patcher ===" in output
        assert "Makes EchoAPI portable or reverts changes." in output
        assert PATCH_MARKER in main_js.read_text(encoding='utf-8')

        assert main(['--root', str(app_root)], make_session("\n\n")) == 0
        assert main_js.read_bytes() == original_main_js

    def test_log_dir_option(self, app_root, make_session, logging_calls, tmp_path):
        """Test that --log-dir and --verbose reach the logging setup."""
        log_dir = str(tmp_path / "logs")
        main(['--root', str(app_root), '--log-dir', log_dir, '--verbose'], make_session())

        assert logging_calls == [(log_dir, True)]

    def test_strict_option(self, app_root, main_js, make_session, output_of, logging_calls):
        """Test that --strict refuses a partial patch."""
        main_js.write_text('const path = require("node:path");\n', encoding='utf-8')
        session = make_session()

        assert main(['--root', str(app_root), '--strict'], session) == 1
        assert PATCH_MARKER not in main_js.read_text(encoding='utf-8')

    def test_config_from_root(self, app_root, main_js, make_session, logging_calls):
        """Test that portable-patch.yaml in the root is honoured."""
        (app_root / DEFAULT_CONFIG_NAME).write_text("strict: true\n", encoding='utf-8')
        main_js.write_text('no anchors\n', encoding='utf-8')

        assert main(['--root', str(app_root)], make_session()) == 1

    def test_bad_config(self, app_root, make_session, output_of, logging_calls):
        """Test that a broken config file is reported and nothing runs."""
        (app_root / DEFAULT_CONFIG_NAME).write_text("strict: [\n", encoding='utf-8')
        session = make_session()

        assert main(['--root', str(app_root)], session) == 1
        assert session.closed is True
        assert "[ERROR]" in output_of(session)
        assert logging_calls == []

    def test_wrong_directory(self, tmp_path, make_session, output_of, logging_calls):
        """Test running somewhere without a resources folder."""
        session = make_session()

        assert main(['--root', str(tmp_path)], session) == 1
        assert "must be placed in the root directory of EchoAPI" in output_of(session)

    def test_config_is_directory(self, app_root, make_session, output_of, logging_calls):
        """Test that --config naming a directory is reported, not raised."""
        session = make_session()

        assert main(['--root', str(app_root), '--config', str(app_root)], session) == 1
        assert session.closed is True
        assert "[ERROR] Could not read configuration file" in output_of(session)

    def test_undecodable_config(self, app_root, make_session, output_of, logging_calls):
        """Test that a non-UTF-8 config file is reported, not raised."""
        (app_root / DEFAULT_CONFIG_NAME).write_bytes(b"\xff\xfe")
        session = make_session()

        assert main(['--root', str(app_root)], session) == 1
        assert "[ERROR]" in output_of(session)

    def test_unusable_log_dir_still_patches(self, app_root, main_js, make_session, output_of, clean_root_logger, tmp_path):
        """Test that a log directory that can't be created only produces a warning."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x", encoding='utf-8')
        session = make_session()

        assert main(['--root', str(app_root), '--log-dir', str(blocker / "logs")], session) == 0
        assert "[WARNING] Could not write log files" in output_of(session)
        assert PATCH_MARKER in main_js.read_text(encoding='utf-8')


class TestSetupLogging:
    """Test logging configuration."""

    def test_creates_timestamped_log_file(self, tmp_path, clean_root_logger):
        """Test that a log file is created in the log directory and receives records."""
        log_dir = tmp_path / "logs"

        setup_logging(str(log_dir))
        logging.getLogger("PortablePatchCLI").info("hello")

        log_files = list(log_dir.glob("*.log"))
        assert len(log_files) == 1
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2}-\d{3}\.log", log_files[0].name)
        assert isinstance(logging.getLogger().handlers[0], RotatingFileHandler)

        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello" in log_files[0].read_text(encoding='utf-8')

    def test_verbose_adds_stderr_handler(self, tmp_path, clean_root_logger):
        """Test that verbose logging also writes to stderr."""
        setup_logging(str(tmp_path / "logs"), verbose=True)

        stream_handlers = [
            h for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler  # pylint: disable=unidiomatic-typecheck
        ]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].stream is sys.stderr

    def test_expands_home_directory(self, tmp_path, clean_root_logger, monkeypatch):
        """Test that a ~ in the log directory is expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))

        setup_logging("~/patch-logs")

        assert len(list((tmp_path / "patch-logs").glob("*.log"))) == 1

    def test_unwritable_directory_raises(self, tmp_path, clean_root_logger):
        """Test that setup_logging reports an unusable directory as OSError."""
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding='utf-8')

        with pytest.raises(OSError):
            setup_logging(str(blocker / "logs"))


class TestCleanupOldLogs:
    """Test log rotation housekeeping."""

    def test_removes_oldest_logs(self, tmp_path):
        """Test that only the newest logs are kept."""
        for i in range(5):
            path = tmp_path / f"2024-01-0{i + 1}.log"
            path.write_text("x", encoding='utf-8')
            os.utime(path, (1000 + i, 1000 + i))

        cleanup_old_logs(str(tmp_path), max_logs=3)

        assert len(list(tmp_path.glob("*.log"))) == 3

    def test_keeps_logs_under_limit(self, tmp_path):
        """Test that nothing is removed when under the limit."""
        (tmp_path / "a.log").write_text("x", encoding='utf-8')

        cleanup_old_logs(str(tmp_path), max_logs=50)

        assert (tmp_path / "a.log").exists()
