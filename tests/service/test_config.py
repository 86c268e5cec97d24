"""Tests for navigation service configuration."""

import logging
from pathlib import Path

import pytest

from wayfinder.service.config import DEFAULT_CONFIG, load_config, setup_logging


class TestLoadConfig:
    """Test configuration loading."""

    def test_merges_over_defaults(self, tmp_path: Path) -> None:
        """Test that a partial file keeps the other defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("server:\n  port: 6000\npathfinding:\n  heuristic: zero\n", encoding="utf-8")

        config = load_config(path)

        assert config["server"]["port"] == 6000
        assert config["server"]["host"] == "127.0.0.1"
        assert config["pathfinding"]["heuristic"] == "zero"
        assert config["layout"]["path"] == DEFAULT_CONFIG["layout"]["path"]

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty file yields the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == DEFAULT_CONFIG

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """Test that an explicit missing file is an error."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_defaults_are_not_shared(self, tmp_path: Path) -> None:
        """Test that callers cannot modify the defaults through a result."""
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        config = load_config(path)
        config["server"]["port"] = 1

        assert DEFAULT_CONFIG["server"]["port"] == 51180

    def test_bundled_config(self) -> None:
        """Test the bundled configuration file."""
        path = Path(__file__).parent.parent.parent / "config" / "navigation_service.yaml"

        config = load_config(path)

        assert config["pathfinding"]["heuristic"] == "auto"
        assert config["pathfinding"]["max_expansions"] is None


class TestSetupLogging:
    """Test logging setup."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        """Restore root logger handlers after each test."""
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers = handlers
        root.setLevel(level)

    def test_file_and_console_handlers(self, tmp_path: Path) -> None:
        """Test that a rotating file handler is added."""
        log_file = tmp_path / "wayfinder.log"
        config = {"logging": {"level": "DEBUG", "file": str(log_file)}}

        setup_logging(config)
        logging.getLogger("wayfinder.test").debug("hello")

        assert logging.getLogger().level == logging.DEBUG
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_console_only(self) -> None:
        """Test logging without a file."""
        before = len(logging.getLogger().handlers)

        setup_logging({"logging": {"level": "WARNING"}}, log_to_file=False)

        assert len(logging.getLogger().handlers) == before + 1
        assert logging.getLogger().level == logging.WARNING
