"""Tests for Config settings sources."""

import logging

import pytest

from dapd1.config import Config, LoggingConfig, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    for name in ("DAPD1_CONFIG_FILE", "DAPD1_DATABASE__URL", "DAPD1_FETCH__TIMEOUT", "DAPD1_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    # Keep any .env in the working tree out of the way
    monkeypatch.chdir(tmp_path)


class TestConfig:
    def test_defaults(self) -> None:
        config = Config()
        assert config.database.url == "sqlite:///~/.local/share/dapd1/datasets.db"
        assert config.fetch.algorithm == "SHA-1"
        assert config.fetch.sdo_suffix == ".nc"
        assert config.fetch.smo_suffix == ".iso"
        assert config.logging.level == "WARNING"

    def test_nested_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAPD1_DATABASE__URL", "sqlite:////tmp/catalog.db")
        monkeypatch.setenv("DAPD1_FETCH__TIMEOUT", "5")

        config = Config()
        assert config.database.url == "sqlite:////tmp/catalog.db"
        assert config.fetch.timeout == 5.0

    def test_unprefixed_env_var_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("URL", "sqlite:////tmp/other.db")
        assert Config().database.url.endswith("datasets.db")

    def test_yaml_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        config_file = tmp_path / "dapd1.yaml"
        config_file.write_text(
            "database:\n  url: sqlite:////srv/dapd1.db\nfetch:\n  algorithm: MD5\n"
        )
        monkeypatch.setenv("DAPD1_CONFIG_FILE", str(config_file))

        config = Config()
        assert config.database.url == "sqlite:////srv/dapd1.db"
        assert config.fetch.algorithm == "MD5"

    def test_env_overrides_yaml(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        config_file = tmp_path / "dapd1.yaml"
        config_file.write_text("database:\n  url: sqlite:////srv/dapd1.db\n")
        monkeypatch.setenv("DAPD1_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("DAPD1_DATABASE__URL", "sqlite:////tmp/env.db")

        assert Config().database.url == "sqlite:////tmp/env.db"

    def test_missing_yaml_file_is_ignored(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.setenv("DAPD1_CONFIG_FILE", str(tmp_path / "absent.yaml"))
        assert Config().fetch.algorithm == "SHA-1"

    def test_init_overrides_everything(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAPD1_DATABASE__URL", "sqlite:////tmp/env.db")
        config = Config(database={"url": "sqlite://"})
        assert config.database.url == "sqlite://"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_single_stderr_handler(self) -> None:
        configure_logging(LoggingConfig(level="DEBUG"))
        configure_logging(LoggingConfig(level="INFO"))

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_log_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        log_file = tmp_path / "logs" / "dapd1.log"
        monkeypatch.setenv("DAPD1_LOG_FILE", str(log_file))

        configure_logging(LoggingConfig(level="INFO"))
        logging.getLogger("dapd1.test").info("catalog opened")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "catalog opened" in log_file.read_text()
