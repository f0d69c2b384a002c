"""Tests for Config Pydantic Settings."""

from pathlib import Path

import pytest

from orderindex.config import DEFAULT_DATABASE_URL, Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate from the developer's environment and any .env file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ORDERINDEX_CONFIG_FILE", raising=False)
    monkeypatch.delenv("ORDERINDEX_DATABASE__URL", raising=False)
    monkeypatch.delenv("ORDERINDEX_RECONCILIATION__CRON", raising=False)


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()

        assert config.database.url == DEFAULT_DATABASE_URL
        assert config.elasticsearch.index == "orders"
        assert config.elasticsearch.refresh == "wait_for"
        assert config.reconciliation.enabled is True
        assert config.reconciliation.cron == "*/5 * * * *"
        assert config.reconciliation.limit is None

    def test_index_settings_follow_elasticsearch_config(self) -> None:
        config = Config()

        settings = config.elasticsearch.settings

        assert settings.index == config.elasticsearch.index
        assert settings.timeout == config.elasticsearch.timeout
        assert settings.max_result_window == 10000


class TestConfigSources:
    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """ORDERINDEX_<SECTION>__<FIELD> overrides nested fields."""
        monkeypatch.setenv("ORDERINDEX_DATABASE__URL", "postgresql+asyncpg://db/orders")
        monkeypatch.setenv("ORDERINDEX_RECONCILIATION__CRON", "0 * * * *")

        config = Config()

        assert config.database.url == "postgresql+asyncpg://db/orders"
        assert config.reconciliation.cron == "0 * * * *"

    def test_yaml_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "orderindex.yaml"
        config_file.write_text(
            "elasticsearch:\n"
            "  index: orders-test\n"
            "  timeout: 2.5\n"
            "reconciliation:\n"
            "  limit: 100\n"
        )
        monkeypatch.setenv("ORDERINDEX_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.elasticsearch.index == "orders-test"
        assert config.elasticsearch.timeout == 2.5
        assert config.reconciliation.limit == 100

    def test_env_beats_yaml(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "orderindex.yaml"
        config_file.write_text("reconciliation:\n  cron: '*/10 * * * *'\n")
        monkeypatch.setenv("ORDERINDEX_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("ORDERINDEX_RECONCILIATION__CRON", "0 * * * *")

        assert Config().reconciliation.cron == "0 * * * *"

    def test_missing_yaml_file_is_ignored(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("ORDERINDEX_CONFIG_FILE", str(tmp_path / "missing.yaml"))

        assert Config().elasticsearch.index == "orders"
