"""Unit tests for configuration loading and validation."""

import json

import pytest

from wellness_planner.config import (
    AppConfig,
    ConfigManager,
    DatabaseConfig,
    ServerConfig,
    WellnessConfig,
    _validate_jwt_secret_key,
)

STRONG_SECRET = "Zq8-wL3_rT7!mN2@vB6#kP9$hJ4%xC1^"


@pytest.fixture
def manager(tmp_path, monkeypatch):
    """A fresh ConfigManager reading from a temporary config file location."""
    for name in (
        "WELLNESS_DATABASE_URL",
        "DATABASE_URL",
        "WELLNESS_DEBUG",
        "WELLNESS_DEV_MODE",
        "WELLNESS_LOG_TO_FILE",
        "WELLNESS_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WELLNESS_CONFIG_FILE", str(tmp_path / "config.json"))
    monkeypatch.setenv("WELLNESS_JWT_SECRET_KEY", STRONG_SECRET)
    return ConfigManager()


@pytest.mark.unit
class TestJWTSecretValidation:
    """Start-up refuses weak signing keys."""

    @pytest.mark.parametrize(
        "secret",
        [
            "",
            "short-key",
            "a" * 40,
            "abababababababababababababababababab",
        ],
    )
    def test_weak_secrets_abort(self, secret):
        with pytest.raises(SystemExit):
            _validate_jwt_secret_key(secret)

    def test_known_default_aborts_regardless_of_case(self):
        with pytest.raises(SystemExit):
            _validate_jwt_secret_key("YOUR-SECRET-KEY-CHANGE-IN-PRODUCTION")

    def test_strong_secret_passes(self):
        _validate_jwt_secret_key(STRONG_SECRET)


@pytest.mark.unit
class TestConfigManager:
    """Defaults, file loading and environment overrides."""

    def test_defaults(self, manager):
        config = manager.load_config()

        assert config.app.jwt_secret_key == STRONG_SECRET
        assert config.app.jwt_algorithm == "HS256"
        assert config.app.max_request_bytes == 16 * 1024
        assert config.database.url.startswith("sqlite:///")
        assert config.server.port == 8000
        assert config.app.is_development is False

    def test_environment_overrides(self, manager, monkeypatch, tmp_path):
        monkeypatch.setenv("WELLNESS_DATABASE_URL", "sqlite:///" + str(tmp_path / "x.db"))
        monkeypatch.setenv("WELLNESS_DEBUG", "true")
        monkeypatch.setenv("WELLNESS_DEV_MODE", "1")
        monkeypatch.setenv("WELLNESS_LOG_TO_FILE", "yes")
        monkeypatch.setenv("WELLNESS_LOG_DIR", str(tmp_path / "logs"))

        config = manager.load_config()

        assert config.database.url.endswith("x.db")
        assert config.server.debug is True
        assert config.app.log_level == "DEBUG"
        assert config.app.is_development is True
        assert config.server.auto_reload is True
        assert config.app.log_to_file is True
        assert config.app.log_dir == str(tmp_path / "logs")

    def test_plain_database_url_is_honoured(self, manager, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/wellness")

        assert manager.load_config().database.url == "postgresql://localhost/wellness"

    def test_missing_secret_is_generated(self, manager, monkeypatch):
        monkeypatch.delenv("WELLNESS_JWT_SECRET_KEY")

        config = manager.load_config()

        assert len(config.app.jwt_secret_key) >= 32

    def test_weak_secret_from_environment_aborts(self, manager, monkeypatch):
        monkeypatch.setenv("WELLNESS_JWT_SECRET_KEY", "secret")

        with pytest.raises(SystemExit):
            manager.load_config()

    def test_loads_config_file(self, manager, tmp_path):
        (tmp_path / "config.json").write_text(
            json.dumps({"app": {"max_request_bytes": 2048}, "server": {"port": 9100}}),
            encoding="utf-8",
        )

        config = manager.load_config()

        assert config.app.max_request_bytes == 2048
        assert config.server.port == 9100

    def test_broken_config_file_falls_back_to_defaults(self, manager, tmp_path):
        (tmp_path / "config.json").write_text("{not json", encoding="utf-8")

        assert manager.load_config().server.port == 8000

    def test_save_and_reload(self, manager, tmp_path):
        config = manager.load_config()
        config.server.port = 8123

        assert manager.save_config(config) is True
        manager.reset()

        assert manager.get().server.port == 8123

    def test_get_is_cached_until_reset(self, manager):
        first = manager.get()

        assert manager.get() is first
        manager.reset()
        assert manager.get() is not first

    def test_round_trip_dict(self):
        config = WellnessConfig(app=AppConfig(), server=ServerConfig(), database=DatabaseConfig())

        assert WellnessConfig.from_dict(config.to_dict()) == config

    def test_validate_config_reports_no_issues_for_defaults(self, manager):
        manager.load_config()

        assert manager.validate_config() == []

    def test_database_module_uses_configured_url(self):
        from wellness_planner.config import get_config
        from wellness_planner.db.database import get_database_url

        assert get_database_url() == get_config().database.url
