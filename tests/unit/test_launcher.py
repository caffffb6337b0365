"""Unit tests for the command line launcher."""

from pathlib import Path

import pytest

from wellness_planner import launcher
from wellness_planner.auth.jwt_auth import jwt_manager


@pytest.mark.unit
class TestLauncher:
    def test_issue_token(self, capsys):
        assert launcher.main(["issue-token", "--user-id", "user-42"]) == 0

        token = capsys.readouterr().out.strip()
        assert jwt_manager.extract_user_id(token) == "user-42"

    def test_issue_token_requires_user(self):
        with pytest.raises(SystemExit):
            launcher.main(["issue-token"])

    def test_migrate(self, monkeypatch):
        calls = []
        monkeypatch.setattr(launcher, "run_migrations", lambda db_url=None: calls.append(db_url))

        assert launcher.main(["migrate"]) == 0
        assert calls == [None]

    def test_serve_migrates_then_runs_uvicorn(self, monkeypatch):
        events = []
        monkeypatch.setattr(launcher, "run_migrations", lambda db_url=None: events.append("migrate"))
        monkeypatch.setattr(
            launcher.uvicorn, "run", lambda app, **kwargs: events.append((app, kwargs["port"]))
        )

        assert launcher.main(["serve", "--port", "8765"]) == 0
        assert events == ["migrate", ("wellness_planner.main:app", 8765)]

    def test_alembic_config_uses_packaged_migrations(self, setup_test_env):
        cfg = launcher.alembic_config(setup_test_env)

        script_location = Path(cfg.get_main_option("script_location"))
        assert cfg.config_file_name is None
        assert script_location.parent == Path(launcher.__file__).resolve().parent
        assert (script_location / "env.py").is_file()
        assert (script_location / "script.py.mako").is_file()
        assert any((script_location / "versions").glob("*_create_wellness_tables.py"))
        assert cfg.get_main_option("sqlalchemy.url") == setup_test_env
