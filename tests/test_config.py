"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from src.utils.config import APPEND_POSITION, Settings, load_config, save_config


class TestSettings:
    """Tests for Settings defaults and loading."""

    def test_default_settings(self):
        settings = Settings()

        assert settings.api.base_url == "http://localhost:5000"
        assert settings.api.session_cookie == "connect.sid"
        assert settings.playlists.default_color == "#1DB954"
        assert settings.playlists.default_icon == "ri-music-fill"
        assert settings.upload.append_position == APPEND_POSITION == 9999

    def test_base_url_trailing_slash_stripped(self):
        settings = Settings(api={"base_url": "https://vault.example.com/"})

        assert settings.api.base_url == "https://vault.example.com"

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            Settings(api={"timeout": "soon"})

    def test_load_missing_file_uses_defaults(self, tmp_path):
        settings = load_config(tmp_path / "absent.yaml")

        assert settings.api.timeout == 30.0

    def test_env_var_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VAULT_HOST", "vault.internal")
        path = tmp_path / "config.yaml"
        path.write_text("api:\n  base_url: http://${VAULT_HOST}:8080\n")

        settings = load_config(path)

        assert settings.api.base_url == "http://vault.internal:8080"

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "config.yaml"
        settings = Settings(playlists={"default_color": "#FF5722"})

        save_config(settings, path)
        reloaded = load_config(path)

        assert reloaded.playlists.default_color == "#FF5722"

    def test_log_file_path(self, tmp_path):
        settings = Settings(logging={"file": str(tmp_path / "vault.log")})

        assert settings.logging.file_path == tmp_path / "vault.log"
        assert Settings().logging.file_path is None
