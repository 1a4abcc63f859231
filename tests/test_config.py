import json
from pathlib import Path

from config import Settings, default_data_dir


def test_default_data_dir_uses_xdg(tmp_path):
    assert default_data_dir({"XDG_DATA_HOME": str(tmp_path)}) == tmp_path / "code-tutor"


def test_defaults_use_local_backend(tmp_path):
    settings = Settings.load({"CODE_TUTOR_DATA_DIR": str(tmp_path)})
    assert settings.data_dir == Path(tmp_path)
    assert settings.theme == "dark"
    assert not settings.uses_remote_backend
    assert settings.local_db_path == Path(tmp_path) / "data.json"


def test_config_file_then_env_override(tmp_path):
    (tmp_path / "config.json").write_text(
        json.dumps({"backend_url": "https://file.example", "app_id": "abc", "theme": "light", "extra": 1})
    )
    settings = Settings.load(
        {"CODE_TUTOR_DATA_DIR": str(tmp_path), "CODE_TUTOR_BACKEND_URL": "https://env.example"}
    )
    assert settings.backend_url == "https://env.example"
    assert settings.app_id == "abc"
    assert settings.theme == "light"
    assert settings.uses_remote_backend


def test_unknown_theme_falls_back_to_dark(tmp_path):
    settings = Settings.load({"CODE_TUTOR_DATA_DIR": str(tmp_path), "CODE_TUTOR_THEME": "neon"})
    assert settings.theme == "dark"


def test_unreadable_config_file_is_ignored(tmp_path):
    (tmp_path / "config.json").write_text("{oops")
    settings = Settings.load({"CODE_TUTOR_DATA_DIR": str(tmp_path)})
    assert settings.backend_url == ""
