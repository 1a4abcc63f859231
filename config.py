from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

APP_DIR_NAME = "code-tutor"
ENV_PREFIX = "CODE_TUTOR_"
THEMES = ("dark", "light")


def default_data_dir(environ: Mapping[str, str] = os.environ) -> Path:
    """
    Local data location:
    - $XDG_DATA_HOME/code-tutor when set
    - otherwise ~/.local/share/code-tutor
    """
    xdg = environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".local" / "share" / APP_DIR_NAME


@dataclass
class Settings:
    data_dir: Path
    backend_url: str = ""
    app_id: str = ""
    api_key: str = ""
    theme: str = "dark"

    @property
    def config_path(self) -> Path:
        return self.data_dir / "config.json"

    @property
    def local_db_path(self) -> Path:
        return self.data_dir / "data.json"

    @property
    def log_path(self) -> Path:
        return self.data_dir / "code-tutor.log"

    @property
    def uses_remote_backend(self) -> bool:
        return bool(self.backend_url and self.app_id)

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Defaults < config.json in the data dir < CODE_TUTOR_* env vars."""
        environ = os.environ if environ is None else environ
        data_dir = Path(environ.get(f"{ENV_PREFIX}DATA_DIR") or default_data_dir(environ))
        settings = cls(data_dir=data_dir)

        names = {f.name for f in fields(cls)} - {"data_dir"}
        for key, value in load_config_file(settings.config_path).items():
            if key in names:
                setattr(settings, key, str(value))
        for name in names:
            value = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value:
                setattr(settings, name, value)

        if settings.theme not in THEMES:
            logger.warning("Unknown theme %r, using dark", settings.theme)
            settings.theme = "dark"
        return settings


def load_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Ignoring unreadable config file %s", path)
        return {}
    return data if isinstance(data, dict) else {}
