# FILE: services/settings_service.py

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

logger = logging.getLogger(__name__)

# Environment variables win over the settings file.
ENV_OVERRIDES = {
    'NPM_UPDATER_NPM': 'npm_command',
    'NPM_UPDATER_REGISTRY': 'registry_url',
    'NPM_UPDATER_LOG_LEVEL': 'log_level',
}


@dataclass(frozen=True)
class Settings:
    npm_command: str = "npm"
    registry_url: str = "https://www.npmjs.com"
    manifest_name: str = "package.json"
    modules_dir: str = "node_modules"
    log_level: str = "INFO"

    def package_url(self, name: str) -> str:
        return f"{self.registry_url.rstrip('/')}/package/{name}"


def default_settings_path() -> Path:
    from gi.repository import GLib
    return Path(GLib.get_user_config_dir()) / 'npm-updater' / 'settings.json'


def load_settings(path: Path | None = None, environ=None) -> Settings:
    """Loads settings from a JSON file, then applies environment overrides."""
    if path is None:
        path = default_settings_path()
    if environ is None:
        environ = os.environ

    values = {}
    if path.exists():
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            # A corrupted or unreadable file falls back to the defaults
            logger.warning("Ignoring settings file %s: %s", path, e)
            data = {}
        if isinstance(data, dict):
            known = {f.name for f in fields(Settings)}
            values = {k: str(v) for k, v in data.items() if k in known}

    for env_name, field_name in ENV_OVERRIDES.items():
        if environ.get(env_name):
            values[field_name] = environ[env_name]

    return replace(Settings(), **values)


def save_settings(settings: Settings, path: Path | None = None):
    """Saves the settings as JSON, creating the config directory if needed."""
    if path is None:
        path = default_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(asdict(settings), f, indent=2)
