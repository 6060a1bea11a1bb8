"""
Configuration service implementation for arkpage.
Loads cache settings from a JSON file with environment overrides.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from . import ConfigServiceInterface
from ..config import CacheSettings, ENV_OVERRIDES

logger = logging.getLogger(__name__)


class ConfigService(ConfigServiceInterface):
    """Service for managing arkpage configuration."""

    def __init__(self, config_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        self.config_file = config_file or self._get_default_config_path()
        self.environ = os.environ if environ is None else environ
        self.settings: Dict[str, Any] = {}
        self._load_settings()

    def _get_default_config_path(self) -> str:
        config_dir = Path.home() / ".config"
        if not config_dir.exists():
            config_dir = Path.home()

        return str(config_dir / "arkpage" / "settings.json")

    def _load_settings(self):
        try:
            if os.path.exists(self.config_file):
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("settings file must contain a JSON object")
                self.settings = loaded
        except (OSError, ValueError) as e:
            logger.warning("Could not load settings from %s: %s", self.config_file, e)
            self.settings = {}

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: Any):
        self.settings[key] = value

    def save_settings(self):
        """Write all settings to the configuration file."""
        try:
            config_path = Path(self.config_file)
            config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self.config_file, e)

    def get_all_settings(self) -> Dict[str, Any]:
        return self.settings.copy()

    def update_settings(self, settings: Dict[str, Any]):
        self.settings.update(settings)

    def get_cache_settings(self) -> CacheSettings:
        """Settings file values, then environment overrides, over CONFIG defaults."""
        merged = dict(self.settings)
        for env_name, key in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value:
                merged[key] = value
        return CacheSettings.from_dict(merged)
