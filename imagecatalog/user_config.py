"""
User configuration management for Image Catalog.

Each setting is resolved from, in order:
1. Environment variable (IMAGECATALOG_*)
2. User config file (~/.imagecatalog/config.json, directory overridable
   with IMAGECATALOG_CONFIG_DIR)
3. Default from config.py

Command-line options override all of these at the call site.

Example config.json:
{
    "media_dir": "downloads",
    "default_workers": 4,
    "similarity_threshold": 5,
    "similarity_sample_limit": 10000,
    "port": 5000,
    "bookmarks": ["https://example.com/gallery"]
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    CONFIG_DIR,
    DEFAULT_MEDIA_DIR,
    DEFAULT_PORT,
    DEFAULT_WORKERS,
    FINGERPRINT_BITS,
    SIMILARITY_SAMPLE_LIMIT,
    SIMILARITY_THRESHOLD,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = 'IMAGECATALOG_'


class UserConfig:
    """
    Settings shared by the HTTP service and the CLI.

    A single instance exists per process; the file is read lazily and
    cached until reload() is called.
    """

    _instance: Optional['UserConfig'] = None
    _file_settings: Optional[dict] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        override = os.getenv(f'{ENV_PREFIX}CONFIG_DIR')
        return Path(override) if override else Path(CONFIG_DIR)

    @property
    def config_file_path(self) -> Path:
        return self.config_dir / 'config.json'

    def reload(self):
        """Forget cached file settings; the next lookup re-reads the file."""
        self._file_settings = None

    def _settings(self) -> dict:
        if self._file_settings is None:
            self._file_settings = self._read_file()
        return self._file_settings

    def _read_file(self) -> dict:
        path = self.config_file_path
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config file {path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {path}: expected a JSON object")
            return {}
        logger.debug(f"Loaded configuration from {path}")
        return data

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Look up a raw setting.

        Environment values are parsed as JSON when possible so lists and
        numbers can be passed through the environment.

        Args:
            key: Key in config.json
            default: Returned when neither source defines the key
            env_var: Environment variable checked first

        Returns:
            The setting value
        """
        if env_var:
            raw = os.getenv(env_var)
            if raw is not None:
                try:
                    return json.loads(raw)
                except ValueError:
                    return raw

        return self._settings().get(key, default)

    def _int_setting(
        self,
        key: str,
        env_var: str,
        default: int,
        minimum: int,
        maximum: Optional[int] = None,
    ) -> int:
        """Integer setting; out-of-range or non-numeric values fall back to the default."""
        value = self.get(key, default=default, env_var=env_var)
        try:
            value = int(value)
        except (TypeError, ValueError):
            logger.warning(f"Invalid {key} {value!r}, using {default}")
            return default
        if value < minimum or (maximum is not None and value > maximum):
            logger.warning(f"{key} {value} out of range, using {default}")
            return default
        return value

    @property
    def media_dir(self) -> str:
        """Directory whose images are catalogued."""
        return str(self.get('media_dir', DEFAULT_MEDIA_DIR, f'{ENV_PREFIX}MEDIA_DIR'))

    @property
    def default_workers(self) -> int:
        """Hashing threads used during a scan."""
        return self._int_setting('default_workers', f'{ENV_PREFIX}WORKERS', DEFAULT_WORKERS, 1)

    @property
    def similarity_threshold(self) -> int:
        """Pairs strictly below this distance are reported by the sweep."""
        return self._int_setting(
            'similarity_threshold', f'{ENV_PREFIX}THRESHOLD',
            SIMILARITY_THRESHOLD, 0, FINGERPRINT_BITS,
        )

    @property
    def similarity_sample_limit(self) -> int:
        """Records compared by the sweep."""
        return self._int_setting(
            'similarity_sample_limit', f'{ENV_PREFIX}SAMPLE_LIMIT',
            SIMILARITY_SAMPLE_LIMIT, 2,
        )

    @property
    def port(self) -> int:
        return self._int_setting('port', f'{ENV_PREFIX}PORT', DEFAULT_PORT, 1, 65535)

    @property
    def bookmarks(self) -> list:
        """Start pages offered to the browser collaborator."""
        bookmarks = self.get('bookmarks', default=[])
        if not isinstance(bookmarks, list):
            logger.warning("Ignoring bookmarks: expected a list")
            return []
        return bookmarks

    def create_example_config(self) -> bool:
        """
        Write a config.json holding every default.

        Returns:
            True if the file was written
        """
        example = {
            "_comment": "Image Catalog user configuration",
            "media_dir": DEFAULT_MEDIA_DIR,
            "default_workers": DEFAULT_WORKERS,
            "similarity_threshold": SIMILARITY_THRESHOLD,
            "similarity_sample_limit": SIMILARITY_SAMPLE_LIMIT,
            "port": DEFAULT_PORT,
            "bookmarks": [],
        }
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False
        logger.info(f"Created example config file at {self.config_file_path}")
        return True


_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Process-wide UserConfig instance."""
    return _user_config
