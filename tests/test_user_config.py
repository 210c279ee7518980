"""
Tests for user configuration loading.
"""

import json

import pytest

from imagecatalog.config import DEFAULT_MEDIA_DIR, DEFAULT_PORT, SIMILARITY_THRESHOLD
from imagecatalog.user_config import get_user_config


@pytest.fixture
def user_config(temp_dir, monkeypatch):
    """User config pointed at an isolated config directory."""
    monkeypatch.setenv('IMAGECATALOG_CONFIG_DIR', str(temp_dir))
    for name in ('IMAGECATALOG_MEDIA_DIR', 'IMAGECATALOG_PORT', 'IMAGECATALOG_WORKERS', 'IMAGECATALOG_THRESHOLD'):
        monkeypatch.delenv(name, raising=False)
    config = get_user_config()
    config.reload()
    yield config
    config.reload()


class TestUserConfig:
    """Test UserConfig priority rules."""

    def test_defaults(self, user_config):
        assert user_config.media_dir == DEFAULT_MEDIA_DIR
        assert user_config.port == DEFAULT_PORT
        assert user_config.bookmarks == []

    def test_config_file(self, user_config, temp_dir):
        (temp_dir / 'config.json').write_text(json.dumps({
            'media_dir': '/srv/media',
            'bookmarks': ['https://example.com'],
        }))
        user_config.reload()
        assert user_config.media_dir == '/srv/media'
        assert user_config.bookmarks == ['https://example.com']

    def test_environment_overrides_file(self, user_config, temp_dir, monkeypatch):
        (temp_dir / 'config.json').write_text(json.dumps({'port': 6000}))
        monkeypatch.setenv('IMAGECATALOG_PORT', '7000')
        user_config.reload()
        assert user_config.port == 7000

    def test_invalid_config_file_ignored(self, user_config, temp_dir):
        (temp_dir / 'config.json').write_text('[1, 2, 3]')
        user_config.reload()
        assert user_config.media_dir == DEFAULT_MEDIA_DIR

    def test_create_example_config(self, user_config, temp_dir):
        assert user_config.create_example_config() is True
        data = json.loads((temp_dir / 'config.json').read_text())
        assert data['media_dir'] == DEFAULT_MEDIA_DIR

    def test_non_numeric_environment_falls_back(self, user_config, monkeypatch):
        monkeypatch.setenv('IMAGECATALOG_PORT', 'not-a-port')
        assert user_config.port == DEFAULT_PORT

    def test_out_of_range_threshold_falls_back(self, user_config, temp_dir):
        (temp_dir / 'config.json').write_text(json.dumps({'similarity_threshold': 500}))
        user_config.reload()
        assert user_config.similarity_threshold == SIMILARITY_THRESHOLD
