"""Tests for environment configuration and logging setup."""
import logging

import pytest
from rich.logging import RichHandler

from tailwind_hierarchy.config import DEFAULT_OUTPUT_PATH, Config, get_config, parse_aliases, reset_config
from tailwind_hierarchy.utils.logger import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ('HIERARCHY_SOURCE_DIR', 'HIERARCHY_OUTPUT_PATH', 'HIERARCHY_ALIASES', 'HIERARCHY_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.source_dir == 'src'
        assert config.output_path == DEFAULT_OUTPUT_PATH
        assert config.aliases == {'@/': 'src/'}
        assert config.log_level == 'WARNING'

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv('HIERARCHY_SOURCE_DIR', 'app')
        monkeypatch.setenv('HIERARCHY_ALIASES', '~/=app/, @ui/=app/ui/')
        monkeypatch.setenv('HIERARCHY_LOG_LEVEL', 'debug')
        config = Config()
        assert config.source_dir == 'app'
        assert config.aliases == {'~/': 'app/', '@ui/': 'app/ui/'}
        assert config.log_level == 'DEBUG'

    def test_dotenv_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / 'custom.env'
        env_file.write_text('HIERARCHY_OUTPUT_PATH=docs/styles.md\n', encoding='utf-8')
        # load_dotenv writes into os.environ; let monkeypatch restore it
        monkeypatch.setenv('HIERARCHY_OUTPUT_PATH', '')
        monkeypatch.delenv('HIERARCHY_OUTPUT_PATH')
        assert Config(env_file).output_path == 'docs/styles.md'

    def test_singleton(self):
        assert get_config() is get_config()


def test_parse_aliases_skips_malformed_entries():
    assert parse_aliases('@/=src/,broken,=x,~/=') == {'@/': 'src/'}


def test_configure_logging_is_idempotent():
    logger = configure_logging('INFO')
    configure_logging('DEBUG')
    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
    assert not logger.propagate
    configure_logging('not-a-level')
    assert logger.level == logging.WARNING
