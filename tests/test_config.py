"""
Unit tests for config.py module.
Tests configuration loading, environment variable handling, and helper functions.
"""
import importlib
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def fresh_config():
    """Reload config after the test so env overrides do not leak."""
    import config
    yield config
    importlib.reload(config)


class TestDatabaseConfig:
    """Tests for database configuration."""

    def test_default_db_server(self):
        """Test default database server value."""
        import config
        assert config.DB_CONFIG['server'] == os.environ.get(
            'OBOETE_DB_SERVER', '(localdb)\\MSSQLLocalDB'
        )

    def test_default_db_name(self):
        """Test default database name."""
        import config
        assert config.DB_CONFIG['database'] == os.environ.get('OBOETE_DB_NAME', 'Oboete')

    def test_connection_string_format(self, fresh_config, monkeypatch):
        """Test connection string is properly formatted."""
        monkeypatch.setattr(fresh_config, 'DB_CONN_STR', '')
        conn_str = fresh_config.get_connection_string()
        assert 'DRIVER={' in conn_str
        assert 'SERVER=' in conn_str
        assert 'DATABASE=' in conn_str
        assert 'Trusted_Connection=' in conn_str

    def test_env_overrides_are_picked_up(self, fresh_config, mock_env_vars):
        """Test OBOETE_* variables feed DB_CONFIG."""
        config = importlib.reload(fresh_config)
        assert config.DB_CONFIG['database'] == 'Oboete_Test'
        assert config.TASK_POLL_MS == 25
        assert config.SPEECH_RATE == 180

    def test_optional_security_flags(self, fresh_config, monkeypatch):
        """Test Encrypt/TrustServerCertificate only appear when set."""
        monkeypatch.setattr(fresh_config, 'DB_CONN_STR', '')
        monkeypatch.setitem(fresh_config.DB_CONFIG, 'encrypt', '')
        monkeypatch.setitem(fresh_config.DB_CONFIG, 'trust_server_certificate', '')
        assert 'Encrypt=' not in fresh_config.get_connection_string()

        monkeypatch.setitem(fresh_config.DB_CONFIG, 'encrypt', 'no')
        monkeypatch.setitem(fresh_config.DB_CONFIG, 'trust_server_certificate', 'yes')
        conn_str = fresh_config.get_connection_string()
        assert 'Encrypt=no;' in conn_str
        assert 'TrustServerCertificate=yes;' in conn_str

    def test_full_connection_string_wins(self, fresh_config, monkeypatch):
        """Test OBOETE_DB_CONN_STR replaces the generated string."""
        monkeypatch.setattr(fresh_config, 'DB_CONN_STR', 'DSN=oboete;')
        assert fresh_config.get_connection_string() == 'DSN=oboete;'

    def test_master_connection_string(self, fresh_config, monkeypatch):
        """Test a named database swaps only the DATABASE part."""
        monkeypatch.setattr(fresh_config, 'DB_CONN_STR', '')
        conn_str = fresh_config.get_connection_string('master')
        assert 'DATABASE=master;' in conn_str
        assert f"DATABASE={fresh_config.DB_CONFIG['database']};" in fresh_config.get_connection_string()


class TestUIConfig:
    """Tests for UI configuration."""

    def test_window_dimensions_exist(self):
        import config
        assert isinstance(config.UI_CONFIG['window_width'], int)
        assert isinstance(config.UI_CONFIG['window_height'], int)

    def test_studysets_per_row(self):
        import config
        assert config.STUDYSETS_PER_ROW == 5

    def test_get_font_title_is_bold(self):
        import config
        font = config.get_font('title')
        assert font[0] == config.UI_CONFIG['font_family']
        assert font[2] == 'bold'

    def test_get_font_unknown_falls_back_to_normal(self):
        import config
        assert config.get_font('unknown') == config.get_font('normal')


class TestLoggingConfig:
    def test_log_file_lives_in_log_dir_by_default(self):
        import config
        if 'OBOETE_LOG_FILE' not in os.environ and 'OBOETE_LOG_DIR' not in os.environ:
            assert os.path.dirname(config.LOG_FILE) == config.LOG_DIR
        assert config.LOG_LEVEL == config.LOG_LEVEL.upper()
