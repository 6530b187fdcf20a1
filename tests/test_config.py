"""Tests for settings loading."""

import pytest

from cboe_options_snapshot.config import Settings, load_settings


def test_defaults_without_file():
    """Test that no file and no environment give the defaults."""
    assert load_settings() == Settings()


def test_missing_file_is_ignored(tmp_path):
    """Test that a path that does not exist falls back to defaults."""
    settings = load_settings(str(tmp_path / "absent.yaml"))

    assert settings.database_url is None


def test_values_from_yaml(tmp_path):
    """Test reading all keys from a YAML file."""
    config_file = tmp_path / "settings.yaml"
    config_file.write_text(
        "database_url: sqlite:///snapshots.db\n"
        "echo: true\n"
        "log_level: DEBUG\n"
    )

    settings = load_settings(str(config_file))

    assert settings.database_url == "sqlite:///snapshots.db"
    assert settings.echo is True
    assert settings.log_level == "DEBUG"


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    """Test that DATABASE_URL and LOG_LEVEL win over the file."""
    config_file = tmp_path / "settings.yaml"
    config_file.write_text("database_url: sqlite:///from-file.db\nlog_level: INFO\n")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///from-env.db")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    settings = load_settings(str(config_file))

    assert settings.database_url == "sqlite:///from-env.db"
    assert settings.log_level == "WARNING"


def test_malformed_yaml(tmp_path):
    """Test that an unparseable file raises ValueError."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("database_url: [unclosed\n")

    with pytest.raises(ValueError):
        load_settings(str(config_file))


def test_yaml_must_be_a_mapping(tmp_path):
    """Test that a list at the top level raises ValueError."""
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- a\n- b\n")

    with pytest.raises(ValueError):
        load_settings(str(config_file))


def test_echo_must_be_boolean(tmp_path):
    """Test that a quoted echo value is refused instead of read as true."""
    config_file = tmp_path / "quoted.yaml"
    config_file.write_text('echo: "false"\n')

    with pytest.raises(ValueError, match="echo"):
        load_settings(str(config_file))


def test_explicit_url_skips_environment(tmp_path, monkeypatch):
    """Test that an explicit URL is used even when POSTGRES_ variables are incomplete."""
    monkeypatch.setenv("POSTGRES_HOST", "localhost")

    settings = load_settings(database_url="sqlite:///explicit.db")

    assert settings.database_url == "sqlite:///explicit.db"
