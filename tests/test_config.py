"""
Tests for shell configuration loading.
"""

import logging

import pytest

from iodine.config import ShellConfig, ConfigError, load_config


class TestShellConfig:
    """Test config defaults and validation."""

    def test_defaults(self):
        config = ShellConfig()
        assert config.prompt == ">"
        assert config.print_tokens is False
        assert config.print_ast is False
        assert config.stop_on_error is False
        assert config.logging_level == logging.WARNING

    def test_from_dict(self):
        config = ShellConfig.from_dict({"prompt": "$ ", "print_ast": True})
        assert config.prompt == "$ "
        assert config.print_ast is True

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="unknown config key"):
            ShellConfig.from_dict({"colour": "red"})

    def test_wrong_type(self):
        """Flags must be real booleans."""
        with pytest.raises(ConfigError, match="print_tokens"):
            ShellConfig.from_dict({"print_tokens": "yes"})

    def test_log_level_case(self):
        config = ShellConfig.from_dict({"log_level": "debug"})
        assert config.log_level == "DEBUG"
        assert config.logging_level == logging.DEBUG

    def test_bad_log_level(self):
        with pytest.raises(ConfigError, match="log level"):
            ShellConfig.from_dict({"log_level": "LOUD"})


class TestLoadConfig:
    """Test YAML loading."""

    def test_no_path(self):
        assert load_config(None) == ShellConfig()

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "iodine.yaml"
        path.write_text("prompt: 'iodine> '\nprint_tokens: true\nstop_on_error: true\n")
        config = load_config(path)
        assert config.prompt == "iodine> "
        assert config.print_tokens is True
        assert config.stop_on_error is True

    def test_empty_file(self, tmp_path):
        """An empty document means all defaults."""
        path = tmp_path / "iodine.yaml"
        path.write_text("")
        assert load_config(path) == ShellConfig()

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "iodine.yaml"
        path.write_text("- prompt\n- print_ast\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "iodine.yaml"
        path.write_text("prompt: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")
