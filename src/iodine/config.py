"""
Shell configuration for the Iodine REPL and script runner.

A config file is a YAML mapping; every key is optional:

    prompt: ">"            # REPL prompt
    print_tokens: false    # dump tokens of every input line
    print_ast: false       # dump the AST of every parsed statement
    stop_on_error: false   # end the REPL at the first error
    log_level: WARNING     # root logger level
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigError(ValueError):
    """Invalid shell configuration file."""
    pass


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ShellConfig:
    """Settings for Repl and run_script."""
    prompt: str = ">"
    print_tokens: bool = False
    print_ast: bool = False
    stop_on_error: bool = False
    log_level: str = "WARNING"

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShellConfig":
        """Build a config from a mapping, rejecting unknown keys and bad types."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

        defaults = cls()
        for name, value in data.items():
            expected = type(getattr(defaults, name))
            if not isinstance(value, expected):
                raise ConfigError(
                    f"config key '{name}' must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )

        config = cls(**data)
        config.log_level = config.log_level.upper()
        if config.log_level not in _LOG_LEVELS:
            raise ConfigError(f"unknown log level: {config.log_level}")
        return config


def load_config(path: Optional[Path | str] = None) -> ShellConfig:
    """
    Load a ShellConfig from a YAML file.

    Args:
        path: Config file path; None returns the defaults

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the document is not a mapping or has invalid keys
    """
    if path is None:
        return ShellConfig()

    config_path = Path(path)
    with config_path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

    if data is None:
        return ShellConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"config file {config_path} must contain a mapping")
    return ShellConfig.from_dict(data)
