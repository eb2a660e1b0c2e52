"""
Configuration Management - YAML-based configuration with environment overrides
=============================================================================

This module handles all configuration aspects including:
- Loading from YAML files
- Environment variable overrides
- Default values
- Configuration validation

Configuration is read-only: nothing here writes back to disk.
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, List
from dataclasses import dataclass, field, asdict

from .exceptions import ConfigError


@dataclass
class ResponderConfig:
    """
    Responder configuration.

    Selects the rule set, seeds the template picker and names the
    response that ends a conversation.
    """
    # Path to a YAML rules file; empty means the built-in rule set
    rules_path: str = ""

    # Seed for response template selection; None draws from system entropy
    seed: Optional[int] = None

    # A response exactly equal to this token list ends the session
    exit_response: List[str] = field(default_factory=lambda: ["good", "bye"])

    def validate(self) -> None:
        """Validate responder configuration."""
        if not self.exit_response:
            raise ConfigError("exit_response must contain at least one token")

        if not all(isinstance(token, str) and token for token in self.exit_response):
            raise ConfigError(
                "exit_response tokens must be non-empty strings",
                {"exit_response": self.exit_response}
            )

        # bool is an int subclass; YAML `true` is not a seed
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")

        if self.rules_path and not Path(self.rules_path).expanduser().is_file():
            raise ConfigError(f"Rules file not found: {self.rules_path}")


@dataclass
class SessionConfig:
    """
    Console session configuration.
    """
    greeting: str = "Hello, I am ELIZA. What is on your mind?"
    farewell: str = "It was nice talking to you."
    prompt: str = "> "

    def validate(self) -> None:
        """Validate session configuration."""
        if not isinstance(self.prompt, str):
            raise ConfigError(f"prompt must be a string, got {self.prompt!r}")


@dataclass
class UIConfig:
    """
    Terminal UI configuration.
    """
    tui_title: str = "ELIZA"
    show_rule_names: bool = False

    def validate(self) -> None:
        """Validate UI configuration."""
        if not self.tui_title:
            raise ConfigError("tui_title cannot be empty")


@dataclass
class Config:
    """
    Main configuration container.

    Aggregates all configuration sections into a single object.
    """
    app_name: str = "ELIZA Responder"
    version: str = "1.0.0"
    debug: bool = False

    responder: ResponderConfig = field(default_factory=ResponderConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    # Paths (set at runtime)
    config_dir: str = ""
    log_dir: str = ""

    # Write eliza.log as JSON lines
    log_json: bool = False

    def validate(self) -> None:
        """
        Validate all configuration sections.

        Raises:
            ConfigError: If any configuration section is invalid
        """
        self.responder.validate()
        self.session.validate()
        self.ui.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "app_name": self.app_name,
            "version": self.version,
            "debug": self.debug,
            "log_dir": self.log_dir,
            "log_json": self.log_json,
            "responder": asdict(self.responder),
            "session": asdict(self.session),
            "ui": asdict(self.ui),
        }


def get_default_config_dir() -> Path:
    """
    Get the default configuration directory path.

    Returns:
        Path to the configuration directory
    """
    if "ELIZA_CONFIG_DIR" in os.environ:
        return Path(os.environ["ELIZA_CONFIG_DIR"])

    if "XDG_CONFIG_HOME" in os.environ:
        return Path(os.environ["XDG_CONFIG_HOME"]) / "eliza-responder"

    return Path.home() / ".config" / "eliza-responder"


def load_config(config_path: Optional[str] = None, load_env: bool = True) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    This function loads configuration in the following order:
    1. Default values from dataclass
    2. Values from YAML file
    3. Environment variable overrides

    Args:
        config_path: Path to configuration file (optional)
        load_env: Whether to load environment variable overrides

    Returns:
        Config object with loaded values

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    config = Config()
    config.config_dir = str(get_default_config_dir())

    if config_path:
        yaml_path = Path(config_path)
        if not yaml_path.exists():
            raise ConfigError("Config file not found", {"path": str(yaml_path)})
    else:
        yaml_path = Path(config.config_dir) / "config.yaml"

    if yaml_path.exists():
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}", {"path": str(yaml_path)})
        except IOError as e:
            raise ConfigError(f"Failed to read config file: {e}", {"path": str(yaml_path)})

        if not isinstance(yaml_config, dict):
            raise ConfigError("Config file must contain a mapping", {"path": str(yaml_path)})

        _apply_yaml_config(config, yaml_config)

        # Relative rule paths are resolved against the config file location
        rules_path = config.responder.rules_path
        if rules_path and not Path(rules_path).expanduser().is_absolute():
            config.responder.rules_path = str(yaml_path.parent / rules_path)

    if load_env:
        _apply_env_overrides(config)

    config.validate()

    return config


def _apply_yaml_config(config: Config, yaml_config: Dict[str, Any]) -> None:
    """
    Apply YAML configuration values to Config object.

    Unknown keys are ignored.

    Args:
        config: Config object to update
        yaml_config: Dictionary of configuration values from YAML
    """
    for key in ("app_name", "version", "debug", "log_dir", "log_json"):
        if key in yaml_config:
            setattr(config, key, yaml_config[key])

    for section_name in ("responder", "session", "ui"):
        section_cfg = yaml_config.get(section_name)
        if section_cfg is None:
            continue
        if not isinstance(section_cfg, dict):
            raise ConfigError(f"Config section '{section_name}' must be a mapping")

        section = getattr(config, section_name)
        for key, value in section_cfg.items():
            if hasattr(section, key):
                setattr(section, key, value)


def _apply_env_overrides(config: Config) -> None:
    """
    Apply environment variable overrides to Config object.

    Args:
        config: Config object to update
    """
    env_mappings = {
        "ELIZA_RULES_PATH": ("responder", "rules_path"),
        "ELIZA_SEED": ("responder", "seed", int),
        "ELIZA_PROMPT": ("session", "prompt"),
        "ELIZA_DEBUG": (None, "debug", bool),
        "ELIZA_LOG_DIR": (None, "log_dir"),
        "ELIZA_LOG_JSON": (None, "log_json", bool),
    }

    for env_var, mapping in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        section = mapping[0]
        key = mapping[1]
        converter = mapping[2] if len(mapping) > 2 else str

        target = getattr(config, section) if section else config

        if converter == bool:
            converted = value.lower() in ("true", "1", "yes", "on")
        else:
            try:
                converted = converter(value)
            except ValueError:
                raise ConfigError(f"Invalid value for {env_var}: {value!r}")

        setattr(target, key, converted)
