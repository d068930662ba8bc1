# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Configuration management for twistscore.
Handles loading and saving settings from a YAML config file.
"""

from pathlib import Path
from typing import Any, TypedDict

import yaml

CONFIG_FILENAME: str = ".twistscore.yaml"

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json")
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class OutputSettings(TypedDict):
    """Type definition for report output settings."""
    format: str  # "text" or "json"
    show_words: bool
    show_similarity: bool


class Config(TypedDict):
    """Type definition for the complete configuration."""
    log_level: str
    output: OutputSettings


# Default configuration values
DEFAULT_CONFIG: Config = {
    "log_level": "WARNING",

    # Report output settings
    "output": {
        "format": "text",
        "show_words": True,
        # Annotate misheard words with how close they were
        "show_similarity": False,
    },
}


def get_config_path() -> Path:
    """Get the path to the config file in the current working directory."""
    return Path.cwd() / CONFIG_FILENAME


def _deep_merge(base, override):
    """
    Deep merge two dictionaries, with override taking precedence.
    Returns a new dictionary without modifying the originals.

    Args:
        base: Base dictionary to merge from.
        override: Dictionary with values that take precedence over base.

    Returns:
        New dictionary with merged values.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _validate(config: dict[str, Any]) -> dict[str, Any]:
    """Replace values the rest of the app can't use with their defaults."""
    output: dict[str, Any] = config.get("output", {})
    if not isinstance(output, dict):
        print(f"Warning: Ignoring invalid output settings: {output!r}")
        config["output"] = DEFAULT_CONFIG["output"].copy()
    elif output.get("format") not in OUTPUT_FORMATS:
        print(f"Warning: Unknown output format {output.get('format')!r}, "
              f"using '{DEFAULT_CONFIG['output']['format']}'")
        output["format"] = DEFAULT_CONFIG["output"]["format"]

    log_level: Any = config.get("log_level")
    if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
        print(f"Warning: Unknown log level {log_level!r}, "
              f"using '{DEFAULT_CONFIG['log_level']}'")
        config["log_level"] = DEFAULT_CONFIG["log_level"]

    return config


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file, merged with defaults.

    Args:
        config_path: Optional path to config file. If None, uses default location.

    Returns:
        Configuration dictionary with all values (defaults + overrides from file).
    """
    if config_path is None:
        config_path = get_config_path()

    # Start with defaults
    config: dict[str, Any] = _deep_merge({}, DEFAULT_CONFIG)

    # Load from file if it exists
    if config_path.exists():
        try:
            with open(config_path, encoding='utf-8') as f:
                file_config: Any = yaml.safe_load(f)
                if isinstance(file_config, dict):
                    config = _deep_merge(config, file_config)
                elif file_config is not None:
                    print(f"Warning: Ignoring {config_path}: expected a mapping")
        except (OSError, yaml.YAMLError) as e:
            print(f"Warning: Could not load config from {config_path}: {e}")

    return _validate(config)  # type: ignore[return-value]


def save_config(config: Config, config_path: Path | None = None) -> bool:
    """
    Save configuration to file.

    Args:
        config: Configuration dictionary to save.
        config_path: Optional path to config file. If None, uses default location.

    Returns:
        True if save was successful, False otherwise.
    """
    if config_path is None:
        config_path = get_config_path()

    try:
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(dict(config), f, default_flow_style=False, sort_keys=False)
        return True
    except (OSError, yaml.YAMLError) as e:
        print(f"Error saving config to {config_path}: {e}")
        return False


def get_output_settings(config: Config) -> OutputSettings:
    """
    Extract output settings from config.

    Args:
        config: Configuration dictionary.

    Returns:
        Output settings dictionary.
    """
    return config.get("output", DEFAULT_CONFIG["output"]).copy()  # type: ignore[return-value]


def update_config_output(config: Config, output_settings: dict[str, Any]) -> Config:
    """
    Update the output section of the config with new settings.
    Returns a new config dict.

    Args:
        config: Current configuration.
        output_settings: New output settings to merge in.

    Returns:
        New configuration with updated output settings.
    """
    new_config: dict[str, Any] = _deep_merge({}, config)
    new_config["output"] = _deep_merge(
        new_config.get("output", {}),
        output_settings
    )
    return new_config  # type: ignore[return-value]
