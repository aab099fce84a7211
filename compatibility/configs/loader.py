"""
Configuration loading and validation.

This module handles loading of YAML configuration files, validates the
engine settings and exposes them as an EngineConfig.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in ["global", "tolerance", "near_match"]:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "tolerance" in config:
        tolerance = config["tolerance"] or {}
        for key in ["age_years", "height_positions"]:
            value = tolerance.get(key)
            if value is not None and (not isinstance(value, int) or value < 0):
                issues.append(f"tolerance.{key} must be a non-negative integer, got {value!r}")

    if "near_match" in config:
        budget = (config["near_match"] or {}).get("max_failed_criteria")
        if budget is not None and (not isinstance(budget, int) or budget < 0):
            issues.append(f"near_match.max_failed_criteria must be a non-negative integer, got {budget!r}")

    if "data" in config:
        profiles = (config["data"] or {}).get("profiles", {})
        if "path" not in profiles:
            issues.append("Missing data.profiles.path")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "tolerance.age_years")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


@dataclass
class EngineConfig:
    """
    Settings for the compatibility engine.

    Attributes:
        age_years: Age tolerance band for relaxing failed age dealbreakers
        height_positions: Height tolerance band, in ladder positions
        max_failed_criteria: Default near-match budget of relaxable failures
        log_level: Logging level name
    """
    age_years: int = 1
    height_positions: int = 2
    max_failed_criteria: int = 2
    log_level: str = "INFO"

    def validate(self) -> None:
        """Validate configuration values."""
        if self.age_years < 0:
            raise ValueError(f"age_years must be >= 0, got {self.age_years}")
        if self.height_positions < 0:
            raise ValueError(f"height_positions must be >= 0, got {self.height_positions}")
        if self.max_failed_criteria < 0:
            raise ValueError(f"max_failed_criteria must be >= 0, got {self.max_failed_criteria}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EngineConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "EngineConfig":
        """Create from main config dictionary."""
        return cls(
            age_years=get_config_value(config, "tolerance.age_years", 1),
            height_positions=get_config_value(config, "tolerance.height_positions", 2),
            max_failed_criteria=get_config_value(config, "near_match.max_failed_criteria", 2),
            log_level=get_config_value(config, "global.log_level", "INFO"),
        )

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved engine config to {filepath}")
