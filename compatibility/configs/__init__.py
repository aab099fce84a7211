"""Configuration loading for the compatibility engine."""

from .loader import load_config, validate_config, get_config_value, EngineConfig

__all__ = ["load_config", "validate_config", "get_config_value", "EngineConfig"]
