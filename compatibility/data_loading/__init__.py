"""Data loading module for profile exports."""

from .loaders import read_profiles_frame, load_profiles, find_profile

__all__ = ["read_profiles_frame", "load_profiles", "find_profile"]
