"""Backends for profile output generation (POSIX sh, etc.)."""

from .shell_profile import generate_profile, quote_value, save_profile

__all__ = ["generate_profile", "quote_value", "save_profile"]
