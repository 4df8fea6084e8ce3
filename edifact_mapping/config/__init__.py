"""Packaged YAML configuration files and the helper that loads them."""

from .manager import ConfigManager

__all__ = [
    "ConfigManager",
]
