# -*- coding: utf-8 -*-
"""Package version lookup."""

from __future__ import annotations

from importlib import metadata
from typing import Optional

_CACHED_VERSION: Optional[str] = None


def get_version() -> str:
    """Return the installed distribution version, or ``"dev"`` from a checkout."""
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION
    try:
        _CACHED_VERSION = metadata.version("edifact-mapping")
    except metadata.PackageNotFoundError:
        _CACHED_VERSION = "dev"
    return _CACHED_VERSION
