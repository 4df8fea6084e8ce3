from __future__ import annotations

"""Path builder for the XML mapping files.

A mapping tree is laid out as::

    <base>/<directory>/codes.xml
    <base>/<directory>/segments.xml
    <base>/<directory>/messages/<message>.xml
    <base>/Service_V<version>/segments.xml
    <base>/Service_V<version>/messages/<message>.xml

The path helpers only join strings; whether the file exists is discovered by
whoever reads it.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

__all__ = ["MappingProvider", "normalize_directory_tag", "DEFAULT_DIRECTORY"]

DEFAULT_DIRECTORY = "D95B"
DEFAULT_SEPARATOR = "/"
DEFAULT_SERVICE_VERSION = "3"
DEFAULT_MESSAGE = "codeco"
DEFAULT_SERVICE_MESSAGE = "contrl"

# UN/EDIFACT directories are published as D\d{2}[A-C]
_DIRECTORY_PATTERN = re.compile(r"[0-9]{2}[A-C]")

_MODULE_DIR = str(Path(__file__).resolve().parent)


def normalize_directory_tag(directory: str) -> str:
    """Return the canonical folder name for *directory*.

    Examples:
        >>> normalize_directory_tag("95B")
        'D95B'
        >>> normalize_directory_tag("D95B")
        'D95B'
        >>> normalize_directory_tag("MY_CUSTOM")
        'MY_CUSTOM'
    """
    if _DIRECTORY_PATTERN.fullmatch(directory):
        return "D" + directory
    return directory


class MappingProvider:
    """Builds paths to the XML mappings of one directory.

    Args:
        directory: Directory tag, normalised with :func:`normalize_directory_tag`.
        path: Base folder of the mapping tree; ``None`` selects the folder of
            this module.
        separator: Separator used to join path parts.
    """

    def __init__(self, directory: str = DEFAULT_DIRECTORY, path: Optional[str] = None,
                 separator: str = DEFAULT_SEPARATOR) -> None:
        self._separator = separator
        self._directory = self.check_directory_format(directory)
        self._path = _MODULE_DIR
        self.set_path(path)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, **overrides: Any) -> "MappingProvider":
        """Create a provider from the ``mapping`` configuration section.

        Keyword *overrides* (``directory``, ``path``, ``separator``) win over
        configured values when they are not ``None``.
        """
        if config is None:
            from edifact_mapping.config import ConfigManager
            config = ConfigManager().get_mapping_config()

        settings = {
            "directory": config.get("directory") or DEFAULT_DIRECTORY,
            "path": config.get("base_path"),
            "separator": config.get("separator") or DEFAULT_SEPARATOR,
        }
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls(str(settings["directory"]), settings["path"], str(settings["separator"]))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @staticmethod
    def check_directory_format(directory: str) -> str:
        return normalize_directory_tag(directory)

    def set_directory(self, directory: str = DEFAULT_DIRECTORY) -> None:
        self._directory = self.check_directory_format(directory)

    def set_path(self, path: Optional[str] = None) -> None:
        self._path = _MODULE_DIR if path is None else str(path)

    @property
    def directory(self) -> str:
        return self._directory

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def base_path(self) -> str:
        return self._path

    def get_base_path(self) -> str:
        return self._path

    # ------------------------------------------------------------------
    # Path builders
    # ------------------------------------------------------------------
    def _join(self, *parts: str) -> str:
        return self._separator.join(parts)

    def codes_path(self) -> str:
        """Path to ``codes.xml`` of the current directory."""
        return self._join(self._path, self._directory, "codes.xml")

    def segments_path(self) -> str:
        """Path to ``segments.xml`` of the current directory."""
        return self._join(self._path, self._directory, "segments.xml")

    def message_path(self, message: str = DEFAULT_MESSAGE) -> str:
        """Path to the structure file of *message* (name is lower-cased)."""
        return self._join(self._path, self._directory, "messages", message.lower() + ".xml")

    def service_segments_path(self, version: str = DEFAULT_SERVICE_VERSION) -> str:
        """Path to the service segments of syntax *version*."""
        return self._join(self._path, f"Service_V{version}", "segments.xml")

    def service_message_path(self, version: str = DEFAULT_SERVICE_VERSION,
                             message: str = DEFAULT_SERVICE_MESSAGE) -> str:
        """Path to a service message (CONTRL, AUTACK…) of syntax *version*."""
        return self._join(self._path, f"Service_V{version}", "messages", message.lower() + ".xml")

    # ------------------------------------------------------------------
    # Directory enumeration
    # ------------------------------------------------------------------
    def list_messages(self) -> List[str]:
        """Return the message names available in the current directory.

        Names are the ``.xml`` file stems, sorted. A missing ``messages``
        folder yields an empty list.
        """
        folder = Path(self._path) / self._directory / "messages"
        try:
            entries = list(folder.iterdir())
        except OSError as exc:
            logger.warning("Cannot list messages in %s: %s", folder, exc)
            return []
        return sorted(p.stem for p in entries if p.is_file() and p.suffix == ".xml")

    def list_directories(self) -> List[str]:
        """Return the directory names found under the base path, sorted."""
        base = Path(self._path)
        try:
            entries = list(base.iterdir())
        except OSError as exc:
            logger.warning("Cannot list directories in %s: %s", base, exc)
            return []
        return sorted(
            p.name for p in entries
            if p.is_dir() and not p.name.startswith((".", "__"))
        )

    def __repr__(self) -> str:
        return f"MappingProvider(directory={self._directory!r}, path={self._path!r})"
