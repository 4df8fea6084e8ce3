from __future__ import annotations

"""File-level access to one mapping directory.

Entry-point for any front-end (CLI, EDIFACT parser, API) that needs converted
mapping documents. Every method resolves a path with the provider, reads it
and converts it. Read/parse problems come back as ``LoadFailure`` values and
an unknown identifier comes back as ``None``.
"""

import logging
from typing import Callable, Dict, Optional, Tuple, TypeVar, Union

from lxml import etree as ET

from edifact_mapping.core.converter import (
    convert_code_table,
    convert_message_structure,
    convert_segment_definition,
    lookup_code_definition,
    lookup_segment_definition,
)
from edifact_mapping.core.models import (
    CodeDefinition,
    CodeTable,
    LoadFailure,
    StructureDocument,
    TreeNode,
)
from edifact_mapping.core.provider import MappingProvider
from edifact_mapping.core.reader import read_document

logger = logging.getLogger(__name__)

__all__ = ["DirectoryCatalog"]

T = TypeVar("T")


class DirectoryCatalog:
    """Converted view over the mapping files a provider points at."""

    def __init__(self, provider: Optional[MappingProvider] = None) -> None:
        self.provider = provider if provider is not None else MappingProvider.from_config()

    def _load(self, path: str, convert: Callable[[ET._Element], T]) -> Union[T, LoadFailure]:
        root = read_document(path)
        if isinstance(root, LoadFailure):
            return root
        return convert(root)

    # ------------------------------------------------------------------
    # Message structures
    # ------------------------------------------------------------------
    def message(self, name: str, keep_defaults: bool) -> Union[StructureDocument, LoadFailure]:
        return self._load(
            self.provider.message_path(name),
            lambda root: convert_message_structure(root, keep_defaults),
        )

    def service_message(self, version: str, name: str,
                        keep_defaults: bool) -> Union[StructureDocument, LoadFailure]:
        return self._load(
            self.provider.service_message_path(version, name),
            lambda root: convert_message_structure(root, keep_defaults),
        )

    def messages(self, keep_defaults: bool) -> Dict[str, StructureDocument]:
        """Convert every message of the directory, skipping unreadable ones."""
        converted: Dict[str, StructureDocument] = {}
        for name in self.provider.list_messages():
            result = self.message(name, keep_defaults)
            if isinstance(result, LoadFailure):
                logger.warning("Skipping message %s (%s failure)", name, result.kind.value)
                continue
            converted[name] = result
        logger.info("Converted %d message structures from %s", len(converted), self.provider.directory)
        return converted

    # ------------------------------------------------------------------
    # Segments
    # ------------------------------------------------------------------
    def segments(self) -> Union[Tuple[TreeNode, ...], LoadFailure]:
        return self._load(self.provider.segments_path(), convert_segment_definition)

    def service_segments(self, version: str) -> Union[Tuple[TreeNode, ...], LoadFailure]:
        return self._load(self.provider.service_segments_path(version), convert_segment_definition)

    def segment(self, segment_id: str,
                version: Optional[str] = None) -> Union[TreeNode, None, LoadFailure]:
        """Look up one segment; *version* selects the service segment catalog."""
        path = (self.provider.segments_path() if version is None
                else self.provider.service_segments_path(version))
        return self._load(path, lambda root: lookup_segment_definition(root, segment_id))

    # ------------------------------------------------------------------
    # Codes
    # ------------------------------------------------------------------
    def codes(self) -> Union[CodeTable, LoadFailure]:
        return self._load(self.provider.codes_path(), convert_code_table)

    def code(self, code_id: str) -> Union[CodeDefinition, None, LoadFailure]:
        return self._load(
            self.provider.codes_path(),
            lambda root: lookup_code_definition(root, code_id),
        )
