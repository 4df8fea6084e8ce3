from __future__ import annotations

"""Core, I/O-light building blocks: path resolution, reading, conversion."""

from .catalog import DirectoryCatalog
from .converter import (
    convert_code_table,
    convert_message_structure,
    convert_segment_definition,
    element_attributes,
    lookup_code_definition,
    lookup_segment_definition,
)
from .models import (
    CodeDefinition,
    FailureKind,
    LoadFailure,
    StructureDocument,
    TreeNode,
)
from .provider import MappingProvider, normalize_directory_tag
from .reader import parse_document, read_document

__all__ = [
    "DirectoryCatalog",
    "MappingProvider",
    "normalize_directory_tag",
    "read_document",
    "parse_document",
    "element_attributes",
    "convert_message_structure",
    "convert_segment_definition",
    "lookup_segment_definition",
    "lookup_code_definition",
    "convert_code_table",
    "TreeNode",
    "StructureDocument",
    "CodeDefinition",
    "FailureKind",
    "LoadFailure",
]
