"""Top-level package of edifact_mapping.

Resolves the location of UN/EDIFACT mapping files (segments, codes, message
structures) and converts them into plain trees. Front-ends should depend on
the names re-exported here rather than on internal modules.
"""

from .core import (
    CodeDefinition,
    DirectoryCatalog,
    FailureKind,
    LoadFailure,
    MappingProvider,
    StructureDocument,
    TreeNode,
    normalize_directory_tag,
)

__all__: list[str] = [
    "CodeDefinition",
    "DirectoryCatalog",
    "FailureKind",
    "LoadFailure",
    "MappingProvider",
    "StructureDocument",
    "TreeNode",
    "normalize_directory_tag",
]
