from __future__ import annotations

"""Shared data structures produced by the mapping converters.

This module is intentionally free of I/O code so that the contained objects
can be reused in any context (unit-tests, CLI, downstream interpreters, etc.).
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from edifact_mapping.core.exceptions import DocumentParseError, DocumentReadError

__all__ = [
    "AttributeMap",
    "CodeTable",
    "TreeNode",
    "StructureDocument",
    "CodeDefinition",
    "FailureKind",
    "LoadFailure",
]

AttributeMap = Dict[str, str]
CodeTable = Dict[str, Dict[str, str]]


@dataclass(frozen=True)
class TreeNode:
    """One converted XML element.

    Attributes
    ----------
    type
        Local tag name of the element (``segment``, ``group``,
        ``data_element``…).
    attributes
        Read-only view of the element attributes in document order; empty
        when it has none. Because of it, nodes compare by value but are not
        hashable.
    children
        Converted structural children; empty for leaf nodes.
    """

    type: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: Tuple["TreeNode", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def has_children(self) -> bool:
        """Return True if this node carries structural children."""
        return len(self.children) > 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "attributes": dict(self.attributes)}
        if self.has_children():
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass(frozen=True)
class StructureDocument:
    """Converted message or segment structure document.

    ``defaults`` holds the attributes of the top-level ``defaults`` element
    when the caller asked to keep them, ``None`` otherwise.
    """

    structure: Tuple[TreeNode, ...] = ()
    defaults: Optional[AttributeMap] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.defaults is not None:
            data["defaults"] = dict(self.defaults)
        data["structure"] = [node.to_dict() for node in self.structure]
        return data


@dataclass(frozen=True)
class CodeDefinition:
    """A single code list: its own attributes plus one map per code entry."""

    attributes: AttributeMap = field(default_factory=dict)
    codes: Tuple[AttributeMap, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attributes": dict(self.attributes),
            "codes": [dict(code) for code in self.codes],
        }


class FailureKind(str, Enum):
    READ = "read"
    PARSE = "parse"


@dataclass(frozen=True)
class LoadFailure:
    """Returned instead of a result when a document cannot be read or parsed.

    Instances are falsy so call sites can write ``if not result: ...`` for
    both failure kinds. Note that an identifier lookup which finds nothing
    returns ``None``, not a ``LoadFailure``.
    """

    kind: FailureKind
    path: str
    reason: str = ""

    def __bool__(self) -> bool:
        return False

    @property
    def is_read_failure(self) -> bool:
        return self.kind is FailureKind.READ

    @property
    def is_parse_failure(self) -> bool:
        return self.kind is FailureKind.PARSE

    def raise_for_failure(self) -> None:
        """Raise the exception matching this failure."""
        if self.kind is FailureKind.READ:
            raise DocumentReadError(self.reason or "document could not be read", self.path)
        raise DocumentParseError(self.reason or "document is not well-formed XML", self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.kind.value, "path": self.path, "reason": self.reason}
