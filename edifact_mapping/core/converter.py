from __future__ import annotations

"""Conversion of parsed mapping XML into :mod:`edifact_mapping.core.models`.

Two tree builders exist and are deliberately kept apart:

* :func:`convert_message_structure` only descends into ``group`` elements
  (message structure files);
* :func:`convert_segment_definition` descends into every element (segment
  and component catalogs).

Comments and processing instructions are ignored; element types are reported
by local tag name.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from lxml import etree as ET

from edifact_mapping.core.models import (
    AttributeMap,
    CodeDefinition,
    CodeTable,
    StructureDocument,
    TreeNode,
)

logger = logging.getLogger(__name__)

__all__ = [
    "element_attributes",
    "convert_message_structure",
    "convert_segment_definition",
    "lookup_segment_definition",
    "lookup_code_definition",
    "convert_code_table",
]

DEFAULTS_TAG = "defaults"
GROUP_TAG = "group"
COMPOSITE_TAG = "composite_data_element"
ID_ATTRIBUTE = "id"
DESC_ATTRIBUTE = "desc"


def _tag_name(element: ET._Element) -> str:
    return ET.QName(element).localname


def _element_children(element: ET._Element) -> Iterator[ET._Element]:
    """Yield the element children of *element*, skipping comments and PIs."""
    for child in element:
        if isinstance(child.tag, str):
            yield child


def element_attributes(element: ET._Element) -> AttributeMap:
    """Return the attributes of *element* as an ordered ``str -> str`` dict."""
    return {str(key): str(value) for key, value in element.attrib.items()}


def _find_by_id(root: ET._Element, identifier: str) -> Optional[ET._Element]:
    matches = [child for child in _element_children(root) if child.get(ID_ATTRIBUTE) == identifier]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning("Duplicate id %r (%d elements), using the first", identifier, len(matches))
    return matches[0]


# ---------------------------------------------------------------------------
# Message structure (recurse into groups only)
# ---------------------------------------------------------------------------

def _structure_nodes(element: ET._Element) -> Tuple[TreeNode, ...]:
    nodes: List[TreeNode] = []
    for child in _element_children(element):
        tag = _tag_name(child)
        if tag == DEFAULTS_TAG:
            continue
        children: Tuple[TreeNode, ...] = ()
        if tag == GROUP_TAG:
            children = _structure_nodes(child)
        nodes.append(TreeNode(tag, element_attributes(child), children))
    return tuple(nodes)


def convert_message_structure(root: ET._Element, keep_defaults: bool) -> StructureDocument:
    """Convert a message (or service segment) structure document.

    The top-level ``defaults`` element never appears in ``structure``; its
    attributes are returned in ``defaults`` only when *keep_defaults* is true.
    ``group`` elements are converted recursively, any other element is a
    leaf. ``defaults`` nested below the root are dropped.
    """
    defaults: Optional[AttributeMap] = None
    if keep_defaults:
        for child in _element_children(root):
            if _tag_name(child) == DEFAULTS_TAG:
                defaults = element_attributes(child)
                break

    return StructureDocument(structure=_structure_nodes(root), defaults=defaults)


# ---------------------------------------------------------------------------
# Segment / component catalog (recurse into everything)
# ---------------------------------------------------------------------------

def _definition_node(element: ET._Element) -> TreeNode:
    return TreeNode(
        _tag_name(element),
        element_attributes(element),
        convert_segment_definition(element),
    )


def convert_segment_definition(root: ET._Element) -> Tuple[TreeNode, ...]:
    """Convert every child of *root* into a node, recursing unconditionally.

    ``defaults`` elements are skipped at every depth.
    """
    return tuple(
        _definition_node(child)
        for child in _element_children(root)
        if _tag_name(child) != DEFAULTS_TAG
    )


def lookup_segment_definition(root: ET._Element, segment_id: str) -> Optional[TreeNode]:
    """Return the definition of *segment_id* from a segment catalog.

    The node lists the segment's data elements and composites by their own
    tag names; composites additionally list their components (one level).
    Returns ``None`` when no top-level element has the requested ``id``.
    """
    segment = _find_by_id(root, segment_id)
    if segment is None:
        return None

    details: List[TreeNode] = []
    for element in _element_children(segment):
        tag = _tag_name(element)
        components: Tuple[TreeNode, ...] = ()
        if tag == COMPOSITE_TAG:
            components = tuple(
                TreeNode(_tag_name(component), element_attributes(component))
                for component in _element_children(element)
            )
        details.append(TreeNode(tag, element_attributes(element), components))

    return TreeNode(_tag_name(segment), element_attributes(segment), tuple(details))


# ---------------------------------------------------------------------------
# Code lists
# ---------------------------------------------------------------------------

def lookup_code_definition(root: ET._Element, code_id: str) -> Optional[CodeDefinition]:
    """Return the code list *code_id*, or ``None`` when it is not defined."""
    code_list = _find_by_id(root, code_id)
    if code_list is None:
        return None
    return CodeDefinition(
        attributes=element_attributes(code_list),
        codes=tuple(element_attributes(code) for code in _element_children(code_list)),
    )


def convert_code_table(root: ET._Element) -> CodeTable:
    """Build ``{code list id: {code value: description}}`` from a code catalog.

    Elements without an ``id`` are skipped; a missing ``desc`` becomes an
    empty string. When a code list id repeats, only the first element is
    used; a repeated code value inside one list also keeps its first entry.
    """
    table: CodeTable = {}
    for code_list in _element_children(root):
        list_id = code_list.get(ID_ATTRIBUTE)
        if list_id is None or list_id in table:
            continue
        values: Dict[str, str] = {}
        table[list_id] = values
        for code in _element_children(code_list):
            value = code.get(ID_ATTRIBUTE)
            if value is None:
                continue
            values.setdefault(value, code.get(DESC_ATTRIBUTE, ""))
    return table
