import pytest
from lxml import etree as ET

from edifact_mapping.core.converter import (
    convert_code_table,
    convert_message_structure,
    convert_segment_definition,
    element_attributes,
    lookup_code_definition,
    lookup_segment_definition,
)
from edifact_mapping.core.models import CodeDefinition, StructureDocument, TreeNode

EXAMPLE = (
    '<segments><defaults minOccur="1"/><segment id="UNH"/>'
    '<group id="G1"><segment id="LIN"/></group></segments>'
)


def _root(text):
    return ET.fromstring(text)


def test_element_attributes_keeps_document_order():
    element = _root('<segment maxOccur="9" id="NAD" minOccur="1"/>')
    attributes = element_attributes(element)
    assert list(attributes) == ["maxOccur", "id", "minOccur"]
    assert attributes["id"] == "NAD"


def test_element_attributes_empty():
    assert element_attributes(_root("<segment/>")) == {}


def test_example_document_with_defaults():
    result = convert_message_structure(_root(EXAMPLE), keep_defaults=True)
    assert result.to_dict() == {
        "defaults": {"minOccur": "1"},
        "structure": [
            {"type": "segment", "attributes": {"id": "UNH"}},
            {"type": "group", "attributes": {"id": "G1"},
             "children": [{"type": "segment", "attributes": {"id": "LIN"}}]},
        ],
    }


def test_defaults_dropped_when_not_requested():
    result = convert_message_structure(_root(EXAMPLE), keep_defaults=False)
    assert result.defaults is None
    assert "defaults" not in result.to_dict()
    assert [node.type for node in result.structure] == ["segment", "group"]


def test_group_with_two_segments_and_sibling():
    root = _root(
        '<message><group id="G"><segment id="A"/><segment id="B"/></group>'
        '<segment id="C"/></message>'
    )
    result = convert_message_structure(root, keep_defaults=False)
    assert len(result.structure) == 2
    group, sibling = result.structure
    assert len(group.children) == 2
    assert sibling.children == ()
    assert "children" not in sibling.to_dict()


def test_segments_never_recurse_in_message_structure():
    root = _root('<message><segment id="A"><data_element id="1"/></segment></message>')
    (segment,) = convert_message_structure(root, keep_defaults=False).structure
    assert segment == TreeNode("segment", {"id": "A"})


def test_nested_groups_and_nested_defaults():
    root = _root(
        '<message><group id="G1"><defaults minOccur="5"/><segment id="A"/>'
        '<group id="G2"><segment id="B"/></group></group></message>'
    )
    result = convert_message_structure(root, keep_defaults=True)
    assert result.defaults is None
    (outer,) = result.structure
    assert [child.type for child in outer.children] == ["segment", "group"]
    assert outer.children[1].children[0].attributes == {"id": "B"}


def test_attributes_key_always_present():
    result = convert_message_structure(_root("<m><segment/></m>"), keep_defaults=False)
    assert result.to_dict()["structure"] == [{"type": "segment", "attributes": {}}]


def test_first_defaults_block_wins():
    root = _root('<m><defaults a="1"/><defaults a="2"/><segment id="X"/></m>')
    assert convert_message_structure(root, keep_defaults=True).defaults == {"a": "1"}


def test_comments_and_namespaces_ignored():
    root = _root(
        '<m xmlns="urn:edi"><!-- c --><?pi x?><segment id="A"/></m>'
    )
    result = convert_message_structure(root, keep_defaults=False)
    assert result.structure == (TreeNode("segment", {"id": "A"}),)


def test_empty_root():
    assert convert_message_structure(_root("<m/>"), keep_defaults=True) == StructureDocument()


def test_segment_definition_recurses_unconditionally():
    root = _root(
        '<segments><defaults x="1"/><segment id="BGM">'
        '<composite_data_element id="C002"><data_element id="1001"/></composite_data_element>'
        '<data_element id="1004"/></segment></segments>'
    )
    (segment,) = convert_segment_definition(root)
    assert segment.type == "segment"
    composite, simple = segment.children
    assert composite.children == (TreeNode("data_element", {"id": "1001"}),)
    assert simple.children == ()


def test_recursion_policies_differ():
    root = _root('<m><segment id="A"><data_element id="1"/></segment></m>')
    as_structure = convert_message_structure(root, keep_defaults=False).structure
    as_definition = convert_segment_definition(root)
    assert as_structure[0].children == ()
    assert len(as_definition[0].children) == 1


def test_segment_definition_skips_nested_defaults():
    root = _root('<s><segment id="A"><defaults y="2"/><data_element id="1"/></segment></s>')
    (segment,) = convert_segment_definition(root)
    assert [child.type for child in segment.children] == ["data_element"]


SEGMENTS = (
    '<segments>'
    '<segment id="BGM" name="Beginning">'
    '<composite_data_element id="C002"><data_element id="1001">'
    '<deeper id="x"/></data_element></composite_data_element>'
    '<data_element id="1004"><deeper id="y"/></data_element>'
    '</segment>'
    '<segment id="DUP" n="1"/><segment id="DUP" n="2"/>'
    '</segments>'
)


def test_lookup_segment_definition():
    node = lookup_segment_definition(_root(SEGMENTS), "BGM")
    assert node.to_dict() == {
        "type": "segment",
        "attributes": {"id": "BGM", "name": "Beginning"},
        "children": [
            {"type": "composite_data_element", "attributes": {"id": "C002"},
             "children": [{"type": "data_element", "attributes": {"id": "1001"}}]},
            {"type": "data_element", "attributes": {"id": "1004"}},
        ],
    }


def test_lookup_segment_not_found_returns_none():
    assert lookup_segment_definition(_root(SEGMENTS), "XXX") is None


def test_lookup_segment_is_exact_match():
    assert lookup_segment_definition(_root(SEGMENTS), "bgm") is None


def test_lookup_segment_duplicate_ids_take_first():
    node = lookup_segment_definition(_root(SEGMENTS), "DUP")
    assert node.attributes == {"id": "DUP", "n": "1"}


def test_lookup_code_definition():
    root = _root(
        '<codes><data_element id="1001" desc="Doc"><value id="220" desc="Order"/>'
        '<value id="380"/></data_element></codes>'
    )
    definition = lookup_code_definition(root, "1001")
    assert definition == CodeDefinition(
        {"id": "1001", "desc": "Doc"},
        ({"id": "220", "desc": "Order"}, {"id": "380"}),
    )
    assert lookup_code_definition(root, "9999") is None


def test_code_table_example():
    root = _root('<codes><data_element id="1001"><value id="A" desc="Alpha"/></data_element></codes>')
    assert convert_code_table(root) == {"1001": {"A": "Alpha"}}


def test_code_table_skips_missing_ids():
    root = _root(
        '<codes><data_element><value id="Z" desc="z"/></data_element>'
        '<data_element id="1"><value desc="no id"/><value id="B"/></data_element></codes>'
    )
    assert convert_code_table(root) == {"1": {"B": ""}}


@pytest.mark.parametrize("document", ["<codes/>", "<codes><!-- none --></codes>"])
def test_code_table_empty(document):
    assert convert_code_table(_root(document)) == {}


def test_code_table_repeated_list_id_keeps_first_element():
    root = _root(
        '<codes><data_element id="1"><value id="A" desc="a"/></data_element>'
        '<data_element id="1"><value id="B" desc="b"/></data_element></codes>'
    )
    table = convert_code_table(root)
    assert table == {"1": {"A": "a"}}
    definition = lookup_code_definition(root, "1")
    assert {code["id"]: code["desc"] for code in definition.codes} == table["1"]


def test_tree_node_attributes_are_read_only():
    (node,) = convert_segment_definition(_root('<s><segment id="UNH"/></s>'))
    with pytest.raises(TypeError):
        node.attributes["id"] = "UNT"
    with pytest.raises(TypeError):
        hash(node)
    assert node.attributes == {"id": "UNH"}


def test_tree_node_copies_caller_dict():
    attributes = {"id": "A"}
    node = TreeNode("segment", attributes)
    attributes["id"] = "B"
    assert node.attributes["id"] == "A"


def test_has_children_drives_to_dict():
    leaf = TreeNode("segment", {"id": "A"})
    group = TreeNode("group", {"id": "G"}, (leaf,))
    assert not leaf.has_children()
    assert group.has_children()
    assert "children" not in leaf.to_dict()
    assert group.to_dict()["children"] == [leaf.to_dict()]
