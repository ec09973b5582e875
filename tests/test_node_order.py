"""Tests for canonical child ordering and member sorting."""

import xml.etree.ElementTree as ET

from docsync.node_order import MEMBER_NODE_ORDER, compare_members, reorder_nodes, sort_type_members


def _member(xml: str) -> ET.Element:
    return ET.fromstring(xml)


def test_reorder_nodes_puts_known_tags_first() -> None:
    """Verify listed tags come first in order and unknown tags keep their order."""
    node = ET.fromstring("<Member><Docs /><Custom /><MemberType /><MemberSignature /><Extra /></Member>")
    reorder_nodes(node, MEMBER_NODE_ORDER)
    assert [c.tag for c in node] == ["MemberSignature", "MemberType", "Docs", "Custom", "Extra"]


def test_compare_members_by_name_then_kind() -> None:
    """Verify names and kinds drive the ordering."""
    method = _member('<Member MemberName="A"><MemberType>Method</MemberType></Member>')
    prop = _member('<Member MemberName="A"><MemberType>Property</MemberType></Member>')
    other = _member('<Member MemberName="B"><MemberType>Field</MemberType></Member>')

    assert compare_members(method, prop) < 0
    assert compare_members(other, method) > 0


def test_compare_members_by_parameters_and_return() -> None:
    """Verify overloads sort by parameter count, then types, then return type."""
    one = _member(
        '<Member MemberName="M"><MemberType>Method</MemberType>'
        '<Parameters><Parameter Name="a" Type="System.Int32" /></Parameters></Member>'
    )
    other = _member(
        '<Member MemberName="M"><MemberType>Method</MemberType>'
        '<Parameters><Parameter Name="a" Type="System.String" /></Parameters></Member>'
    )
    none = _member('<Member MemberName="M"><MemberType>Method</MemberType><Parameters /></Member>')
    op_a = _member(
        '<Member MemberName="op_Explicit"><MemberType>Method</MemberType>'
        "<ReturnValue><ReturnType>System.Int32</ReturnType></ReturnValue></Member>"
    )
    op_b = _member(
        '<Member MemberName="op_Explicit"><MemberType>Method</MemberType>'
        "<ReturnValue><ReturnType>System.Int64</ReturnType></ReturnValue></Member>"
    )

    assert compare_members(none, one) < 0
    assert compare_members(one, other) < 0
    assert compare_members(op_b, op_a) > 0


def test_generic_methods_sort_by_base_name_and_arity() -> None:
    """Verify generic methods group by base name before type-parameter names."""
    members = ET.fromstring(
        "<Members>"
        '<Member MemberName="Go&lt;T,U&gt;"><MemberType>Method</MemberType>'
        '<TypeParameters><TypeParameter Name="T" /><TypeParameter Name="U" /></TypeParameters></Member>'
        '<Member MemberName="Go&lt;T&gt;"><MemberType>Method</MemberType>'
        '<TypeParameters><TypeParameter Name="T" /></TypeParameters></Member>'
        "<Extra />"
        "</Members>"
    )

    sort_type_members(members)

    assert [c.get("MemberName") for c in members] == ["Go<T>", "Go<T,U>", None]
