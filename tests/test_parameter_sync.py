"""Tests for positional parameter and generic parameter synchronization."""

import xml.etree.ElementTree as ET

from docsync.framework_index import FrameworkIndex
from docsync.parameter_sync import sync_parameters, sync_type_parameters
from docsync.type_model import AttributeDecl, ConstraintDecl, GenericParameterDecl, ParameterDecl
from tests.builders import frameworks_for, params


def _sync(
    index: FrameworkIndex,
    root: ET.Element,
    framework: str,
    parameters: tuple[ParameterDecl, ...],
    *,
    first: bool,
    last: bool,
) -> bool:
    entry = index.start_type(framework, "N.T")
    return sync_parameters(root, parameters, entry, is_first=first, is_last=last, universe=entry.universe())


def _shape(root: ET.Element) -> list[tuple[str | None, str | None, str | None]]:
    return [
        (p.get("Name"), p.get("Index"), p.get("FrameworkAlternate")) for p in root.findall("Parameters/Parameter")
    ]


def test_same_parameters_everywhere_have_no_markers() -> None:
    """Verify parameters shared by all frameworks carry neither Index nor frameworks."""
    index = frameworks_for("net6", "net8")
    member = ET.Element("Member")
    shared = params(("a", "System.Int32"), ("b", "System.String"))

    assert not _sync(index, member, "net6", shared, first=True, last=False)
    assert not _sync(index, member, "net8", shared, first=False, last=True)

    assert _shape(member) == [("a", None, None), ("b", None, None)]


def test_parameter_missing_from_later_framework_is_tagged() -> None:
    """Verify a trailing parameter only in the first framework keeps that framework."""
    index = frameworks_for("net6", "net8")
    member = ET.Element("Member")

    _sync(index, member, "net6", params(("a", "System.Int32"), ("b", "System.Int32")), first=True, last=False)
    _sync(index, member, "net8", params(("a", "System.Int32")), first=False, last=True)

    assert _shape(member) == [("a", "0", None), ("b", "1", "net6")]


def test_renamed_parameter_creates_alternate() -> None:
    """Verify a different parameter at an occupied position is inserted as a sibling."""
    index = frameworks_for("net6", "net8")
    member = ET.Element("Member")

    _sync(index, member, "net6", params(("a", "System.Int32")), first=True, last=False)
    triggered = _sync(index, member, "net8", params(("b", "System.Int32")), first=False, last=True)

    assert triggered
    assert _shape(member) == [("a", "0", "net6"), ("b", "0", "net8")]


def test_unmarked_occupant_gets_previous_frameworks() -> None:
    """Verify an occupant without frameworks is pinned to those processed before."""
    index = frameworks_for("net6", "net7", "net8")
    member = ET.fromstring('<Member><Parameters><Parameter Name="a" Type="System.Int32" /></Parameters></Member>')

    _sync(index, member, "net8", params(("b", "System.Int32")), first=False, last=True)

    assert _shape(member) == [("a", "0", "net6;net7"), ("b", "0", "net8")]


def test_node_losing_last_framework_is_removed() -> None:
    """Verify an untouched parameter left without frameworks disappears."""
    index = frameworks_for("net6", "net8")
    member = ET.fromstring(
        "<Member><Parameters>"
        '<Parameter Name="a" Type="System.Int32" Index="0" FrameworkAlternate="net6" />'
        '<Parameter Name="old" Type="System.Int32" Index="1" FrameworkAlternate="net8" />'
        "</Parameters></Member>"
    )

    _sync(index, member, "net8", params(("a", "System.Int32")), first=False, last=True)

    assert _shape(member) == [("a", None, None)]


def test_ref_kind_and_attributes_are_written() -> None:
    """Verify RefType and parameter attributes land on the node."""
    index = frameworks_for("net6")
    member = ET.Element("Member")
    parameter = ParameterDecl("x", "System.Int32&", "out", (AttributeDecl({"C#": "[NotNull]"}),))

    _sync(index, member, "net6", (parameter,), first=True, last=True)

    node = member.find("Parameters/Parameter")
    assert node is not None
    assert node.get("RefType") == "out"
    assert node.findtext("Attributes/Attribute/AttributeName") == "[NotNull]"


def test_type_parameters_with_constraints() -> None:
    """Verify generic parameters are matched by name and stale ones dropped on first pass."""
    entry = frameworks_for("net6").start_type("net6", "N.T")
    root = ET.fromstring('<Type><TypeParameters><TypeParameter Name="Old" /></TypeParameters></Type>')
    generic = GenericParameterDecl(
        "T",
        (ConstraintDecl("System.IComparable", is_interface=True), ConstraintDecl("N.Base")),
        ("DefaultConstructorConstraint",),
    )

    sync_type_parameters(root, [generic], entry, is_first=True)

    (node,) = root.findall("TypeParameters/TypeParameter")
    assert node.get("Name") == "T"
    assert [(c.tag, c.text) for c in node.find("Constraints")] == [
        ("ParameterAttribute", "DefaultConstructorConstraint"),
        ("InterfaceName", "System.IComparable"),
        ("BaseTypeName", "N.Base"),
    ]

    sync_type_parameters(root, [], entry, is_first=True)
    assert root.find("TypeParameters") is None
