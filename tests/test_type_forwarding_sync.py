"""Tests for the TypeForwardingChain."""

import xml.etree.ElementTree as ET

from docsync.type_forwarding_sync import collect_forwards, sync_type_forwarding_chain
from docsync.type_model import TypeForward
from tests.builders import frameworks_for, type_decl

TO_CORE = TypeForward("Lib", "1.0.0.0", "Core", "2.0.0.0")
OUTER = TypeForward("Outer", "1.0.0.0", "Core", "2.0.0.0")


def test_forwards_include_enclosing_types() -> None:
    """Verify nested types inherit the forwards of their declaring types."""
    outer = type_decl("N.Outer", forwards=(OUTER,))
    nested = type_decl("N.Outer.Inner", forwards=(TO_CORE,), declaring_type=outer)

    assert collect_forwards(nested) == [TO_CORE, OUTER]


def test_forward_in_every_framework_is_elided() -> None:
    """Verify a hop seen by every framework carries no FrameworkAlternate."""
    index = frameworks_for("net6", "net8")
    root = ET.Element("Type")
    decl = type_decl(forwards=(TO_CORE,))

    sync_type_forwarding_chain(root, decl, index.start_type("net6", "N.T"))
    sync_type_forwarding_chain(root, decl, index.start_type("net8", "N.T"))

    (node,) = root.findall("TypeForwardingChain/TypeForwarding")
    assert node.attrib == {"From": "Lib", "FromVersion": "1.0.0.0", "To": "Core", "ToVersion": "2.0.0.0"}


def test_forward_in_one_framework_is_tagged() -> None:
    """Verify a hop seen by one framework only records that framework."""
    index = frameworks_for("net6", "net8")
    root = ET.fromstring('<Type><TypeForwardingChain><TypeForwarding From="Stale" /></TypeForwardingChain></Type>')

    sync_type_forwarding_chain(root, type_decl(forwards=(TO_CORE,)), index.start_type("net6", "N.T"))
    sync_type_forwarding_chain(root, type_decl(), index.start_type("net8", "N.T"))

    (node,) = root.findall("TypeForwardingChain/TypeForwarding")
    assert node.get("From") == "Lib"
    assert node.get("FrameworkAlternate") == "net6"
