"""Tests for ReturnValue variants."""

import xml.etree.ElementTree as ET

from docsync.return_value_sync import sync_return_value
from tests.builders import frameworks_for


def test_return_type_variants_per_framework() -> None:
    """Verify differing return types are kept per framework."""
    index = frameworks_for("net6", "net8")
    member = ET.Element("Member")
    net6 = index.start_type("net6", "N.T")
    net8 = index.start_type("net8", "N.T")

    sync_return_value(member, "System.Int32", net6, is_first=True, is_last=False, universe=net6.universe())
    sync_return_value(member, "System.Int64", net8, is_first=False, is_last=True, universe=net8.universe())

    shape = [(r.text, r.get("FrameworkAlternate")) for r in member.findall("ReturnValue/ReturnType")]
    assert shape == [("System.Int32", "net6"), ("System.Int64", "net8")]


def test_readonly_ref_return() -> None:
    """Verify ref-readonly returns drop the by-ref marker and record RefType."""
    entry = frameworks_for("net6").start_type("net6", "N.T")
    member = ET.Element("Member")

    sync_return_value(
        member, "System.Int32&", entry, is_first=True, is_last=True, universe=entry.universe(), ref_kind="readonly"
    )

    container = member.find("ReturnValue")
    assert container is not None
    assert container.get("RefType") == "Readonly"
    assert [r.text for r in container.findall("ReturnType")] == ["System.Int32"]
    assert "FrameworkAlternate" not in container.find("ReturnType").attrib
