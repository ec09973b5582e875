"""Tests for custom attribute lists."""

import xml.etree.ElementTree as ET

from docsync.attribute_sync import sync_attributes
from docsync.type_model import AttributeDecl
from tests.builders import frameworks_for

OBSOLETE = AttributeDecl({"C#": "[System.Obsolete]", "F#": "[<System.Obsolete>]"})
FLAGS = AttributeDecl({"C#": "[System.Flags]"})


def test_attributes_written_with_all_languages() -> None:
    """Verify each attribute lists its primary rendering first."""
    root = ET.Element("Type")

    sync_attributes(root, [OBSOLETE], None, is_first=True, languages=["F#"])

    names = root.findall("Attributes/Attribute/AttributeName")
    assert [(n.get("Language"), n.text) for n in names] == [
        ("C#", "[System.Obsolete]"),
        ("F#", "[<System.Obsolete>]"),
    ]


def test_later_passes_only_add() -> None:
    """Verify attributes accumulate across frameworks without duplicates."""
    index = frameworks_for("net6", "net8")
    root = ET.Element("Type")

    sync_attributes(root, [OBSOLETE], index.start_type("net6", "N.T"), is_first=True)
    sync_attributes(root, [OBSOLETE, FLAGS], index.start_type("net8", "N.T"), is_first=False)

    assert [a.findtext("AttributeName") for a in root.findall("Attributes/Attribute")] == [
        "[System.Obsolete]",
        "[System.Flags]",
    ]


def test_first_pass_clears_and_empty_container_is_removed() -> None:
    """Verify stale attributes vanish and no empty Attributes element is left."""
    root = ET.fromstring("<Type><Attributes><Attribute><AttributeName>[Old]</AttributeName></Attribute></Attributes></Type>")

    sync_attributes(root, [], None, is_first=True)

    assert root.find("Attributes") is None


def test_reentry_does_not_clear() -> None:
    """Verify a second visit in the same framework keeps earlier attributes."""
    index = frameworks_for("net6")
    root = ET.Element("Type")
    sync_attributes(root, [OBSOLETE], index.start_type("net6", "N.T"), is_first=True)

    sync_attributes(root, [FLAGS], index.start_type("net6", "N.T"), is_first=True)

    assert len(root.findall("Attributes/Attribute")) == 2


def test_parent_left_without_children_becomes_empty() -> None:
    """Verify dropping the last Attributes child leaves a self-closing parent."""
    root = ET.fromstring(
        '<Parameter Name="x">\n  <Attributes>\n    <Attribute><AttributeName>[Old]</AttributeName></Attribute>\n'
        "  </Attributes>\n</Parameter>"
    )

    sync_attributes(root, [], None, is_first=True)

    assert ET.tostring(root, encoding="unicode") == '<Parameter Name="x" />'


def test_parent_with_other_children_is_untouched() -> None:
    """Verify a parent that still has children keeps its layout."""
    root = ET.fromstring("<Member>\n  <Attributes />\n  <Docs />\n</Member>")

    sync_attributes(root, [], None, is_first=True)

    assert [c.tag for c in root] == ["Docs"]
    assert root.text == "\n  "
