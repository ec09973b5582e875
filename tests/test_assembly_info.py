"""Tests for AssemblyInfo maintenance."""

import xml.etree.ElementTree as ET

from docsync.assembly_info import (
    find_or_add_assembly_info,
    remove_invalid_assembly_info,
    update_assembly_culture,
    update_assembly_versions,
    version_key,
)
from docsync.deletion_policy import RunKind


def _versions(node: ET.Element) -> list[str | None]:
    return [v.text for v in node.findall("AssemblyInfo/AssemblyVersion")]


def test_versions_are_added_sorted() -> None:
    """Verify versions are kept in numeric order, not string order."""
    member = ET.Element("Member")
    for version in ("10.0.0.0", "2.0.0.0", "9.1.0.0"):
        update_assembly_versions(member, "Lib", version, add=True, run_kind=RunKind.NORMAL)

    assert _versions(member) == ["2.0.0.0", "9.1.0.0", "10.0.0.0"]
    assert member.findtext("AssemblyInfo/AssemblyName") == "Lib"
    assert version_key("1.10") > version_key("1.9")


def test_retracting_last_version_removes_info() -> None:
    """Verify an AssemblyInfo left without versions disappears."""
    member = ET.Element("Member")
    update_assembly_versions(member, "Lib", "1.0.0.0", add=True, run_kind=RunKind.NORMAL)

    remaining = update_assembly_versions(member, "Lib", "1.0.0.0", add=False, run_kind=RunKind.NORMAL)

    assert not remaining
    assert member.find("AssemblyInfo") is None


def test_culture_stays_after_versions() -> None:
    """Verify re-sorting versions keeps AssemblyCulture in place."""
    root = ET.Element("Type")
    info = find_or_add_assembly_info(root, "Lib", RunKind.NORMAL)
    update_assembly_versions(root, "Lib", "2.0.0.0", add=True, run_kind=RunKind.NORMAL)
    update_assembly_culture(info, "en-US")

    update_assembly_versions(root, "Lib", "1.0.0.0", add=True, run_kind=RunKind.NORMAL)

    assert [c.tag for c in info] == ["AssemblyName", "AssemblyVersion", "AssemblyVersion", "AssemblyCulture"]
    update_assembly_culture(info, "")
    assert info.find("AssemblyCulture") is None


def test_remove_invalid_assembly_info() -> None:
    """Verify AssemblyInfo without versions is dropped unless versions are disabled."""
    root = ET.fromstring(
        "<Member><AssemblyInfo><AssemblyName>Old</AssemblyName></AssemblyInfo>"
        "<AssemblyInfo><AssemblyName>Lib</AssemblyName><AssemblyVersion>1.0</AssemblyVersion></AssemblyInfo>"
        "</Member>"
    )

    assert remove_invalid_assembly_info(root, no_assembly_versions=True) == 0
    assert remove_invalid_assembly_info(root, no_assembly_versions=False) == 1
    assert [i.findtext("AssemblyName") for i in root.findall("AssemblyInfo")] == ["Lib"]


def test_unified_run_marks_both_styles() -> None:
    """Verify a unified run adds its own AssemblyInfo and marks the classic one."""
    member = ET.fromstring(
        "<Member><AssemblyInfo><AssemblyName>Lib</AssemblyName>"
        "<AssemblyVersion>1.0</AssemblyVersion></AssemblyInfo></Member>"
    )

    update_assembly_versions(member, "Lib", "2.0", add=True, run_kind=RunKind.UNIFIED)

    infos = member.findall("AssemblyInfo")
    assert [i.get("apistyle") for i in infos] == ["classic", "unified"]
    assert [i.findtext("AssemblyVersion") for i in infos] == ["1.0", "2.0"]
    assert "apistyle" not in member.attrib
