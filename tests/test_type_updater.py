"""Tests for TypeUpdater."""

import xml.etree.ElementTree as ET

from docsync.framework_index import FrameworkIndex
from docsync.sync_options import SyncOptions
from docsync.type_document import TypeDocument
from docsync.type_model import TypeDecl
from docsync.type_updater import TypeUpdater
from tests.builders import LANGUAGES, formatters, frameworks_for, method, params, type_decl


def _update(root: ET.Element, decl: TypeDecl, index: FrameworkIndex, framework: str) -> None:
    TypeUpdater(formatters(), SyncOptions(), LANGUAGES).update_type(
        root, decl, index.start_type(framework, decl.full_name)
    )


def test_type_header_is_written() -> None:
    """Verify signatures, AssemblyInfo and Docs are created for a new type."""
    index = frameworks_for("net6")
    root = TypeDocument.new("T", "N.T").root

    _update(root, type_decl(), index, "net6")

    assert [s.get("Language") for s in root.findall("TypeSignature")] == list(LANGUAGES)
    assert root.findtext("AssemblyInfo/AssemblyName") == "Lib"
    assert root.findtext("AssemblyInfo/AssemblyVersion") == "1.0.0.0"
    assert root.findtext("Base/BaseTypeName") == "System.Object"
    assert root.findtext("Docs/summary") == "To be added."
    assert root.find("Members") is not None


def test_differing_base_type_becomes_alternate() -> None:
    """Verify the first base stays unmarked and a later one is tagged."""
    index = frameworks_for("net6", "net8")
    root = TypeDocument.new("T", "N.T").root

    _update(root, type_decl(), index, "net6")
    _update(root, type_decl(base_type="N.Base"), index, "net8")

    shape = [(b.text, b.get("FrameworkAlternate")) for b in root.findall("Base/BaseTypeName")]
    assert shape == [("System.Object", None), ("N.Base", "net8")]


def test_interfaces_track_frameworks() -> None:
    """Verify interfaces implemented everywhere are unmarked."""
    index = frameworks_for("net6", "net8")
    root = TypeDocument.new("T", "N.T").root

    _update(root, type_decl(interfaces=("N.IFoo",)), index, "net6")
    _update(root, type_decl(interfaces=("N.IFoo", "N.IBar")), index, "net8")

    shape = [(i.findtext("InterfaceName"), i.get("FrameworkAlternate")) for i in root.findall("Interfaces/Interface")]
    assert shape == [("N.IFoo", None), ("N.IBar", "net8")]


def test_delegate_documents_invoke_signature() -> None:
    """Verify delegates get parameters, a return value and no Members."""
    invoke = method("Invoke", params(("value", "System.Int32")), "System.Boolean", owner="N.Handler")
    decl = type_decl(
        "N.Handler",
        kind="Delegate",
        base_type="System.MulticastDelegate",
        invoke=invoke,
    )
    index = frameworks_for("net6", type_name="N.Handler")
    root = TypeDocument.new("Handler", "N.Handler").root

    _update(root, decl, index, "net6")

    assert root.findtext("Base/BaseTypeName") == "System.Delegate"
    assert [p.get("Name") for p in root.findall("Parameters/Parameter")] == ["value"]
    assert root.findtext("ReturnValue/ReturnType") == "System.Boolean"
    assert [p.get("name") for p in root.findall("Docs/param")] == ["value"]
    assert root.findtext("Docs/returns") == "To be added."
    assert root.find("Members") is None
    assert root.find("Interfaces") is None
