"""Small declaration builders shared by the tests."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from typing import Any

from docsync.formatter_set import FormatterSet
from docsync.framework_index import FrameworkIndex
from docsync.index_document import IndexDocument
from docsync.reconciler import Reconciler, ReconcileResult
from docsync.sync_options import SyncOptions
from docsync.type_document import TypeDocument
from docsync.type_model import MethodDecl, ParameterDecl, PropertyDecl, TypeDecl

LANGUAGES = ("C#", "ILAsm", "DocId")


def formatters() -> FormatterSet:
    """Formatters reading the pre-rendered ids of the builders below."""
    return FormatterSet.declared(LANGUAGES)


def params(*pairs: tuple[str, str]) -> tuple[ParameterDecl, ...]:
    """Build parameters from (name, type) pairs."""
    return tuple(ParameterDecl(name, type_) for name, type_ in pairs)


def method(
    name: str,
    parameters: Sequence[ParameterDecl] = (),
    return_type: str = "System.Void",
    *,
    owner: str = "N.T",
    **kwargs: Any,
) -> MethodDecl:
    """A public method whose signatures are derived from its shape."""
    types = ",".join(p.type for p in parameters)
    cs_args = ", ".join(f"{p.type} {p.name}" for p in parameters)
    il_args = ", ".join(f"{p.type} {p.name}" for p in parameters)
    ids = {
        "C#": f"public {return_type} {name} ({cs_args});",
        "ILAsm": f".method public hidebysig instance {return_type} {name}({il_args}) cil managed",
        "DocId": f"M:{owner}.{name}({types})" if parameters else f"M:{owner}.{name}",
    }
    return MethodDecl(name=name, ids=ids, parameters=tuple(parameters), return_type=return_type, **kwargs)


def prop(name: str, type_: str = "System.Int32", *, owner: str = "N.T") -> PropertyDecl:
    """A public read/write property."""
    ids = {
        "C#": f"public {type_} {name} {{ get; set; }}",
        "ILAsm": f".property instance {type_} {name}",
        "DocId": f"P:{owner}.{name}",
    }
    return PropertyDecl(name=name, ids=ids, type=type_)


def type_decl(full_name: str = "N.T", members: Sequence[Any] = (), **kwargs: Any) -> TypeDecl:
    """A public class in assembly ``Lib``."""
    namespace, _, name = full_name.rpartition(".")
    values: dict[str, Any] = {
        "full_name": full_name,
        "name": name,
        "namespace": namespace,
        "kind": "Class",
        "assembly_name": "Lib",
        "assembly_version": "1.0.0.0",
        "base_type": "System.Object",
        "ids": {
            "C#": f"public class {name}",
            "ILAsm": f".class public auto ansi {full_name}",
            "DocId": f"T:{full_name}",
        },
        "members": tuple(members),
    }
    values.update(kwargs)
    return TypeDecl(**values)


def sync(
    document: TypeDocument,
    snapshots: Sequence[tuple[str, Sequence[TypeDecl]]],
    options: SyncOptions | None = None,
    index: IndexDocument | None = None,
) -> ReconcileResult:
    """Reconcile ``document`` against every snapshot in order and sum the deltas."""
    formatter_set = formatters()
    frameworks = FrameworkIndex.from_snapshots(snapshots, formatter_set)
    reconciler = Reconciler(formatter_set, options or SyncOptions(), LANGUAGES, index)
    total = ReconcileResult()
    for framework, types in snapshots:
        for decl in types:
            if decl.full_name != document.full_name:
                continue
            entry = frameworks.start_type(framework, decl.full_name)
            result = reconciler.reconcile(document, decl, entry)
            total.added += result.added
            total.removed += result.removed
            total.unchanged += result.unchanged
    return total


def member_xml(name: str, ilasm: str, summary: str = "To be added.", *, docid: str | None = None) -> str:
    """Serialized Member node with one fingerprint signature and a summary."""
    docid_sig = f'<MemberSignature Language="DocId" Value="{docid}" />' if docid else ""
    return (
        f'<Member MemberName="{name}">'
        f'<MemberSignature Language="ILAsm" Value="{ilasm}" />{docid_sig}'
        "<MemberType>Method</MemberType>"
        f"<Docs><summary>{summary}</summary><remarks>To be added.</remarks></Docs>"
        "</Member>"
    )


def document_with(*members: str, full_name: str = "N.T") -> TypeDocument:
    """A Type document holding the given serialized Member nodes."""
    name = full_name.rpartition(".")[2]
    return TypeDocument.from_string(
        f'<Type Name="{name}" FullName="{full_name}"><Members>{"".join(members)}</Members></Type>'
    )


def signatures(node: ET.Element, language: str, tag: str = "MemberSignature") -> list[ET.Element]:
    """Signature elements of ``language`` below ``node``."""
    return [s for s in node.findall(tag) if s.get("Language") == language]


def frameworks_for(*names: str, type_name: str = "N.T", members: Sequence[str] = ()) -> FrameworkIndex:
    """An index where every framework in ``names`` contains ``type_name``."""
    index = FrameworkIndex()
    for name in names:
        index.add_framework(name)
        index.add_type(name, type_name, members)
    return index
