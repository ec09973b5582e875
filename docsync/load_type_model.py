"""Logic for loading framework snapshots from YAML into type declarations."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from docsync.errors import DataInconsistencyError
from docsync.type_model import (
    AttributeDecl,
    ConstraintDecl,
    ConstructorDecl,
    EventDecl,
    FieldDecl,
    GenericParameterDecl,
    InterfaceMemberRef,
    MemberDecl,
    MethodDecl,
    ParameterDecl,
    PropertyDecl,
    TypeDecl,
    TypeForward,
)


def _attributes(raw: list[Any] | None) -> tuple[AttributeDecl, ...]:
    # a bare string is the C# rendering
    return tuple(
        AttributeDecl({"C#": a}) if isinstance(a, str) else AttributeDecl(dict(a))
        for a in raw or ()
    )


def _parameters(raw: list[dict[str, Any]] | None) -> tuple[ParameterDecl, ...]:
    return tuple(
        ParameterDecl(
            name=p["name"],
            type=p["type"],
            ref_kind=p.get("ref_kind", ""),
            attributes=_attributes(p.get("attributes")),
        )
        for p in raw or ()
    )


def _type_parameters(raw: list[dict[str, Any]] | None) -> tuple[GenericParameterDecl, ...]:
    return tuple(
        GenericParameterDecl(
            name=t["name"],
            constraints=tuple(
                ConstraintDecl(c["type"], bool(c.get("interface", False)))
                for c in t.get("constraints") or ()
            ),
            flags=tuple(t.get("flags") or ()),
            attributes=_attributes(t.get("attributes")),
        )
        for t in raw or ()
    )


def _common(raw: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": raw["name"],
        "ids": dict(raw.get("ids") or {}),
        "usage": dict(raw.get("usage") or {}),
        "attributes": _attributes(raw.get("attributes")),
        "explicit_interface": raw.get("explicit_interface"),
        "explicit_interface_is_public": bool(raw.get("explicit_interface_is_public", True)),
    }


def _method(raw: dict[str, Any]) -> MethodDecl:
    return MethodDecl(
        **_common(raw),
        parameters=_parameters(raw.get("parameters")),
        return_type=raw.get("return_type", "System.Void"),
        return_ref_kind=raw.get("return_ref_kind", ""),
        return_attributes=_attributes(raw.get("return_attributes")),
        type_parameters=_type_parameters(raw.get("type_parameters")),
        is_extension=bool(raw.get("is_extension", False)),
    )


MEMBER_LOADERS: dict[str, Callable[[dict[str, Any]], MemberDecl]] = {
    "Constructor": lambda raw: ConstructorDecl(**_common(raw), parameters=_parameters(raw.get("parameters"))),
    "Method": _method,
    "Property": lambda raw: PropertyDecl(
        **_common(raw),
        type=raw.get("type", "System.Object"),
        parameters=_parameters(raw.get("parameters")),
    ),
    "Field": lambda raw: FieldDecl(
        **_common(raw),
        type=raw.get("type", "System.Object"),
        const_value=raw.get("const_value"),
    ),
    "Event": lambda raw: EventDecl(**_common(raw), type=raw.get("type", "System.EventHandler")),
}


def load_member(raw: dict[str, Any]) -> MemberDecl:
    """Build one member declaration from its ``kind``-tagged mapping."""
    kind = raw.get("kind")
    loader = MEMBER_LOADERS.get(kind or "")
    if loader is None:
        msg = f"Unknown member kind '{kind}' for member '{raw.get('name')}'"
        raise DataInconsistencyError(msg)
    return loader(raw)


def _interface_map(raw: dict[str, Any] | None) -> dict[str, tuple[InterfaceMemberRef, ...]]:
    return {
        key: tuple(
            InterfaceMemberRef(r["interface"], r["member_id"], bool(r.get("interface_is_public", True)))
            for r in refs or ()
        )
        for key, refs in (raw or {}).items()
    }


def load_types(raw_types: list[dict[str, Any]]) -> list[TypeDecl]:
    """Build type declarations, resolving ``declaring_type`` by full name."""
    by_name = {t["full_name"]: t for t in raw_types}
    built: dict[str, TypeDecl] = {}

    def build(full_name: str, chain: tuple[str, ...] = ()) -> TypeDecl:
        if full_name in built:
            return built[full_name]
        if full_name in chain:
            msg = f"Declaring type cycle at '{full_name}'"
            raise DataInconsistencyError(msg)
        raw = by_name.get(full_name)
        if raw is None:
            msg = f"Declaring type '{full_name}' is not part of the snapshot"
            raise DataInconsistencyError(msg)

        declaring = raw.get("declaring_type")
        assembly = raw.get("assembly") or {}
        invoke = raw.get("invoke")
        decl = TypeDecl(
            full_name=full_name,
            name=raw.get("name", full_name.rsplit(".", 1)[-1]),
            namespace=raw.get("namespace", ""),
            kind=raw.get("kind", "Class"),
            assembly_name=assembly.get("name", ""),
            assembly_version=str(assembly.get("version", "0.0.0.0")),
            assembly_culture=assembly.get("culture", ""),
            base_type=raw.get("base_type"),
            base_type_arguments=tuple((a["name"], a["value"]) for a in raw.get("base_type_arguments") or ()),
            interfaces=tuple(raw.get("interfaces") or ()),
            type_parameters=_type_parameters(raw.get("type_parameters")),
            attributes=_attributes(raw.get("attributes")),
            members=tuple(load_member(m) for m in raw.get("members") or ()),
            ids=dict(raw.get("ids") or {}),
            usage=dict(raw.get("usage") or {}),
            forwards=tuple(
                TypeForward(f["from_assembly"], str(f["from_version"]), f["to_assembly"], str(f["to_version"]))
                for f in raw.get("forwards") or ()
            ),
            declaring_type=build(declaring, (*chain, full_name)) if declaring else None,
            interface_map=_interface_map(raw.get("interface_map")),
            invoke=_method({"name": "Invoke", **invoke}) if invoke else None,
        )
        built[full_name] = decl
        return decl

    return [build(t["full_name"]) for t in raw_types]


def load_snapshot(path: Path) -> tuple[str, list[TypeDecl]]:
    """Load one framework snapshot file.

    The file holds a ``framework`` name and a ``types`` list; the framework
    defaults to the file stem.
    """
    doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    framework = str(doc.get("framework") or path.stem)
    return framework, load_types(doc.get("types") or [])
