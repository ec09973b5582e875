"""Positional synchronization of Parameter and TypeParameter nodes."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence

from docsync.attribute_sync import sync_attributes
from docsync.framework_index import TypeEntry
from docsync.framework_set import FrameworkSet
from docsync.type_model import GenericParameterDecl, ParameterDecl
from docsync.variant_tracker import (
    FRAMEWORK_ALTERNATE,
    add_framework_to_element,
    clear_framework_if_all,
    has_frameworks,
    read_frameworks,
    remove_framework_from_element,
    write_frameworks,
)
from docsync.xml_nodes import append_element_text, child_elements, insert_after, write_element

INDEX = "Index"


def _position(node: ET.Element, fallback: int) -> int:
    try:
        return int(node.get(INDEX, ""))
    except ValueError:
        return fallback


def _write_ref_type(node: ET.Element, param: ParameterDecl) -> None:
    if param.ref_kind:
        node.set("RefType", param.ref_kind)
    else:
        node.attrib.pop("RefType", None)


def _new_parameter(param: ParameterDecl, index: int, framework: str) -> ET.Element:
    node = ET.Element("Parameter", {"Name": param.name, "Type": param.type})
    _write_ref_type(node, param)
    node.set(INDEX, str(index))
    node.set(FRAMEWORK_ALTERNATE, framework)
    return node


def sync_parameters(
    root: ET.Element,
    parameters: Sequence[ParameterDecl],
    entry: TypeEntry,
    *,
    is_first: bool,
    is_last: bool,
    universe: FrameworkSet,
    languages: Sequence[str] = (),
) -> bool:
    """Merge ``parameters`` into the Parameters child of ``root``.

    A parameter matching a node by name, position and type adds the current
    framework to it. A different parameter at an occupied position becomes a
    framework alternate: every node gets an explicit Index, the occupants
    keep the frameworks processed so far, and a sibling tagged with the
    current framework is inserted after them. Nodes not matched in this pass
    lose the current framework and disappear once they have none left.

    Returns whether an alternate was created.
    """
    if entry.times_processed > 1:
        return False

    container = write_element(root, "Parameters")
    if is_first:
        container.clear()

    existing = [(n, _position(n, i)) for i, n in enumerate(child_elements(container, "Parameter"))]
    touched: list[ET.Element] = []
    triggered = False

    for i, param in enumerate(parameters):
        match = next(
            (
                n
                for n, pos in existing
                if pos == i and n.get("Name") == param.name and n.get("Type") == param.type
            ),
            None,
        )
        if match is not None:
            _write_ref_type(match, param)
            match.set(INDEX, str(i))
            add_framework_to_element(match, entry.framework, entry.order)
            node = match
        else:
            occupants = [n for n, pos in existing if pos == i]
            node = _new_parameter(param, i, entry.framework)
            if occupants:
                for other, pos in existing:
                    if INDEX not in other.attrib:
                        other.set(INDEX, str(pos))
                previous = entry.previously_processed()
                for other in occupants:
                    if not has_frameworks(other):
                        write_frameworks(other, previous, entry.order)
                insert_after(container, node, occupants[-1])
                triggered = True
            else:
                before = [n for n, pos in existing if pos < i]
                if before:
                    insert_after(container, node, before[-1])
                elif existing:
                    container.insert(0, node)
                else:
                    container.append(node)
        touched.append(node)
        sync_attributes(node, param.attributes, entry, is_first=is_first, languages=languages)

    for node in child_elements(container, "Parameter"):
        if any(node is t for t in touched) or not has_frameworks(node):
            continue
        if entry.framework in read_frameworks(node):
            remaining = remove_framework_from_element(node, entry.framework, entry.order)
            if not remaining:
                container.remove(node)

    if is_last:
        final = child_elements(container, "Parameter")
        for node in final:
            clear_framework_if_all(node, universe)
        if not any(has_frameworks(n) for n in final):
            for node in final:
                node.attrib.pop(INDEX, None)

    return triggered


def _make_constraints(decl: GenericParameterDecl) -> ET.Element | None:
    constraints = ET.Element("Constraints")
    for flag in decl.flags:
        append_element_text(constraints, "ParameterAttribute", flag)
    for c in decl.constraints:
        append_element_text(constraints, "InterfaceName" if c.is_interface else "BaseTypeName", c.type_name)
    return constraints if len(constraints) else None


def sync_type_parameters(
    root: ET.Element,
    type_parameters: Sequence[GenericParameterDecl],
    entry: TypeEntry,
    *,
    is_first: bool,
    languages: Sequence[str] = (),
) -> None:
    """Merge generic parameters into the TypeParameters child of ``root``.

    Nodes are matched by name; constraints are written when a node is created.
    On the first pass nodes naming no current generic parameter are removed.
    """
    if not type_parameters:
        for node in child_elements(root, "TypeParameters"):
            root.remove(node)
        return

    container = write_element(root, "TypeParameters")
    names = {t.name for t in type_parameters}
    if is_first:
        for node in child_elements(container, "TypeParameter"):
            if node.get("Name") not in names:
                container.remove(node)

    nodes = child_elements(container, "TypeParameter")
    for decl in type_parameters:
        node = next((n for n in nodes if n.get("Name") == decl.name), None)
        if node is None:
            node = ET.SubElement(container, "TypeParameter", {"Name": decl.name})
            constraints = _make_constraints(decl)
            if constraints is not None:
                node.append(constraints)
        sync_attributes(node, decl.attributes, entry, is_first=is_first, languages=languages)
