"""Implements/InterfaceMember references recomputed from the interface map."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable

from docsync.framework_index import TypeEntry
from docsync.type_model import InterfaceMemberRef, MemberDecl, TypeDecl
from docsync.variant_tracker import add_framework_to_element, clear_framework_if_all
from docsync.xml_nodes import clear_element


def implemented_members(
    decl: MemberDecl,
    type_decl: TypeDecl,
    key: str | None,
    fingerprint: Callable[[MemberDecl], str | None],
) -> list[InterfaceMemberRef]:
    """Public interface members implemented by ``decl``.

    An explicit implementation keeps only the member of its named interface.
    An implicit implementation drops members another member of the type
    implements explicitly.
    """
    refs = [r for r in type_decl.interface_map.get(key or "", ()) if r.interface_is_public]
    if decl.explicit_interface:
        named = [r for r in refs if r.interface == decl.explicit_interface]
        return named[:1] or refs
    claimed = {
        r.member_id
        for m in type_decl.members
        if m.explicit_interface and m is not decl
        for r in type_decl.interface_map.get(fingerprint(m) or "", ())
        if r.interface == m.explicit_interface
    }
    return [r for r in refs if r.member_id not in claimed]


def sync_implements(
    member: ET.Element,
    decl: MemberDecl,
    type_decl: TypeDecl,
    entry: TypeEntry,
    key: str | None,
    fingerprint: Callable[[MemberDecl], str | None],
) -> None:
    """Refresh the Implements element of ``member``."""
    if entry.times_processed > 1:
        return
    if entry.is_first_for_member(key):
        clear_element(member, "Implements")

    refs = implemented_members(decl, type_decl, key, fingerprint)
    if not refs:
        return

    container = member.find("Implements")
    if container is None:
        container = ET.SubElement(member, "Implements")
    is_last = entry.is_last_for_member(key)
    universe = entry.universe()
    for ref in refs:
        node = next((n for n in container.findall("InterfaceMember") if n.text == ref.member_id), None)
        if node is None:
            node = ET.SubElement(container, "InterfaceMember")
            node.text = ref.member_id
        add_framework_to_element(node, entry.framework, entry.order)
        if is_last:
            clear_framework_if_all(node, universe)
