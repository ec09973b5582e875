"""TypeForwardingChain maintenance for Type nodes."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from docsync.framework_index import TypeEntry
from docsync.type_model import TypeDecl, TypeForward
from docsync.variant_tracker import add_framework_to_element, clear_framework_if_all
from docsync.xml_nodes import child_elements, clear_element

CHAIN = "TypeForwardingChain"


def collect_forwards(decl: TypeDecl) -> list[TypeForward]:
    """Forwards of ``decl`` followed by those of its enclosing types."""
    forwards = list(decl.forwards)
    outer = decl.declaring_type
    while outer is not None:
        forwards.extend(outer.forwards)
        outer = outer.declaring_type
    return forwards


def _matches(node: ET.Element, forward: TypeForward) -> bool:
    return (
        node.get("From") == forward.from_assembly
        and node.get("FromVersion") == forward.from_version
        and node.get("To") == forward.to_assembly
        and node.get("ToVersion") == forward.to_version
    )


def sync_type_forwarding_chain(root: ET.Element, decl: TypeDecl, entry: TypeEntry) -> None:
    """Record the forwards seen in the current framework.

    The chain is rebuilt from scratch on the first pass for the type; each
    distinct (From, FromVersion, To, ToVersion) hop carries the frameworks
    it was seen in.
    """
    if entry.times_processed > 1:
        return

    chain = root.find(CHAIN)
    if entry.is_first_for_type():
        clear_element(root, CHAIN)
        chain = None

    forwards = collect_forwards(decl)
    if forwards:
        if chain is None:
            chain = ET.SubElement(root, CHAIN)
        for forward in forwards:
            node = next((n for n in child_elements(chain, "TypeForwarding") if _matches(n, forward)), None)
            if node is None:
                node = ET.SubElement(
                    chain,
                    "TypeForwarding",
                    {
                        "From": forward.from_assembly,
                        "FromVersion": forward.from_version,
                        "To": forward.to_assembly,
                        "ToVersion": forward.to_version,
                    },
                )
            add_framework_to_element(node, entry.framework, entry.order)

    if entry.is_last_for_type() and chain is not None:
        universe = entry.universe()
        for node in child_elements(chain, "TypeForwarding"):
            clear_framework_if_all(node, universe)
