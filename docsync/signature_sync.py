"""Per-language signature variants of Type and Member nodes."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from docsync.formatter_set import Formatter
from docsync.framework_index import TypeEntry
from docsync.framework_set import FrameworkSet
from docsync.type_model import MemberDecl, TypeDecl
from docsync.variant_tracker import (
    FRAMEWORK_ALTERNATE,
    add_framework_to_element,
    clear_framework_if_all,
    read_frameworks,
    remove_framework_from_element,
)
from docsync.xml_nodes import child_elements


def _variants(node: ET.Element, tag: str, language: str) -> list[ET.Element]:
    return [e for e in child_elements(node, tag) if e.get("Language") == language]


def sync_signature(
    node: ET.Element,
    tag: str,
    language: str,
    value: str | None,
    usage: str | None,
    entry: TypeEntry,
    *,
    is_first: bool,
    is_last: bool,
    universe: FrameworkSet,
) -> None:
    """Merge one (value, usage) signature of ``language`` into ``node``.

    The matching variant gains the current framework while every other
    variant of the language loses it; without a match a new variant is
    added for the current framework alone. On the last pass variants with
    no framework left are dropped and universal ones lose the attribute.
    """
    existing = _variants(node, tag, language)
    if entry.times_processed > 1 and existing:
        return

    if is_first:
        for element in existing:
            node.remove(element)
        existing = []

    if value is None and usage is None:
        return

    found = False
    for element in existing:
        if element.get("Value", "") == (value or "") and element.get("Usage", "") == (usage or ""):
            add_framework_to_element(element, entry.framework, entry.order)
            found = True
        else:
            remove_framework_from_element(element, entry.framework, entry.order)

    if not found:
        element = ET.SubElement(node, tag, {"Language": language})
        if value and value.strip():
            element.set("Value", value)
        if usage and usage.strip():
            element.set("Usage", usage)
        element.set(FRAMEWORK_ALTERNATE, entry.framework)

    if is_last:
        for element in _variants(node, tag, language):
            if not read_frameworks(element):
                node.remove(element)
            else:
                clear_framework_if_all(element, universe)


def sync_type_signature(
    formatter: Formatter, decl: TypeDecl, root: ET.Element, entry: TypeEntry
) -> None:
    """Refresh the TypeSignature of ``formatter``'s language."""
    sync_signature(
        root,
        "TypeSignature",
        formatter.language,
        formatter.type_declaration(decl),
        formatter.usage(decl),
        entry,
        is_first=entry.is_first_for_type(),
        is_last=entry.is_last_for_type(),
        universe=entry.universe(),
    )


def sync_member_signature(
    formatter: Formatter,
    decl: MemberDecl,
    member: ET.Element,
    entry: TypeEntry,
    key: str | None,
) -> None:
    """Refresh the MemberSignature of ``formatter``'s language.

    First and last passes are those of the member, keyed by its fingerprint.
    """
    sync_signature(
        member,
        "MemberSignature",
        formatter.language,
        formatter.member_declaration(decl),
        formatter.usage(decl),
        entry,
        is_first=entry.is_first_for_member(key),
        is_last=entry.is_last_for_member(key),
        universe=entry.universe(),
    )
