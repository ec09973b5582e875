"""Custom attribute lists of Type, Member, Parameter and TypeParameter nodes."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence

from docsync.framework_index import TypeEntry
from docsync.type_model import AttributeDecl

PRIMARY_LANGUAGE = "C#"


def _primary_text(attribute: ET.Element) -> str:
    names = attribute.findall("AttributeName")
    for name in names:
        if name.get("Language") == PRIMARY_LANGUAGE:
            return name.text or ""
    return (names[0].text or "") if names else ""


def _add_attribute(container: ET.Element, decl: AttributeDecl, languages: Sequence[str]) -> ET.Element:
    attribute = ET.SubElement(container, "Attribute")
    primary = ET.SubElement(attribute, "AttributeName", {"Language": PRIMARY_LANGUAGE})
    primary.text = decl.text(PRIMARY_LANGUAGE)
    ordered = list(languages) + [lang for lang in decl.renderings if lang not in languages]
    for language in ordered:
        text = decl.text(language)
        if language == PRIMARY_LANGUAGE or text is None:
            continue
        node = ET.SubElement(attribute, "AttributeName", {"Language": language})
        node.text = text
    return attribute


def sync_attributes(
    root: ET.Element,
    attributes: Sequence[AttributeDecl],
    entry: TypeEntry | None,
    *,
    is_first: bool,
    languages: Sequence[str] = (),
) -> None:
    """Merge ``attributes`` into the Attributes child of ``root``.

    The container is emptied on the first pass; afterwards attributes are only
    added, matched by their C# rendering. An empty container is removed, and
    a parent left without children is collapsed to an empty element.
    """
    container = root.find("Attributes")
    attached = container is not None
    if container is None:
        container = ET.Element("Attributes")

    if is_first and (entry is None or entry.times_processed == 1):
        container.clear()

    for decl in attributes:
        text = decl.text(PRIMARY_LANGUAGE)
        if text is None:
            continue
        if any(_primary_text(a) == text for a in container.findall("Attribute")):
            continue
        _add_attribute(container, decl, languages)

    if len(container) == 0:
        if attached:
            root.remove(container)
            if len(root) == 0 and not (root.text or "").strip():
                root.text = None
        return
    if not attached:
        root.append(container)
