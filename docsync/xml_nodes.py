"""Controlled mutation helpers over ``xml.etree.ElementTree`` elements."""

from __future__ import annotations

import xml.etree.ElementTree as ET


def child_elements(parent: ET.Element, tag: str | None = None) -> list[ET.Element]:
    return [c for c in parent if tag is None or c.tag == tag]


def write_element(parent: ET.Element, tag: str, *, force_new: bool = False) -> ET.Element:
    if not force_new:
        existing = parent.find(tag)
        if existing is not None:
            return existing
    return ET.SubElement(parent, tag)


def write_element_text(
    parent: ET.Element, tag: str, value: str, *, force_new: bool = False
) -> ET.Element:
    """Find-or-create ``tag`` under ``parent`` and set its text."""
    node = write_element(parent, tag, force_new=force_new)
    node.text = value
    return node


def append_element_text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    node = ET.SubElement(parent, tag)
    node.text = value
    return node


def clear_element(parent: ET.Element, tag: str) -> None:
    for child in child_elements(parent, tag):
        parent.remove(child)


def insert_after(parent: ET.Element, node: ET.Element, anchor: ET.Element | None) -> None:
    if anchor is None:
        parent.append(node)
        return
    position = list(parent).index(anchor)
    parent.insert(position + 1, node)


def inner_text(node: ET.Element | None) -> str:
    if node is None:
        return ""
    return "".join(node.itertext())


def set_or_remove(node: ET.Element, name: str, value: str | None) -> None:
    if value:
        node.set(name, value)
    else:
        node.attrib.pop(name, None)
