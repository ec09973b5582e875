"""Logic for loading, querying and saving one per-type documentation file."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from docsync.xml_nodes import child_elements, write_element

INDENT = "  "


def indent_tree(elem: ET.Element, level: int = 0) -> None:
    """Normalize whitespace between structural nodes.

    The content of Docs entries (summary, remarks, param, ...) is never
    touched so that mixed prose survives byte for byte.
    """
    children = list(elem)
    if not children:
        return
    inner = "\n" + INDENT * (level + 1)
    if not elem.text or not elem.text.strip():
        elem.text = inner
    for child in children:
        if elem.tag != "Docs":
            indent_tree(child, level + 1)
        if not child.tail or not child.tail.strip():
            child.tail = inner
    last = children[-1]
    if not last.tail or not last.tail.strip():
        last.tail = "\n" + INDENT * level


class TypeDocument:
    """A ``Type`` document and the Member nodes below it."""

    def __init__(self, root: ET.Element, path: Path | None = None) -> None:
        self.root = root
        self.path = path

    @classmethod
    def new(cls, name: str, full_name: str, path: Path | None = None) -> TypeDocument:
        root = ET.Element("Type", {"Name": name, "FullName": full_name})
        return cls(root, path)

    @classmethod
    def load(cls, path: Path) -> TypeDocument:
        tree = ET.parse(path)
        return cls(tree.getroot(), path)

    @classmethod
    def from_string(cls, text: str) -> TypeDocument:
        return cls(ET.fromstring(text))

    @classmethod
    def load_or_new(cls, path: Path, name: str, full_name: str) -> TypeDocument:
        if path.exists():
            return cls.load(path)
        return cls.new(name, full_name, path)

    @property
    def full_name(self) -> str:
        return self.root.get("FullName", "")

    @property
    def members_element(self) -> ET.Element:
        return write_element(self.root, "Members")

    def members(self) -> list[ET.Element]:
        members = self.root.find("Members")
        if members is None:
            return []
        return child_elements(members, "Member")

    def add_member(self, name: str) -> ET.Element:
        return ET.SubElement(self.members_element, "Member", {"MemberName": name})

    def remove_member(self, node: ET.Element) -> None:
        members = self.root.find("Members")
        if members is not None and node in list(members):
            members.remove(node)

    def to_string(self) -> str:
        indent_tree(self.root)
        return ET.tostring(self.root, encoding="unicode") + "\n"

    def save(self, path: Path | None = None) -> Path:
        target = path or self.path
        if target is None:
            msg = f"No output path for type document '{self.full_name}'"
            raise ValueError(msg)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_string(), encoding="utf-8")
        self.path = target
        return target


def signature_values(node: ET.Element, language: str, tag: str = "MemberSignature") -> list[str]:
    """Return every signature Value stored on ``node`` for ``language``."""
    return [
        s.get("Value", "")
        for s in child_elements(node, tag)
        if s.get("Language") == language
    ]
