"""Logic for the top-level index document aggregating namespaces, types and assemblies."""

from __future__ import annotations

import copy
import logging
import threading
import xml.etree.ElementTree as ET
from pathlib import Path

from docsync.docs_stub import PLACEHOLDER
from docsync.errors import DataInconsistencyError
from docsync.type_document import indent_tree
from docsync.type_model import MethodDecl, TypeDecl
from docsync.xml_nodes import child_elements, clear_element, write_element

EXTENSION_MEMBER_CHILDREN = ("Docs", "MemberSignature", "MemberType", "Parameters", "ReturnValue", "TypeParameters")
EXTENSION_DOCS_CHILDREN = ("param", "summary", "typeparam")

logger = logging.getLogger(__name__)


def type_file_name(decl: TypeDecl) -> str:
    """File-safe type name: generic arity as a backtick suffix."""
    base = decl.name.split("<", 1)[0]
    if decl.type_parameters:
        return f"{base}`{len(decl.type_parameters)}"
    return base


def _remove_except(node: ET.Element | None, keep: tuple[str, ...]) -> None:
    if node is None:
        return
    for child in list(node):
        if child.tag not in keep:
            node.remove(child)


def _extension_sort_key(node: ET.Element) -> tuple[str, str]:
    link = node.find("Member/Link")
    if link is None:
        return ("", "")
    return (link.get("Type", ""), link.get("Member", ""))


class IndexDocument:
    """The ``Overview`` document written next to the per-type files.

    Registration methods take a lock so that types of one framework pass may
    be processed concurrently.
    """

    def __init__(self, root: ET.Element | None = None, path: Path | None = None) -> None:
        self.root = root if root is not None else self._stub()
        self.path = path
        self._lock = threading.Lock()
        self._extension_methods: dict[tuple[str, str], tuple[str, ET.Element]] = {}
        # format change: stale top-level entries are rebuilt every run
        clear_element(self.root, "Assembly")
        clear_element(self.root, "Attributes")

    @staticmethod
    def _stub() -> ET.Element:
        root = ET.Element("Overview")
        ET.SubElement(root, "Assemblies")
        ET.SubElement(root, "Remarks").text = PLACEHOLDER
        ET.SubElement(root, "Copyright").text = PLACEHOLDER
        ET.SubElement(root, "Types")
        return root

    @classmethod
    def load_or_new(cls, path: Path) -> IndexDocument:
        if path.exists():
            return cls(ET.parse(path).getroot(), path)
        return cls(path=path)

    @property
    def types_element(self) -> ET.Element:
        return write_element(self.root, "Types")

    @property
    def assemblies_element(self) -> ET.Element:
        return write_element(self.root, "Assemblies")

    def reset_assemblies(self) -> None:
        with self._lock:
            self.assemblies_element.clear()

    def add_type(self, decl: TypeDecl) -> ET.Element:
        file_name = type_file_name(decl)
        with self._lock:
            types = self.types_element
            ns = next((n for n in child_elements(types, "Namespace") if n.get("Name") == decl.namespace), None)
            if ns is None:
                ns = ET.SubElement(types, "Namespace", {"Name": decl.namespace})
            node = next((t for t in child_elements(ns, "Type") if t.get("Name") == file_name), None)
            if node is None:
                node = ET.SubElement(ns, "Type", {"Name": file_name})
            if decl.name != file_name:
                node.set("DisplayName", decl.name)
            else:
                node.attrib.pop("DisplayName", None)
            node.set("Kind", decl.kind)
            return node

    def add_assembly(self, name: str, version: str, culture: str = "") -> ET.Element:
        with self._lock:
            assemblies = self.assemblies_element
            node = next((a for a in child_elements(assemblies, "Assembly") if a.get("Name") == name), None)
            if node is None:
                node = ET.SubElement(assemblies, "Assembly", {"Name": name})
            node.set("Version", version)
            clear_element(node, "AssemblyCulture")
            if culture:
                ET.SubElement(node, "AssemblyCulture").text = culture
            return node

    def add_extension_method(
        self, member: ET.Element, decl: MethodDecl, type_decl: TypeDecl, framework: str
    ) -> ET.Element:
        """Register an extension method from its freshly updated Member node.

        Entries are keyed by their Link Type and Member. A later registration
        replaces an earlier one, so the last framework declaring the method and
        the node that survives duplicate resolution win.
        """
        if not decl.parameters:
            msg = f"Extension method '{decl.name}' of {type_decl.full_name} has no target parameter"
            raise DataInconsistencyError(msg)
        em = ET.Element("ExtensionMethod")
        targets = ET.SubElement(em, "Targets")
        first = decl.parameters[0]
        generic = next((t for t in decl.type_parameters if t.name == first.type), None)
        if generic is None:
            ET.SubElement(targets, "Target", {"Type": f"T:{first.type}"})
        elif not generic.constraints:
            ET.SubElement(targets, "Target", {"Type": "System.Object"})
        else:
            for constraint in generic.constraints:
                ET.SubElement(targets, "Target", {"Type": f"T:{constraint.type_name}"})

        clone = copy.deepcopy(member)
        _remove_except(clone, EXTENSION_MEMBER_CHILDREN)
        _remove_except(clone.find("Docs"), EXTENSION_DOCS_CHILDREN)
        member_type = clone.find("MemberType")
        if member_type is None:
            member_type = ET.SubElement(clone, "MemberType")
        member_type.text = "ExtensionMethod"
        ET.SubElement(
            clone,
            "Link",
            {"Type": type_decl.full_name, "Member": decl.ids.get("DocId") or clone.get("MemberName", "")},
        )
        em.append(clone)
        key = _extension_sort_key(em)
        with self._lock:
            previous = self._extension_methods.get(key)
            if previous is not None and previous[0] != framework:
                logger.debug(f"Extension method {key} replaced by {framework}")
            self._extension_methods[key] = (framework, em)
        return em

    def sort_entries(self) -> None:
        types = self.types_element
        namespaces = sorted(child_elements(types, "Namespace"), key=lambda n: n.get("Name", ""))
        for ns in namespaces:
            type_nodes = sorted(child_elements(ns, "Type"), key=lambda t: t.get("Name", ""))
            clear_element(ns, "Type")
            ns.extend(type_nodes)
        clear_element(types, "Namespace")
        types.extend(namespaces)

    def cleanup_types(self, good_types: set[tuple[str, str]]) -> int:
        removed = 0
        for ns in child_elements(self.types_element, "Namespace"):
            for node in child_elements(ns, "Type"):
                if (ns.get("Name", ""), node.get("Name", "")) not in good_types:
                    ns.remove(node)
                    removed += 1
        return removed

    def cleanup_extensions(self) -> None:
        existing = self.root.find("ExtensionMethods")
        if not self._extension_methods:
            if existing is not None:
                self.root.remove(existing)
            return
        ordered = [em for _, (_, em) in sorted(self._extension_methods.items())]
        if existing is None:
            existing = ET.SubElement(self.root, "ExtensionMethods")
        else:
            existing.clear()
        existing.extend(ordered)

    def finalize(self, title: str = "Untitled") -> None:
        if self.root.find("Title") is None:
            title_node = ET.Element("Title")
            title_node.text = title
            self.root.insert(0, title_node)
        self.sort_entries()
        self.cleanup_extensions()

    def to_string(self) -> str:
        indent_tree(self.root)
        return ET.tostring(self.root, encoding="unicode") + "\n"

    def save(self, path: Path | None = None) -> Path:
        target = path or self.path
        if target is None:
            msg = "No output path for the index document"
            raise ValueError(msg)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_string(), encoding="utf-8")
        self.path = target
        return target
