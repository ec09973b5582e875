"""Logic for refreshing the type-level part of a Type document."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence

from docsync.assembly_info import (
    find_or_add_assembly_info,
    remove_invalid_assembly_info,
    update_assembly_culture,
    update_assembly_version_for_assembly_info,
)
from docsync.attribute_sync import sync_attributes
from docsync.docs_stub import ensure_docs, update_docs_stub
from docsync.formatter_set import FormatterSet
from docsync.framework_index import TypeEntry
from docsync.node_order import TYPE_NODE_ORDER, reorder_nodes
from docsync.parameter_sync import sync_parameters, sync_type_parameters
from docsync.return_value_sync import sync_return_value
from docsync.signature_sync import sync_type_signature
from docsync.sync_options import SyncOptions
from docsync.type_forwarding_sync import sync_type_forwarding_chain
from docsync.type_model import TypeDecl
from docsync.variant_tracker import (
    FRAMEWORK_ALTERNATE,
    add_framework_to_element,
    clear_framework_if_all,
)
from docsync.xml_nodes import (
    append_element_text,
    child_elements,
    clear_element,
    write_element,
    write_element_text,
)


def doc_base_type_name(base_type: str) -> str:
    """All delegates are multicast; documents name the plain delegate base."""
    if base_type == "System.MulticastDelegate":
        return "System.Delegate"
    return base_type


def update_base_type(root: ET.Element, decl: TypeDecl, entry: TypeEntry) -> None:
    """Record the base type, keeping per-framework alternates.

    The first BaseTypeName seen in the run is unmarked; a differing base in a
    later framework is added as a sibling carrying that framework.
    """
    if entry.times_processed > 1:
        return
    if entry.is_first_for_type():
        clear_element(root, "Base")
    if decl.base_type is None:
        return

    base = write_element(root, "Base")
    name = doc_base_type_name(decl.base_type)
    names = child_elements(base, "BaseTypeName")
    if not names:
        write_element_text(base, "BaseTypeName", name)
    elif names[0].text != name:
        existing = next((n for n in names if n.text == name), None)
        if existing is None:
            node = append_element_text(base, "BaseTypeName", name)
            node.set(FRAMEWORK_ALTERNATE, entry.framework)
        else:
            add_framework_to_element(existing, entry.framework, entry.order)

    if decl.base_type_arguments:
        clear_element(base, "BaseTypeArguments")
        arguments = ET.SubElement(base, "BaseTypeArguments")
        for param_name, value in decl.base_type_arguments:
            arg = ET.SubElement(arguments, "BaseTypeArgument", {"TypeParamName": param_name})
            arg.text = value


def update_interfaces(root: ET.Element, decl: TypeDecl, entry: TypeEntry) -> None:
    """Rebuild Interfaces on the first pass and append afterwards."""
    if decl.is_delegate or decl.is_enum:
        clear_element(root, "Interfaces")
        return

    interfaces = write_element(root, "Interfaces")
    if entry.is_first_for_type():
        interfaces.clear()
    is_last = entry.is_last_for_type()
    universe = entry.universe()
    for name in sorted(set(decl.interfaces)):
        node = next(
            (i for i in child_elements(interfaces, "Interface") if i.findtext("InterfaceName") == name),
            None,
        )
        if node is None:
            node = ET.SubElement(interfaces, "Interface")
            append_element_text(node, "InterfaceName", name)
        add_framework_to_element(node, entry.framework, entry.order)
        if is_last:
            clear_framework_if_all(node, universe)


class TypeUpdater:
    """Applies one framework's view of a type to the root of its document."""

    def __init__(
        self,
        formatters: FormatterSet,
        options: SyncOptions,
        languages: Sequence[str] = (),
    ) -> None:
        """Store the collaborators shared by every type of a run."""
        self.formatters = formatters
        self.options = options
        self.languages = languages

    def update_assembly_info(self, root: ET.Element, decl: TypeDecl, entry: TypeEntry) -> None:
        """Maintain the AssemblyInfo of the current API style."""
        if entry.is_first_for_type():
            remove_invalid_assembly_info(root, no_assembly_versions=self.options.no_assembly_versions)
        info = find_or_add_assembly_info(root, decl.assembly_name, self.options.run_kind)
        if self.options.no_assembly_versions:
            clear_element(info, "AssemblyVersion")
        else:
            update_assembly_version_for_assembly_info(info, root, [decl.assembly_version], add=True)
        update_assembly_culture(info, decl.assembly_culture)
        clear_element(info, "Attributes")

    def update_type(self, root: ET.Element, decl: TypeDecl, entry: TypeEntry) -> None:
        """Refresh signatures, assembly data, inheritance and type-level Docs."""
        root.set("Name", decl.name)
        root.set("FullName", decl.full_name)

        for formatter in self.formatters.type_formatters:
            sync_type_signature(formatter, decl, root, entry)

        self.update_assembly_info(root, decl, entry)

        sync_type_forwarding_chain(root, decl, entry)

        is_first = entry.is_first_for_type()
        is_last = entry.is_last_for_type()
        sync_type_parameters(root, decl.type_parameters, entry, is_first=is_first, languages=self.languages)
        update_base_type(root, decl, entry)
        update_interfaces(root, decl, entry)
        sync_attributes(root, decl.attributes, entry, is_first=is_first, languages=self.languages)

        parameters = None
        returns = None
        if decl.is_delegate and decl.invoke is not None:
            universe = entry.universe()
            parameters = [p.name for p in decl.invoke.parameters]
            sync_parameters(
                root,
                decl.invoke.parameters,
                entry,
                is_first=is_first,
                is_last=is_last,
                universe=universe,
                languages=self.languages,
            )
            sync_return_value(
                root,
                decl.invoke.return_type,
                entry,
                is_first=is_first,
                is_last=is_last,
                universe=universe,
                ref_kind=decl.invoke.return_ref_kind,
                attributes=decl.invoke.return_attributes,
                languages=self.languages,
            )
            if decl.invoke.return_type != "System.Void":
                returns = "returns"

        update_docs_stub(
            ensure_docs(root),
            parameters=parameters,
            type_parameters=[t.name for t in decl.type_parameters] or None,
            returns=returns,
            is_last=is_last,
            delete=self.options.delete,
            markers=self.options.placeholder_markers,
            documented_parameters=[p.get("Name", "") for p in root.findall("Parameters/Parameter")],
            documented_type_parameters=[t.get("Name", "") for t in root.findall("TypeParameters/TypeParameter")],
        )

        if not decl.is_delegate:
            write_element(root, "Members")

        reorder_nodes(root, TYPE_NODE_ORDER)
