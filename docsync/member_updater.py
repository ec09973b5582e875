"""Logic for creating and refreshing Member nodes from declarations."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Sequence

from docsync.assembly_info import remove_invalid_assembly_info, update_assembly_versions
from docsync.attribute_sync import sync_attributes
from docsync.docs_stub import ensure_docs, update_docs_stub
from docsync.formatter_set import FormatterSet
from docsync.framework_index import TypeEntry
from docsync.implements_sync import sync_implements
from docsync.index_document import IndexDocument
from docsync.node_order import MEMBER_NODE_ORDER, reorder_nodes
from docsync.parameter_sync import sync_parameters, sync_type_parameters
from docsync.return_value_sync import sync_return_value
from docsync.signature_sync import sync_member_signature
from docsync.sync_options import SyncOptions
from docsync.type_document import TypeDocument
from docsync.type_model import (
    FieldDecl,
    MemberDecl,
    MethodDecl,
    PropertyDecl,
    TypeDecl,
    explicit_member_name,
    member_kind,
    member_name,
    member_parameters,
    member_return_type,
    member_type_parameters,
)
from docsync.xml_nodes import clear_element, write_element_text

logger = logging.getLogger(__name__)


def docs_return_tag(decl: MemberDecl) -> str | None:
    """Docs entry describing the result: ``returns``, ``value`` or None."""
    match decl:
        case MethodDecl() if decl.return_type != "System.Void":
            return "returns"
        case PropertyDecl():
            return "value"
    return None


class MemberUpdater:
    """Applies one framework's view of a member to its Member node."""

    def __init__(
        self,
        formatters: FormatterSet,
        options: SyncOptions,
        languages: Sequence[str] = (),
        index: IndexDocument | None = None,
    ) -> None:
        """Store the collaborators shared by every member of a run."""
        self.formatters = formatters
        self.options = options
        self.languages = languages
        self.index = index

    def make_member(
        self,
        document: TypeDocument,
        decl: MemberDecl,
        type_decl: TypeDecl,
        entry: TypeEntry,
        key: str | None,
    ) -> ET.Element | None:
        """Create the Member node for a newly seen member.

        Returns None when the primary formatter cannot render the member.
        """
        if not self.formatters.is_visible(decl):
            return None
        node = document.add_member(member_name(decl))
        self.update_member(node, decl, type_decl, entry, key)
        return node

    def update_member(
        self,
        node: ET.Element,
        decl: MemberDecl,
        type_decl: TypeDecl,
        entry: TypeEntry,
        key: str | None,
    ) -> None:
        """Refresh every structural child of ``node`` for the current pass."""
        is_first = entry.is_first_for_member(key)
        is_last = entry.is_last_for_member(key)
        universe = entry.universe()

        name = member_name(decl)
        node.set("MemberName", name)
        eii_name = explicit_member_name(decl)
        if eii_name and eii_name != name:
            node.set("ExplicitInterfaceMemberName", eii_name)

        write_element_text(node, "MemberType", member_kind(decl))
        sync_implements(node, decl, type_decl, entry, key, self.formatters.fingerprint)

        if self.options.no_assembly_versions:
            clear_element(node, "AssemblyInfo")
        else:
            if entry.is_first_for_type():
                remove_invalid_assembly_info(node, no_assembly_versions=False)
            update_assembly_versions(
                node,
                type_decl.assembly_name,
                type_decl.assembly_version,
                add=True,
                run_kind=self.options.run_kind,
            )

        sync_attributes(node, decl.attributes, entry, is_first=is_first, languages=self.languages)

        return_type = member_return_type(decl)
        if return_type is not None:
            is_method = isinstance(decl, MethodDecl)
            sync_return_value(
                node,
                return_type,
                entry,
                is_first=is_first,
                is_last=is_last,
                universe=universe,
                ref_kind=decl.return_ref_kind if is_method else "",
                attributes=decl.return_attributes if is_method else (),
                languages=self.languages,
            )

        type_parameters = member_type_parameters(decl)
        if isinstance(decl, MethodDecl):
            sync_type_parameters(node, type_parameters, entry, is_first=is_first, languages=self.languages)

        parameters = member_parameters(decl)
        if parameters is not None:
            triggered = sync_parameters(
                node,
                parameters,
                entry,
                is_first=is_first,
                is_last=is_last,
                universe=universe,
                languages=self.languages,
            )
            if triggered:
                logger.info(f"Parameter alternates recorded for {name} in {entry.framework}")
            if isinstance(decl, MethodDecl) and decl.is_extension:
                first = node.find("Parameters/Parameter")
                if first is not None:
                    first.set("RefType", "this")

        if isinstance(decl, FieldDecl) and decl.const_value:
            write_element_text(node, "MemberValue", decl.const_value)

        update_docs_stub(
            ensure_docs(node),
            parameters=[p.name for p in parameters] if parameters is not None else None,
            type_parameters=[t.name for t in type_parameters] if type_parameters else None,
            returns=docs_return_tag(decl),
            is_last=is_last,
            delete=self.options.delete,
            markers=self.options.placeholder_markers,
            documented_parameters=[p.get("Name", "") for p in node.findall("Parameters/Parameter")],
            documented_type_parameters=[t.get("Name", "") for t in node.findall("TypeParameters/TypeParameter")],
        )

        for formatter in self.formatters.member_formatters:
            sync_member_signature(formatter, decl, node, entry, key)

        reorder_nodes(node, MEMBER_NODE_ORDER)

        if (
            self.index is not None
            and entry.times_processed == 1
            and isinstance(decl, MethodDecl)
            and decl.is_extension
        ):
            self.index.add_extension_method(node, decl, type_decl, entry.framework)
