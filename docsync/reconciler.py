"""Per-type reconciliation of a Type document against one framework snapshot.

The reconciler walks the existing Member nodes in document order, matches
each by the fingerprint stored in its signatures, resolves duplicates,
retires members the framework no longer declares, refreshes the survivors
and finally creates nodes for members the document does not know yet.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from dataclasses import dataclass

from docsync.api_style import (
    ApiStyle,
    add_api_style,
    is_classic_assembly_info,
    node_is_classic,
    node_is_unified,
    remove_api_style,
)
from docsync.assembly_info import remove_invalid_assembly_info, update_assembly_versions
from docsync.deletion_policy import RemovalDecision, RunKind, decide_removal
from docsync.errors import DataInconsistencyError
from docsync.formatter_set import FormatterSet
from docsync.framework_index import TypeEntry
from docsync.index_document import IndexDocument
from docsync.member_docs_have_user_content import member_docs_have_user_content
from docsync.member_updater import MemberUpdater
from docsync.node_order import sort_type_members
from docsync.sync_options import SyncOptions
from docsync.type_document import TypeDocument, signature_values
from docsync.type_model import MemberDecl, TypeDecl, is_private_explicit_implementation
from docsync.type_updater import TypeUpdater
from docsync.xml_nodes import child_elements

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Structural deltas of one (type, framework) unit."""

    added: int = 0
    removed: int = 0
    unchanged: int = 0


def _docid(node: ET.Element) -> str | None:
    return next(iter(signature_values(node, "DocId")), None)


def _display_signature(node: ET.Element) -> str:
    return next(iter(signature_values(node, "C#")), None) or node.get("MemberName", "")


class Reconciler:
    """Merges one framework's declarations of a type into its document."""

    def __init__(
        self,
        formatters: FormatterSet,
        options: SyncOptions,
        languages: Sequence[str] = (),
        index: IndexDocument | None = None,
    ) -> None:
        """Wire the type and member updaters for one run."""
        self.formatters = formatters
        self.options = options
        self.type_updater = TypeUpdater(formatters, options, languages)
        self.member_updater = MemberUpdater(formatters, options, languages, index)

    def node_keys(self, node: ET.Element) -> list[str]:
        """Fingerprints stored on a Member node.

        A node with neither a MemberName nor a fingerprint signature cannot be
        identified at all.
        """
        keys = signature_values(node, self.formatters.fingerprint_language)
        if not keys and not node.get("MemberName"):
            msg = "Member node has neither a MemberName nor a fingerprint signature"
            raise DataInconsistencyError(msg)
        return keys

    def current_members(self, type_decl: TypeDecl) -> tuple[dict[str, MemberDecl], set[str]]:
        """Index the visible members of ``type_decl`` by fingerprint.

        Returns the members and the fingerprints of explicit implementations of
        non-public interfaces, which are never documented.
        """
        current: dict[str, MemberDecl] = {}
        private: set[str] = set()
        for decl in type_decl.members:
            if not self.formatters.is_visible(decl):
                continue
            key = self.formatters.fingerprint(decl)
            if key is None:
                msg = f"Cannot derive a fingerprint for member '{decl.name}' of {type_decl.full_name}"
                raise DataInconsistencyError(msg)
            if is_private_explicit_implementation(decl):
                private.add(key)
                continue
            current.setdefault(key, decl)
        return current, private

    def reconcile(self, document: TypeDocument, type_decl: TypeDecl, entry: TypeEntry) -> ReconcileResult:
        """Merge ``type_decl`` as seen by ``entry.framework`` into ``document``."""
        result = ReconcileResult()
        self.type_updater.update_type(document.root, type_decl, entry)

        current, private = self.current_members(type_decl)
        seen: dict[str, ET.Element] = {}
        doomed: list[ET.Element] = []

        for node in document.members():
            if any(node is d for d in doomed):
                continue
            keys = self.node_keys(node)
            key = next((k for k in keys if k in current), None)
            if any(k in private for k in keys):
                logger.warning(
                    f"Member Removed (explicit implementation of a non-public interface): "
                    f"File='{document.path}'; Signature='{_display_signature(node)}'"
                )
                doomed.append(node)
                result.removed += 1
                continue

            if key is None:
                if entry.is_first_for_type():
                    remove_invalid_assembly_info(node, no_assembly_versions=self.options.no_assembly_versions)
                if self._survives_elsewhere(node, keys, type_decl, entry):
                    result.unchanged += 1
                    continue
                self._retire(node, document, "Member Removed", result, doomed)
                continue

            if key in seen:
                if self._resolve_duplicate(node, seen, key, document, result, doomed):
                    self.member_updater.update_member(node, current[key], type_decl, entry, key)
                    result.unchanged += 1
                continue

            self.member_updater.update_member(node, current[key], type_decl, entry, key)
            result.unchanged += 1
            for value in signature_values(node, self.formatters.fingerprint_language):
                seen.setdefault(value, node)

        for node in doomed:
            document.remove_member(node)

        if not type_decl.is_delegate:
            self._add_new_members(document, type_decl, entry, current, seen, result)

        sort_type_members(document.root.find("Members"))
        return result

    def _survives_elsewhere(
        self, node: ET.Element, keys: list[str], type_decl: TypeDecl, entry: TypeEntry
    ) -> bool:
        """Check whether an unmatched node must be kept anyway.

        It stays while any framework of the run declares it, or while it still
        lists a version of another assembly once the current one is retracted.
        """
        if any(entry.index.contains_member(entry.type_name, k) for k in keys):
            return True
        if self.options.no_assembly_versions:
            return False
        return update_assembly_versions(
            node,
            type_decl.assembly_name,
            type_decl.assembly_version,
            add=False,
            run_kind=self.options.run_kind,
        )

    def _resolve_duplicate(
        self,
        node: ET.Element,
        seen: dict[str, ET.Element],
        key: str,
        document: TypeDocument,
        result: ReconcileResult,
        doomed: list[ET.Element],
    ) -> bool:
        """Settle a second node matching an already claimed fingerprint.

        The copy with real documentation is kept. Two documented copies are an
        ambiguous match where the first encountered wins. Returns True when
        ``node`` takes over the fingerprint and must be refreshed.
        """
        markers = self.options.placeholder_markers
        first = seen[key]
        if member_docs_have_user_content(node, markers):
            members = document.members()
            earlier = [
                m
                for m in members[: members.index(node)]
                if key in signature_values(m, self.formatters.fingerprint_language)
                and not any(m is d for d in doomed)
            ]
            empty = [m for m in earlier if not member_docs_have_user_content(m, markers)]
            if empty:
                for member in empty:
                    decision = self._retire(member, document, "Duplicate Member (empty) Found", result, doomed)
                    if member is first and decision is RemovalDecision.DELETE:
                        result.unchanged -= 1
                seen[key] = node
                return True
            logger.warning(
                f"Ambiguous duplicate members: File='{document.path}'; "
                f"Signature='{_display_signature(node)}'; keeping the first one"
            )

        first_docid = _docid(first)
        node_docid = _docid(node)
        if first_docid is not None and node_docid is not None and first_docid != node_docid:
            return False
        self._retire(node, document, "Duplicate Member Found", result, doomed)
        return False

    def _retire(
        self,
        node: ET.Element,
        document: TypeDocument,
        reason: str,
        result: ReconcileResult,
        doomed: list[ET.Element],
    ) -> RemovalDecision:
        """Apply the removal policy to a node that should go away."""
        signature = _display_signature(node)
        logger.warning(f"{reason}: File='{document.path}'; Signature='{signature}'")
        decision = decide_removal(
            run_kind=self.options.run_kind,
            delete_enabled=self.options.delete,
            preserve=self.options.preserve,
            has_user_content=member_docs_have_user_content(node, self.options.placeholder_markers),
            node_is_classic=node_is_classic(node),
            node_is_unified=node_is_unified(node),
        )
        match decision:
            case RemovalDecision.DELETE:
                doomed.append(node)
                result.removed += 1
            case RemovalDecision.PRESERVE:
                if self.options.preserve:
                    logger.warning(f"Not deleting '{signature}' due to preserve.")
                else:
                    logger.warning(f"Not deleting '{signature}'; must be enabled with the delete option")
            case RemovalDecision.MARK_CLASSIC_ONLY:
                remove_api_style(node, ApiStyle.UNIFIED)
                add_api_style(node, ApiStyle.CLASSIC)
                logger.warning(f"Not removing '{signature}' since it's still in the classic assembly.")
            case RemovalDecision.MARK_UNIFIED_ONLY:
                logger.warning(
                    f"Removing classic from '{signature}' ... will be removed in the unified run if not present there."
                )
                remove_api_style(node, ApiStyle.CLASSIC)
                classic = next(
                    (i for i in child_elements(node, "AssemblyInfo") if is_classic_assembly_info(i)),
                    None,
                )
                if classic is not None:
                    node.remove(classic)
        return decision

    def _add_new_members(
        self,
        document: TypeDocument,
        type_decl: TypeDecl,
        entry: TypeEntry,
        current: dict[str, MemberDecl],
        seen: dict[str, ET.Element],
        result: ReconcileResult,
    ) -> None:
        for key, decl in current.items():
            if key in seen:
                continue
            docid = decl.ids.get("DocId")
            if docid and any(docid in signature_values(n, "DocId") for n in seen.values()):
                continue
            node = self.member_updater.make_member(document, decl, type_decl, entry, key)
            if node is None:
                continue
            if self.options.run_kind is RunKind.UNIFIED:
                add_api_style(node, ApiStyle.UNIFIED)
            seen[key] = node
            result.added += 1
            logger.info(f"Member Added: {_display_signature(node)}")
