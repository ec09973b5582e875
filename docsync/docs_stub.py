"""Placeholder Docs entries for newly discovered structure."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Sequence

from docsync.is_placeholder_text import DEFAULT_MARKERS, is_placeholder_text
from docsync.node_order import DOCS_NODE_ORDER, reorder_nodes
from docsync.xml_nodes import child_elements, clear_element, inner_text, write_element

logger = logging.getLogger(__name__)

PLACEHOLDER = "To be added."


def write_initial_text(parent: ET.Element, tag: str, text: str = PLACEHOLDER) -> ET.Element:
    """Create ``tag`` with ``text`` unless it already exists."""
    node = parent.find(tag)
    if node is None:
        node = ET.SubElement(parent, tag)
        node.text = text
    return node


def _add_named_entries(docs: ET.Element, tag: str, names: Sequence[str]) -> None:
    wanted: dict[str, int] = {}
    for name in names:
        wanted[name] = wanted.get(name, 0) + 1
        existing = [e for e in child_elements(docs, tag) if e.get("name") == name]
        if len(existing) < wanted[name]:
            entry = ET.SubElement(docs, tag, {"name": name})
            entry.text = PLACEHOLDER


def _remove_stale_entries(
    docs: ET.Element,
    tag: str,
    names: Sequence[str],
    *,
    delete: bool,
    markers: Sequence[str],
) -> None:
    allowed: dict[str, int] = {}
    for name in names:
        allowed[name] = allowed.get(name, 0) + 1
    seen: dict[str, int] = {}
    for entry in child_elements(docs, tag):
        name = entry.get("name", "")
        seen[name] = seen.get(name, 0) + 1
        if seen[name] <= allowed.get(name, 0):
            continue
        text = inner_text(entry)
        if delete or is_placeholder_text(text, markers):
            docs.remove(entry)
        else:
            logger.warning(
                f"Would have deleted {tag} '{name}', but delete is disabled and it is not empty ('{text}')"
            )


def _sort_named_entries(docs: ET.Element, tag: str, names: Sequence[str]) -> None:
    entries = child_elements(docs, tag)
    if not entries:
        return
    rank = {name: i for i, name in reversed(list(enumerate(names)))}
    ordered = sorted(entries, key=lambda e: rank.get(e.get("name", ""), len(rank)))
    anchor = list(docs).index(entries[0])
    for entry in entries:
        docs.remove(entry)
    for offset, entry in enumerate(ordered):
        docs.insert(anchor + offset, entry)


def update_docs_stub(
    docs: ET.Element,
    *,
    parameters: Sequence[str] | None = None,
    type_parameters: Sequence[str] | None = None,
    returns: str | None = None,
    is_last: bool = False,
    delete: bool = False,
    markers: Sequence[str] = DEFAULT_MARKERS,
    documented_parameters: Sequence[str] | None = None,
    documented_type_parameters: Sequence[str] | None = None,
) -> None:
    """Fill in missing placeholder entries of a Docs element.

    ``returns`` is ``"returns"`` for methods, ``"value"`` for properties and
    None when there is no return value. Existing text is never rewritten; a
    ``returns`` entry is renamed to ``value`` (or back) with its content.

    On the last pass ``param``/``typeparam`` entries naming nothing are
    dropped when they are placeholders (or when deletion is enabled). The
    names still listed in the document are passed as
    ``documented_parameters``/``documented_type_parameters``, so entries of
    parameter alternates from other frameworks survive; they default to the
    current names.
    """
    write_initial_text(docs, "summary")

    for tag, names, documented in (
        ("param", parameters, documented_parameters),
        ("typeparam", type_parameters, documented_type_parameters),
    ):
        if names is None:
            continue
        _add_named_entries(docs, tag, names)
        if is_last:
            keep = names if documented is None else documented
            _remove_stale_entries(docs, tag, keep, delete=delete, markers=markers)
            _sort_named_entries(docs, tag, keep)

    if returns is not None:
        other_tag = "value" if returns == "returns" else "returns"
        other = docs.find(other_tag)
        if other is not None:
            other.tag = returns
        else:
            write_initial_text(docs, returns)
    else:
        for tag in ("returns", "value"):
            node = docs.find(tag)
            if node is not None and is_placeholder_text(inner_text(node), markers):
                clear_element(docs, tag)

    write_initial_text(docs, "remarks")
    reorder_nodes(docs, DOCS_NODE_ORDER)


def ensure_docs(node: ET.Element) -> ET.Element:
    """Return the Docs child of ``node``, creating it when missing."""
    return write_element(node, "Docs")
