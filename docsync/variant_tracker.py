"""Per-element bookkeeping of the FrameworkAlternate membership attribute."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable
from typing import TYPE_CHECKING

from docsync.framework_set import FrameworkSet

if TYPE_CHECKING:
    from docsync.framework_index import TypeEntry

FRAMEWORK_ALTERNATE = "FrameworkAlternate"


def has_frameworks(node: ET.Element) -> bool:
    """Check whether ``node`` carries an explicit membership attribute."""
    return FRAMEWORK_ALTERNATE in node.attrib


def read_frameworks(node: ET.Element, universe: FrameworkSet | None = None) -> FrameworkSet:
    """Decode the membership of ``node``.

    A missing attribute means "applies everywhere" and decodes to
    ``universe`` when one is given.
    """
    if not has_frameworks(node):
        return universe if universe is not None else FrameworkSet()
    return FrameworkSet.decode(node.get(FRAMEWORK_ALTERNATE))


def write_frameworks(node: ET.Element, frameworks: FrameworkSet, order: list[str]) -> None:
    """Encode ``frameworks`` onto ``node`` (an empty set is written as empty)."""
    node.set(FRAMEWORK_ALTERNATE, frameworks.encode(order))


def add_framework_to_element(node: ET.Element, framework: str, order: list[str]) -> None:
    """Add ``framework`` to the explicit membership of ``node``."""
    current = FrameworkSet.decode(node.get(FRAMEWORK_ALTERNATE))
    write_frameworks(node, current.with_framework(framework), order)


def remove_framework_from_element(
    node: ET.Element, framework: str, order: list[str]
) -> FrameworkSet:
    """Remove ``framework`` from the membership of ``node`` and return the rest."""
    remaining = FrameworkSet.decode(node.get(FRAMEWORK_ALTERNATE)).without_framework(
        framework
    )
    write_frameworks(node, remaining, order)
    return remaining


def clear_framework_if_all(node: ET.Element, universe: FrameworkSet) -> None:
    """Elide the attribute when membership equals the universe."""
    if has_frameworks(node) and read_frameworks(node) == universe:
        del node.attrib[FRAMEWORK_ALTERNATE]


def add_element_with_fx(
    entry: TypeEntry | None,
    parent: ET.Element,
    *,
    is_first: bool,
    is_last: bool,
    universe: Callable[[], FrameworkSet],
    clear: Callable[[ET.Element], None],
    find_existing: Callable[[ET.Element], ET.Element | None],
    add_item: Callable[[ET.Element], ET.Element],
) -> ET.Element | None:
    """Upsert one framework-tracked child of ``parent``.

    Clears the container on the first pass, reuses a matching child or adds a
    new one, tags it with the current framework, and on the last pass elides
    the attribute when it covers the universe.
    """
    if entry is not None and entry.times_processed > 1:
        return None
    if is_first:
        clear(parent)
    item = find_existing(parent)
    if item is None:
        item = add_item(parent)
    if entry is not None:
        add_framework_to_element(item, entry.framework, entry.order)
    if is_last:
        clear_framework_if_all(item, universe())
    return item
