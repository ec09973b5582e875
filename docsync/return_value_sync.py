"""ReturnValue/ReturnType variants of Member and delegate Type nodes."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence

from docsync.attribute_sync import sync_attributes
from docsync.framework_index import TypeEntry
from docsync.framework_set import FrameworkSet
from docsync.type_model import AttributeDecl
from docsync.variant_tracker import add_element_with_fx
from docsync.xml_nodes import clear_element, set_or_remove, write_element

REF_KINDS = {"ref": "Ref", "readonly": "Readonly"}


def sync_return_value(
    root: ET.Element,
    return_type: str,
    entry: TypeEntry,
    *,
    is_first: bool,
    is_last: bool,
    universe: FrameworkSet,
    ref_kind: str = "",
    attributes: Sequence[AttributeDecl] = (),
    languages: Sequence[str] = (),
) -> ET.Element | None:
    """Upsert the ReturnType variant for ``return_type``."""
    container = write_element(root, "ReturnValue")
    value = return_type
    if ref_kind == "readonly" and value.endswith("&"):
        value = value[:-1]
    set_or_remove(container, "RefType", REF_KINDS.get(ref_kind))

    def _add(parent: ET.Element) -> ET.Element:
        node = ET.SubElement(parent, "ReturnType")
        node.text = value
        sync_attributes(parent, attributes, entry, is_first=is_first, languages=languages)
        return node

    return add_element_with_fx(
        entry,
        container,
        is_first=is_first,
        is_last=is_last,
        universe=lambda: universe,
        clear=lambda parent: clear_element(parent, "ReturnType"),
        find_existing=lambda parent: next(
            (r for r in parent.findall("ReturnType") if (r.text or "") == value), None
        ),
        add_item=_add,
    )
