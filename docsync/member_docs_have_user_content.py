"""Detect human-authored documentation below a Member or Type node."""

import xml.etree.ElementTree as ET
from collections.abc import Sequence

from docsync.is_placeholder_text import DEFAULT_MARKERS, is_placeholder_text
from docsync.xml_nodes import inner_text


def member_docs_have_user_content(
    node: ET.Element, markers: Sequence[str] = DEFAULT_MARKERS
) -> bool:
    """Check whether any Docs child carries non-placeholder text."""
    docs = node.find("Docs")
    if docs is None:
        return False
    return any(not is_placeholder_text(inner_text(d), markers) for d in docs)
