"""Tests for placeholder detection."""

import xml.etree.ElementTree as ET

from docsync.is_placeholder_text import is_placeholder_text
from docsync.member_docs_have_user_content import member_docs_have_user_content


def test_is_placeholder_text() -> None:
    """Verify empty and stub text count as placeholders."""
    assert is_placeholder_text("")
    assert is_placeholder_text("   \n")
    assert is_placeholder_text("To be added.")
    assert not is_placeholder_text("Adds two numbers.")
    assert is_placeholder_text("TODO: document", ["TODO"])


def test_member_docs_have_user_content() -> None:
    """Verify any non-placeholder Docs entry counts as user content."""
    stub = ET.fromstring("<Member><Docs><summary>To be added.</summary><remarks /></Docs></Member>")
    written = ET.fromstring(
        '<Member><Docs><summary>To be added.</summary><remarks>See <see cref="T:X" />.</remarks></Docs></Member>'
    )

    assert not member_docs_have_user_content(stub)
    assert member_docs_have_user_content(written)
    assert not member_docs_have_user_content(ET.Element("Member"))
