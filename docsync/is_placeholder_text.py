"""Predicate for generated placeholder documentation text."""

from collections.abc import Sequence

DEFAULT_MARKERS = ("To be added",)


def is_placeholder_text(text: str, markers: Sequence[str] = DEFAULT_MARKERS) -> bool:
    """Check if ``text`` is empty or one of the generated stubs."""
    stripped = text.strip()
    return not stripped or any(stripped.startswith(m) for m in markers)
