"""Signature formatters consumed by the synchronizer.

Rendering itself belongs to the front end; formatters here only expose the
canonical strings per output language and pick the fingerprint used to
match members across passes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from docsync.type_model import MemberDecl, TypeDecl


class Formatter(Protocol):
    """Maps declarations to one language's canonical signature."""

    language: str

    def type_declaration(self, decl: TypeDecl) -> str | None:
        """Return the type signature, or None when it cannot be rendered."""
        ...

    def member_declaration(self, decl: MemberDecl) -> str | None:
        """Return the member signature, or None when it cannot be rendered."""
        ...

    def usage(self, decl: TypeDecl | MemberDecl) -> str | None:
        """Return an optional usage sample."""
        ...


@dataclass(frozen=True)
class DeclaredFormatter:
    """Formatter reading the strings the front end stored on declarations."""

    language: str
    with_usage: bool = False

    def type_declaration(self, decl: TypeDecl) -> str | None:
        """Return the pre-rendered type signature."""
        return decl.ids.get(self.language)

    def member_declaration(self, decl: MemberDecl) -> str | None:
        """Return the pre-rendered member signature."""
        return decl.ids.get(self.language)

    def usage(self, decl: TypeDecl | MemberDecl) -> str | None:
        """Return the pre-rendered usage sample if enabled."""
        if not self.with_usage:
            return None
        return decl.usage.get(self.language)


@dataclass
class FormatterSet:
    """Ordered formatters plus the language whose output is the fingerprint.

    The first member formatter is the visibility gate: when it cannot render a
    member, the member is treated as non-public.
    """

    type_formatters: Sequence[Formatter]
    member_formatters: Sequence[Formatter]
    fingerprint_language: str = "ILAsm"
    _by_language: dict[str, Formatter] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Index member formatters by language."""
        self._by_language = {f.language: f for f in self.member_formatters}

    @classmethod
    def declared(
        cls,
        languages: Sequence[str],
        fingerprint_language: str = "ILAsm",
        usage_languages: Sequence[str] = (),
    ) -> FormatterSet:
        """Build a set of ``DeclaredFormatter`` for ``languages``."""
        formatters = [DeclaredFormatter(lang, lang in usage_languages) for lang in languages]
        return cls(formatters, formatters, fingerprint_language)

    @property
    def primary(self) -> Formatter:
        """The first member formatter."""
        return self.member_formatters[0]

    def is_visible(self, decl: MemberDecl) -> bool:
        """Check whether the primary formatter can render the member."""
        return self.primary.member_declaration(decl) is not None

    def fingerprint(self, decl: MemberDecl) -> str | None:
        """Return the language-neutral matching key of a member."""
        formatter = self._by_language.get(self.fingerprint_language)
        if formatter is None:
            return decl.ids.get(self.fingerprint_language)
        return formatter.member_declaration(decl)
