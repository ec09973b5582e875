"""Index of every framework in a run and the types and members each contains."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from docsync.errors import DataInconsistencyError
from docsync.framework_set import FrameworkSet
from docsync.type_model import is_private_explicit_implementation

if TYPE_CHECKING:
    from docsync.formatter_set import FormatterSet
    from docsync.type_model import TypeDecl


@dataclass
class FrameworkEntry:
    """One framework snapshot: its types and their member fingerprints."""

    name: str
    position: int
    types: dict[str, set[str]] = field(default_factory=dict)

    def has_member(self, type_name: str, key: str) -> bool:
        """Check whether ``type_name`` declares the member ``key`` here."""
        return key in self.types.get(type_name, ())


class FrameworkIndex:
    """Declared framework order plus what each framework contains.

    First and last passes are always relative to this order, never to the
    order in which types happen to be visited.
    """

    def __init__(self) -> None:
        """Create an empty index."""
        self.frameworks: list[FrameworkEntry] = []
        self._by_name: dict[str, FrameworkEntry] = {}
        self._entries: dict[tuple[str, str], TypeEntry] = {}

    @classmethod
    def from_snapshots(
        cls,
        snapshots: Iterable[tuple[str, Iterable[TypeDecl]]],
        formatters: FormatterSet,
    ) -> FrameworkIndex:
        """Build the index from ordered (framework, types) snapshots.

        Only documentable members are recorded: hidden members and explicit
        implementations of non-public interfaces never keep a node alive.
        """
        index = cls()
        for fx_name, types in snapshots:
            index.add_framework(fx_name)
            for type_decl in types:
                keys = [
                    formatters.fingerprint(m)
                    for m in type_decl.members
                    if formatters.is_visible(m) and not is_private_explicit_implementation(m)
                ]
                index.add_type(fx_name, type_decl.full_name, [k for k in keys if k])
        return index

    @property
    def names(self) -> list[str]:
        """Framework names in declared order."""
        return [f.name for f in self.frameworks]

    def add_framework(self, name: str) -> FrameworkEntry:
        """Append a framework to the declared order."""
        if name in self._by_name:
            msg = f"Framework '{name}' declared twice"
            raise DataInconsistencyError(msg)
        entry = FrameworkEntry(name=name, position=len(self.frameworks))
        self.frameworks.append(entry)
        self._by_name[name] = entry
        return entry

    def add_type(self, framework: str, type_name: str, member_keys: Iterable[str]) -> None:
        """Record that ``framework`` contains ``type_name`` with those members."""
        self.get(framework).types.setdefault(type_name, set()).update(member_keys)

    def get(self, framework: str) -> FrameworkEntry:
        """Return the entry for ``framework`` or fail loudly."""
        try:
            return self._by_name[framework]
        except KeyError:
            msg = f"Framework '{framework}' is not part of this run"
            raise DataInconsistencyError(msg) from None

    def frameworks_with_type(self, type_name: str) -> list[str]:
        """Frameworks (in order) that contain ``type_name``."""
        return [f.name for f in self.frameworks if type_name in f.types]

    def frameworks_with_member(self, type_name: str, key: str) -> list[str]:
        """Frameworks (in order) whose ``type_name`` declares member ``key``."""
        return [f.name for f in self.frameworks if f.has_member(type_name, key)]

    def previous_frameworks(self, framework: str, type_name: str) -> list[str]:
        """Frameworks declared before ``framework`` that contain ``type_name``."""
        position = self.get(framework).position
        return [f.name for f in self.frameworks if f.position < position and type_name in f.types]

    def contains_member(self, type_name: str, key: str) -> bool:
        """Check whether any framework of the run declares the member."""
        return any(f.has_member(type_name, key) for f in self.frameworks)

    def start_type(self, framework: str, type_name: str) -> TypeEntry:
        """Begin one (type, framework) processing unit.

        Processing the same type twice within one framework (e.g. the type is
        reachable from two assemblies) bumps ``times_processed``.
        """
        fx = self.get(framework)
        if type_name not in fx.types:
            msg = f"Type '{type_name}' is not indexed for framework '{framework}'"
            raise DataInconsistencyError(msg)
        key = (framework, type_name)
        entry = self._entries.get(key)
        if entry is None:
            entry = TypeEntry(index=self, framework=framework, type_name=type_name)
            self._entries[key] = entry
        entry.times_processed += 1
        return entry


@dataclass
class TypeEntry:
    """One type being processed for one framework."""

    index: FrameworkIndex
    framework: str
    type_name: str
    times_processed: int = 0

    @property
    def order(self) -> list[str]:
        """Declared framework order, used when encoding sets."""
        return self.index.names

    def universe(self) -> FrameworkSet:
        """All frameworks of the run that contain this type."""
        return FrameworkSet(self.index.frameworks_with_type(self.type_name))

    def is_first_for_type(self) -> bool:
        """Check whether this is the first framework containing the type."""
        fxs = self.index.frameworks_with_type(self.type_name)
        return not fxs or fxs[0] == self.framework

    def is_last_for_type(self) -> bool:
        """Check whether this is the last framework containing the type."""
        fxs = self.index.frameworks_with_type(self.type_name)
        return bool(fxs) and fxs[-1] == self.framework

    def is_first_for_member(self, key: str | None) -> bool:
        """Check whether this is the first framework declaring the member."""
        fxs = self.index.frameworks_with_member(self.type_name, key) if key else []
        if not fxs:
            return self.is_first_for_type()
        return fxs[0] == self.framework

    def is_last_for_member(self, key: str | None) -> bool:
        """Check whether this is the last framework declaring the member."""
        fxs = self.index.frameworks_with_member(self.type_name, key) if key else []
        if not fxs:
            return self.is_last_for_type()
        return fxs[-1] == self.framework

    def previously_processed(self) -> FrameworkSet:
        """Frameworks before this one (in order) that contain the type."""
        return FrameworkSet(self.index.previous_frameworks(self.framework, self.type_name))
