"""Set of framework names with the delimited-string encoding used on disk."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

DELIMITER = ";"


class FrameworkSet:
    """Immutable set of framework identifiers.

    Internally a plain set; the ``;`` delimited form only exists at the
    serialization edge (``decode`` / ``encode``).
    """

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = frozenset(n.strip() for n in names if n and n.strip())

    @classmethod
    def decode(cls, text: str | None) -> FrameworkSet:
        if not text:
            return cls()
        return cls(text.split(DELIMITER))

    def encode(self, order: Sequence[str] = ()) -> str:
        rank = {name: i for i, name in enumerate(order)}
        ordered = sorted(self._names, key=lambda n: (rank.get(n, len(rank)), n))
        return DELIMITER.join(ordered)

    def with_framework(self, name: str) -> FrameworkSet:
        return FrameworkSet(self._names | {name})

    def without_framework(self, name: str) -> FrameworkSet:
        return FrameworkSet(self._names - {name})

    def issubset(self, other: FrameworkSet) -> bool:
        return self._names <= other._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self):
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __bool__(self) -> bool:
        return bool(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrameworkSet):
            return NotImplemented
        return self._names == other._names

    def __hash__(self) -> int:
        return hash(self._names)

    def __repr__(self) -> str:
        return f"FrameworkSet({self.encode()!r})"
