"""Canonical child ordering for Type, Member and Docs nodes."""

import functools
import xml.etree.ElementTree as ET
from collections.abc import Sequence

TYPE_NODE_ORDER = (
    "Metadata",
    "TypeSignature",
    "MemberOfLibrary",
    "AssemblyInfo",
    "TypeForwardingChain",
    "ThreadingSafetyStatement",
    "ThreadSafetyStatement",
    "TypeParameters",
    "Base",
    "Interfaces",
    "Attributes",
    "Parameters",
    "ReturnValue",
    "Docs",
    "Members",
    "TypeExcluded",
)

MEMBER_NODE_ORDER = (
    "Metadata",
    "MemberSignature",
    "MemberType",
    "Implements",
    "AssemblyInfo",
    "Attributes",
    "ReturnValue",
    "TypeParameters",
    "Parameters",
    "MemberValue",
    "Docs",
    "Excluded",
    "ExcludedLibrary",
    "Link",
)

DOCS_NODE_ORDER = (
    "typeparam",
    "param",
    "summary",
    "returns",
    "value",
    "remarks",
)


def reorder_nodes(node: ET.Element, ordering: Sequence[str]) -> None:
    """Move children named in ``ordering`` to the front, in that order.

    Children with the same tag keep their relative order; unlisted children
    follow in their original order.
    """
    children = list(node)
    ranked = [c for tag in ordering for c in children if c.tag == tag]
    rest = [c for c in children if c.tag not in ordering]
    for child in children:
        node.remove(child)
    node.extend(ranked + rest)


def _attr_values(member: ET.Element, path: str, attr: str) -> list[str]:
    return [n.get(attr, "") for n in member.findall(path)]


def _cmp(a: str, b: str) -> int:
    return (a > b) - (a < b)


def compare_members(x: ET.Element, y: ET.Element) -> int:
    """Order members by name, kind, generic arity, parameters and return type."""
    x_name = x.get("MemberName", "")
    y_name = y.get("MemberName", "")
    # generic methods end with '>'; explicit implementations of generic
    # interfaces may contain '<' without being generic themselves
    if not (x_name.endswith(">") and y_name.endswith(">")):
        r = _cmp(x_name, y_name)
        if r:
            return r
    r = _cmp(x_name.split("<", 1)[0], y_name.split("<", 1)[0])
    if r:
        return r

    r = _cmp(x.findtext("MemberType", ""), y.findtext("MemberType", ""))
    if r:
        return r

    for path, attr in (
        ("TypeParameters/TypeParameter", "Name"),
        ("Parameters/Parameter", "Type"),
    ):
        xs = _attr_values(x, path, attr)
        ys = _attr_values(y, path, attr)
        if len(xs) != len(ys):
            return -1 if len(xs) < len(ys) else 1
        for a, b in zip(xs, ys):
            r = _cmp(a, b)
            if r:
                return r

    x_ret = x.find("ReturnValue/ReturnType")
    y_ret = y.find("ReturnValue/ReturnType")
    if x_ret is not None and y_ret is not None:
        return _cmp(x_ret.text or "", y_ret.text or "")
    return 0


def sort_type_members(members: ET.Element | None) -> None:
    """Sort the Member children of a Members element in place (stable)."""
    if members is None:
        return
    items = [c for c in members if c.tag == "Member"]
    others = [c for c in members if c.tag != "Member"]
    for child in list(members):
        members.remove(child)
    members.extend(sorted(items, key=functools.cmp_to_key(compare_members)) + others)
