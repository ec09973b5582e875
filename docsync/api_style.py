"""Helpers for the ``apistyle`` (classic/unified) marker."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from enum import Enum

API_STYLE = "apistyle"


class ApiStyle(str, Enum):
    """The two namespace-mapping conventions a catalog can be documented in."""

    CLASSIC = "classic"
    UNIFIED = "unified"


def has_api_style(node: ET.Element, style: ApiStyle) -> bool:
    """Check whether ``node`` is marked with ``style``."""
    return node.get(API_STYLE) == style.value


def is_classic_assembly_info(node: ET.Element) -> bool:
    """Unmarked AssemblyInfo nodes belong to the classic style."""
    return node.get(API_STYLE) in (None, "", ApiStyle.CLASSIC.value)


def add_api_style(node: ET.Element, style: ApiStyle, parent: ET.Element | None = None) -> None:
    """Mark ``node`` with ``style``.

    When ``node`` is a Member's AssemblyInfo the style propagates to the Member,
    unless the member also has AssemblyInfo of the other style.
    """
    node.set(API_STYLE, style.value)
    if node.tag != "AssemblyInfo" or parent is None or parent.tag != "Member":
        return
    infos = parent.findall("AssemblyInfo")
    has_unified = any(has_api_style(i, ApiStyle.UNIFIED) for i in infos)
    has_classic = any(is_classic_assembly_info(i) for i in infos)
    if (style is ApiStyle.CLASSIC and has_unified) or (
        style is ApiStyle.UNIFIED and has_classic
    ):
        parent.attrib.pop(API_STYLE, None)
    elif API_STYLE not in parent.attrib:
        parent.set(API_STYLE, style.value)


def remove_api_style(node: ET.Element, style: ApiStyle) -> None:
    """Drop the marker when it is ``style`` or blank."""
    if node.get(API_STYLE, "").strip() in ("", style.value):
        node.attrib.pop(API_STYLE, None)


def node_is_classic(member: ET.Element) -> bool:
    """Classic when marked so or carrying classic AssemblyInfo."""
    if has_api_style(member, ApiStyle.CLASSIC):
        return True
    return any(is_classic_assembly_info(i) for i in member.findall("AssemblyInfo"))


def node_is_unified(member: ET.Element) -> bool:
    """Unified when marked so or carrying unified AssemblyInfo."""
    if has_api_style(member, ApiStyle.UNIFIED):
        return True
    return any(has_api_style(i, ApiStyle.UNIFIED) for i in member.findall("AssemblyInfo"))
