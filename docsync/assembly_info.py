"""AssemblyInfo maintenance for Type and Member nodes."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from docsync.api_style import ApiStyle, add_api_style, has_api_style, is_classic_assembly_info
from docsync.deletion_policy import RunKind
from docsync.xml_nodes import child_elements, clear_element, write_element_text


def version_key(version: str) -> tuple[int | str, ...]:
    """Sort key for dotted versions; non-numeric parts sort after numbers."""
    parts: list[int | str] = []
    for part in version.split("."):
        parts.append(int(part) if part.isdigit() else part)
    return tuple((0, p) if isinstance(p, int) else (1, p) for p in parts)


def _matches_style(info: ET.Element, run_kind: RunKind) -> bool:
    if run_kind is RunKind.UNIFIED:
        return has_api_style(info, ApiStyle.UNIFIED)
    return is_classic_assembly_info(info)


def remove_invalid_assembly_info(root: ET.Element, *, no_assembly_versions: bool) -> int:
    """Drop AssemblyInfo nodes without any AssemblyVersion; return how many."""
    if no_assembly_versions:
        return 0
    stale = [i for i in child_elements(root, "AssemblyInfo") if i.find("AssemblyVersion") is None]
    for info in stale:
        root.remove(info)
    return len(stale)


def find_or_add_assembly_info(
    root: ET.Element, assembly_name: str, run_kind: RunKind
) -> ET.Element:
    """Return the AssemblyInfo of the current API style, creating it when missing."""
    infos = child_elements(root, "AssemblyInfo")
    current = next(
        (
            i
            for i in infos
            if _matches_style(i, run_kind)
            and i.findtext("AssemblyName", assembly_name) == assembly_name
        ),
        None,
    )
    if current is None:
        current = ET.SubElement(root, "AssemblyInfo")
        if run_kind is RunKind.UNIFIED:
            add_api_style(current, ApiStyle.UNIFIED, root)
        elif run_kind is RunKind.CLASSIC:
            add_api_style(current, ApiStyle.CLASSIC, root)

    if run_kind is RunKind.UNIFIED:
        other = next((i for i in infos if is_classic_assembly_info(i)), None)
        if other is not None:
            add_api_style(current, ApiStyle.UNIFIED, root)
            add_api_style(other, ApiStyle.CLASSIC, root)

    write_element_text(current, "AssemblyName", assembly_name)
    return current


def update_assembly_version_for_assembly_info(
    info: ET.Element, root: ET.Element, versions: list[str], *, add: bool
) -> bool:
    """Add or remove ``versions`` and report whether any version remains.

    An AssemblyInfo left without versions is removed from ``root``.
    """
    existing = child_elements(info, "AssemblyVersion")
    matches = [v for v in existing if (v.text or "") in versions]
    if matches and not add:
        for node in matches:
            info.remove(node)
    elif not matches and add:
        for version in versions:
            ET.SubElement(info, "AssemblyVersion").text = version

    remaining = sorted(child_elements(info, "AssemblyVersion"), key=lambda v: version_key(v.text or ""))
    for node in remaining:
        info.remove(node)
    name = info.find("AssemblyName")
    anchor = list(info).index(name) + 1 if name is not None else 0
    for offset, node in enumerate(remaining):
        info.insert(anchor + offset, node)

    if not remaining and info in list(root):
        root.remove(info)
    return bool(remaining)


def update_assembly_versions(
    root: ET.Element,
    assembly_name: str,
    version: str,
    *,
    add: bool,
    run_kind: RunKind,
    no_assembly_versions: bool = False,
) -> bool:
    """Record (or retract) ``version`` of ``assembly_name`` on ``root``.

    Returns whether any assembly version is still attached, which is what
    keeps a member alive when the current assembly no longer declares it.
    """
    if no_assembly_versions:
        return False
    clear_element(root, "AssemblyVersions")
    info = find_or_add_assembly_info(root, assembly_name, run_kind)
    return update_assembly_version_for_assembly_info(info, root, [version], add=add)


def update_assembly_culture(info: ET.Element, culture: str) -> None:
    """Write AssemblyCulture, or drop it for the neutral culture."""
    if culture:
        write_element_text(info, "AssemblyCulture", culture)
    else:
        clear_element(info, "AssemblyCulture")
