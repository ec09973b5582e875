"""Per-namespace documents written next to the type directories."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from docsync.docs_stub import PLACEHOLDER
from docsync.type_document import indent_tree

GLOBAL_NAMESPACE = "_global"


def namespace_stub_path(output_dir: Path, namespace: str) -> Path:
    """Location of the ``ns-<Namespace>.xml`` document."""
    return output_dir / f"ns-{namespace or GLOBAL_NAMESPACE}.xml"


def write_namespace_stub(output_dir: Path, namespace: str) -> Path | None:
    """Create the placeholder document of ``namespace``.

    Returns the new path, or None if the document already exists. An
    existing document is never overwritten.
    """
    root = ET.Element("Namespace", {"Name": namespace})
    docs = ET.SubElement(root, "Docs")
    ET.SubElement(docs, "summary").text = PLACEHOLDER
    ET.SubElement(docs, "remarks").text = PLACEHOLDER
    indent_tree(root)

    path = namespace_stub_path(output_dir, namespace)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        # exclusive create: concurrent workers of one pass race on shared namespaces
        with open(path, "x", encoding="utf-8") as f:
            f.write(ET.tostring(root, encoding="unicode") + "\n")
    except FileExistsError:
        return None
    return path
