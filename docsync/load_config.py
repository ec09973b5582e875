"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from docsync.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "policy": {
        "delete": False,
        "preserve_tag": "",
        "run_kind": "normal",
        "no_assembly_versions": False,
    },
    "signatures": {
        "fingerprint_language": "ILAsm",
        "usage_languages": [],
    },
    "languages": [
        "C#",
        "ILAsm",
        "DocId",
    ],
    "placeholder_markers": [
        "To be added",
    ],
    "parallel": {
        "max_workers": 1,
    },
    "index": {
        "file_name": "index.xml",
        "title": "Untitled",
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
