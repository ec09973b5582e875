"""Explicit run context handed to every synchronizer collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from docsync.deletion_policy import RunKind


@dataclass(frozen=True)
class SyncOptions:
    """Policy flags for one run."""

    delete: bool = False
    preserve_tag: str = ""
    run_kind: RunKind = RunKind.NORMAL
    no_assembly_versions: bool = False
    placeholder_markers: tuple[str, ...] = ("To be added",)

    @property
    def preserve(self) -> bool:
        """Check whether a preserve tag is active."""
        return bool(self.preserve_tag.strip())

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> SyncOptions:
        """Build options from a loaded configuration dictionary."""
        policy = config.get("policy", {})
        return cls(
            delete=bool(policy.get("delete", False)),
            preserve_tag=str(policy.get("preserve_tag") or ""),
            run_kind=RunKind(policy.get("run_kind", "normal")),
            no_assembly_versions=bool(policy.get("no_assembly_versions", False)),
            placeholder_markers=tuple(config.get("placeholder_markers", ("To be added",))),
        )
