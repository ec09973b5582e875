"""Decision table for members that no longer exist in the current pass."""

from __future__ import annotations

from enum import Enum


class RunKind(str, Enum):
    """Which API style the current run documents."""

    NORMAL = "normal"
    CLASSIC = "classic"
    UNIFIED = "unified"


class RemovalDecision(str, Enum):
    """Outcome for a removal candidate."""

    DELETE = "delete"
    PRESERVE = "preserve"
    MARK_CLASSIC_ONLY = "mark_classic_only"
    MARK_UNIFIED_ONLY = "mark_unified_only"


def decide_removal(
    *,
    run_kind: RunKind,
    delete_enabled: bool,
    preserve: bool,
    has_user_content: bool,
    node_is_classic: bool,
    node_is_unified: bool,
) -> RemovalDecision:
    """Resolve what happens to a member missing from the current pass.

    Members with real documentation survive unless deletion is explicitly
    enabled; a preserve tag protects everything. On a unified run a member
    still present in the classic assembly is demoted to classic-only, and on
    a classic run a styled member loses its classic marker instead of being
    deleted.
    """
    should_delete = not preserve and (delete_enabled or not has_user_content)
    if not should_delete:
        return RemovalDecision.PRESERVE

    if run_kind is RunKind.UNIFIED:
        if node_is_classic:
            return RemovalDecision.MARK_CLASSIC_ONLY
        return RemovalDecision.DELETE

    if run_kind is RunKind.CLASSIC and (node_is_classic or node_is_unified):
        return RemovalDecision.MARK_UNIFIED_ONLY

    return RemovalDecision.DELETE
