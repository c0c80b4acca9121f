"""Cross-run finding identity and run-to-run change detection."""

from apidrift.diff.change_detector import create_snapshot, detect_changes, new_id
from apidrift.diff.matcher import create_scope, group_by_scope, scope_key, scopes_equal

__all__ = [
    "create_scope",
    "create_snapshot",
    "detect_changes",
    "group_by_scope",
    "new_id",
    "scope_key",
    "scopes_equal",
]
