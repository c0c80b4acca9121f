"""
Finding scope matcher.

Two findings from different runs are "the same finding" iff method, path,
field path and status code are all exactly equal. There is no fuzzy or
partial matching.
"""

from __future__ import annotations

from apidrift.models import DriftFinding, FindingScope


def create_scope(finding: DriftFinding) -> FindingScope:
    return FindingScope(
        method=finding.method,
        path=finding.path,
        field_path=finding.field_path,
        status_code=finding.status_code,
    )


def scopes_equal(a: FindingScope, b: FindingScope) -> bool:
    return (
        a.method == b.method
        and a.path == b.path
        and a.field_path == b.field_path
        and a.status_code == b.status_code
    )


def scope_key(scope: FindingScope) -> str:
    """Deterministic key: ``METHOD|path[|field:<f>][|status:<code>]``."""
    parts = [scope.method.value, scope.path]
    if scope.field_path is not None:
        parts.append(f"field:{scope.field_path}")
    if scope.status_code is not None:
        parts.append(f"status:{scope.status_code}")
    return "|".join(parts)


def group_by_scope(findings: list[DriftFinding]) -> dict[str, DriftFinding]:
    """Map scope key to finding; on duplicate scopes the last one wins."""
    grouped: dict[str, DriftFinding] = {}
    for finding in findings:
        grouped[scope_key(create_scope(finding))] = finding
    return grouped
