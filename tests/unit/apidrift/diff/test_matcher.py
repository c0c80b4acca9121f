"""Tests for cross-run finding identity."""

from __future__ import annotations

from apidrift.diff.matcher import create_scope, group_by_scope, scope_key, scopes_equal
from apidrift.models import FindingScope
from apidrift.types import DriftType, HttpMethod, SeverityLevel


class TestScopeKey:
    def test_field_scope(self):
        scope = FindingScope(method=HttpMethod.GET, path="/users", field_path="email")
        assert scope_key(scope) == "GET|/users|field:email"

    def test_status_scope(self):
        scope = FindingScope(method=HttpMethod.POST, path="/users", status_code=500)
        assert scope_key(scope) == "POST|/users|status:500"

    def test_both_parts_in_fixed_order(self):
        scope = FindingScope(method=HttpMethod.GET, path="/u", field_path="a", status_code=200)
        assert scope_key(scope) == "GET|/u|field:a|status:200"

    def test_bare_scope(self):
        assert scope_key(FindingScope(method=HttpMethod.GET, path="/u")) == "GET|/u"


class TestScopes:
    def test_create_scope_projects_identity(self, make_finding):
        finding = make_finding(DriftType.UNDOCUMENTED_STATUS_CODE, status_code=503)
        scope = create_scope(finding)
        assert scope == FindingScope(method=HttpMethod.GET, path="/users", status_code=503)

    def test_scopes_equal_is_exact(self):
        a = FindingScope(method=HttpMethod.GET, path="/users", field_path="email")
        assert scopes_equal(a, FindingScope(method="GET", path="/users", field_path="email"))
        assert not scopes_equal(a, FindingScope(method=HttpMethod.GET, path="/users/", field_path="email"))
        assert not scopes_equal(a, FindingScope(method=HttpMethod.GET, path="/users", field_path="Email"))
        assert not scopes_equal(a, FindingScope(method=HttpMethod.GET, path="/users"))

    def test_group_by_scope_last_write_wins(self, make_finding):
        first = make_finding(severity=SeverityLevel.LOW)
        second = make_finding(severity=SeverityLevel.HIGH)
        grouped = group_by_scope([first, second])
        assert list(grouped) == ["GET|/users|field:email"]
        assert grouped["GET|/users|field:email"].severity == SeverityLevel.HIGH

    def test_different_finding_types_share_a_scope(self, make_finding):
        grouped = group_by_scope(
            [make_finding(DriftType.MISSING_FIELD), make_finding(DriftType.TYPE_MISMATCH)]
        )
        assert len(grouped) == 1
