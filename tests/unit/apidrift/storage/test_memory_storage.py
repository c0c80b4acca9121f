"""Tests for in-memory storage and the backend factory."""

from __future__ import annotations

import hashlib

import pytest

from apidrift.models import DriftReportV2, RunMetadata
from apidrift.storage import (
    FileReportStorage,
    MemoryReportStorage,
    ReportStorage,
    StorageType,
    calculate_spec_hash,
    get_storage,
)


def _make_v2(report, run_id: str, executed_at: str) -> DriftReportV2:
    return DriftReportV2(
        report=report,
        run=RunMetadata(
            run_id=run_id,
            executed_at=executed_at,
            service_name="users-api",
            environment="prod",
            spec_hash="abc",
            tool_version="0.2.0",
        ),
    )


class TestMemoryReportStorage:
    def test_save_load_and_order(self, make_report):
        storage = MemoryReportStorage()
        storage.save_report(_make_v2(make_report(), "old", "2024-01-01T00:00:00.000Z"))
        storage.save_report(_make_v2(make_report(), "new", "2024-01-02T00:00:00.000Z"))

        assert storage.load_report("old").run.run_id == "old"
        assert storage.load_report("missing") is None
        assert [r.run_id for r in storage.list_recent_runs("users-api", "prod", 5)] == ["new", "old"]
        assert storage.get_previous_run("users-api", "prod").run_id == "new"
        assert storage.get_previous_run("users-api", "dev") is None


class TestGetStorage:
    def test_file_backend(self, tmp_path):
        storage = get_storage(StorageType.FILE, base_dir=tmp_path, index_limit=3)
        assert isinstance(storage, FileReportStorage)
        assert storage.index_limit == 3

    def test_memory_backend_by_name(self):
        assert isinstance(get_storage("memory"), MemoryReportStorage)

    def test_backends_satisfy_protocol(self, tmp_path):
        assert isinstance(get_storage("memory"), ReportStorage)
        assert isinstance(get_storage("file", base_dir=tmp_path), ReportStorage)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown storage type"):
            get_storage("redis")


class TestSpecHash:
    def test_sha256_of_file_bytes(self, tmp_path):
        spec = tmp_path / "openapi.yaml"
        spec.write_bytes(b"openapi: 3.0.0\n")
        assert calculate_spec_hash(spec) == hashlib.sha256(b"openapi: 3.0.0\n").hexdigest()

    def test_different_content_different_hash(self, tmp_path):
        a = tmp_path / "a.yaml"
        b = tmp_path / "b.yaml"
        a.write_text("x: 1")
        b.write_text("x: 2")
        assert calculate_spec_hash(a) != calculate_spec_hash(b)
