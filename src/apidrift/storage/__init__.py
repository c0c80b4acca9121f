"""
Report storage for apidrift.

Persists longitudinal reports so later runs can be diffed against them.

Example:
    from apidrift.storage import get_storage, StorageType

    storage = get_storage(StorageType.FILE, base_dir=".drift-reports")
    previous = storage.get_previous_run("users-api", "staging")
"""

from apidrift.storage.base import (
    BaseReportStorage,
    ReportStorage,
    StorageType,
    get_storage,
    register_backend,
)
from apidrift.storage.file import FileReportStorage
from apidrift.storage.memory import MemoryReportStorage
from apidrift.storage.spec_hash import calculate_spec_hash

__all__ = [
    "BaseReportStorage",
    "FileReportStorage",
    "MemoryReportStorage",
    "ReportStorage",
    "StorageType",
    "calculate_spec_hash",
    "get_storage",
    "register_backend",
]
