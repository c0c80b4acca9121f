"""
Base report storage protocol and factory.

Defines the interface that all report storage backends must implement.
The core only ever issues one "previous run", one "recent runs" and one
"save" request per invocation; an empty result means "no history".
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Type, runtime_checkable

from apidrift.models import DriftReportV2, PreviousRunRef

logger = logging.getLogger(__name__)


class StorageType(str, Enum):
    """Available storage backend types."""
    FILE = "file"
    MEMORY = "memory"


@runtime_checkable
class ReportStorage(Protocol):
    """
    Protocol defining the report storage interface.

    All storage implementations must provide these methods.
    """

    def save_report(self, report: DriftReportV2) -> None:
        """Persist a longitudinal report."""
        ...

    def load_report(self, run_id: str) -> Optional[DriftReportV2]:
        """Load a stored report, or None if absent or unreadable."""
        ...

    def get_previous_run(
        self, service_name: str, environment: str
    ) -> Optional[PreviousRunRef]:
        """Most recent stored run for a service/environment."""
        ...

    def list_recent_runs(
        self, service_name: str, environment: str, limit: int
    ) -> List[PreviousRunRef]:
        """Stored runs for a service/environment, newest first."""
        ...


class BaseReportStorage(ABC):
    """
    Abstract base class for report storage backends.

    Provides ``get_previous_run`` in terms of ``list_recent_runs``.
    """

    @abstractmethod
    def save_report(self, report: DriftReportV2) -> None:
        """Persist a longitudinal report."""
        pass

    @abstractmethod
    def load_report(self, run_id: str) -> Optional[DriftReportV2]:
        """Load a stored report, or None if absent or unreadable."""
        pass

    @abstractmethod
    def list_recent_runs(
        self, service_name: str, environment: str, limit: int
    ) -> List[PreviousRunRef]:
        """Stored runs for a service/environment, newest first."""
        pass

    def get_previous_run(
        self, service_name: str, environment: str
    ) -> Optional[PreviousRunRef]:
        """Most recent stored run for a service/environment."""
        runs = self.list_recent_runs(service_name, environment, limit=1)
        return runs[0] if runs else None


# Storage backend registry
_BACKENDS: Dict[StorageType, Type[BaseReportStorage]] = {}


def register_backend(storage_type: StorageType):
    """Decorator to register a storage backend."""
    def decorator(cls: Type[BaseReportStorage]) -> Type[BaseReportStorage]:
        _BACKENDS[storage_type] = cls
        return cls
    return decorator


def get_storage(
    storage_type: StorageType | str = StorageType.FILE,
    **kwargs: Any,
) -> BaseReportStorage:
    """
    Get a report storage backend instance.

    Args:
        storage_type: Backend to use (``file`` or ``memory``)
        **kwargs: Backend-specific options (``base_dir``, ``index_limit``)

    Returns:
        Storage backend instance
    """
    # Import backends to register them
    from apidrift.storage import file, memory  # noqa: F401

    try:
        storage_type = StorageType(storage_type)
    except ValueError:
        raise ValueError(f"Unknown storage type: {storage_type}") from None

    if storage_type not in _BACKENDS:
        raise ValueError(f"Unknown storage type: {storage_type}")

    backend_class = _BACKENDS[storage_type]
    logger.debug("Using %s report storage", storage_type.value)
    return backend_class(**kwargs)
