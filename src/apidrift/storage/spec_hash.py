"""Content hash of a contract document, used to flag contract changes between runs."""

from __future__ import annotations

import hashlib
from pathlib import Path


def calculate_spec_hash(path: Path) -> str:
    """SHA-256 hex digest of the file's bytes."""
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()
