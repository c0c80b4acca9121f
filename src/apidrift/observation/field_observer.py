"""
Field observer.

Flattens JSON bodies into field paths and aggregates, per path, how often
it appeared, which JSON types it held, and a few sample values.

Path notation::

    {"user": {"email": "a@b"}}      -> user, user.email
    {"items": [{"id": 1}]}          -> items, items[0], items[0].id
    [{"id": 1}]                     -> [0], [0].id

Only the first element of an array is inspected. Arrays are assumed to be
homogeneous; later elements never contribute paths, types or counts.

Usage::

    observer = FieldObserver()
    for sample in samples:
        observer.observe(sample.response_body)
    fields = observer.get_observations()
"""

from __future__ import annotations

import json

from apidrift.models import FieldObservation, JsonValue

MAX_SAMPLE_VALUES = 10


def json_type_name(value: JsonValue) -> str:
    """JSON type tag: null | boolean | number | string | object | array."""
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def extract_field_paths(value: JsonValue, prefix: str = "") -> dict[str, JsonValue]:
    """Depth-first walk returning ``path -> value`` for every field in ``value``."""
    fields: dict[str, JsonValue] = {}

    if value is None:
        return fields

    if isinstance(value, list):
        if prefix:
            fields[prefix] = value
        if value:
            first = value[0]
            element_path = f"{prefix}[0]"
            fields[element_path] = first
            if isinstance(first, dict):
                for path, nested in extract_field_paths(first, element_path).items():
                    fields.setdefault(path, nested)
        return fields

    if isinstance(value, dict):
        for key, child in value.items():
            field_path = f"{prefix}.{key}" if prefix else key
            fields[field_path] = child
            if isinstance(child, (dict, list)):
                fields.update(extract_field_paths(child, field_path))
        return fields

    if prefix:
        fields[prefix] = value
    return fields


class _FieldStats:
    __slots__ = ("count", "types", "values")

    def __init__(self) -> None:
        self.count = 0
        self.types: set[str] = set()
        # dict as an insertion-ordered set of serialised values
        self.values: dict[str, None] = {}


class FieldObserver:
    """Aggregates field observations over the bodies of one endpoint."""

    def __init__(self) -> None:
        self._fields: dict[str, _FieldStats] = {}
        self._total_samples = 0

    @property
    def total_samples(self) -> int:
        return self._total_samples

    def observe(self, body: JsonValue | None) -> None:
        """Record one body. Absent bodies count as samples with no fields."""
        self._total_samples += 1

        if body is None:
            return

        for path, value in extract_field_paths(body).items():
            stats = self._fields.get(path)
            if stats is None:
                stats = self._fields[path] = _FieldStats()
            stats.count += 1
            stats.types.add(json_type_name(value))
            if len(stats.values) < MAX_SAMPLE_VALUES:
                stats.values.setdefault(json.dumps(value), None)

    def get_observations(self) -> list[FieldObservation]:
        """Current observations sorted by path. Has no side effects."""
        total = self._total_samples
        observations: list[FieldObservation] = []
        for path, stats in self._fields.items():
            observations.append(
                FieldObservation(
                    path=path,
                    occurrence_count=stats.count,
                    occurrence_percentage=(stats.count / total) * 100 if total > 0 else 0.0,
                    observed_types=sorted(stats.types),
                    sample_values=[json.loads(v) for v in stats.values],
                )
            )
        return sorted(observations, key=lambda o: o.path)

