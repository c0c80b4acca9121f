"""
Schema extractor.

Flattens contract JSON Schemas into the same field-path space the field
observer produces, and pairs the two sides up path by path.

Only ``type: object`` nodes with ``properties`` are expanded. ``anyOf`` /
``oneOf`` contribute their variants' ``type`` values and nothing deeper.
Array ``items`` are expanded at ``<path>[0]``; the element path itself is
not declared, and a top-level array schema declares nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from apidrift.models import FieldObservation


@dataclass(frozen=True)
class SchemaField:
    """Declared types of one field path and whether its parent requires it."""
    types: list[str]
    required: bool


@dataclass(frozen=True)
class FieldComparison:
    """One path from the union of contract and observed paths.

    Attributes for a side the path is absent from stay ``None``.
    """
    field_path: str
    in_spec: bool
    in_observed: bool
    spec_types: Optional[list[str]] = None
    observed_types: Optional[list[str]] = None
    spec_required: Optional[bool] = None
    observed_occurrence_percentage: Optional[float] = None


def _schema_types(schema: dict[str, Any]) -> list[str]:
    declared = schema.get("type")
    if declared:
        return list(declared) if isinstance(declared, list) else [declared]
    variants = schema.get("anyOf") or schema.get("oneOf")
    if isinstance(variants, list):
        return [v["type"] for v in variants if isinstance(v, dict) and v.get("type")]
    return []


def extract_fields(schema: Any, prefix: str = "") -> dict[str, SchemaField]:
    """Flatten ``schema`` into ``path -> SchemaField``.

    A field is required only when its direct parent object lists it.
    """
    fields: dict[str, SchemaField] = {}

    if not isinstance(schema, dict):
        return fields

    properties = schema.get("properties")
    if schema.get("type") != "object" or not isinstance(properties, dict):
        return fields

    required = schema.get("required")
    required_names = set(required) if isinstance(required, list) else set()

    for name, prop in properties.items():
        field_path = f"{prefix}.{name}" if prefix else name
        prop = prop if isinstance(prop, dict) else {}
        fields[field_path] = SchemaField(
            types=_schema_types(prop),
            required=name in required_names,
        )

        if prop.get("type") == "object":
            fields.update(extract_fields(prop, field_path))

        if prop.get("type") == "array" and prop.get("items"):
            fields.update(extract_fields(prop["items"], f"{field_path}[0]"))

    return fields


def compare_fields(
    schema: Any,
    observed_fields: list[FieldObservation],
) -> list[FieldComparison]:
    """Pair contract paths with observed paths over their union.

    Contract paths come first in schema order, then observed-only paths.
    """
    spec_fields = extract_fields(schema)
    observed_by_path = {field.path: field for field in observed_fields}

    all_paths = dict.fromkeys([*spec_fields, *observed_by_path])

    comparisons: list[FieldComparison] = []
    for path in all_paths:
        spec_info = spec_fields.get(path)
        observed = observed_by_path.get(path)
        comparisons.append(
            FieldComparison(
                field_path=path,
                in_spec=spec_info is not None,
                in_observed=observed is not None,
                spec_types=spec_info.types if spec_info else None,
                observed_types=observed.observed_types if observed else None,
                spec_required=spec_info.required if spec_info else None,
                observed_occurrence_percentage=(
                    observed.occurrence_percentage if observed else None
                ),
            )
        )
    return comparisons


def _normalize_type(type_name: str) -> str:
    return "number" if type_name == "integer" else type_name


def types_match(
    spec_types: Optional[list[str]],
    observed_types: Optional[list[str]],
) -> bool:
    """True unless both sides are known and share no type.

    ``integer`` is treated as ``number``. Any overlap counts as a match,
    so ``["string", "number"]`` vs ``["string"]`` matches.
    """
    if spec_types is None or observed_types is None:
        return True

    normalized_spec = {_normalize_type(t) for t in spec_types}
    normalized_observed = {_normalize_type(t) for t in observed_types}
    return bool(normalized_spec & normalized_observed)
