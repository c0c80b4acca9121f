"""
OpenAPI document loader.

Reads an OpenAPI 3.x document (JSON or YAML) and reduces it to the
``SpecEndpoint`` records the drift detector consumes: per-status-code JSON
response schemas and the JSON request schema of every operation.

Local ``$ref`` pointers (``#/components/schemas/User``) are resolved
before extraction. A pointer that cannot be followed, or that refers back
into itself, resolves to an empty schema.

Usage::

    from apidrift.comparison.spec_loader import build_spec_index, extract_endpoints, load_spec

    spec = load_spec(Path("openapi.yaml"))
    index = build_spec_index(extract_endpoints(spec))
    endpoint = index.get("GET /users")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from apidrift.errors import SpecLoadError
from apidrift.models import SpecEndpoint
from apidrift.types import HttpMethod

logger = logging.getLogger(__name__)

_JSON_MEDIA_TYPE = "application/json"


def load_spec(path: Path) -> dict[str, Any]:
    """Load an OpenAPI document.

    ``.json`` files are parsed as JSON, ``.yaml``/``.yml`` as YAML; any
    other extension is tried as JSON first, then YAML.

    Raises:
        SpecLoadError: If the file is missing, unparseable, or its root
            is not a mapping.
    """
    if not path.exists():
        raise SpecLoadError(f"Spec file not found: {path}")

    content = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            raw = json.loads(content)
        elif suffix in (".yaml", ".yml"):
            raw = yaml.safe_load(content)
        else:
            try:
                raw = json.loads(content)
            except json.JSONDecodeError:
                raw = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SpecLoadError(f"Failed to parse spec file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise SpecLoadError(
            f"Expected a mapping at root of {path}, got {type(raw).__name__}"
        )
    return raw


def _follow_pointer(ref: str, spec: dict[str, Any]) -> Optional[Any]:
    if not ref.startswith("#/"):
        return None
    current: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def resolve_refs(node: Any, spec: dict[str, Any], _seen: frozenset[str] = frozenset()) -> Any:
    """Return ``node`` with local ``$ref`` pointers replaced by their targets."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            if ref in _seen:
                logger.debug("Cyclic $ref %s resolved to empty schema", ref)
                return {}
            target = _follow_pointer(ref, spec)
            if target is None:
                logger.debug("Unresolvable $ref %s resolved to empty schema", ref)
                return {}
            return resolve_refs(target, spec, _seen | {ref})
        return {key: resolve_refs(value, spec, _seen) for key, value in node.items()}
    if isinstance(node, list):
        return [resolve_refs(item, spec, _seen) for item in node]
    return node


def _json_schema(container: Any) -> Optional[dict[str, Any]]:
    if not isinstance(container, dict):
        return None
    content = container.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(_JSON_MEDIA_TYPE)
    if not isinstance(media, dict):
        return None
    schema = media.get("schema")
    return schema if isinstance(schema, dict) else None


def extract_endpoints(spec: dict[str, Any]) -> list[SpecEndpoint]:
    """Extract one ``SpecEndpoint`` per (path, method) operation."""
    endpoints: list[SpecEndpoint] = []

    paths = spec.get("paths")
    if not isinstance(paths, dict):
        return endpoints

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        for method in HttpMethod:
            operation = path_item.get(method.value.lower())
            if not isinstance(operation, dict):
                continue
            operation = resolve_refs(operation, spec)

            responses: dict[int, dict[str, Any]] = {}
            for status_code, response in (operation.get("responses") or {}).items():
                try:
                    code = int(str(status_code))
                except ValueError:
                    # "default", "2XX" and friends name no concrete code
                    continue
                responses[code] = _json_schema(response) or {}

            endpoints.append(
                SpecEndpoint(
                    method=method,
                    path=str(path),
                    responses=responses,
                    request_body=_json_schema(operation.get("requestBody")),
                )
            )

    logger.debug("Extracted %d endpoints from spec", len(endpoints))
    return endpoints


def build_spec_index(endpoints: list[SpecEndpoint]) -> dict[str, SpecEndpoint]:
    """Map ``"METHOD path"`` to endpoint. Paths are matched verbatim."""
    return {endpoint.key: endpoint for endpoint in endpoints}
