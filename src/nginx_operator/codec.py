"""Store and recover the spec an object was generated from.

The spec is kept as compact JSON in a single annotation on the generated
Deployment. Reading it back is how drift between a live object and a freshly
reconciled one is detected.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from .config import NginxDefaults
from .errors import AnnotationCorrupt, AnnotationMissing
from .resources.nginx import NginxSpec


def encode_spec(spec: NginxSpec) -> str:
    data = spec.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, separators=(",", ":"))


def decode_spec(value: str, key: str) -> NginxSpec:
    try:
        data = json.loads(value)
    except (ValueError, RecursionError) as exc:
        raise AnnotationCorrupt(key, str(exc)) from exc
    if not isinstance(data, dict):
        raise AnnotationCorrupt(key, f"expected a JSON object, got {type(data).__name__}")
    try:
        return NginxSpec.model_validate(data)
    except ValidationError as exc:
        raise AnnotationCorrupt(key, str(exc)) from exc


def set_nginx_spec(metadata: Dict[str, Any], spec: NginxSpec, defaults: NginxDefaults) -> None:
    """Write ``spec`` into the annotations of ``metadata``."""

    annotations = metadata.get("annotations")
    if annotations is None:
        annotations = metadata["annotations"] = {}
    annotations[defaults.generated_from_annotation] = encode_spec(spec)


def extract_nginx_spec(metadata: Mapping[str, Any], defaults: NginxDefaults) -> NginxSpec:
    """Recover the spec stored by :func:`set_nginx_spec`.

    Raises :class:`AnnotationMissing` when the object was not generated by the
    operator and :class:`AnnotationCorrupt` when the stored value is unreadable.
    """

    key = defaults.generated_from_annotation
    annotations = metadata.get("annotations") or {}
    if key not in annotations:
        raise AnnotationMissing(key)
    value = annotations[key]
    if not isinstance(value, str):
        raise AnnotationCorrupt(key, f"expected a string, got {type(value).__name__}")
    return decode_spec(value, key)
