"""Service resource builder."""
from __future__ import annotations

from typing import Any, Dict

from ..config import NginxDefaults, OwnerKind
from .base import ResourceDefinition, ResourceIdentity


def service_port(name: str, port: int) -> Dict[str, Any]:
    return {"name": name, "protocol": "TCP", "port": port, "targetPort": name}


def new_service(identity: ResourceIdentity, defaults: NginxDefaults, owner: OwnerKind) -> ResourceDefinition:
    """Assemble the ClusterIP service exposing the nginx pods over HTTP."""

    owner_reference = identity.owner_reference(owner)

    metadata: Dict[str, Any] = {
        "name": f"{identity.name}-service",
        "ownerReferences": [owner_reference],
        "labels": defaults.labels_for(identity.name),
    }
    if identity.namespace:
        metadata["namespace"] = identity.namespace

    spec: Dict[str, Any] = {
        "ports": [service_port(defaults.http_port_name, defaults.http_port)],
        "selector": defaults.labels_for(identity.name),
        "type": "ClusterIP",
    }

    return ResourceDefinition(
        api_version="v1",
        kind="Service",
        metadata=metadata,
        spec=spec,
    )
