"""Deployment resource builder."""
from __future__ import annotations

import copy
from typing import Any, Dict

from ..config import NginxDefaults, OwnerKind
from .base import ResourceDefinition, ResourceIdentity
from .nginx import NginxSpec


def http_get_probe(port_name: str, scheme: str) -> Dict[str, Any]:
    return {"httpGet": {"path": "/", "port": port_name, "scheme": scheme}}


def nginx_container(deployment: ResourceDefinition) -> Dict[str, Any]:
    """Return the single nginx container of a generated deployment."""

    return deployment.spec["template"]["spec"]["containers"][0]


def new_deployment(
    identity: ResourceIdentity,
    spec: NginxSpec,
    defaults: NginxDefaults,
    owner: OwnerKind,
) -> ResourceDefinition:
    """Assemble the Deployment running nginx for a normalized spec."""

    owner_reference = identity.owner_reference(owner)

    container: Dict[str, Any] = {
        "name": defaults.container_name,
        "image": spec.image,
        "ports": [
            {
                "name": defaults.http_port_name,
                "containerPort": defaults.http_port,
                "protocol": "TCP",
            }
        ],
        "readinessProbe": http_get_probe(defaults.http_port_name, "HTTP"),
    }
    if spec.pod_template.resources:
        container["resources"] = copy.deepcopy(spec.pod_template.resources)

    pod_spec: Dict[str, Any] = {"containers": [container]}
    if spec.pod_template.affinity is not None:
        pod_spec["affinity"] = copy.deepcopy(spec.pod_template.affinity)

    template_metadata: Dict[str, Any] = {"labels": defaults.labels_for(identity.name)}
    metadata: Dict[str, Any] = {
        "name": f"{identity.name}-deployment",
        "ownerReferences": [owner_reference],
    }
    if identity.namespace:
        metadata["namespace"] = identity.namespace
        template_metadata["namespace"] = identity.namespace

    deployment_spec: Dict[str, Any] = {
        "selector": {"matchLabels": defaults.labels_for(identity.name)},
        "template": {"metadata": template_metadata, "spec": pod_spec},
    }
    if spec.replicas is not None:
        deployment_spec["replicas"] = spec.replicas

    return ResourceDefinition(
        api_version="apps/v1",
        kind="Deployment",
        metadata=metadata,
        spec=deployment_spec,
    )
