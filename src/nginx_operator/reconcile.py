"""Reconciliation of Nginx resources into their Deployment and Service."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from .codec import extract_nginx_spec, set_nginx_spec
from .config import OperatorConfig
from .errors import AnnotationMissing
from .normalize import normalize
from .resources.attachments import attach_config, attach_tls
from .resources.base import ResourceDefinition
from .resources.deployment import new_deployment
from .resources.nginx import Nginx, NginxSpec
from .resources.service import new_service

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciliation:
    """Objects desired for an Nginx resource and the spec they were built from."""

    spec: NginxSpec
    deployment: ResourceDefinition
    service: ResourceDefinition

    def objects(self) -> List[ResourceDefinition]:
        return [self.deployment, self.service]


def reconcile(nginx: Nginx, config: Optional[OperatorConfig] = None) -> Reconciliation:
    """Build the Deployment and Service for ``nginx`` from scratch.

    The caller's spec is left untouched. The stored annotation is written last
    so it reflects every default resolved while building.
    """

    config = config or OperatorConfig()
    defaults = config.defaults
    identity = nginx.identity

    spec = normalize(nginx.spec, defaults)
    deployment = new_deployment(identity, spec, defaults, config.owner)
    service = new_service(identity, defaults, config.owner)

    attach_config(deployment, spec.config, defaults)
    attach_tls(deployment, service, spec.tls_secret, defaults)

    set_nginx_spec(deployment.metadata, spec, defaults)

    _LOG.debug(
        "Reconciled %s %s/%s into %s and %s",
        config.owner.kind,
        identity.namespace or "(default)",
        identity.name,
        deployment.name,
        service.name,
    )
    return Reconciliation(spec=spec, deployment=deployment, service=service)


def has_drifted(live_metadata: Mapping[str, Any], nginx: Nginx, config: Optional[OperatorConfig] = None) -> bool:
    """Return whether a live Deployment was generated from a different spec.

    Objects without the generated-from annotation always count as drifted.
    A corrupt annotation raises :class:`~nginx_operator.errors.AnnotationCorrupt`.
    """

    config = config or OperatorConfig()
    try:
        previous = extract_nginx_spec(live_metadata, config.defaults)
    except AnnotationMissing:
        _LOG.debug("Deployment %s has no generated-from annotation", live_metadata.get("name"))
        return True
    return previous != normalize(nginx.spec, config.defaults)
