"""Optional config and TLS extensions of the generated objects."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config import NginxDefaults
from ..errors import UnrecognizedConfigKind
from .base import ResourceDefinition
from .deployment import http_get_probe, nginx_container
from .nginx import ConfigKind, ConfigRef, TLSSecret
from .service import service_port

_LOG = logging.getLogger(__name__)


def _pod_spec(deployment: ResourceDefinition) -> Dict[str, Any]:
    return deployment.spec["template"]["spec"]


def attach_config(deployment: ResourceDefinition, config: Optional[ConfigRef], defaults: NginxDefaults) -> None:
    """Mount the nginx configuration referenced by ``config`` into the deployment.

    ``ConfigMap`` mounts an existing ConfigMap. ``Inline`` stores the text as a
    pod template annotation and projects it into ``nginx.conf`` through the
    downward API, since only pod metadata is visible to such a volume.
    """

    if config is None:
        return

    if config.kind == ConfigKind.CONFIG_MAP.value:
        volume: Dict[str, Any] = {
            "name": defaults.config_volume_name,
            "configMap": {"name": config.name},
        }
    elif config.kind == ConfigKind.INLINE.value:
        template_metadata = deployment.spec["template"]["metadata"]
        template_metadata.setdefault("annotations", {})[config.name] = config.value
        volume = {
            "name": defaults.config_volume_name,
            "downwardAPI": {
                "items": [
                    {
                        "path": defaults.config_file_name,
                        "fieldRef": {"fieldPath": f"metadata.annotations['{config.name}']"},
                    }
                ]
            },
        }
    else:
        raise UnrecognizedConfigKind(config.kind)

    _LOG.debug("Mounting %s config %s at %s", config.kind, config.name, defaults.config_mount_path)
    nginx_container(deployment).setdefault("volumeMounts", []).append(
        {"name": defaults.config_volume_name, "mountPath": defaults.config_mount_path}
    )
    _pod_spec(deployment).setdefault("volumes", []).append(volume)


def attach_tls(
    deployment: ResourceDefinition,
    service: ResourceDefinition,
    secret: Optional[TLSSecret],
    defaults: NginxDefaults,
) -> None:
    """Serve HTTPS from the key pair in ``secret``.

    ``secret`` must already be normalized so the mounted paths match the
    stored spec.
    """

    if secret is None:
        return

    container = nginx_container(deployment)
    container["ports"].append(
        {
            "name": defaults.https_port_name,
            "containerPort": defaults.https_port,
            "protocol": "TCP",
        }
    )
    container["readinessProbe"] = http_get_probe(defaults.https_port_name, "HTTPS")
    container.setdefault("volumeMounts", []).append(
        {"name": defaults.cert_volume_name, "mountPath": defaults.cert_mount_path}
    )
    _pod_spec(deployment).setdefault("volumes", []).append(
        {
            "name": defaults.cert_volume_name,
            "secret": {
                "secretName": secret.secret_name,
                "items": [
                    {"key": secret.key_field, "path": secret.key_path},
                    {"key": secret.certificate_field, "path": secret.certificate_path},
                ],
            },
        }
    )

    service.spec["ports"].append(service_port(defaults.https_port_name, defaults.https_port))
    _LOG.debug("Serving HTTPS with certificates from secret %s", secret.secret_name)
