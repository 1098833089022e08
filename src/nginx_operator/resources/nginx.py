"""Models for the Nginx custom resource."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field

from .base import ResourceIdentity, ResourceModel


class ConfigKind(str, Enum):
    """Sources the nginx configuration can be mounted from."""

    CONFIG_MAP = "ConfigMap"
    INLINE = "Inline"


class ConfigRef(ResourceModel):
    """Reference to the nginx.conf to mount into the container.

    ``kind`` is kept as a plain string so that unknown kinds survive parsing
    and are reported when the configuration is attached.
    """

    name: str
    kind: str
    value: str = ""


class TLSSecret(ResourceModel):
    """Secret holding the key/certificate pair served over HTTPS."""

    secret_name: str = Field(..., alias="secretName")
    key_field: str = Field(default="", alias="keyField")
    certificate_field: str = Field(default="", alias="certificateField")
    key_path: str = Field(default="", alias="keyPath")
    certificate_path: str = Field(default="", alias="certificatePath")


class NginxPodTemplate(ResourceModel):
    """Pod level overrides copied verbatim into the generated pod template."""

    resources: Dict[str, Any] = Field(default_factory=dict)
    affinity: Optional[Dict[str, Any]] = None


class NginxSpec(ResourceModel):
    """Desired state of an Nginx resource."""

    image: str = ""
    replicas: Optional[int] = None
    pod_template: NginxPodTemplate = Field(default_factory=NginxPodTemplate, alias="podTemplate")
    config: Optional[ConfigRef] = None
    tls_secret: Optional[TLSSecret] = Field(default=None, alias="tlsSecret")


class NginxMetadata(ResourceModel):
    name: Optional[str] = None
    namespace: Optional[str] = None
    uid: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class Nginx(ResourceModel):
    """An ``Nginx`` custom resource document."""

    api_version: str = Field(default="nginx.tsuru.io/v1alpha1", alias="apiVersion")
    kind: str = "Nginx"
    metadata: NginxMetadata = Field(default_factory=NginxMetadata)
    spec: NginxSpec = Field(default_factory=NginxSpec)

    @property
    def identity(self) -> ResourceIdentity:
        return ResourceIdentity(
            name=self.metadata.name,
            namespace=self.metadata.namespace,
            uid=self.metadata.uid,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "Nginx":
        document_path = Path(path)
        data = yaml.safe_load(document_path.read_text())
        if not isinstance(data, dict):
            raise ValueError("Nginx resource file must contain a mapping at the top level.")
        return cls.model_validate(data)
