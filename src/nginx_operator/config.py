"""Configuration models and helpers for the Nginx operator."""
from __future__ import annotations

from pathlib import Path
from typing import Dict

import yaml
from pydantic import BaseModel, ConfigDict, Field


class OwnerKind(BaseModel):
    """Type descriptor of the custom resource that owns generated objects."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_group: str = Field(default="nginx.tsuru.io", alias="apiGroup")
    version: str = "v1alpha1"
    kind: str = "Nginx"

    @property
    def api_version(self) -> str:
        return f"{self.api_group}/{self.version}"


class NginxDefaults(BaseModel):
    """Conventional names, ports and paths shared by every generated object.

    Generated objects are compared against previously applied ones, so these
    values must stay stable between releases.
    """

    model_config = ConfigDict(frozen=True)

    image: str = "nginx:latest"
    container_name: str = "nginx"

    http_port_name: str = "http"
    http_port: int = 80
    https_port_name: str = "https"
    https_port: int = 443

    config_volume_name: str = "nginx-config"
    config_mount_path: str = "/etc/nginx"
    config_file_name: str = "nginx.conf"

    cert_volume_name: str = "nginx-certs"
    cert_mount_path: str = "/etc/nginx/certs"
    tls_key_field: str = "tls.key"
    tls_certificate_field: str = "tls.crt"

    resource_label: str = "nginx_cr"
    app_label_value: str = "nginx"

    generated_from_annotation: str = "nginx.tsuru.io/generated-from"

    def labels_for(self, name: str) -> Dict[str, str]:
        """Return the labels identifying pods generated for the named resource."""

        return {self.resource_label: name, "app": self.app_label_value}


class OperatorConfig(BaseModel):
    """Top-level configuration consumed by the reconciliation pipeline."""

    defaults: NginxDefaults = Field(default_factory=NginxDefaults)
    owner: OwnerKind = Field(default_factory=OwnerKind)

    @classmethod
    def from_file(cls, path: str | Path) -> "OperatorConfig":
        document_path = Path(path)
        data = yaml.safe_load(document_path.read_text())
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a mapping at the top level.")
        return cls.model_validate(data)
