"""Shared resource definitions for the Nginx operator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from ..config import OwnerKind
from ..errors import InvalidResourceIdentity


class ResourceModel(BaseModel):
    """Shared base model for Nginx resource configuration objects."""

    model_config = ConfigDict(populate_by_name=True)


@dataclass(frozen=True)
class ResourceIdentity:
    """Name, namespace and uid of the resource that owns generated objects."""

    name: Optional[str]
    namespace: Optional[str] = None
    uid: Optional[str] = None

    def owner_reference(self, owner: OwnerKind) -> Dict[str, Any]:
        """Build a controller owner reference pointing back at this resource."""

        if not self.name:
            raise InvalidResourceIdentity("Owner reference requires the resource name.")
        if not self.uid:
            raise InvalidResourceIdentity(f"Owner reference for {owner.kind} {self.name!r} requires a uid.")
        return {
            "apiVersion": owner.api_version,
            "kind": owner.kind,
            "name": self.name,
            "uid": self.uid,
            "controller": True,
            "blockOwnerDeletion": True,
        }


@dataclass(frozen=True)
class ResourceDefinition:
    """Represents a Kubernetes resource manifest."""

    api_version: str
    kind: str
    metadata: Dict[str, Any]
    spec: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata,
        }
        if self.spec is not None:
            body["spec"] = self.spec
        return body

    @property
    def name(self) -> Optional[str]:
        return self.metadata.get("name")
