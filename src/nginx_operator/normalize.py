"""Default filling for Nginx specs."""
from __future__ import annotations

from typing import Optional

from .config import NginxDefaults
from .resources.nginx import NginxSpec, TLSSecret
from .utils import value_or_default


def normalize_tls_secret(secret: Optional[TLSSecret], defaults: NginxDefaults) -> Optional[TLSSecret]:
    """Return a copy of ``secret`` with empty field and path names resolved.

    Paths fall back to the resolved field names, so a secret with only
    ``secretName`` mounts ``tls.key`` and ``tls.crt`` under their own names.
    """

    if secret is None:
        return None
    key_field = value_or_default(secret.key_field, defaults.tls_key_field)
    certificate_field = value_or_default(secret.certificate_field, defaults.tls_certificate_field)
    return secret.model_copy(
        update={
            "key_field": key_field,
            "certificate_field": certificate_field,
            "key_path": value_or_default(secret.key_path, key_field),
            "certificate_path": value_or_default(secret.certificate_path, certificate_field),
        }
    )


def normalize(spec: NginxSpec, defaults: NginxDefaults) -> NginxSpec:
    """Return a new spec with every optional field filled with its default."""

    normalized = spec.model_copy(deep=True)
    normalized.image = value_or_default(spec.image, defaults.image)
    normalized.tls_secret = normalize_tls_secret(normalized.tls_secret, defaults)
    return normalized
