"""Nginx operator reconciliation package."""

from .config import NginxDefaults, OperatorConfig, OwnerKind  # noqa: F401
from .reconcile import Reconciliation, has_drifted, reconcile  # noqa: F401

__all__ = [
    "NginxDefaults",
    "OperatorConfig",
    "OwnerKind",
    "Reconciliation",
    "has_drifted",
    "reconcile",
]
