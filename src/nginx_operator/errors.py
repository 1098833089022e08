"""Exceptions raised by the Nginx operator core."""
from __future__ import annotations


class NginxOperatorError(Exception):
    """Base exception for Nginx operator errors."""


class InvalidResourceIdentity(NginxOperatorError):
    """Raised when an owner reference cannot be built from a resource identity."""


class UnrecognizedConfigKind(NginxOperatorError):
    """Raised when a config reference uses a kind the operator cannot mount."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unrecognized config kind {kind!r}; expected 'ConfigMap' or 'Inline'.")
        self.kind = kind


class AnnotationError(NginxOperatorError):
    """Base class for problems with the generated-from annotation."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class AnnotationMissing(AnnotationError):
    """Raised when an object carries no generated-from annotation."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f"missing {key!r} annotation in deployment")


class AnnotationCorrupt(AnnotationError):
    """Raised when the generated-from annotation cannot be parsed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(key, f"failed to decode nginx spec from {key!r} annotation: {reason}")
        self.reason = reason
