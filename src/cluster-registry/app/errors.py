"""Cluster resolution errors.

Every error is terminal for the resolution attempt that raised it; callers
map the kind to a user-facing message.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class ResolutionError(Exception):
    """Base class for cluster resolution failures."""

    pass


class MalformedEncodingError(ResolutionError):
    """Raised when a value that looks like base64 fails to decode."""

    pass


class InvalidKubeconfigError(ResolutionError):
    """Raised when uploaded kubeconfig bytes are not a kubeconfig document."""

    pass


class UnresolvableCredentialError(ResolutionError):
    """Raised when required credential fields are empty after merging."""

    def __init__(self, mechanism: str, missing_fields: Sequence[str]):
        self.mechanism = mechanism
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"Could not resolve {mechanism} credentials: missing {', '.join(self.missing_fields)}"
        )


class UnsupportedMechanismError(ResolutionError):
    """Raised when a candidate declares an unknown auth mechanism."""

    def __init__(self, mechanism: Any):
        self.mechanism = mechanism
        super().__init__(f"Unsupported auth mechanism: {mechanism!r}")


class InvalidServerURLError(ResolutionError):
    """Raised when a cluster server URL cannot be reparsed."""

    def __init__(self, server: str, reason: str = ""):
        self.server = server
        message = f"Invalid cluster server URL: {server!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class NotFoundError(ResolutionError):
    """Raised when a persisted entity does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID '{entity_id}' not found")
