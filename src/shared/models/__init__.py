"""Shared data models for the Cluster Registry.

All models follow these conventions:
- Timestamps: ISO 8601 format with timezone (UTC preferred)
- IDs: UUID v4
- Field names: lowercase snake_case
- Enums: uppercase SNAKE_CASE
"""

# Base
from .base import RegistryBaseModel

# Cluster domain
from .cluster import (
    CREDENTIAL_SLOTS,
    AuthMechanism,
    ClusterCandidate,
    ClusterDescriptor,
    CredentialReference,
)

# Kubeconfig structure
from .kubeconfig import (
    AuthProviderConfig,
    ClusterConfig,
    RawAuthInfo,
    RawCluster,
    RawContext,
    RawKubeConfig,
)

__all__ = [
    # Base
    "RegistryBaseModel",
    # Cluster
    "AuthMechanism",
    "CREDENTIAL_SLOTS",
    "ClusterCandidate",
    "ClusterDescriptor",
    "CredentialReference",
    # Kubeconfig
    "AuthProviderConfig",
    "ClusterConfig",
    "RawAuthInfo",
    "RawCluster",
    "RawContext",
    "RawKubeConfig",
]
