"""Data access repositories."""

from .cluster_repository import ClusterCandidateRepository, ClusterRepository
from .credential_repository import CredentialRepository

__all__ = [
    "ClusterCandidateRepository",
    "ClusterRepository",
    "CredentialRepository",
]
