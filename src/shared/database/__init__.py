"""Database configuration and models."""

from .base import Base, create_engine, create_session_factory
from .models import (
    AWSCredentialModel,
    BasicCredentialModel,
    CertificateCredentialModel,
    ClusterCandidateModel,
    ClusterModel,
    CredentialRecordMixin,
    GCPCredentialModel,
    LocalCredentialModel,
    OIDCCredentialModel,
    TokenCredentialModel,
)

__all__ = [
    # Base
    "Base",
    "create_engine",
    "create_session_factory",
    # Candidates and clusters
    "ClusterCandidateModel",
    "ClusterModel",
    # Credential records
    "CredentialRecordMixin",
    "CertificateCredentialModel",
    "TokenCredentialModel",
    "BasicCredentialModel",
    "LocalCredentialModel",
    "OIDCCredentialModel",
    "GCPCredentialModel",
    "AWSCredentialModel",
]
