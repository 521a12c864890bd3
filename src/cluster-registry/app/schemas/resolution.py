"""Cluster resolution schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ResolverOverrides(BaseModel):
    """Operator-supplied values that win over the uploaded kubeconfig.

    An override applies only when non-empty, and replaces its field whole.
    """

    # Cluster-level
    cluster_ca_data: str | None = Field(None, description="Base64-encoded cluster CA")
    cluster_hostname: str | None = Field(
        None, description="Replacement host for the API server URL (port is kept)"
    )

    # Certificate
    client_cert_data: str | None = Field(None, description="Base64-encoded client certificate")
    client_key_data: str | None = Field(None, description="Base64-encoded client key")

    # Bearer token
    token_data: str | None = Field(None, description="Bearer token")

    # OIDC
    oidc_issuer_ca_data: str | None = Field(
        None, description="Base64-encoded issuer CA, stored as given"
    )

    # GCP
    gcp_key_data: str | None = Field(None, description="GCP service account key JSON")

    # AWS
    aws_cluster_id: str | None = Field(None, description="EKS cluster name")
    aws_access_key_id: str | None = Field(None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(None, description="AWS secret access key")


class CandidateCreateRequest(BaseModel):
    """Request to store a detected cluster candidate for later resolution."""

    project_id: int
    auth_mechanism: str = Field(..., description="Detected auth mechanism tag")
    name: str = Field(..., min_length=1, max_length=255)
    server: str = ""
    context_name: str = ""
    kubeconfig: bytes = Field(..., description="Raw uploaded kubeconfig")
