"""Cluster request schemas."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


class ClusterCreateRequest(BaseModel):
    """Request to register a cluster directly against a cloud credential.

    Used when there is no kubeconfig to resolve: the cluster authenticates
    with an existing GCP or AWS credential record.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Cluster name")
    project_id: int = Field(..., description="Owning project")
    server: str = Field(..., description="Kubernetes API server URL")
    gcp_credential_id: UUID | None = Field(None, description="Existing GCP credential record")
    aws_credential_id: UUID | None = Field(None, description="Existing AWS credential record")
    certificate_authority_data: str | None = Field(
        None, description="Cluster CA, raw PEM or base64-encoded"
    )

    @field_validator("server")
    @classmethod
    def validate_server(cls, v: str) -> str:
        """Validate API server URL format."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("API server URL must start with http:// or https://")
        return v

    @model_validator(mode="after")
    def validate_credential(self) -> ClusterCreateRequest:
        """Require a GCP or AWS credential reference."""
        if self.gcp_credential_id is None and self.aws_credential_id is None:
            raise ValueError("Must include an AWS or GCP credential id")
        return self


class ClusterUpdateRequest(BaseModel):
    """Request to update a cluster (only the name for now)."""

    name: str = Field(..., min_length=1, max_length=255)
