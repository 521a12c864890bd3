"""Cluster domain models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import ConfigDict, Field, model_validator

from .base import RegistryBaseModel
from .kubeconfig import RawAuthInfo, RawCluster


class AuthMechanism(str, Enum):
    """Authentication mechanism used to reach a cluster."""

    CERTIFICATE = "CERTIFICATE"  # Client certificate
    TOKEN = "TOKEN"  # Bearer token
    BASIC = "BASIC"  # Basic auth (username/password)
    LOCAL = "LOCAL"  # The uploaded kubeconfig, used as-is
    OIDC = "OIDC"
    GCP = "GCP"  # GCP service account key
    AWS = "AWS"  # AWS IAM access keys


# Descriptor field holding the credential reference for each mechanism
CREDENTIAL_SLOTS: dict[AuthMechanism, str] = {
    AuthMechanism.CERTIFICATE: "certificate_credential_id",
    AuthMechanism.TOKEN: "token_credential_id",
    AuthMechanism.BASIC: "basic_credential_id",
    AuthMechanism.LOCAL: "local_credential_id",
    AuthMechanism.OIDC: "oidc_credential_id",
    AuthMechanism.GCP: "gcp_credential_id",
    AuthMechanism.AWS: "aws_credential_id",
}


class ClusterCandidate(RegistryBaseModel):
    """A detected, not yet resolved, cluster connection.

    ``auth_mechanism`` is kept as a plain string: candidates come from
    uploaded kubeconfigs and may carry tags this registry does not know.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID | None = None
    project_id: int
    auth_mechanism: str
    name: str
    server: str = ""
    context_name: str = ""
    kubeconfig: bytes = b""
    cluster: RawCluster = Field(default_factory=RawCluster)
    auth_info: RawAuthInfo = Field(default_factory=RawAuthInfo)


class CredentialReference(RegistryBaseModel):
    """The single credential record a cluster authenticates with."""

    mechanism: AuthMechanism
    credential_id: UUID


class ClusterDescriptor(RegistryBaseModel):
    """A connectable cluster.

    Exactly one of the ``*_credential_id`` slots is set on a resolved
    cluster; it matches ``auth_mechanism``.
    """

    id: UUID | None = None
    project_id: int
    name: str
    server: str
    auth_mechanism: AuthMechanism

    # Provenance copied from the originating kubeconfig context
    cluster_location_of_origin: str = ""
    tls_server_name: str = ""
    insecure_skip_tls_verify: bool = False
    user_location_of_origin: str = ""
    user_impersonate: str = ""
    user_impersonate_groups: str = ""
    certificate_authority_data: bytes = b""

    # Credential slots, mutually exclusive
    certificate_credential_id: UUID | None = None
    token_credential_id: UUID | None = None
    basic_credential_id: UUID | None = None
    local_credential_id: UUID | None = None
    oidc_credential_id: UUID | None = None
    gcp_credential_id: UUID | None = None
    aws_credential_id: UUID | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def validate_single_credential(self) -> "ClusterDescriptor":
        set_slots = [slot for slot, value in self.credential_slots.items() if value]
        if len(set_slots) > 1:
            raise ValueError(f"Cluster references more than one credential: {set_slots}")
        return self

    @property
    def credential_slots(self) -> dict[str, UUID | None]:
        """Map each credential slot name to its value."""
        return {slot: getattr(self, slot) for slot in CREDENTIAL_SLOTS.values()}

    @property
    def credential_reference(self) -> CredentialReference | None:
        """Return the credential this cluster uses, if any."""
        for mechanism, slot in CREDENTIAL_SLOTS.items():
            credential_id = getattr(self, slot)
            if credential_id is not None:
                return CredentialReference(mechanism=mechanism, credential_id=credential_id)
        return None
