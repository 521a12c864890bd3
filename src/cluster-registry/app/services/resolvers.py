"""Per-mechanism credential resolvers.

Each resolver merges the candidate's kubeconfig fields with operator
overrides, checks that its mechanism's required fields are present, and
writes one credential record.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar
from uuid import UUID

from shared.database.models import (
    AWSCredentialModel,
    BasicCredentialModel,
    CertificateCredentialModel,
    CredentialRecordMixin,
    GCPCredentialModel,
    LocalCredentialModel,
    OIDCCredentialModel,
    TokenCredentialModel,
)
from shared.models import AuthMechanism, ClusterCandidate
from shared.observability import get_logger

from ..errors import UnresolvableCredentialError
from ..repositories.credential_repository import CredentialRepository
from ..schemas.resolution import ResolverOverrides
from .encoding import sniff_and_decode

logger = get_logger(__name__)

# Auth provider config keys read for OIDC
OIDC_CONFIG_KEYS: dict[str, str] = {
    "issuer_url": "idp-issuer-url",
    "client_id": "client-id",
    "client_secret": "client-secret",
    "certificate_authority_data": "idp-certificate-authority-data",
    "id_token": "id-token",
    "refresh_token": "refresh-token",
}


def coalesce(
    base: bytes | str | None,
    override: str | None,
    decode: Callable[[str], bytes] = str.encode,
) -> bytes:
    """Return the decoded override if non-empty, else base as bytes."""
    if override:
        return decode(override)
    if isinstance(base, str):
        return base.encode()
    return base or b""


class MechanismResolver(ABC):
    """Resolves one auth mechanism into a persisted credential record."""

    mechanism: ClassVar[AuthMechanism]
    record_model: ClassVar[type[CredentialRecordMixin]]
    required_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, repository: CredentialRepository):
        self.repository = repository

    @abstractmethod
    def collect(
        self, candidate: ClusterCandidate, overrides: ResolverOverrides
    ) -> dict[str, bytes]:
        """Merge candidate and override values into record fields."""

    def missing_fields(self, fields: dict[str, Any]) -> list[str]:
        return [name for name in self.required_fields if not fields.get(name)]

    async def resolve(
        self,
        candidate: ClusterCandidate,
        overrides: ResolverOverrides,
        project_id: int,
        user_id: int,
    ) -> UUID:
        """Persist a credential record for the candidate.

        Returns:
            ID of the new credential record

        Raises:
            UnresolvableCredentialError: a required field is empty after merging
        """
        fields = self.collect(candidate, overrides)

        missing = self.missing_fields(fields)
        if missing:
            raise UnresolvableCredentialError(self.mechanism.value, missing)

        record = await self.repository.create(
            self.record_model,
            project_id=project_id,
            user_id=user_id,
            mechanism=self.mechanism.value,
            **fields,
        )

        logger.info(
            "Credential record created",
            mechanism=self.mechanism.value,
            credential_id=str(record.id),
            project_id=project_id,
        )
        return record.id


class CertificateResolver(MechanismResolver):
    """Client certificate auth. Overrides may be base64 or raw PEM."""

    mechanism = AuthMechanism.CERTIFICATE
    record_model = CertificateCredentialModel
    required_fields = ("client_certificate_data", "client_key_data")

    def collect(
        self, candidate: ClusterCandidate, overrides: ResolverOverrides
    ) -> dict[str, bytes]:
        auth_info = candidate.auth_info
        return {
            "client_certificate_data": coalesce(
                auth_info.client_certificate_data,
                overrides.client_cert_data,
                sniff_and_decode,
            ),
            "client_key_data": coalesce(
                auth_info.client_key_data,
                overrides.client_key_data,
                sniff_and_decode,
            ),
        }


class TokenResolver(MechanismResolver):
    mechanism = AuthMechanism.TOKEN
    record_model = TokenCredentialModel
    required_fields = ("token",)

    def collect(
        self, candidate: ClusterCandidate, overrides: ResolverOverrides
    ) -> dict[str, bytes]:
        return {"token": coalesce(candidate.auth_info.token, overrides.token_data)}


class BasicResolver(MechanismResolver):
    """Basic auth. There are no overrides for username or password."""

    mechanism = AuthMechanism.BASIC
    record_model = BasicCredentialModel
    required_fields = ("username", "password")

    def collect(
        self, candidate: ClusterCandidate, overrides: ResolverOverrides
    ) -> dict[str, bytes]:
        auth_info = candidate.auth_info
        return {
            "username": coalesce(auth_info.username, None),
            "password": coalesce(auth_info.password, None),
        }


class LocalResolver(MechanismResolver):
    """Keeps the uploaded kubeconfig as-is."""

    mechanism = AuthMechanism.LOCAL
    record_model = LocalCredentialModel
    required_fields = ("kubeconfig",)

    def collect(
        self, candidate: ClusterCandidate, overrides: ResolverOverrides
    ) -> dict[str, bytes]:
        return {"kubeconfig": candidate.kubeconfig}


class OIDCResolver(MechanismResolver):
    """OIDC auth provider.

    Nothing is required. The issuer CA is stored as base64 text, both from
    the kubeconfig and from the override, because the OIDC client plugin
    decodes it itself.
    """

    mechanism = AuthMechanism.OIDC
    record_model = OIDCCredentialModel

    def collect(
        self, candidate: ClusterCandidate, overrides: ResolverOverrides
    ) -> dict[str, bytes]:
        config = candidate.auth_info.auth_provider_config
        fields = {field: coalesce(config.get(key), None) for field, key in OIDC_CONFIG_KEYS.items()}
        fields["certificate_authority_data"] = coalesce(
            fields["certificate_authority_data"], overrides.oidc_issuer_ca_data
        )
        return fields


class GCPResolver(MechanismResolver):
    """GCP service account key, supplied only as an override."""

    mechanism = AuthMechanism.GCP
    record_model = GCPCredentialModel
    required_fields = ("gcp_key_data",)

    def collect(
        self, candidate: ClusterCandidate, overrides: ResolverOverrides
    ) -> dict[str, bytes]:
        return {"gcp_key_data": coalesce(None, overrides.gcp_key_data)}


class AWSResolver(MechanismResolver):
    """AWS IAM keys, supplied only as overrides."""

    mechanism = AuthMechanism.AWS
    record_model = AWSCredentialModel
    required_fields = ("aws_cluster_id", "aws_access_key_id", "aws_secret_access_key")

    def collect(
        self, candidate: ClusterCandidate, overrides: ResolverOverrides
    ) -> dict[str, bytes]:
        return {
            "aws_cluster_id": coalesce(None, overrides.aws_cluster_id),
            "aws_access_key_id": coalesce(None, overrides.aws_access_key_id),
            "aws_secret_access_key": coalesce(None, overrides.aws_secret_access_key),
        }


RESOLVER_CLASSES: tuple[type[MechanismResolver], ...] = (
    CertificateResolver,
    TokenResolver,
    BasicResolver,
    LocalResolver,
    OIDCResolver,
    GCPResolver,
    AWSResolver,
)
