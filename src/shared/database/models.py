"""SQLAlchemy ORM models.

Credential records are written once by a resolver and never updated; a new
credential means a new row.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import Base

# =============================================================================
# Cluster candidates
# =============================================================================


class ClusterCandidateModel(Base):
    """Uploaded kubeconfig context awaiting credential resolution."""

    __tablename__ = "cluster_candidates"
    __table_args__ = (Index("idx_cluster_candidates_project_id", "project_id"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False)
    auth_mechanism: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    server: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    context_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    kubeconfig: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


# =============================================================================
# Credential records (one table per mechanism)
# =============================================================================


class CredentialRecordMixin:
    """Columns shared by every credential record."""

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    mechanism: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class CertificateCredentialModel(CredentialRecordMixin, Base):
    """Client certificate and key."""

    __tablename__ = "certificate_credentials"

    client_certificate_data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    client_key_data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class TokenCredentialModel(CredentialRecordMixin, Base):
    """Bearer token."""

    __tablename__ = "token_credentials"

    token: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class BasicCredentialModel(CredentialRecordMixin, Base):
    """Username and password."""

    __tablename__ = "basic_credentials"

    username: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    password: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class LocalCredentialModel(CredentialRecordMixin, Base):
    """The uploaded kubeconfig, kept verbatim."""

    __tablename__ = "local_credentials"

    kubeconfig: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class OIDCCredentialModel(CredentialRecordMixin, Base):
    """OIDC auth provider settings.

    ``certificate_authority_data`` stays base64 text: the OIDC client plugin
    decodes it itself.
    """

    __tablename__ = "oidc_credentials"

    issuer_url: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
    client_id: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
    client_secret: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
    certificate_authority_data: Mapped[bytes] = mapped_column(
        LargeBinary, nullable=False, default=b""
    )
    id_token: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
    refresh_token: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")


class GCPCredentialModel(CredentialRecordMixin, Base):
    """GCP service account key."""

    __tablename__ = "gcp_credentials"

    gcp_key_data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class AWSCredentialModel(CredentialRecordMixin, Base):
    """AWS IAM access keys for an EKS cluster."""

    __tablename__ = "aws_credentials"

    aws_cluster_id: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    aws_access_key_id: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    aws_secret_access_key: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


# =============================================================================
# Clusters
# =============================================================================

_CREDENTIAL_COLUMNS = (
    "certificate_credential_id",
    "token_credential_id",
    "basic_credential_id",
    "local_credential_id",
    "oidc_credential_id",
    "gcp_credential_id",
    "aws_credential_id",
)

_SINGLE_CREDENTIAL_SQL = (
    " + ".join(f"(CASE WHEN {column} IS NULL THEN 0 ELSE 1 END)" for column in _CREDENTIAL_COLUMNS)
    + " <= 1"
)


class ClusterModel(Base):
    """Resolved, connectable cluster."""

    __tablename__ = "clusters"
    __table_args__ = (
        CheckConstraint(_SINGLE_CREDENTIAL_SQL, name="single_credential"),
        CheckConstraint(
            "auth_mechanism IN ('CERTIFICATE', 'TOKEN', 'BASIC', 'LOCAL', 'OIDC', 'GCP', 'AWS')",
            name="valid_auth_mechanism",
        ),
        Index("idx_clusters_project_id", "project_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    server: Mapped[str] = mapped_column(String(512), nullable=False)
    auth_mechanism: Mapped[str] = mapped_column(String(20), nullable=False)

    cluster_location_of_origin: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tls_server_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    insecure_skip_tls_verify: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    user_location_of_origin: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_impersonate: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    user_impersonate_groups: Mapped[str] = mapped_column(Text, nullable=False, default="")
    certificate_authority_data: Mapped[bytes] = mapped_column(
        LargeBinary, nullable=False, default=b""
    )

    certificate_credential_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("certificate_credentials.id")
    )
    token_credential_id: Mapped[UUID | None] = mapped_column(ForeignKey("token_credentials.id"))
    basic_credential_id: Mapped[UUID | None] = mapped_column(ForeignKey("basic_credentials.id"))
    local_credential_id: Mapped[UUID | None] = mapped_column(ForeignKey("local_credentials.id"))
    oidc_credential_id: Mapped[UUID | None] = mapped_column(ForeignKey("oidc_credentials.id"))
    gcp_credential_id: Mapped[UUID | None] = mapped_column(ForeignKey("gcp_credentials.id"))
    aws_credential_id: Mapped[UUID | None] = mapped_column(ForeignKey("aws_credentials.id"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
