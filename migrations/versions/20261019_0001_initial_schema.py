"""Initial schema creation.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CREDENTIAL_TABLES = {
    "certificate": [
        sa.Column("client_certificate_data", postgresql.BYTEA, nullable=False),
        sa.Column("client_key_data", postgresql.BYTEA, nullable=False),
    ],
    "token": [
        sa.Column("token", postgresql.BYTEA, nullable=False),
    ],
    "basic": [
        sa.Column("username", postgresql.BYTEA, nullable=False),
        sa.Column("password", postgresql.BYTEA, nullable=False),
    ],
    "local": [
        sa.Column("kubeconfig", postgresql.BYTEA, nullable=False),
    ],
    "oidc": [
        sa.Column("issuer_url", postgresql.BYTEA, nullable=False),
        sa.Column("client_id", postgresql.BYTEA, nullable=False),
        sa.Column("client_secret", postgresql.BYTEA, nullable=False),
        sa.Column("certificate_authority_data", postgresql.BYTEA, nullable=False),
        sa.Column("id_token", postgresql.BYTEA, nullable=False),
        sa.Column("refresh_token", postgresql.BYTEA, nullable=False),
    ],
    "gcp": [
        sa.Column("gcp_key_data", postgresql.BYTEA, nullable=False),
    ],
    "aws": [
        sa.Column("aws_cluster_id", postgresql.BYTEA, nullable=False),
        sa.Column("aws_access_key_id", postgresql.BYTEA, nullable=False),
        sa.Column("aws_secret_access_key", postgresql.BYTEA, nullable=False),
    ],
}


def upgrade() -> None:
    # =========================================================================
    # Cluster candidates
    # =========================================================================

    op.create_table(
        "cluster_candidates",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("project_id", sa.Integer, nullable=False),
        sa.Column("auth_mechanism", sa.String(20), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("server", sa.String(512), nullable=False, server_default=""),
        sa.Column("context_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("kubeconfig", postgresql.BYTEA, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_cluster_candidates_project_id", "cluster_candidates", ["project_id"])

    # =========================================================================
    # Credential records
    # =========================================================================

    for prefix, columns in CREDENTIAL_TABLES.items():
        table = f"{prefix}_credentials"
        op.create_table(
            table,
            sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
            sa.Column("project_id", sa.Integer, nullable=False),
            sa.Column("user_id", sa.Integer, nullable=False),
            sa.Column("mechanism", sa.String(20), nullable=False),
            *columns,
            sa.Column(
                "created_at",
                sa.DateTime(timezone=True),
                server_default=sa.func.now(),
            ),
        )
        op.create_index(f"ix_{table}_project_id", table, ["project_id"])

    # =========================================================================
    # Clusters
    # =========================================================================

    credential_columns = [f"{prefix}_credential_id" for prefix in CREDENTIAL_TABLES]
    single_credential = (
        " + ".join(f"(CASE WHEN {c} IS NULL THEN 0 ELSE 1 END)" for c in credential_columns)
        + " <= 1"
    )

    op.create_table(
        "clusters",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("project_id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("server", sa.String(512), nullable=False),
        sa.Column("auth_mechanism", sa.String(20), nullable=False),
        sa.Column("cluster_location_of_origin", sa.Text, nullable=False, server_default=""),
        sa.Column("tls_server_name", sa.String(255), nullable=False, server_default=""),
        sa.Column(
            "insecure_skip_tls_verify", sa.Boolean, nullable=False, server_default=sa.false()
        ),
        sa.Column("user_location_of_origin", sa.Text, nullable=False, server_default=""),
        sa.Column("user_impersonate", sa.String(255), nullable=False, server_default=""),
        sa.Column("user_impersonate_groups", sa.Text, nullable=False, server_default=""),
        sa.Column("certificate_authority_data", postgresql.BYTEA, nullable=False),
        *[
            sa.Column(
                f"{prefix}_credential_id",
                postgresql.UUID(as_uuid=True),
                sa.ForeignKey(f"{prefix}_credentials.id"),
                nullable=True,
            )
            for prefix in CREDENTIAL_TABLES
        ],
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(single_credential, name="single_credential"),
        sa.CheckConstraint(
            "auth_mechanism IN ('CERTIFICATE', 'TOKEN', 'BASIC', 'LOCAL', 'OIDC', 'GCP', 'AWS')",
            name="valid_auth_mechanism",
        ),
    )
    op.create_index("idx_clusters_project_id", "clusters", ["project_id"])


def downgrade() -> None:
    op.drop_table("clusters")

    for prefix in reversed(list(CREDENTIAL_TABLES)):
        op.drop_table(f"{prefix}_credentials")

    op.drop_table("cluster_candidates")
