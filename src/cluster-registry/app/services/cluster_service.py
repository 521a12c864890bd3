"""Cluster service for creating and updating resolved clusters."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shared.database.models import AWSCredentialModel, GCPCredentialModel
from shared.models import CREDENTIAL_SLOTS, AuthMechanism, ClusterDescriptor
from shared.observability import get_logger

from ..repositories.cluster_repository import ClusterRepository
from ..repositories.credential_repository import CredentialRepository
from ..schemas.cluster import ClusterCreateRequest, ClusterUpdateRequest
from .encoding import sniff_and_decode

logger = get_logger(__name__)

# Descriptor fields owned by the database
_GENERATED_FIELDS = {"id", "created_at", "updated_at"}


class ClusterService:
    """Service for cluster persistence and updates."""

    def __init__(self, session: AsyncSession):
        self.repository = ClusterRepository(session)
        self.credentials = CredentialRepository(session)

    async def save(self, descriptor: ClusterDescriptor) -> ClusterDescriptor:
        """Persist a built descriptor and return it with its generated ID."""
        cluster = await self.repository.create(descriptor.model_dump(exclude=_GENERATED_FIELDS))

        logger.info(
            "Cluster created",
            cluster_id=str(cluster.id),
            name=cluster.name,
            auth_mechanism=cluster.auth_mechanism,
        )
        return ClusterDescriptor.model_validate(cluster)

    async def create(self, request: ClusterCreateRequest) -> ClusterDescriptor:
        """Register a cluster against an existing GCP or AWS credential.

        GCP wins when both IDs are given.

        Raises:
            NotFoundError: the referenced credential record does not exist
            MalformedEncodingError: the CA data looks like base64 but is not
        """
        if request.gcp_credential_id is not None:
            mechanism, credential_id = AuthMechanism.GCP, request.gcp_credential_id
            await self.credentials.get(GCPCredentialModel, credential_id)
        else:
            mechanism, credential_id = AuthMechanism.AWS, request.aws_credential_id
            await self.credentials.get(AWSCredentialModel, credential_id)

        ca_data = b""
        if request.certificate_authority_data:
            ca_data = sniff_and_decode(request.certificate_authority_data)

        descriptor = ClusterDescriptor(
            project_id=request.project_id,
            name=request.name,
            server=request.server,
            auth_mechanism=mechanism,
            certificate_authority_data=ca_data,
            **{CREDENTIAL_SLOTS[mechanism]: credential_id},
        )
        return await self.save(descriptor)

    async def get(self, cluster_id: UUID) -> ClusterDescriptor:
        """Get cluster by ID."""
        cluster = await self.repository.get_by_id(cluster_id)
        return ClusterDescriptor.model_validate(cluster)

    async def list(self, project_id: int) -> list[ClusterDescriptor]:
        """List a project's clusters."""
        clusters = await self.repository.list_by_project(project_id)
        return [ClusterDescriptor.model_validate(c) for c in clusters]

    async def rename(self, cluster_id: UUID, request: ClusterUpdateRequest) -> ClusterDescriptor:
        """Change a cluster's name."""
        cluster = await self.repository.update(cluster_id, {"name": request.name})

        logger.info("Cluster renamed", cluster_id=str(cluster_id), name=request.name)

        return ClusterDescriptor.model_validate(cluster)
