"""Cluster candidate resolution.

Resolution runs in two steps, always in this order:

1. The dispatcher resolves and stores the candidate's credential record.
2. The builder turns the candidate into a cluster referencing that record,
   which is then stored.

A cluster is never built when step 1 fails, so every stored cluster points at
an existing credential. Duplicate submissions of one candidate are not
deduplicated here.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shared.models import ClusterCandidate, ClusterDescriptor
from shared.observability import RequestContextManager, get_logger

from ..errors import ResolutionError
from ..repositories.cluster_repository import ClusterCandidateRepository
from ..repositories.credential_repository import CredentialRepository
from ..schemas.resolution import CandidateCreateRequest, ResolverOverrides
from .cluster_builder import build_cluster
from .cluster_service import ClusterService
from .dispatcher import ResolutionDispatcher
from .kubeconfig import load_raw_config

logger = get_logger(__name__)


class ClusterResolutionService:
    """Turns cluster candidates into stored, connectable clusters."""

    def __init__(self, session: AsyncSession):
        self.candidates = ClusterCandidateRepository(session)
        self.credentials = CredentialRepository(session)
        self.dispatcher = ResolutionDispatcher(self.credentials)
        self.cluster_service = ClusterService(session)

    async def resolve_and_create(
        self,
        candidate: ClusterCandidate,
        overrides: ResolverOverrides,
        project_id: int,
        user_id: int,
    ) -> ClusterDescriptor:
        """Resolve a candidate's credentials and store the resulting cluster.

        Errors from the dispatcher or builder are re-raised unchanged.
        """
        async with RequestContextManager(user_id=str(user_id), project_id=str(project_id)):
            logger.info(
                "Resolving cluster candidate",
                name=candidate.name,
                auth_mechanism=candidate.auth_mechanism,
            )

            try:
                mechanism, credential_id = await self.dispatcher.dispatch(
                    candidate, overrides, project_id, user_id
                )
                descriptor = build_cluster(candidate, mechanism, credential_id, overrides)
            except ResolutionError as e:
                logger.warning(
                    "Cluster resolution failed",
                    name=candidate.name,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            return await self.cluster_service.save(descriptor)

    async def create_candidate(self, request: CandidateCreateRequest) -> UUID:
        """Store a candidate for later resolution."""
        candidate = await self.candidates.create(request.model_dump())

        logger.info(
            "Cluster candidate stored",
            candidate_id=str(candidate.id),
            name=candidate.name,
            auth_mechanism=candidate.auth_mechanism,
        )
        return candidate.id

    async def load_candidate(self, candidate_id: UUID) -> ClusterCandidate:
        """Read a stored candidate and parse its kubeconfig.

        The candidate's own context is used when it names one, otherwise the
        kubeconfig's current context.

        Raises:
            NotFoundError: no candidate has this ID
        """
        row = await self.candidates.get_by_id(candidate_id)
        raw_config = load_raw_config(row.kubeconfig)

        context_name = row.context_name or raw_config.current_context
        raw_cluster = raw_config.current_cluster(context_name)

        return ClusterCandidate(
            id=row.id,
            project_id=row.project_id,
            auth_mechanism=row.auth_mechanism,
            name=row.name,
            server=row.server or raw_cluster.server,
            context_name=context_name,
            kubeconfig=row.kubeconfig,
            cluster=raw_cluster,
            auth_info=raw_config.current_auth_info(context_name),
        )

    async def resolve_candidate(
        self,
        candidate_id: UUID,
        overrides: ResolverOverrides,
        user_id: int,
    ) -> ClusterDescriptor:
        """Resolve a stored candidate into the candidate's project."""
        candidate = await self.load_candidate(candidate_id)
        return await self.resolve_and_create(candidate, overrides, candidate.project_id, user_id)
