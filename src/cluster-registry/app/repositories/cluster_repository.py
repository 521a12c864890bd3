"""Cluster and cluster candidate data access."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.database.models import ClusterCandidateModel, ClusterModel

from ..errors import NotFoundError


class ClusterRepository:
    """Repository for resolved clusters."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, data: dict[str, Any]) -> ClusterModel:
        """Create a new cluster."""
        cluster = ClusterModel(**data)
        self.session.add(cluster)
        await self.session.commit()
        await self.session.refresh(cluster)
        return cluster

    async def get_by_id(self, cluster_id: UUID) -> ClusterModel:
        """Get cluster by ID.

        Raises:
            NotFoundError: no cluster has this ID
        """
        result = await self.session.execute(
            select(ClusterModel).where(ClusterModel.id == cluster_id)
        )
        cluster = result.scalar_one_or_none()
        if cluster is None:
            raise NotFoundError("Cluster", cluster_id)
        return cluster

    async def list_by_project(self, project_id: int) -> list[ClusterModel]:
        """List a project's clusters ordered by name."""
        result = await self.session.execute(
            select(ClusterModel)
            .where(ClusterModel.project_id == project_id)
            .order_by(ClusterModel.name)
        )
        return list(result.scalars().all())

    async def update(self, cluster_id: UUID, data: dict[str, Any]) -> ClusterModel:
        """Update a cluster."""
        cluster = await self.get_by_id(cluster_id)

        for key, value in data.items():
            if value is not None:
                setattr(cluster, key, value)

        await self.session.commit()
        await self.session.refresh(cluster)
        return cluster


class ClusterCandidateRepository:
    """Repository for cluster candidates awaiting resolution."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, data: dict[str, Any]) -> ClusterCandidateModel:
        """Store a new candidate."""
        candidate = ClusterCandidateModel(**data)
        self.session.add(candidate)
        await self.session.commit()
        await self.session.refresh(candidate)
        return candidate

    async def get_by_id(self, candidate_id: UUID) -> ClusterCandidateModel:
        """Get candidate by ID.

        Raises:
            NotFoundError: no candidate has this ID
        """
        result = await self.session.execute(
            select(ClusterCandidateModel).where(ClusterCandidateModel.id == candidate_id)
        )
        candidate = result.scalar_one_or_none()
        if candidate is None:
            raise NotFoundError("ClusterCandidate", candidate_id)
        return candidate
