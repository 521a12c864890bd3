"""Request schemas for the Cluster Registry."""

from .cluster import ClusterCreateRequest, ClusterUpdateRequest
from .resolution import CandidateCreateRequest, ResolverOverrides

__all__ = [
    "CandidateCreateRequest",
    "ClusterCreateRequest",
    "ClusterUpdateRequest",
    "ResolverOverrides",
]
