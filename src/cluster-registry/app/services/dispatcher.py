"""Routes a cluster candidate to the resolver for its auth mechanism."""

from __future__ import annotations

from uuid import UUID

from shared.models import AuthMechanism, ClusterCandidate

from ..errors import UnsupportedMechanismError
from ..repositories.credential_repository import CredentialRepository
from ..schemas.resolution import ResolverOverrides
from .resolvers import RESOLVER_CLASSES, MechanismResolver


class ResolutionDispatcher:
    """Selects and runs the mechanism resolver for a candidate."""

    def __init__(self, repository: CredentialRepository):
        self.resolvers: dict[AuthMechanism, MechanismResolver] = {
            resolver_cls.mechanism: resolver_cls(repository) for resolver_cls in RESOLVER_CLASSES
        }

    def resolver_for(self, tag: str) -> MechanismResolver:
        """Return the resolver for a mechanism tag.

        Raises:
            UnsupportedMechanismError: the tag names no known mechanism
        """
        try:
            mechanism = AuthMechanism(tag)
        except ValueError:
            raise UnsupportedMechanismError(tag) from None

        resolver = self.resolvers.get(mechanism)
        if resolver is None:
            raise UnsupportedMechanismError(tag)
        return resolver

    async def dispatch(
        self,
        candidate: ClusterCandidate,
        overrides: ResolverOverrides,
        project_id: int,
        user_id: int,
    ) -> tuple[AuthMechanism, UUID]:
        """Resolve the candidate's credentials.

        Returns:
            The mechanism used and the new credential record ID
        """
        resolver = self.resolver_for(candidate.auth_mechanism)
        credential_id = await resolver.resolve(candidate, overrides, project_id, user_id)
        return resolver.mechanism, credential_id
