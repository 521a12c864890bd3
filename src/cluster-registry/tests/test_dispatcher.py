"""Tests for mechanism dispatch."""

import pytest

from app.errors import UnsupportedMechanismError
from app.repositories.credential_repository import CredentialRepository
from app.schemas.resolution import ResolverOverrides
from app.services.dispatcher import ResolutionDispatcher
from app.services.resolvers import RESOLVER_CLASSES, TokenResolver
from shared.database.models import TokenCredentialModel
from shared.models import AuthMechanism


@pytest.fixture
def repository(test_session):
    return CredentialRepository(test_session)


@pytest.fixture
def dispatcher(repository):
    return ResolutionDispatcher(repository)


class TestResolverSelection:
    def test_every_mechanism_has_a_resolver(self, dispatcher):
        assert set(dispatcher.resolvers) == set(AuthMechanism)
        assert len(RESOLVER_CLASSES) == len(AuthMechanism)

    @pytest.mark.parametrize("mechanism", list(AuthMechanism))
    def test_resolver_matches_tag(self, dispatcher, mechanism):
        assert dispatcher.resolver_for(mechanism.value).mechanism == mechanism

    @pytest.mark.parametrize("tag", ["KERBEROS", "token", ""])
    def test_unknown_tag_is_rejected(self, dispatcher, tag):
        """Test unknown and miscased tags are unsupported."""
        with pytest.raises(UnsupportedMechanismError) as exc_info:
            dispatcher.resolver_for(tag)

        assert exc_info.value.mechanism == tag


class TestDispatch:
    async def test_returns_mechanism_and_record_id(self, dispatcher, repository, make_candidate):
        candidate = make_candidate("TOKEN", token="raw-token")

        mechanism, credential_id = await dispatcher.dispatch(
            candidate, ResolverOverrides(), project_id=1, user_id=7
        )

        assert mechanism == AuthMechanism.TOKEN
        record = await repository.get(TokenCredentialModel, credential_id)
        assert record.token == b"raw-token"
        assert isinstance(dispatcher.resolvers[AuthMechanism.TOKEN], TokenResolver)

    async def test_unsupported_mechanism_persists_nothing(
        self, dispatcher, repository, make_candidate
    ):
        candidate = make_candidate("KERBEROS", token="raw-token")

        with pytest.raises(UnsupportedMechanismError):
            await dispatcher.dispatch(candidate, ResolverOverrides(), 1, 7)

        assert await repository.count(TokenCredentialModel) == 0
