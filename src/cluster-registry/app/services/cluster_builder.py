"""Builds a cluster descriptor from a resolved candidate.

Building is pure: nothing here touches the database.
"""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlsplit, urlunsplit
from uuid import UUID

from shared.models import CREDENTIAL_SLOTS, AuthMechanism, ClusterCandidate, ClusterDescriptor
from shared.observability import get_logger

from ..errors import InvalidServerURLError
from ..schemas.resolution import ResolverOverrides
from .encoding import sniff_and_decode

logger = get_logger(__name__)


def flatten_impersonate_groups(groups: Sequence[str]) -> str:
    """Join impersonation groups with commas, keeping order and duplicates."""
    return ",".join(groups)


def override_hostname(server: str, hostname: str) -> str:
    """Replace the host of a server URL, keeping its port if it has one.

    Raises:
        InvalidServerURLError: server cannot be parsed as a URL with a host
    """
    try:
        parts = urlsplit(server)
        port = parts.port
    except ValueError as e:
        raise InvalidServerURLError(server, str(e)) from e

    if not parts.netloc:
        raise InvalidServerURLError(server, "no host")

    netloc = hostname if port is None else f"{hostname}:{port}"

    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit(parts._replace(netloc=netloc))


def build_cluster(
    candidate: ClusterCandidate,
    mechanism: AuthMechanism,
    credential_id: UUID,
    overrides: ResolverOverrides,
) -> ClusterDescriptor:
    """Build an unsaved cluster descriptor that references one credential.

    Raises:
        MalformedEncodingError: the CA override looks like base64 but is not
        InvalidServerURLError: the hostname override cannot be applied
    """
    raw_cluster = candidate.cluster
    auth_info = candidate.auth_info

    ca_data = raw_cluster.certificate_authority_data
    if overrides.cluster_ca_data:
        ca_data = sniff_and_decode(overrides.cluster_ca_data)

    server = candidate.server
    if overrides.cluster_hostname:
        server = override_hostname(server, overrides.cluster_hostname)
        logger.debug("Cluster hostname overridden", name=candidate.name, server=server)

    mechanism = AuthMechanism(mechanism)

    return ClusterDescriptor(
        project_id=candidate.project_id,
        name=candidate.name,
        server=server,
        auth_mechanism=mechanism,
        cluster_location_of_origin=raw_cluster.location_of_origin,
        tls_server_name=raw_cluster.tls_server_name,
        insecure_skip_tls_verify=raw_cluster.insecure_skip_tls_verify,
        user_location_of_origin=auth_info.location_of_origin,
        user_impersonate=auth_info.impersonate,
        user_impersonate_groups=flatten_impersonate_groups(auth_info.impersonate_groups),
        certificate_authority_data=ca_data,
        **{CREDENTIAL_SLOTS[mechanism]: credential_id},
    )
