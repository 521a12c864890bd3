"""Kubeconfig parsing.

Turns raw kubeconfig bytes into a ``RawKubeConfig``. Missing sections are
not an error: an empty or partial kubeconfig yields empty mappings, and
lookups through a dangling context return empty entries. Sections or
fields of the wrong type raise ``InvalidKubeconfigError``.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable
from typing import Any

import yaml
from pydantic import ValidationError

from shared.models import (
    AuthProviderConfig,
    ClusterConfig,
    RawAuthInfo,
    RawCluster,
    RawContext,
    RawKubeConfig,
)

from ..errors import InvalidKubeconfigError, MalformedEncodingError


def _field(body: dict[str, Any], key: str, default: Any = "") -> Any:
    """Return a field's value, with explicit nulls treated as absent."""
    value = body.get(key)
    return default if value is None else value


def _decode_data(value: Any, field: str) -> bytes:
    """Decode a ``*-data`` field, which kubeconfig always stores as base64."""
    if not value:
        return b""
    if not isinstance(value, str):
        raise InvalidKubeconfigError(f"Kubeconfig field '{field}' must be a string")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncodingError(f"Kubeconfig field '{field}' is not valid base64") from e


def _named_entries(document: dict[str, Any], section: str, key: str) -> Iterable[tuple[str, dict]]:
    """Yield (name, body) for each entry of a kubeconfig list section."""
    entries = _field(document, section, [])
    if not isinstance(entries, list):
        raise InvalidKubeconfigError(f"Kubeconfig section '{section}' must be a list")

    for entry in entries:
        if not isinstance(entry, dict):
            raise InvalidKubeconfigError(f"Kubeconfig '{section}' entries must be mappings")
        if not entry.get("name"):
            continue

        body = _field(entry, key, {})
        if not isinstance(body, dict):
            raise InvalidKubeconfigError(
                f"Kubeconfig {key} '{entry['name']}' must be a mapping"
            )
        yield str(entry["name"]), body


def _parse_cluster(body: dict[str, Any], location_of_origin: str) -> RawCluster:
    return RawCluster(
        server=_field(body, "server"),
        certificate_authority_data=_decode_data(
            body.get("certificate-authority-data"), "certificate-authority-data"
        ),
        tls_server_name=_field(body, "tls-server-name"),
        insecure_skip_tls_verify=_field(body, "insecure-skip-tls-verify", False),
        location_of_origin=location_of_origin,
    )


def _parse_auth_info(body: dict[str, Any], location_of_origin: str) -> RawAuthInfo:
    provider = body.get("auth-provider")
    auth_provider = None
    if provider is not None:
        if not isinstance(provider, dict):
            raise InvalidKubeconfigError("Kubeconfig auth-provider must be a mapping")
        config = _field(provider, "config", {})
        if not isinstance(config, dict):
            raise InvalidKubeconfigError("Kubeconfig auth-provider config must be a mapping")
        auth_provider = AuthProviderConfig(
            name=_field(provider, "name"),
            config={str(k): str(v) for k, v in config.items()},
        )

    groups = _field(body, "as-groups", [])
    if not isinstance(groups, list):
        raise InvalidKubeconfigError("Kubeconfig as-groups must be a list")

    return RawAuthInfo(
        client_certificate_data=_decode_data(
            body.get("client-certificate-data"), "client-certificate-data"
        ),
        client_key_data=_decode_data(body.get("client-key-data"), "client-key-data"),
        token=_field(body, "token"),
        username=_field(body, "username"),
        password=_field(body, "password"),
        auth_provider=auth_provider,
        impersonate=_field(body, "as"),
        impersonate_groups=groups,
        location_of_origin=location_of_origin,
    )


def load_raw_config(data: bytes | str, location_of_origin: str = "") -> RawKubeConfig:
    """Parse kubeconfig bytes.

    Args:
        data: Raw kubeconfig YAML
        location_of_origin: Where the kubeconfig came from, stamped on
            every cluster and user entry

    Raises:
        InvalidKubeconfigError: data is not YAML, or a section or field has
            the wrong type
        MalformedEncodingError: a ``*-data`` field is not valid base64
    """
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise InvalidKubeconfigError(f"Kubeconfig is not valid YAML: {e!s}") from e

    if document is None:
        return RawKubeConfig()
    if not isinstance(document, dict):
        raise InvalidKubeconfigError("Kubeconfig must be a mapping")

    try:
        return RawKubeConfig(
            clusters={
                name: _parse_cluster(body, location_of_origin)
                for name, body in _named_entries(document, "clusters", "cluster")
            },
            contexts={
                name: RawContext(
                    cluster=_field(body, "cluster"),
                    auth_info=_field(body, "user"),
                    namespace=_field(body, "namespace"),
                )
                for name, body in _named_entries(document, "contexts", "context")
            },
            auth_infos={
                name: _parse_auth_info(body, location_of_origin)
                for name, body in _named_entries(document, "users", "user")
            },
            current_context=_field(document, "current-context"),
        )
    except ValidationError as e:
        raise InvalidKubeconfigError(f"Kubeconfig has invalid field values: {e!s}") from e


def get_all_cluster_configs(data: bytes | str) -> list[ClusterConfig]:
    """List every context whose cluster and user both exist."""
    raw = load_raw_config(data)

    configs = []
    for context_name, context in raw.contexts.items():
        cluster = raw.clusters.get(context.cluster)
        if cluster is None or context.auth_info not in raw.auth_infos:
            continue
        configs.append(
            ClusterConfig(
                name=context.cluster,
                server=cluster.server,
                context=context_name,
                user=context.auth_info,
            )
        )
    return configs


def get_cluster_configs(data: bytes | str, allowed_clusters: Iterable[str]) -> list[ClusterConfig]:
    """List joinable contexts whose cluster name is in allowed_clusters."""
    allowed = set(allowed_clusters)
    return [config for config in get_all_cluster_configs(data) if config.name in allowed]
