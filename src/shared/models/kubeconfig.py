"""Structured kubeconfig models.

These mirror the parts of a kubeconfig that cluster resolution reads. All
byte-valued ``*_data`` fields hold already-decoded material.
"""

from pydantic import ConfigDict, Field

from .base import RegistryBaseModel


class KubeConfigModel(RegistryBaseModel):
    """Immutable base for parsed kubeconfig entries."""

    model_config = ConfigDict(frozen=True)


class AuthProviderConfig(KubeConfigModel):
    """Auth provider plugin settings (e.g. ``oidc``)."""

    name: str = ""
    config: dict[str, str] = Field(default_factory=dict)


class RawCluster(KubeConfigModel):
    """A ``clusters[].cluster`` entry."""

    server: str = ""
    certificate_authority_data: bytes = b""
    tls_server_name: str = ""
    insecure_skip_tls_verify: bool = False
    location_of_origin: str = ""


class RawAuthInfo(KubeConfigModel):
    """A ``users[].user`` entry."""

    client_certificate_data: bytes = b""
    client_key_data: bytes = b""
    token: str = ""
    username: str = ""
    password: str = ""
    auth_provider: AuthProviderConfig | None = None
    impersonate: str = ""
    impersonate_groups: list[str] = Field(default_factory=list)
    location_of_origin: str = ""

    @property
    def auth_provider_config(self) -> dict[str, str]:
        """Provider config mapping, empty when no provider is set."""
        if self.auth_provider is None:
            return {}
        return self.auth_provider.config


class RawContext(KubeConfigModel):
    """A ``contexts[].context`` entry."""

    cluster: str = ""
    auth_info: str = ""
    namespace: str = ""


class RawKubeConfig(KubeConfigModel):
    """A parsed kubeconfig keyed by entry name."""

    clusters: dict[str, RawCluster] = Field(default_factory=dict)
    contexts: dict[str, RawContext] = Field(default_factory=dict)
    auth_infos: dict[str, RawAuthInfo] = Field(default_factory=dict)
    current_context: str = ""

    def context(self, name: str | None = None) -> RawContext:
        """Return the named (or current) context, or an empty one."""
        return self.contexts.get(name or self.current_context, RawContext())

    def current_cluster(self, context_name: str | None = None) -> RawCluster:
        """Return the cluster referenced by a context, or an empty one."""
        return self.clusters.get(self.context(context_name).cluster, RawCluster())

    def current_auth_info(self, context_name: str | None = None) -> RawAuthInfo:
        """Return the user referenced by a context, or an empty one."""
        return self.auth_infos.get(self.context(context_name).auth_info, RawAuthInfo())


class ClusterConfig(KubeConfigModel):
    """A context joined with its cluster and user names."""

    name: str
    server: str
    context: str
    user: str
