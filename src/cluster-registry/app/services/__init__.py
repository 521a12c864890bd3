"""Business logic services."""

from .cluster_builder import build_cluster, flatten_impersonate_groups, override_hostname
from .cluster_service import ClusterService
from .dispatcher import ResolutionDispatcher
from .encoding import looks_like_base64, sniff_and_decode
from .kubeconfig import get_all_cluster_configs, get_cluster_configs, load_raw_config
from .resolution_service import ClusterResolutionService
from .resolvers import (
    RESOLVER_CLASSES,
    AWSResolver,
    BasicResolver,
    CertificateResolver,
    GCPResolver,
    LocalResolver,
    MechanismResolver,
    OIDCResolver,
    TokenResolver,
    coalesce,
)

__all__ = [
    "AWSResolver",
    "BasicResolver",
    "CertificateResolver",
    "ClusterResolutionService",
    "ClusterService",
    "GCPResolver",
    "LocalResolver",
    "MechanismResolver",
    "OIDCResolver",
    "RESOLVER_CLASSES",
    "ResolutionDispatcher",
    "TokenResolver",
    "build_cluster",
    "coalesce",
    "flatten_impersonate_groups",
    "get_all_cluster_configs",
    "get_cluster_configs",
    "load_raw_config",
    "looks_like_base64",
    "override_hostname",
    "sniff_and_decode",
]
