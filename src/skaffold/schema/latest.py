"""Canonical configuration shape: the latest version of the v2 lineage."""

from skaffold.schema.versions.v3 import (
    Artifact,
    BuildConfig,
    ClusterDetails,
    KanikoArtifact,
    KubectlDeploy,
    Volume,
    VolumeMount,
)
from skaffold.schema.versions.v4beta1 import (
    VERSION,
    DeployConfig,
    HelmDeploy,
    HelmManifests,
    ManifestsConfig,
    Profile,
    SkaffoldConfig,
)

__all__ = [
    "VERSION",
    "Artifact",
    "BuildConfig",
    "ClusterDetails",
    "DeployConfig",
    "HelmDeploy",
    "HelmManifests",
    "KanikoArtifact",
    "KubectlDeploy",
    "ManifestsConfig",
    "Profile",
    "SkaffoldConfig",
    "Volume",
    "VolumeMount",
]
