"""Configuration version skaffold/v3alpha1 - first version of the v2 lineage.

Rendering and deploying are split: manifests are declared once under
``manifests`` and the deployers only carry their own flags.
"""

from pydantic import Field

from skaffold.schema.util import SchemaModel, VersionedConfig, VersionedModel, upgrade_into
from skaffold.schema.versions.v1 import Activation
from skaffold.schema.versions.v1alpha2 import KubectlFlags
from skaffold.schema.versions.v1beta1 import TestCase
from skaffold.schema.versions.v1beta4 import PortForwardResource
from skaffold.schema.versions.v1beta5 import HelmRelease
from skaffold.schema.versions.v2alpha1 import BuildConfig, Metadata
from skaffold.schema.versions.v2beta1 import LogsConfig

VERSION = "skaffold/v3alpha1"


class Kustomize(SchemaModel):
    paths: list[str] = Field(default_factory=list)


class ManifestsConfig(SchemaModel):
    raw_yaml: list[str] = Field(default_factory=list)
    kustomize: Kustomize | None = None


class KubectlDeploy(SchemaModel):
    flags: KubectlFlags = Field(default_factory=KubectlFlags)


class HelmDeploy(SchemaModel):
    releases: list[HelmRelease] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list)


class DeployConfig(SchemaModel):
    kubectl: KubectlDeploy | None = None
    helm: HelmDeploy | None = None
    status_check_deadline_seconds: int = 0
    logs: LogsConfig = Field(default_factory=LogsConfig)


class Profile(SchemaModel):
    name: str = ""
    activation: list[Activation] = Field(default_factory=list)
    build: BuildConfig = Field(default_factory=BuildConfig)
    manifests: ManifestsConfig = Field(default_factory=ManifestsConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)


class SkaffoldConfig(VersionedModel):
    api_version: str = VERSION
    metadata: Metadata = Field(default_factory=Metadata)
    build: BuildConfig = Field(default_factory=BuildConfig)
    manifests: ManifestsConfig = Field(default_factory=ManifestsConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)
    port_forward: list[PortForwardResource] = Field(default_factory=list)
    profiles: list[Profile] = Field(default_factory=list)

    def upgrade(self) -> VersionedConfig:
        """Upgrade to v3beta1, which adds verify test cases."""
        from skaffold.schema.versions import v3beta1

        return upgrade_into(v3beta1, self.to_mapping(), self.api_version)
