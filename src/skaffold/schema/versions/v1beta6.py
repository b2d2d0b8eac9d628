"""Configuration version skaffold/v1beta6."""

from pydantic import Field

from skaffold.schema.util import SchemaModel, VersionedConfig, VersionedModel, upgrade_into
from skaffold.schema.versions.v1alpha2 import KubectlDeploy
from skaffold.schema.versions.v1beta1 import BuildConfig, TestCase
from skaffold.schema.versions.v1beta3 import KustomizeDeploy
from skaffold.schema.versions.v1beta4 import PortForwardResource
from skaffold.schema.versions.v1beta5 import HelmDeploy

VERSION = "skaffold/v1beta6"


class DeployConfig(SchemaModel):
    kubectl: KubectlDeploy | None = None
    helm: HelmDeploy | None = None
    kustomize: KustomizeDeploy | None = None
    status_check_deadline_seconds: int = 0


class Profile(SchemaModel):
    name: str = ""
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)


class SkaffoldConfig(VersionedModel):
    api_version: str = VERSION
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)
    port_forward: list[PortForwardResource] = Field(default_factory=list)
    profiles: list[Profile] = Field(default_factory=list)

    def upgrade(self) -> VersionedConfig:
        """Upgrade to v1, which adds profile activation."""
        from skaffold.schema.versions import v1

        return upgrade_into(v1, self.to_mapping(), self.api_version)
