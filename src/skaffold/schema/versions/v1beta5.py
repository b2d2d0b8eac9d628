"""Configuration version skaffold/v1beta5."""

from pydantic import Field

from skaffold.schema.util import SchemaModel, VersionedConfig, VersionedModel, upgrade_into
from skaffold.schema.versions.v1alpha2 import KubectlDeploy
from skaffold.schema.versions.v1beta1 import BuildConfig, TestCase
from skaffold.schema.versions.v1beta3 import KustomizeDeploy
from skaffold.schema.versions.v1beta4 import PortForwardResource

VERSION = "skaffold/v1beta5"


class HelmRelease(SchemaModel):
    name: str = ""
    chart_path: str = ""
    values_files: list[str] = Field(default_factory=list)
    values: dict[str, str] = Field(default_factory=dict)
    namespace: str = ""
    version: str = ""


class HelmDeploy(SchemaModel):
    releases: list[HelmRelease] = Field(default_factory=list)


class DeployConfig(SchemaModel):
    kubectl: KubectlDeploy | None = None
    helm: HelmDeploy | None = None
    kustomize: KustomizeDeploy | None = None


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
        """Upgrade to v1beta6, which adds a status check deadline."""
        from skaffold.schema.versions import v1beta6

        return upgrade_into(v1beta6, self.to_mapping(), self.api_version)
