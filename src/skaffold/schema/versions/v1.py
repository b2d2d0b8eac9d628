"""Configuration version skaffold/v1."""

from pydantic import Field

from skaffold.schema.util import SchemaModel, VersionedConfig, VersionedModel, upgrade_into
from skaffold.schema.versions.v1beta1 import BuildConfig, TestCase
from skaffold.schema.versions.v1beta4 import PortForwardResource
from skaffold.schema.versions.v1beta6 import DeployConfig

VERSION = "skaffold/v1"


class Activation(SchemaModel):
    """Criteria that switch a profile on automatically."""

    env: str = ""
    kube_context: str = ""
    command: str = ""


class Profile(SchemaModel):
    name: str = ""
    activation: list[Activation] = Field(default_factory=list)
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
        """Upgrade to v2alpha1, which adds metadata and cluster docker config."""
        from skaffold.schema.versions import v2alpha1

        return upgrade_into(v2alpha1, self.to_mapping(), self.api_version)
