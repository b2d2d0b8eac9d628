"""Configuration version skaffold/v3beta1."""

from pydantic import Field

from skaffold.schema.util import SchemaModel, VersionedConfig, VersionedModel, upgrade_into
from skaffold.schema.versions.v1 import Activation
from skaffold.schema.versions.v1beta1 import TestCase
from skaffold.schema.versions.v1beta4 import PortForwardResource
from skaffold.schema.versions.v2alpha1 import BuildConfig, Metadata
from skaffold.schema.versions.v3alpha1 import DeployConfig, ManifestsConfig

VERSION = "skaffold/v3beta1"


class VerifyTestCase(SchemaModel):
    """A container run after deployment to check the deployed application."""

    name: str = ""
    image: str = ""
    command: list[str] = Field(default_factory=list)
    args: list[str] = Field(default_factory=list)


class Profile(SchemaModel):
    name: str = ""
    activation: list[Activation] = Field(default_factory=list)
    build: BuildConfig = Field(default_factory=BuildConfig)
    manifests: ManifestsConfig = Field(default_factory=ManifestsConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)
    verify: list[VerifyTestCase] = Field(default_factory=list)


class SkaffoldConfig(VersionedModel):
    api_version: str = VERSION
    metadata: Metadata = Field(default_factory=Metadata)
    build: BuildConfig = Field(default_factory=BuildConfig)
    manifests: ManifestsConfig = Field(default_factory=ManifestsConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)
    verify: list[VerifyTestCase] = Field(default_factory=list)
    port_forward: list[PortForwardResource] = Field(default_factory=list)
    profiles: list[Profile] = Field(default_factory=list)

    def upgrade(self) -> VersionedConfig:
        """Upgrade to v3, which adds kaniko volumes and a kubectl default namespace."""
        from skaffold.schema.versions import v3

        return upgrade_into(v3, self.to_mapping(), self.api_version)
