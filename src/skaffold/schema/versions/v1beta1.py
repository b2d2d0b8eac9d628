"""Configuration version skaffold/v1beta1."""

from pydantic import Field

from skaffold.schema.util import (
    OneOfModel,
    SchemaModel,
    VersionedConfig,
    VersionedModel,
    upgrade_into,
)
from skaffold.schema.versions.v1alpha1 import GoogleCloudBuild
from skaffold.schema.versions.v1alpha2 import DeployConfig, TagPolicy
from skaffold.schema.versions.v1alpha3 import LocalBuild
from skaffold.schema.versions.v1alpha5 import Artifact

VERSION = "skaffold/v1beta1"


class ClusterDetails(SchemaModel):
    pull_secret_path: str = ""
    pull_secret_name: str = ""
    namespace: str = ""
    timeout: str = ""


class BuildConfig(OneOfModel):
    one_of = ("local", "google_cloud_build", "cluster")

    artifacts: list[Artifact] = Field(default_factory=list)
    tag_policy: TagPolicy = Field(default_factory=TagPolicy)
    local: LocalBuild | None = None
    google_cloud_build: GoogleCloudBuild | None = None
    cluster: ClusterDetails | None = None


class TestCase(SchemaModel):
    image: str = ""
    structure_tests: list[str] = Field(default_factory=list)


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
    profiles: list[Profile] = Field(default_factory=list)

    def upgrade(self) -> VersionedConfig:
        """Upgrade to v1beta2. Only adds fields, nothing to rewrite."""
        from skaffold.schema.versions import v1beta2

        return upgrade_into(v1beta2, self.to_mapping(), self.api_version)
