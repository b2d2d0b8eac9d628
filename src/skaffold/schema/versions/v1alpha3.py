"""Configuration version skaffold/v1alpha3."""

from pydantic import Field

from skaffold.schema.util import (
    OneOfModel,
    SchemaModel,
    VersionedConfig,
    VersionedModel,
    pipelines,
    rename,
    upgrade_into,
)
from skaffold.schema.versions.v1alpha1 import GoogleCloudBuild
from skaffold.schema.versions.v1alpha2 import Artifact, DeployConfig, TagPolicy

VERSION = "skaffold/v1alpha3"


class LocalBuild(SchemaModel):
    push: bool | None = None


class KanikoBuildContext(SchemaModel):
    gcs_bucket: str = ""


class KanikoBuild(SchemaModel):
    build_context: KanikoBuildContext | None = None
    pull_secret: str = ""
    pull_secret_name: str = ""
    namespace: str = ""
    timeout: str = ""


class BuildConfig(OneOfModel):
    one_of = ("local", "google_cloud_build", "kaniko")

    artifacts: list[Artifact] = Field(default_factory=list)
    tag_policy: TagPolicy = Field(default_factory=TagPolicy)
    local: LocalBuild | None = None
    google_cloud_build: GoogleCloudBuild | None = None
    kaniko: KanikoBuild | None = None


class Profile(SchemaModel):
    name: str = ""
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)


class SkaffoldConfig(VersionedModel):
    api_version: str = VERSION
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    profiles: list[Profile] = Field(default_factory=list)

    def upgrade(self) -> VersionedConfig:
        """Upgrade to v1alpha4: artifacts use ``image`` and ``context``."""
        from skaffold.schema.versions import v1alpha4

        data = self.to_mapping()
        for pipeline in pipelines(data):
            for artifact in pipeline["build"]["artifacts"]:
                rename(artifact, "imageName", "image")
                rename(artifact, "workspace", "context")

        return upgrade_into(v1alpha4, data, self.api_version)
