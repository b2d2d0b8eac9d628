"""Configuration version skaffold/v1alpha5."""

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
from skaffold.schema.versions.v1alpha2 import BazelArtifact, DeployConfig, DockerArtifact, TagPolicy
from skaffold.schema.versions.v1alpha3 import KanikoBuildContext, LocalBuild

VERSION = "skaffold/v1alpha5"


class KanikoArtifact(SchemaModel):
    dockerfile_path: str = ""
    build_args: dict[str, str] = Field(default_factory=dict)
    build_context: KanikoBuildContext | None = None


class Artifact(OneOfModel):
    one_of = ("docker", "bazel", "kaniko")

    image: str = ""
    context: str = ""
    docker: DockerArtifact | None = None
    bazel: BazelArtifact | None = None
    kaniko: KanikoArtifact | None = None


class ClusterDetails(SchemaModel):
    pull_secret: str = ""
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
        """Upgrade to v1beta1: ``cluster.pullSecret`` becomes ``pullSecretPath``."""
        from skaffold.schema.versions import v1beta1

        data = self.to_mapping()
        for pipeline in pipelines(data):
            if "cluster" in pipeline["build"]:
                rename(pipeline["build"]["cluster"], "pullSecret", "pullSecretPath")

        return upgrade_into(v1beta1, data, self.api_version)
