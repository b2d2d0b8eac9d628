"""Configuration version skaffold/v1alpha4."""

from pydantic import Field

from skaffold.schema.errors import ChainUpgradeError
from skaffold.schema.util import (
    OneOfModel,
    SchemaModel,
    VersionedConfig,
    VersionedModel,
    pipelines,
    upgrade_into,
)
from skaffold.schema.versions.v1alpha1 import GoogleCloudBuild
from skaffold.schema.versions.v1alpha2 import BazelArtifact, DeployConfig, DockerArtifact, TagPolicy
from skaffold.schema.versions.v1alpha3 import KanikoBuild, LocalBuild

VERSION = "skaffold/v1alpha4"


class Artifact(OneOfModel):
    one_of = ("docker", "bazel")

    image: str = ""
    context: str = ""
    docker: DockerArtifact | None = None
    bazel: BazelArtifact | None = None


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
        """Upgrade to v1alpha5.

        The ``kaniko`` build type becomes the ``cluster`` build type and each
        artifact it builds turns into a kaniko artifact carrying the former
        build context. Bazel artifacts cannot be built by kaniko.
        """
        from skaffold.schema.versions import v1alpha5

        data = self.to_mapping()
        for pipeline in pipelines(data):
            build = pipeline["build"]
            if "kaniko" not in build:
                continue

            cluster = build.pop("kaniko")
            build_context = cluster.pop("buildContext", None)
            build["cluster"] = cluster

            for artifact in build["artifacts"]:
                if "bazel" in artifact:
                    raise ChainUpgradeError(
                        self.api_version,
                        f"bazel artifact {artifact['image']!r} cannot be built by kaniko",
                    )
                docker = artifact.pop("docker", None) or {}
                kaniko = {
                    "dockerfilePath": docker.get("dockerfilePath", ""),
                    "buildArgs": docker.get("buildArgs", {}),
                }
                if build_context is not None:
                    kaniko["buildContext"] = dict(build_context)
                artifact["kaniko"] = kaniko

        return upgrade_into(v1alpha5, data, self.api_version)
