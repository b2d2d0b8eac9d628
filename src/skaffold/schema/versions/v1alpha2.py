"""Configuration version skaffold/v1alpha2."""

from pydantic import Field

from skaffold.schema.util import (
    OneOfModel,
    SchemaModel,
    VersionedConfig,
    VersionedModel,
    pipelines,
    upgrade_into,
)
from skaffold.schema.versions.v1alpha1 import GoogleCloudBuild, HelmDeploy, LocalBuild

VERSION = "skaffold/v1alpha2"


class GitTagger(SchemaModel):
    pass


class ShaTagger(SchemaModel):
    pass


class EnvTemplateTagger(SchemaModel):
    template: str = ""


class TagPolicy(OneOfModel):
    one_of = ("git_commit", "sha256", "env_template")

    git_commit: GitTagger | None = None
    sha256: ShaTagger | None = None
    env_template: EnvTemplateTagger | None = None


class DockerArtifact(SchemaModel):
    dockerfile_path: str = ""
    build_args: dict[str, str] = Field(default_factory=dict)


class BazelArtifact(SchemaModel):
    target: str = ""


class Artifact(OneOfModel):
    one_of = ("docker", "bazel")

    image_name: str = ""
    workspace: str = ""
    docker: DockerArtifact | None = None
    bazel: BazelArtifact | None = None


class KanikoBuild(SchemaModel):
    gcs_bucket: str = ""
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


class KubectlFlags(SchemaModel):
    apply: list[str] = Field(default_factory=list)
    delete: list[str] = Field(default_factory=list)


class KubectlDeploy(SchemaModel):
    manifests: list[str] = Field(default_factory=list)
    flags: KubectlFlags = Field(default_factory=KubectlFlags)


class DeployConfig(SchemaModel):
    kubectl: KubectlDeploy | None = None
    helm: HelmDeploy | None = None


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
        """Upgrade to v1alpha3.

        The kaniko GCS bucket moves under ``buildContext`` and local builds
        replace ``skipPush`` with its inverse, ``push``.
        """
        from skaffold.schema.versions import v1alpha3

        data = self.to_mapping()
        for pipeline in pipelines(data):
            build = pipeline["build"]
            if "kaniko" in build:
                bucket = build["kaniko"].pop("gcsBucket")
                if bucket:
                    build["kaniko"]["buildContext"] = {"gcsBucket": bucket}
            if "local" in build and "skipPush" in build["local"]:
                build["local"]["push"] = not build["local"].pop("skipPush")

        return upgrade_into(v1alpha3, data, self.api_version)
