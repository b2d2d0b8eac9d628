"""Configuration version skaffold/v3."""

from pydantic import Field

from skaffold.schema.util import (
    OneOfModel,
    SchemaModel,
    VersionedConfig,
    VersionedModel,
    pipelines,
    upgrade_into,
)
from skaffold.schema.versions.v1 import Activation
from skaffold.schema.versions.v1alpha1 import GoogleCloudBuild
from skaffold.schema.versions.v1alpha2 import BazelArtifact, DockerArtifact, KubectlFlags, TagPolicy
from skaffold.schema.versions.v1alpha3 import KanikoBuildContext, LocalBuild
from skaffold.schema.versions.v1beta1 import TestCase
from skaffold.schema.versions.v1beta4 import PortForwardResource
from skaffold.schema.versions.v2alpha1 import DockerConfig, Metadata
from skaffold.schema.versions.v2beta1 import LogsConfig
from skaffold.schema.versions.v3alpha1 import HelmDeploy, ManifestsConfig
from skaffold.schema.versions.v3beta1 import VerifyTestCase

VERSION = "skaffold/v3"


class ConfigMapVolumeSource(SchemaModel):
    name: str = ""


class SecretVolumeSource(SchemaModel):
    secret_name: str = ""


class EmptyDirVolumeSource(SchemaModel):
    medium: str = ""


class Volume(OneOfModel):
    """A volume made available to kaniko pods in the build cluster."""

    one_of = ("config_map", "secret", "empty_dir")

    name: str = ""
    config_map: ConfigMapVolumeSource | None = None
    secret: SecretVolumeSource | None = None
    empty_dir: EmptyDirVolumeSource | None = None


class VolumeMount(SchemaModel):
    name: str = ""
    mount_path: str = ""
    read_only: bool = False


class KanikoArtifact(SchemaModel):
    dockerfile_path: str = ""
    build_args: dict[str, str] = Field(default_factory=dict)
    build_context: KanikoBuildContext | None = None
    volume_mounts: list[VolumeMount] = Field(default_factory=list)


class Artifact(OneOfModel):
    one_of = ("docker", "bazel", "kaniko")

    image: str = ""
    context: str = ""
    docker: DockerArtifact | None = None
    bazel: BazelArtifact | None = None
    kaniko: KanikoArtifact | None = None


class ClusterDetails(SchemaModel):
    pull_secret_path: str = ""
    pull_secret_name: str = ""
    namespace: str = ""
    timeout: str = ""
    docker_config: DockerConfig | None = None
    volumes: list[Volume] = Field(default_factory=list)


class BuildConfig(OneOfModel):
    one_of = ("local", "google_cloud_build", "cluster")

    artifacts: list[Artifact] = Field(default_factory=list)
    tag_policy: TagPolicy = Field(default_factory=TagPolicy)
    local: LocalBuild | None = None
    google_cloud_build: GoogleCloudBuild | None = None
    cluster: ClusterDetails | None = None


class KubectlDeploy(SchemaModel):
    default_namespace: str | None = None
    flags: KubectlFlags = Field(default_factory=KubectlFlags)


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
        """Upgrade to v4beta1: helm releases move from ``deploy`` to ``manifests``."""
        from skaffold.schema.versions import v4beta1

        data = self.to_mapping()
        for pipeline in pipelines(data):
            helm = pipeline["deploy"].get("helm")
            if helm is None:
                continue
            releases = helm.pop("releases")
            if releases:
                pipeline["manifests"]["helm"] = {"releases": releases}

        return upgrade_into(v4beta1, data, self.api_version)
