"""Configuration version skaffold/v1alpha1 - oldest tracked version."""

import logging
from typing import Literal

from pydantic import Field

from skaffold.schema.util import (
    OneOfModel,
    SchemaModel,
    VersionedConfig,
    VersionedModel,
    upgrade_into,
)

logger = logging.getLogger(__name__)

VERSION = "skaffold/v1alpha1"


class LocalBuild(SchemaModel):
    skip_push: bool | None = None


class GoogleCloudBuild(SchemaModel):
    project_id: str = ""


class Artifact(SchemaModel):
    """Every v1alpha1 artifact is built from a Dockerfile."""

    image_name: str = ""
    workspace: str = ""
    dockerfile_path: str = ""
    build_args: dict[str, str] = Field(default_factory=dict)


class BuildConfig(OneOfModel):
    one_of = ("local", "google_cloud_build")

    artifacts: list[Artifact] = Field(default_factory=list)
    tag_policy: Literal["", "gitCommit", "sha256"] = ""
    local: LocalBuild | None = None
    google_cloud_build: GoogleCloudBuild | None = None


class Manifest(SchemaModel):
    paths: list[str] = Field(default_factory=list)
    parameters: dict[str, str] = Field(default_factory=dict)


class KubectlDeploy(SchemaModel):
    manifests: list[Manifest] = Field(default_factory=list)


class HelmRelease(SchemaModel):
    name: str = ""
    chart_path: str = ""
    values_file_path: str = ""
    values: dict[str, str] = Field(default_factory=dict)
    namespace: str = ""
    version: str = ""


class HelmDeploy(SchemaModel):
    releases: list[HelmRelease] = Field(default_factory=list)


class DeployConfig(SchemaModel):
    name: str = ""
    kubectl: KubectlDeploy | None = None
    helm: HelmDeploy | None = None


class SkaffoldConfig(VersionedModel):
    api_version: str = VERSION
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)

    def upgrade(self) -> VersionedConfig:
        """Upgrade to v1alpha2.

        - tagPolicy turns from a string into an object
        - Dockerfile settings move into a ``docker`` block on each artifact
        - kubectl manifests flatten to a list of paths
        - the deploy name is dropped
        """
        from skaffold.schema.versions import v1alpha2

        data = self.to_mapping()
        build = data["build"]

        policy = build.pop("tagPolicy")
        build["tagPolicy"] = {policy: {}} if policy else {}

        for artifact in build["artifacts"]:
            artifact["docker"] = {
                "dockerfilePath": artifact.pop("dockerfilePath"),
                "buildArgs": artifact.pop("buildArgs"),
            }

        deploy = data["deploy"]
        deploy.pop("name")
        if "kubectl" in deploy:
            paths = []
            for manifest in deploy["kubectl"]["manifests"]:
                if manifest["parameters"]:
                    logger.warning(
                        "Dropping kubectl manifest parameters %s: no longer supported",
                        sorted(manifest["parameters"]),
                    )
                paths.extend(manifest["paths"])
            deploy["kubectl"] = {"manifests": paths}

        return upgrade_into(v1alpha2, data, self.api_version)
