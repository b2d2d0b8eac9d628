"""Configuration version skaffold/v2alpha1."""

import re

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
from skaffold.schema.versions.v1 import Activation
from skaffold.schema.versions.v1alpha1 import GoogleCloudBuild
from skaffold.schema.versions.v1alpha2 import TagPolicy
from skaffold.schema.versions.v1alpha3 import LocalBuild
from skaffold.schema.versions.v1alpha5 import Artifact
from skaffold.schema.versions.v1beta1 import TestCase
from skaffold.schema.versions.v1beta4 import PortForwardResource
from skaffold.schema.versions.v1beta6 import DeployConfig

VERSION = "skaffold/v2alpha1"

# Leading "{{.IMAGE_NAME}}:" in an envTemplate; the image name is always prepended now.
_IMAGE_NAME_PREFIX = re.compile(r"^\{\{\s*\.IMAGE_NAME\s*\}\}:")
_IMAGE_NAME = re.compile(r"\{\{\s*\.IMAGE_NAME\s*\}\}")


class Metadata(SchemaModel):
    name: str = ""


class DockerConfig(SchemaModel):
    secret_name: str = ""
    path: str = ""


class ClusterDetails(SchemaModel):
    pull_secret_path: str = ""
    pull_secret_name: str = ""
    namespace: str = ""
    timeout: str = ""
    docker_config: DockerConfig | None = None


class BuildConfig(OneOfModel):
    one_of = ("local", "google_cloud_build", "cluster")

    artifacts: list[Artifact] = Field(default_factory=list)
    tag_policy: TagPolicy = Field(default_factory=TagPolicy)
    local: LocalBuild | None = None
    google_cloud_build: GoogleCloudBuild | None = None
    cluster: ClusterDetails | None = None


class Profile(SchemaModel):
    name: str = ""
    activation: list[Activation] = Field(default_factory=list)
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)


class SkaffoldConfig(VersionedModel):
    api_version: str = VERSION
    metadata: Metadata = Field(default_factory=Metadata)
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)
    port_forward: list[PortForwardResource] = Field(default_factory=list)
    profiles: list[Profile] = Field(default_factory=list)

    def upgrade(self) -> VersionedConfig:
        """Upgrade to v2beta1.

        ``{{.IMAGE_NAME}}`` is no longer available in env templates: a leading
        ``{{.IMAGE_NAME}}:`` is dropped, any other use is an error.
        """
        from skaffold.schema.versions import v2beta1

        data = self.to_mapping()
        for pipeline in pipelines(data):
            env_template = pipeline["build"]["tagPolicy"].get("envTemplate")
            if env_template is None:
                continue
            template = _IMAGE_NAME_PREFIX.sub("", env_template["template"])
            if _IMAGE_NAME.search(template):
                raise ChainUpgradeError(
                    self.api_version,
                    f"envTemplate {env_template['template']!r} uses {{{{.IMAGE_NAME}}}}, "
                    "which is no longer supported",
                )
            env_template["template"] = template

        return upgrade_into(v2beta1, data, self.api_version)
