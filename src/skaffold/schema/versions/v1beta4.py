"""Configuration version skaffold/v1beta4."""

from pydantic import Field

from skaffold.schema.util import (
    SchemaModel,
    VersionedConfig,
    VersionedModel,
    pipelines,
    upgrade_into,
)
from skaffold.schema.versions.v1beta1 import BuildConfig, TestCase
from skaffold.schema.versions.v1beta3 import DeployConfig, Profile

VERSION = "skaffold/v1beta4"


class PortForwardResource(SchemaModel):
    resource_type: str = ""
    resource_name: str = ""
    namespace: str = ""
    port: int = 0
    local_port: int = 0


class SkaffoldConfig(VersionedModel):
    api_version: str = VERSION
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    test: list[TestCase] = Field(default_factory=list)
    port_forward: list[PortForwardResource] = Field(default_factory=list)
    profiles: list[Profile] = Field(default_factory=list)

    def upgrade(self) -> VersionedConfig:
        """Upgrade to v1beta5: helm releases take a list of ``valuesFiles``."""
        from skaffold.schema.versions import v1beta5

        data = self.to_mapping()
        for pipeline in pipelines(data):
            helm = pipeline["deploy"].get("helm")
            if helm is None:
                continue
            for release in helm["releases"]:
                values_file = release.pop("valuesFilePath")
                release["valuesFiles"] = [values_file] if values_file else []

        return upgrade_into(v1beta5, data, self.api_version)
