"""Configuration version skaffold/v1beta2."""

from pydantic import Field

from skaffold.schema.util import (
    SchemaModel,
    VersionedConfig,
    VersionedModel,
    pipelines,
    upgrade_into,
)
from skaffold.schema.versions.v1alpha1 import HelmDeploy
from skaffold.schema.versions.v1alpha2 import KubectlDeploy
from skaffold.schema.versions.v1beta1 import BuildConfig, TestCase

VERSION = "skaffold/v1beta2"


class KustomizeDeploy(SchemaModel):
    path: str = ""


class DeployConfig(SchemaModel):
    kubectl: KubectlDeploy | None = None
    helm: HelmDeploy | None = None
    kustomize: KustomizeDeploy | None = None


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
        """Upgrade to v1beta3: kustomize takes a list of ``paths``."""
        from skaffold.schema.versions import v1beta3

        data = self.to_mapping()
        for pipeline in pipelines(data):
            kustomize = pipeline["deploy"].get("kustomize")
            if kustomize is not None:
                path = kustomize.pop("path")
                kustomize["paths"] = [path] if path else []

        return upgrade_into(v1beta3, data, self.api_version)
