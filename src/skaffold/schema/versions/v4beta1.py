"""Configuration version skaffold/v4beta1 - current version."""

from pydantic import Field

from skaffold.schema.errors import UpgradeNotAvailableError
from skaffold.schema.util import SchemaModel, VersionedConfig, VersionedModel
from skaffold.schema.versions.v1 import Activation
from skaffold.schema.versions.v1beta1 import TestCase
from skaffold.schema.versions.v1beta4 import PortForwardResource
from skaffold.schema.versions.v1beta5 import HelmRelease
from skaffold.schema.versions.v2alpha1 import Metadata
from skaffold.schema.versions.v2beta1 import LogsConfig
from skaffold.schema.versions.v3 import BuildConfig, KubectlDeploy
from skaffold.schema.versions.v3alpha1 import Kustomize
from skaffold.schema.versions.v3beta1 import VerifyTestCase

VERSION = "skaffold/v4beta1"


class HelmManifests(SchemaModel):
    releases: list[HelmRelease] = Field(default_factory=list)


class ManifestsConfig(SchemaModel):
    raw_yaml: list[str] = Field(default_factory=list)
    kustomize: Kustomize | None = None
    helm: HelmManifests | None = None


class HelmDeploy(SchemaModel):
    flags: list[str] = Field(default_factory=list)


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
        raise UpgradeNotAvailableError(self.api_version)
