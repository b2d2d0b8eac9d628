"""Configuration version skaffold/v2beta1 - latest version of the v1 lineage."""

from pydantic import Field

from skaffold.schema.errors import UpgradeNotAvailableError
from skaffold.schema.util import SchemaModel, VersionedConfig, VersionedModel
from skaffold.schema.versions.v1 import Activation
from skaffold.schema.versions.v1alpha2 import KubectlDeploy
from skaffold.schema.versions.v1beta1 import TestCase
from skaffold.schema.versions.v1beta3 import KustomizeDeploy
from skaffold.schema.versions.v1beta4 import PortForwardResource
from skaffold.schema.versions.v1beta5 import HelmDeploy
from skaffold.schema.versions.v2alpha1 import BuildConfig, Metadata

VERSION = "skaffold/v2beta1"


class LogsConfig(SchemaModel):
    prefix: str = ""


class DeployConfig(SchemaModel):
    kubectl: KubectlDeploy | None = None
    helm: HelmDeploy | None = None
    kustomize: KustomizeDeploy | None = None
    status_check_deadline_seconds: int = 0
    logs: LogsConfig = Field(default_factory=LogsConfig)


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
        """The v1 lineage ends here; v3 configs are not derived from it."""
        raise UpgradeNotAvailableError(self.api_version)
