"""Tests for chaining upgrades across a lineage."""

from itertools import pairwise

import pytest

from skaffold.schema import (
    LATEST_V1_VERSION,
    LATEST_VERSION,
    ChainUpgradeError,
    DowngradeError,
    Lineage,
    UpgradeNotAvailableError,
)
from skaffold.schema.upgrade import upgrade_to_terminal, upgrade_until
from skaffold.schema.util import VersionedModel
from skaffold.schema.versions import v1alpha1, v1beta6, v2alpha1, v2beta1, v3alpha1, v4beta1


class TestUpgradeToNextVersion:
    """Test single upgrade steps."""

    @pytest.mark.parametrize("lineage", list(Lineage))
    def test_every_step_lands_on_next_version(self, registry, lineage):
        """Should upgrade each non-terminal version to its successor."""
        versions = registry.all_versions_of(lineage)
        for current, expected in pairwise(versions):
            config = registry.get_version(current)()
            upgraded = config.upgrade()
            assert upgraded.get_version() == expected
            assert config.get_version() == current

    def test_cant_upgrade_from_latest_v1_version(self):
        """Should have no successor for the last v1 lineage version."""
        with pytest.raises(UpgradeNotAvailableError):
            v2beta1.SkaffoldConfig().upgrade()

    def test_cant_upgrade_from_latest_version(self):
        """Should have no successor for the current version."""
        with pytest.raises(UpgradeNotAvailableError):
            v4beta1.SkaffoldConfig().upgrade()


class TestUpgradeToTerminal:
    """Test upgrading to the end of a lineage."""

    def test_v1_lineage(self, registry):
        """Should upgrade v1 documents to the last v1 version."""
        upgraded = upgrade_to_terminal(v1alpha1.SkaffoldConfig(), registry)
        assert upgraded.get_version() == LATEST_V1_VERSION
        assert isinstance(upgraded, v2beta1.SkaffoldConfig)

    def test_v2_lineage(self, registry):
        """Should upgrade v2 documents to the current version."""
        upgraded = upgrade_to_terminal(v3alpha1.SkaffoldConfig(), registry)
        assert upgraded.get_version() == LATEST_VERSION

    def test_already_at_terminal(self, registry):
        """Should return the document unchanged when nothing is left to do."""
        config = v4beta1.SkaffoldConfig()
        assert upgrade_to_terminal(config, registry) is config

    def test_step_failure_is_reported(self, registry):
        """Should surface a failing step as a ChainUpgradeError."""
        config = v2alpha1.SkaffoldConfig.model_validate(
            {"build": {"tagPolicy": {"envTemplate": {"template": "{{.IMAGE_NAME}}-dev"}}}}
        )
        with pytest.raises(ChainUpgradeError, match="upgrading config from skaffold/v2alpha1"):
            upgrade_to_terminal(config, registry)

    def test_version_without_upgrade(self, registry, mocker):
        """Should report a version that never defined its upgrade as a failed step."""
        mocker.patch.object(v1beta6.SkaffoldConfig, "upgrade", VersionedModel.upgrade)
        with pytest.raises(ChainUpgradeError, match="upgrading config from skaffold/v1beta6"):
            upgrade_to_terminal(v1beta6.SkaffoldConfig(), registry)

    def test_step_landing_on_wrong_version(self, registry, mocker):
        """Should reject a step that skips a version."""
        config = v1beta6.SkaffoldConfig()
        mocker.patch.object(
            v1beta6.SkaffoldConfig, "upgrade", return_value=v2alpha1.SkaffoldConfig()
        )
        with pytest.raises(ChainUpgradeError, match="expected skaffold/v1"):
            upgrade_to_terminal(config, registry)


class TestUpgradeUntil:
    """Test upgrading to an explicit target."""

    def test_stops_at_target(self, registry):
        """Should stop at the requested version."""
        upgraded = upgrade_until(v1alpha1.SkaffoldConfig(), "skaffold/v1beta6", registry)
        assert isinstance(upgraded, v1beta6.SkaffoldConfig)

    def test_same_version(self, registry):
        """Should leave a document already at the target untouched."""
        config = v1beta6.SkaffoldConfig()
        assert upgrade_until(config, "skaffold/v1beta6", registry) is config

    def test_older_target(self, registry):
        """Should refuse to downgrade."""
        with pytest.raises(DowngradeError) as exc_info:
            upgrade_until(v1beta6.SkaffoldConfig(), "skaffold/v1alpha1", registry)
        assert 'is more recent than target version "skaffold/v1alpha1": upgrade Skaffold' in str(
            exc_info.value
        )

    def test_follows_registry_path(self, registry, mocker):
        """Should take one step per version on the registry's upgrade path."""
        spy = mocker.spy(registry, "get_upgrade_path")
        step = mocker.spy(v1beta6.SkaffoldConfig, "upgrade")

        upgraded = upgrade_until(v1beta6.SkaffoldConfig(), LATEST_V1_VERSION, registry)

        spy.assert_called_once_with("skaffold/v1beta6", LATEST_V1_VERSION)
        assert step.call_count == 1
        assert upgraded.get_version() == LATEST_V1_VERSION
