"""Tests for the single-step transforms between versions."""

import pytest

from skaffold.schema import ChainUpgradeError
from skaffold.schema.versions import (
    v1alpha1,
    v1alpha2,
    v1alpha4,
    v1alpha5,
    v1beta2,
    v1beta4,
    v2alpha1,
    v3,
)


class TestV1Alpha1:
    """Test the v1alpha1 to v1alpha2 transform."""

    def test_tag_policy_and_docker_block(self):
        """Should turn the tag policy into an object and move Dockerfile settings."""
        config = v1alpha1.SkaffoldConfig.model_validate(
            {
                "build": {
                    "tagPolicy": "sha256",
                    "artifacts": [
                        {
                            "imageName": "example",
                            "workspace": "./app",
                            "dockerfilePath": "Dockerfile.dev",
                            "buildArgs": {"key": "value"},
                        }
                    ],
                },
            }
        )

        upgraded = config.upgrade()

        assert upgraded.build.tag_policy.sha256 is not None
        assert upgraded.build.tag_policy.git_commit is None
        artifact = upgraded.build.artifacts[0]
        assert artifact.image_name == "example"
        assert artifact.docker.dockerfile_path == "Dockerfile.dev"
        assert artifact.docker.build_args == {"key": "value"}

    def test_empty_tag_policy(self):
        """Should leave the tag policy unset when none was chosen."""
        upgraded = v1alpha1.SkaffoldConfig().upgrade()
        assert upgraded.build.tag_policy == v1alpha2.TagPolicy()

    def test_kubectl_manifests_flatten(self, mocker):
        """Should flatten manifests to paths and drop parameters with a warning."""
        mock_logger = mocker.patch("skaffold.schema.versions.v1alpha1.logger")
        config = v1alpha1.SkaffoldConfig.model_validate(
            {
                "deploy": {
                    "name": "example",
                    "kubectl": {
                        "manifests": [
                            {"paths": ["k8s/dep.yaml"], "parameters": {"env": "dev"}},
                            {"paths": ["k8s/svc.yaml"]},
                        ]
                    },
                }
            }
        )

        upgraded = config.upgrade()

        assert upgraded.deploy.kubectl.manifests == ["k8s/dep.yaml", "k8s/svc.yaml"]
        mock_logger.warning.assert_called_once()

    def test_input_left_untouched(self):
        """Should not modify the document being upgraded."""
        config = v1alpha1.SkaffoldConfig.model_validate(
            {"build": {"tagPolicy": "gitCommit"}, "deploy": {"name": "example"}}
        )
        config.upgrade()
        assert config.build.tag_policy == "gitCommit"
        assert config.deploy.name == "example"


class TestV1Alpha2:
    """Test the v1alpha2 to v1alpha3 transform."""

    def test_kaniko_bucket_moves_to_build_context(self):
        """Should move gcsBucket under buildContext."""
        config = v1alpha2.SkaffoldConfig.model_validate(
            {"build": {"kaniko": {"gcsBucket": "my-bucket", "pullSecretName": "secret"}}}
        )

        upgraded = config.upgrade()

        assert upgraded.build.kaniko.build_context.gcs_bucket == "my-bucket"
        assert upgraded.build.kaniko.pull_secret_name == "secret"

    def test_kaniko_without_bucket(self):
        """Should leave buildContext unset without a bucket."""
        config = v1alpha2.SkaffoldConfig.model_validate({"build": {"kaniko": {}}})
        assert config.upgrade().build.kaniko.build_context is None

    @pytest.mark.parametrize("skip_push,push", [(True, False), (False, True)])
    def test_skip_push_becomes_push(self, skip_push, push):
        """Should replace skipPush with its inverse."""
        config = v1alpha2.SkaffoldConfig.model_validate(
            {"build": {"local": {"skipPush": skip_push}}}
        )
        assert config.upgrade().build.local.push is push

    def test_profiles_are_upgraded(self):
        """Should apply the transform to every profile."""
        config = v1alpha2.SkaffoldConfig.model_validate(
            {"profiles": [{"name": "gcb", "build": {"local": {"skipPush": True}}}]}
        )
        assert config.upgrade().profiles[0].build.local.push is False


class TestV1Alpha4:
    """Test the v1alpha4 to v1alpha5 transform."""

    def test_kaniko_becomes_cluster(self):
        """Should turn kaniko builds into cluster builds of kaniko artifacts."""
        config = v1alpha4.SkaffoldConfig.model_validate(
            {
                "build": {
                    "artifacts": [
                        {
                            "image": "example",
                            "context": ".",
                            "docker": {"dockerfilePath": "Dockerfile.prod"},
                        }
                    ],
                    "kaniko": {
                        "buildContext": {"gcsBucket": "bucket"},
                        "pullSecretName": "kaniko-secret",
                    },
                }
            }
        )

        upgraded = config.upgrade()

        assert isinstance(upgraded, v1alpha5.SkaffoldConfig)
        assert upgraded.build.cluster.pull_secret_name == "kaniko-secret"
        artifact = upgraded.build.artifacts[0]
        assert artifact.docker is None
        assert artifact.kaniko.dockerfile_path == "Dockerfile.prod"
        assert artifact.kaniko.build_context.gcs_bucket == "bucket"

    def test_local_build_unchanged(self):
        """Should keep docker artifacts of local builds."""
        config = v1alpha4.SkaffoldConfig.model_validate(
            {"build": {"artifacts": [{"image": "example", "docker": {}}], "local": {}}}
        )
        upgraded = config.upgrade()
        assert upgraded.build.artifacts[0].docker is not None
        assert upgraded.build.cluster is None

    def test_bazel_artifact_with_kaniko(self):
        """Should fail for bazel artifacts built by kaniko."""
        config = v1alpha4.SkaffoldConfig.model_validate(
            {
                "build": {
                    "artifacts": [{"image": "example", "bazel": {"target": "//:example.tar"}}],
                    "kaniko": {},
                }
            }
        )
        with pytest.raises(ChainUpgradeError, match="bazel artifact 'example' cannot be built"):
            config.upgrade()


class TestV1Alpha5:
    """Test the v1alpha5 to v1beta1 transform."""

    def test_pull_secret_renamed(self):
        """Should rename pullSecret to pullSecretPath."""
        config = v1alpha5.SkaffoldConfig.model_validate(
            {"build": {"cluster": {"pullSecret": "/secret.json"}}}
        )
        assert config.upgrade().build.cluster.pull_secret_path == "/secret.json"


class TestV1Beta2:
    """Test the v1beta2 to v1beta3 transform."""

    def test_kustomize_path_becomes_paths(self):
        """Should wrap the kustomize path in a list."""
        config = v1beta2.SkaffoldConfig.model_validate(
            {"deploy": {"kustomize": {"path": "overlays/dev"}}}
        )
        assert config.upgrade().deploy.kustomize.paths == ["overlays/dev"]

    def test_kustomize_without_path(self):
        """Should produce no paths when none was set."""
        config = v1beta2.SkaffoldConfig.model_validate({"deploy": {"kustomize": {}}})
        assert config.upgrade().deploy.kustomize.paths == []


class TestV1Beta4:
    """Test the v1beta4 to v1beta5 transform."""

    def test_values_file_becomes_values_files(self):
        """Should wrap the helm values file in a list."""
        config = v1beta4.SkaffoldConfig.model_validate(
            {
                "deploy": {
                    "helm": {
                        "releases": [
                            {
                                "name": "app",
                                "chartPath": "charts/app",
                                "valuesFilePath": "values.yaml",
                            },
                            {"name": "db", "chartPath": "charts/db"},
                        ]
                    }
                }
            }
        )

        releases = config.upgrade().deploy.helm.releases

        assert releases[0].values_files == ["values.yaml"]
        assert releases[1].values_files == []


class TestV2Alpha1:
    """Test the v2alpha1 to v2beta1 transform."""

    def test_leading_image_name_dropped(self):
        """Should drop a leading {{.IMAGE_NAME}}: from env templates."""
        config = v2alpha1.SkaffoldConfig.model_validate(
            {
                "build": {
                    "tagPolicy": {"envTemplate": {"template": "{{.IMAGE_NAME}}:{{.DIGEST}}"}}
                },
                "profiles": [
                    {
                        "name": "dev",
                        "build": {
                            "tagPolicy": {"envTemplate": {"template": "{{.IMAGE_NAME}}:dev"}}
                        },
                    }
                ],
            }
        )

        upgraded = config.upgrade()

        assert upgraded.build.tag_policy.env_template.template == "{{.DIGEST}}"
        assert upgraded.profiles[0].build.tag_policy.env_template.template == "dev"

    def test_other_image_name_use(self):
        """Should fail when the image name is used elsewhere in the template."""
        config = v2alpha1.SkaffoldConfig.model_validate(
            {"build": {"tagPolicy": {"envTemplate": {"template": "{{.IMAGE_NAME}}-latest"}}}}
        )
        with pytest.raises(ChainUpgradeError, match="no longer supported"):
            config.upgrade()


class TestV3:
    """Test the v3 to v4beta1 transform."""

    def test_helm_releases_move_to_manifests(self):
        """Should move helm releases from deploy to manifests."""
        config = v3.SkaffoldConfig.model_validate(
            {
                "deploy": {
                    "helm": {
                        "releases": [{"name": "app", "chartPath": "charts/app"}],
                        "flags": ["--atomic"],
                    }
                }
            }
        )

        upgraded = config.upgrade()

        assert [r.name for r in upgraded.manifests.helm.releases] == ["app"]
        assert upgraded.deploy.helm.flags == ["--atomic"]

    def test_without_helm(self):
        """Should leave manifests without helm when nothing was deployed with it."""
        config = v3.SkaffoldConfig.model_validate({"manifests": {"rawYaml": ["k8s/*.yaml"]}})
        upgraded = config.upgrade()
        assert upgraded.manifests.helm is None
        assert upgraded.manifests.raw_yaml == ["k8s/*.yaml"]

    def test_kaniko_volumes(self):
        """Should carry kaniko volumes and mounts forward."""
        config = v3.SkaffoldConfig.model_validate(
            {
                "build": {
                    "artifacts": [
                        {
                            "image": "image1",
                            "context": "./examples/app1",
                            "kaniko": {
                                "volumeMounts": [
                                    {"name": "docker-config", "mountPath": "/kaniko/.docker"}
                                ]
                            },
                        }
                    ],
                    "cluster": {
                        "pullSecretName": "some-secret",
                        "volumes": [
                            {"name": "docker-config", "configMap": {"name": "docker-config"}}
                        ],
                    },
                }
            }
        )

        upgraded = config.upgrade()

        mount = upgraded.build.artifacts[0].kaniko.volume_mounts[0]
        assert mount.mount_path == "/kaniko/.docker"
        assert upgraded.build.cluster.volumes[0].config_map.name == "docker-config"
