"""Tests for ingresstree configuration models."""

import pytest
from pydantic import ValidationError

from ingresstree.exceptions import ConfigError
from ingresstree.models import ClusterConfig, ReaderConfig


class TestClusterConfig:
    """Tests for ClusterConfig model."""

    def test_valid_cluster_config(self):
        """Test creating a valid cluster configuration."""
        config = ClusterConfig(
            name="test-cluster",
            environment="test",
            kubeconfig_path="/path/to/config",
            context="test-context",
            region="us-west-1",
            request_timeout=10,
        )

        assert config.name == "test-cluster"
        assert config.environment == "test"
        assert config.enabled is True
        assert config.request_timeout == 10

    def test_minimal_cluster_config(self):
        """Test creating cluster config with minimal required fields."""
        config = ClusterConfig(name="minimal-cluster")

        assert config.environment == "default"
        assert config.kubeconfig_path is None
        assert config.request_timeout is None
        assert config.enabled is True

    def test_invalid_cluster_config(self):
        """Test validation errors for invalid cluster config."""
        with pytest.raises(ValidationError):
            ClusterConfig()

    def test_request_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClusterConfig(name="test", request_timeout=0)


class TestReaderConfig:
    """Tests for ReaderConfig model and cluster resolution."""

    @pytest.fixture
    def reader_config(self):
        return ReaderConfig(
            clusters=[
                ClusterConfig(name="prod", environment="prod", enabled=False),
                ClusterConfig(name="staging", environment="staging"),
                ClusterConfig(name="test", environment="test"),
            ],
        )

    def test_default_reader_config(self):
        config = ReaderConfig()
        assert config.clusters == []
        assert config.default_cluster is None

    def test_get_cluster_by_name(self, reader_config):
        assert reader_config.get_cluster("test").name == "test"

    def test_get_cluster_first_enabled(self, reader_config):
        assert reader_config.get_cluster().name == "staging"

    def test_get_cluster_default(self, reader_config):
        config = reader_config.model_copy(update={"default_cluster": "test"})
        assert config.get_cluster().name == "test"
        assert config.get_cluster("staging").name == "staging"

    def test_get_cluster_disabled(self, reader_config):
        with pytest.raises(ConfigError, match="disabled"):
            reader_config.get_cluster("prod")

    def test_get_cluster_unknown(self, reader_config):
        with pytest.raises(ConfigError, match="not configured"):
            reader_config.get_cluster("nope")

    def test_get_cluster_none_enabled(self):
        config = ReaderConfig(clusters=[ClusterConfig(name="prod", enabled=False)])
        with pytest.raises(ConfigError):
            config.get_cluster()
