"""Tests for FastAPI REST API endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from ingresstree import api
from ingresstree.api import app, initialize_reader
from ingresstree.exceptions import IdentityMissingError, IngressClientError, MappingError
from ingresstree.models import ClusterConfig, ReaderConfig
from ingresstree.schema import ConfigurationTree, IngressMetadata, IngressSpec, IngressStatus


class TestAPI:
    """Tests for FastAPI endpoints."""

    @pytest.fixture
    def client(self):
        """Create a test client."""
        return TestClient(app)

    @pytest.fixture
    def reader_config(self):
        return ReaderConfig(
            clusters=[
                ClusterConfig(name="staging", environment="staging", kubeconfig_path="/dev/null"),
                ClusterConfig(name="prod", environment="prod", kubeconfig_path="/dev/null"),
                ClusterConfig(name="old", environment="prod", enabled=False),
            ],
        )

    @pytest.fixture(autouse=True)
    def initialized(self, reader_config):
        initialize_reader(reader_config)
        yield
        api.readers.clear()
        api.reader_config = None

    @pytest.fixture
    def found_tree(self):
        return ConfigurationTree(
            id="default/web",
            metadata=IngressMetadata(namespace="default", name="web"),
            spec=IngressSpec(ingress_class_name="nginx"),
            status=IngressStatus(),
        )

    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "ingresstree"}

    def test_schema(self, client):
        response = client.get("/schema")
        assert response.status_code == 200
        assert response.json()["title"] == "ConfigurationTree"

    def test_initialize_reader(self):
        assert set(api.readers) == {"staging", "prod"}
        assert api.reader_config is not None

    def test_read_ingress(self, client, found_tree):
        with patch.object(api.readers["staging"], "read", new=AsyncMock(return_value=found_tree)) as mock_read:
            response = client.get("/ingresses/default/web")

        assert response.status_code == 200
        mock_read.assert_awaited_once_with({"namespace": "default", "name": "web"})
        body = response.json()
        assert body["id"] == "default/web"
        assert body["spec"][0]["ingress_class_name"] == "nginx"
        assert body["spec"][0]["default_backend"] == []
        assert body["status"] == [{"load_balancer": []}]

    def test_read_ingress_named_cluster(self, client, found_tree):
        with patch.object(api.readers["prod"], "read", new=AsyncMock(return_value=found_tree)) as mock_read:
            response = client.get("/ingresses/default/web", params={"cluster": "prod"})

        assert response.status_code == 200
        mock_read.assert_awaited_once()

    def test_read_ingress_not_found_is_empty_tree(self, client):
        empty = ConfigurationTree(id="default/web", metadata=IngressMetadata(namespace="default", name="web"))
        with patch.object(api.readers["staging"], "read", new=AsyncMock(return_value=empty)):
            response = client.get("/ingresses/default/web")

        assert response.status_code == 200
        assert response.json()["spec"] == []
        assert response.json()["status"] == []

    def test_read_ingress_client_error(self, client):
        error = IngressClientError("Failed to read ingress default/web: 403 Forbidden", status=403)
        with patch.object(api.readers["staging"], "read", new=AsyncMock(side_effect=error)):
            response = client.get("/ingresses/default/web")

        assert response.status_code == 502
        assert "403 Forbidden" in response.json()["detail"]

    def test_read_ingress_mapping_error(self, client):
        error = MappingError("spec", "unknown path type")
        with patch.object(api.readers["staging"], "read", new=AsyncMock(side_effect=error)):
            response = client.get("/ingresses/default/web")

        assert response.status_code == 500

    def test_read_ingress_identity_error(self, client):
        with patch.object(api.readers["staging"], "read", new=AsyncMock(side_effect=IdentityMissingError("name"))):
            response = client.get("/ingresses/default/web")

        assert response.status_code == 422

    def test_read_ingress_disabled_cluster(self, client):
        response = client.get("/ingresses/default/web", params={"cluster": "old"})
        assert response.status_code == 404

    def test_read_ingress_not_initialized(self, client):
        api.reader_config = None
        response = client.get("/ingresses/default/web")
        assert response.status_code == 503
