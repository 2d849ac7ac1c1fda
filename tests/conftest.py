"""Shared fixtures building kubernetes client objects."""

from types import SimpleNamespace

import pytest
from kubernetes import client


@pytest.fixture
def ingress_without_path_type(service_backend):
    """An ingress whose single path has no pathType attribute at all.

    Built from plain attribute objects, since generated client models refuse
    to be created without the required pathType.
    """
    def _build(host="example.com", path="/", name="svc", number=80):
        http_path = SimpleNamespace(path=path, backend=service_backend(name, number))
        rule = SimpleNamespace(host=host, http=SimpleNamespace(paths=[http_path]))
        return SimpleNamespace(
            metadata=client.V1ObjectMeta(namespace="default", name="web"),
            spec=SimpleNamespace(ingress_class_name=None, default_backend=None, rules=[rule], tls=None),
            status=None,
        )
    return _build


@pytest.fixture
def service_backend():
    def _build(name="svc", number=80, port_name=None):
        return client.V1IngressBackend(
            service=client.V1IngressServiceBackend(
                name=name,
                port=client.V1ServiceBackendPort(name=port_name, number=number),
            )
        )
    return _build


@pytest.fixture
def make_ingress():
    def _build(namespace="default", name="web", spec=None, load_balancer=None, labels=None):
        return client.V1Ingress(
            api_version="networking.k8s.io/v1",
            kind="Ingress",
            metadata=client.V1ObjectMeta(
                namespace=namespace,
                name=name,
                labels=labels or {},
                annotations={},
                generation=1,
                resource_version="12345",
                uid="0b9c6a1e-3d4f-4f6e-9a55-6c2b1f1e7a10",
            ),
            spec=spec if spec is not None else client.V1IngressSpec(rules=[], tls=[]),
            status=client.V1IngressStatus(
                load_balancer=load_balancer
                if load_balancer is not None
                else client.V1IngressLoadBalancerStatus(ingress=[])
            ),
        )
    return _build
