"""Pure functions mapping kubernetes client objects into tree records.

Each function takes a ``kubernetes.client`` model (``V1IngressSpec``,
``V1ObjectMeta``, ...) and returns the matching record from
``ingresstree.schema``. None inputs map to empty records. Values the schema
rejects raise ``pydantic.ValidationError``; callers decide how to report it.
"""

from typing import Any, List, Optional

from .schema import (
    HTTPIngressPath,
    HTTPIngressRuleValue,
    IngressBackend,
    IngressMetadata,
    IngressRule,
    IngressServiceBackend,
    IngressSpec,
    IngressTLS,
    LoadBalancerIngress,
    ResourceReference,
    ServiceBackendPort,
)


def flatten_metadata(meta: Any) -> IngressMetadata:
    return IngressMetadata(
        namespace=meta.namespace,
        name=meta.name,
        labels=meta.labels or {},
        annotations=meta.annotations or {},
        generation=meta.generation,
        resource_version=meta.resource_version,
        uid=meta.uid,
    )


def flatten_backend(backend: Any) -> Optional[IngressBackend]:
    if backend is None:
        return None

    service = None
    if backend.service is not None:
        port = None
        if backend.service.port is not None:
            port = ServiceBackendPort(
                name=backend.service.port.name,
                number=backend.service.port.number,
            )
        service = IngressServiceBackend(name=backend.service.name, port=port)

    resource = None
    if backend.resource is not None:
        resource = ResourceReference(
            api_group=backend.resource.api_group,
            kind=backend.resource.kind,
            name=backend.resource.name,
        )

    return IngressBackend(service=service, resource=resource)


def flatten_paths(paths: Optional[List[Any]]) -> List[HTTPIngressPath]:
    return [
        HTTPIngressPath(
            path=p.path,
            path_type=getattr(p, "path_type", None),
            backend=flatten_backend(p.backend),
        )
        for p in paths or []
    ]


def flatten_rules(rules: Optional[List[Any]]) -> List[IngressRule]:
    """Map rules in order.

    A rule without an HTTP section, or with no paths in it, gets no ``http``
    record at all.
    """
    out = []
    for rule in rules or []:
        http = None
        if rule.http is not None and rule.http.paths:
            http = HTTPIngressRuleValue(path=flatten_paths(rule.http.paths))
        out.append(IngressRule(host=rule.host, http=http))
    return out


def flatten_tls(tls: Optional[List[Any]]) -> List[IngressTLS]:
    return [IngressTLS(hosts=list(t.hosts or []), secret_name=t.secret_name) for t in tls or []]


def flatten_spec(spec: Any) -> IngressSpec:
    if spec is None:
        return IngressSpec()
    return IngressSpec(
        ingress_class_name=spec.ingress_class_name,
        default_backend=flatten_backend(spec.default_backend),
        rule=flatten_rules(spec.rules),
        tls=flatten_tls(spec.tls),
    )


def flatten_status(load_balancer: Any) -> List[LoadBalancerIngress]:
    """Map ``status.loadBalancer`` into its endpoint records."""
    if load_balancer is None:
        return []
    return [
        LoadBalancerIngress(ip=ing.ip, hostname=ing.hostname)
        for ing in load_balancer.ingress or []
    ]
