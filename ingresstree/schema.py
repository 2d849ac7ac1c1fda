"""Configuration tree models for a networking.k8s.io/v1 Ingress.

The models are frozen and defined once at import, so a single schema is
shared by every read. Optional sub-records are plain ``Optional`` fields
here; ``to_tree()`` renders them as lists of zero or one record, which is
the shape downstream tooling consumes.
"""

from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PathType(str, Enum):
    """How an HTTP path is matched against a request path."""

    IMPLEMENTATION_SPECIFIC = "ImplementationSpecific"
    PREFIX = "Prefix"
    EXACT = "Exact"


def _is_record(annotation: Any) -> bool:
    """Return True if the annotation is a model or an Optional model."""
    if get_origin(annotation) is Union:
        return any(_is_record(arg) for arg in get_args(annotation) if arg is not type(None))
    return isinstance(annotation, type) and issubclass(annotation, TreeModel)


def _find_ref(prop: Dict[str, Any]) -> Optional[str]:
    if "$ref" in prop:
        return prop["$ref"]
    for key in ("anyOf", "allOf", "oneOf"):
        for sub in prop.get(key, []):
            ref = _find_ref(sub)
            if ref:
                return ref
    return None


def _singleton_list(items: Dict[str, Any], prop: Dict[str, Any], required: bool) -> Dict[str, Any]:
    """Schema of a list holding at most one record."""
    out: Dict[str, Any] = {"type": "array", "items": items, "maxItems": 1}
    if required:
        out["minItems"] = 1
    else:
        out["default"] = []
    for key in ("title", "description"):
        if key in prop:
            out[key] = prop[key]
    return out


def _render(value: Any) -> Any:
    if isinstance(value, TreeModel):
        return value.to_tree()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_render(item) for item in value]
    return value


class TreeModel(BaseModel):
    """Base for all tree records."""

    model_config = ConfigDict(frozen=True)

    def to_tree(self) -> Dict[str, Any]:
        """Render the record with every optional sub-record as a 0-or-1 list."""
        out: Dict[str, Any] = {}
        for name, info in type(self).model_fields.items():
            value = getattr(self, name)
            if _is_record(info.annotation) and not isinstance(value, list):
                out[name] = [] if value is None else [value.to_tree()]
            else:
                out[name] = _render(value)
        return out

    @classmethod
    def tree_schema(cls, schema: Dict[str, Any]) -> None:
        """Rewrite this model's JSON schema in place to match ``to_tree()``."""
        properties = schema.get("properties", {})
        for name, info in cls.model_fields.items():
            if name in properties and _is_record(info.annotation):
                prop = properties[name]
                properties[name] = _singleton_list({"$ref": _find_ref(prop)}, prop, info.is_required())


class ServiceBackendPort(TreeModel):
    """Port of a referenced service, by name or by number."""

    name: Optional[str] = Field(None, description="Name of the port on the service")
    number: Optional[int] = Field(None, description="Numerical port number on the service")


class IngressServiceBackend(TreeModel):
    """A service referenced as a backend."""

    name: Optional[str] = Field(None, description="Referenced service name")
    port: Optional[ServiceBackendPort] = Field(None, description="Port of the referenced service")


class ResourceReference(TreeModel):
    """A typed reference to an object in the ingress namespace."""

    api_group: Optional[str] = Field(None, description="API group of the referenced resource")
    kind: Optional[str] = Field(None, description="Kind of the referenced resource")
    name: Optional[str] = Field(None, description="Name of the referenced resource")


class IngressBackend(TreeModel):
    """Endpoint that receives traffic: either a service or a resource."""

    service: Optional[IngressServiceBackend] = Field(None, description="Service backend")
    resource: Optional[ResourceReference] = Field(None, description="Resource backend")


class HTTPIngressPath(TreeModel):
    """A path matched by an HTTP rule and the backend it routes to."""

    path: Optional[str] = Field(None, description="Path matched against the request path")
    path_type: PathType = Field(PathType.IMPLEMENTATION_SPECIFIC, description="How the path is matched")
    backend: Optional[IngressBackend] = Field(None, description="Backend receiving matched traffic")

    @field_validator("path_type", mode="before")
    @classmethod
    def _default_path_type(cls, value: Any) -> Any:
        if value is None or value == "":
            return PathType.IMPLEMENTATION_SPECIFIC
        return value


class HTTPIngressRuleValue(TreeModel):
    """HTTP section of a rule."""

    path: List[HTTPIngressPath] = Field(default_factory=list, description="Ordered HTTP paths")


class IngressRule(TreeModel):
    """A host rule."""

    host: Optional[str] = Field(None, description="Fully qualified domain name of the rule")
    http: Optional[HTTPIngressRuleValue] = Field(None, description="HTTP paths for the host")


class IngressTLS(TreeModel):
    """TLS termination entry."""

    hosts: List[str] = Field(default_factory=list, description="Hosts covered by the certificate")
    secret_name: Optional[str] = Field(None, description="Secret holding the certificate")


class IngressSpec(TreeModel):
    """Routing configuration of the ingress."""

    ingress_class_name: Optional[str] = Field(None, description="Name of the IngressClass")
    default_backend: Optional[IngressBackend] = Field(None, description="Backend for unmatched requests")
    rule: List[IngressRule] = Field(default_factory=list, description="Ordered host rules")
    tls: List[IngressTLS] = Field(default_factory=list, description="Ordered TLS entries")


class LoadBalancerIngress(TreeModel):
    """An observed load-balancer endpoint."""

    ip: Optional[str] = Field(None, description="IP address of the endpoint")
    hostname: Optional[str] = Field(None, description="Hostname of the endpoint")


class IngressStatus(TreeModel):
    """Observed state of the ingress."""

    load_balancer: List[LoadBalancerIngress] = Field(default_factory=list, description="Load-balancer endpoints")

    def to_tree(self) -> Dict[str, Any]:
        if not self.load_balancer:
            return {"load_balancer": []}
        return {"load_balancer": [{"ingress": _render(self.load_balancer)}]}

    @classmethod
    def tree_schema(cls, schema: Dict[str, Any]) -> None:
        prop = schema["properties"]["load_balancer"]
        endpoints = {
            "type": "object",
            "properties": {"ingress": {"type": "array", "items": prop["items"]}},
            "required": ["ingress"],
        }
        schema["properties"]["load_balancer"] = _singleton_list(endpoints, prop, required=False)


class IngressIdentity(TreeModel):
    """The (namespace, name) pair locating an ingress."""

    namespace: str = Field(..., min_length=1, description="Namespace of the ingress")
    name: str = Field(..., min_length=1, description="Name of the ingress")


class IngressMetadata(IngressIdentity):
    """Identity plus descriptive metadata of a fetched ingress."""

    labels: Dict[str, str] = Field(default_factory=dict, description="Ingress labels")
    annotations: Dict[str, str] = Field(default_factory=dict, description="Ingress annotations")
    generation: Optional[int] = Field(None, description="Generation of the desired state")
    resource_version: Optional[str] = Field(None, description="Opaque version of the object")
    uid: Optional[str] = Field(None, description="Unique ID of the object")


class ConfigurationTree(TreeModel):
    """Result of one read.

    ``spec`` and ``status`` are None when the ingress was not found.
    """

    id: str = Field(..., description="Identifier derived from namespace and name")
    metadata: IngressMetadata = Field(..., description="Identity and metadata of the ingress")
    spec: Optional[IngressSpec] = Field(None, description="Routing configuration")
    status: Optional[IngressStatus] = Field(None, description="Observed status")

    @property
    def found(self) -> bool:
        return self.spec is not None


def _tree_models(base: type) -> Dict[str, type]:
    models = {}
    for sub in base.__subclasses__():
        models[sub.__name__] = sub
        models.update(_tree_models(sub))
    return models


@lru_cache(maxsize=None)
def get_tree_schema() -> Dict[str, Any]:
    """JSON schema of the ``to_tree()`` output, built once per process."""
    schema = ConfigurationTree.model_json_schema()
    models = _tree_models(TreeModel)
    for name, definition in schema.get("$defs", {}).items():
        if name in models:
            models[name].tree_schema(definition)
    ConfigurationTree.tree_schema(schema)
    return schema
