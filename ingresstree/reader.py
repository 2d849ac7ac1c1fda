"""Read an ingress from a cluster into a ConfigurationTree."""

from typing import Any, Callable, Mapping, TypeVar, Union

from pydantic import ValidationError

from .client import IngressClient
from .exceptions import IdentityMissingError, IngressNotFoundError, MappingError
from .flatten import flatten_metadata, flatten_spec, flatten_status
from .logging_config import get_logger, log_function_entry, log_function_exit, log_read_event
from .schema import ConfigurationTree, IngressIdentity, IngressMetadata, IngressStatus

logger = get_logger(__name__)

T = TypeVar("T")


def expand_identity(identity: Union[IngressIdentity, Mapping[str, Any]]) -> IngressIdentity:
    """Extract namespace and name from user input.

    Raises:
        IdentityMissingError: If either field is missing, empty or blank.
    """
    fields = identity.model_dump() if isinstance(identity, IngressIdentity) else identity

    for field in ("namespace", "name"):
        value = fields.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise IdentityMissingError(field)

    if isinstance(identity, IngressIdentity):
        return identity
    return IngressIdentity(namespace=str(identity["namespace"]), name=str(identity["name"]))


def build_id(namespace: str, name: str) -> str:
    """Deterministic identifier of an ingress tree."""
    return f"{namespace}/{name}"


def _populate(section: str, mapper: Callable[..., T], *args: Any) -> T:
    try:
        return mapper(*args)
    except (ValidationError, ValueError, TypeError, AttributeError) as e:
        raise MappingError(section, str(e)) from e


def _status_record(load_balancer: Any) -> IngressStatus:
    return IngressStatus(load_balancer=flatten_status(load_balancer))


class IngressReader:
    """Reads ingresses through an ``IngressClient``.

    The reader holds no per-read state; one instance can serve concurrent
    reads.
    """

    def __init__(self, client: IngressClient):
        self.client = client

    async def read(self, identity: Union[IngressIdentity, Mapping[str, Any]]) -> ConfigurationTree:
        """Read one ingress.

        A missing ingress is not an error: the returned tree carries the id
        and the requested identity, with ``spec`` and ``status`` left unset.

        Raises:
            IdentityMissingError: Before any API call, if namespace or name is absent.
            IngressClientError: For API failures other than not-found.
            MappingError: If the fetched object cannot be mapped into the tree.
        """
        ident = expand_identity(identity)
        tree_id = build_id(ident.namespace, ident.name)
        log_function_entry(logger, "read", id=tree_id)

        logger.info("Reading ingress", namespace=ident.namespace, name=ident.name)
        try:
            ingress = await self.client.get_ingress(ident.namespace, ident.name)
        except IngressNotFoundError:
            log_read_event(logger, "not_found", id=tree_id)
            log_function_exit(logger, "read", id=tree_id, status="not_found")
            return ConfigurationTree(
                id=tree_id,
                metadata=IngressMetadata(namespace=ident.namespace, name=ident.name),
            )
        logger.debug("Received ingress", id=tree_id, ingress=str(ingress))

        metadata = _populate("metadata", flatten_metadata, ingress.metadata)
        spec = _populate("spec", flatten_spec, ingress.spec)
        load_balancer = ingress.status.load_balancer if ingress.status is not None else None
        status = _populate("status", _status_record, load_balancer)

        tree = ConfigurationTree(id=tree_id, metadata=metadata, spec=spec, status=status)

        log_read_event(logger, "found", id=tree_id, rules=len(spec.rule), tls=len(spec.tls))
        log_function_exit(logger, "read", id=tree_id, status="found")
        return tree
