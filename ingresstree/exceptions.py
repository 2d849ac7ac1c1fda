"""Exceptions raised while reading an ingress into a configuration tree."""

from typing import Optional


class IngressTreeError(Exception):
    """Base exception for ingresstree errors."""

    pass


class ConfigError(IngressTreeError):
    """Raised when the reader configuration cannot be loaded or resolved."""

    pass


class IdentityMissingError(IngressTreeError):
    """Raised when a required identity field (namespace or name) is absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Identity field '{field}' is required")


class IngressClientError(IngressTreeError):
    """Raised for any Kubernetes API failure other than not-found.

    The underlying ``ApiException`` is kept as ``__cause__``.
    """

    def __init__(self, message: str, status: Optional[int] = None, reason: Optional[str] = None):
        self.status = status
        self.reason = reason
        super().__init__(message)


class IngressNotFoundError(IngressClientError):
    """Raised by the client when the requested ingress does not exist."""

    def __init__(self, namespace: str, name: str):
        self.namespace = namespace
        self.name = name
        super().__init__(f"Ingress {namespace}/{name} not found", status=404, reason="Not Found")


class MappingError(IngressTreeError):
    """Raised when a fetched object cannot be written into the tree."""

    def __init__(self, section: str, message: str):
        self.section = section
        super().__init__(f"Failed to map ingress {section}: {message}")
