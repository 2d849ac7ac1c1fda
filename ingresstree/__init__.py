"""ingresstree: read Kubernetes ingresses into typed configuration trees."""

__version__ = "0.1.0"

# Lazy imports to avoid loading the kubernetes client for CLI usage
__all__ = [
    "IngressReader",
    "IngressClient",
    "ConfigurationTree",
    "ClusterConfig",
    "ReaderConfig",
]


def __getattr__(name):
    if name == "IngressReader":
        from .reader import IngressReader
        return IngressReader
    elif name == "IngressClient":
        from .client import IngressClient
        return IngressClient
    elif name == "ConfigurationTree":
        from .schema import ConfigurationTree
        return ConfigurationTree
    elif name == "ClusterConfig":
        from .models import ClusterConfig
        return ClusterConfig
    elif name == "ReaderConfig":
        from .models import ReaderConfig
        return ReaderConfig
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
