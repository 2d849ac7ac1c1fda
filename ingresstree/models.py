"""Configuration models for ingresstree."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .exceptions import ConfigError


class ClusterConfig(BaseModel):
    """Configuration for a Kubernetes cluster."""

    name: str = Field(..., description="Cluster name identifier")
    kubeconfig_path: Optional[str] = Field(None, description="Path to kubeconfig file")
    context: Optional[str] = Field(None, description="Kubernetes context name")
    environment: str = Field("default", description="Environment (prod, staging, test, etc.)")
    region: Optional[str] = Field(None, description="Cloud region")
    enabled: bool = Field(True, description="Whether this cluster may be read from")
    request_timeout: Optional[float] = Field(None, gt=0, description="Per-request API timeout in seconds")


class ReaderConfig(BaseModel):
    """Configuration for the ingress reader."""

    clusters: List[ClusterConfig] = Field(default_factory=list, description="Cluster configurations")
    default_cluster: Optional[str] = Field(None, description="Cluster used when none is requested")

    def get_cluster(self, name: Optional[str] = None) -> ClusterConfig:
        """Resolve the cluster to read from.

        Args:
            name: Requested cluster name. Falls back to ``default_cluster``,
                then to the first enabled cluster.

        Raises:
            ConfigError: If no matching enabled cluster exists.
        """
        wanted = name or self.default_cluster
        if wanted:
            for cluster in self.clusters:
                if cluster.name == wanted:
                    if not cluster.enabled:
                        raise ConfigError(f"Cluster '{wanted}' is disabled")
                    return cluster
            raise ConfigError(f"Cluster '{wanted}' is not configured")

        for cluster in self.clusters:
            if cluster.enabled:
                return cluster
        raise ConfigError("No enabled cluster configured")
