"""Kubernetes API client used to fetch ingresses."""

import asyncio
from typing import Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from .exceptions import IngressClientError, IngressNotFoundError
from .logging_config import get_logger, log_function_entry, log_function_exit, log_k8s_operation
from .models import ClusterConfig

logger = get_logger(__name__)


class IngressClient:
    """Client for reading Ingress resources from one Kubernetes cluster."""

    def __init__(self, cluster_config: ClusterConfig):
        self.cluster_config = cluster_config
        self._k8s_client: Optional[client.ApiClient] = None
        self._networking_v1: Optional[client.NetworkingV1Api] = None
        logger.debug("IngressClient initialized", cluster_name=cluster_config.name, environment=cluster_config.environment)

    def connect(self) -> None:
        """Load cluster credentials and build the API clients."""
        log_function_entry(logger, "connect", cluster_name=self.cluster_config.name)
        log_k8s_operation(logger, "connect", self.cluster_config.name,
                         kubeconfig_path=self.cluster_config.kubeconfig_path,
                         context=self.cluster_config.context)

        try:
            if self.cluster_config.kubeconfig_path:
                logger.debug("Loading kubeconfig from file",
                           kubeconfig_path=self.cluster_config.kubeconfig_path,
                           context=self.cluster_config.context,
                           cluster=self.cluster_config.name)
                # Per-cluster ApiClient, the global default configuration is left alone
                self._k8s_client = config.new_client_from_config(
                    config_file=self.cluster_config.kubeconfig_path,
                    context=self.cluster_config.context
                )
            else:
                logger.debug("Loading in-cluster config", cluster=self.cluster_config.name)
                config.load_incluster_config()
                self._k8s_client = client.ApiClient()

            self._networking_v1 = client.NetworkingV1Api(self._k8s_client)

            logger.info("Successfully connected to cluster", cluster=self.cluster_config.name)
            log_function_exit(logger, "connect", cluster_name=self.cluster_config.name, status="success")

        except Exception as e:
            logger.error("Failed to connect to cluster",
                        cluster=self.cluster_config.name,
                        error=str(e),
                        kubeconfig_path=self.cluster_config.kubeconfig_path,
                        context=self.cluster_config.context)
            log_function_exit(logger, "connect", cluster_name=self.cluster_config.name, status="error", error=str(e))
            raise IngressClientError(f"Failed to connect to cluster {self.cluster_config.name}: {e}") from e

    def _read_ingress(self, namespace: str, name: str) -> client.V1Ingress:
        kwargs = {}
        if self.cluster_config.request_timeout:
            kwargs["_request_timeout"] = self.cluster_config.request_timeout
        return self._networking_v1.read_namespaced_ingress(name=name, namespace=namespace, **kwargs)

    async def get_ingress(self, namespace: str, name: str) -> client.V1Ingress:
        """Fetch one ingress.

        The blocking API call runs in a worker thread so the calling task
        can be cancelled while it waits.

        Raises:
            IngressNotFoundError: If the API answers 404.
            IngressClientError: For any other API or transport failure.
        """
        if not self._networking_v1:
            logger.debug("API client not initialized, connecting", cluster=self.cluster_config.name)
            self.connect()

        log_k8s_operation(logger, "read_namespaced_ingress", self.cluster_config.name,
                         namespace=namespace, name=name)
        try:
            return await asyncio.to_thread(self._read_ingress, namespace, name)
        except ApiException as e:
            if e.status == 404:
                raise IngressNotFoundError(namespace, name) from e
            logger.debug("Received error", cluster=self.cluster_config.name, status=e.status, reason=e.reason)
            raise IngressClientError(
                f"Failed to read ingress {namespace}/{name}: {e.status} {e.reason}",
                status=e.status,
                reason=e.reason,
            ) from e
        except Exception as e:
            logger.debug("Received error", cluster=self.cluster_config.name, error=str(e))
            raise IngressClientError(f"Failed to read ingress {namespace}/{name}: {e}") from e

    def disconnect(self) -> None:
        """Close the underlying API client."""
        if self._k8s_client:
            self._k8s_client.close()
            self._k8s_client = None
            self._networking_v1 = None
