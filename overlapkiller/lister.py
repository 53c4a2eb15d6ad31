import logging

from overlapkiller.api import meta
from overlapkiller.api.types import Pod, Service

logger = logging.getLogger(__name__)

SERVICES_PATH = "/api/v1/services"
PODS_PATH = "/api/v1/pods"


def new_lister(client):
    return Lister(client)


class Lister:
    """Lists the cluster-wide Services and Pods as plain values."""

    def __init__(self, client):
        self._client = client

    async def list_services(self):
        services = await self._client.execute(
            "GET", SERVICES_PATH, response_type=_services_from_list
        )
        logger.debug("Listed %d services", len(services))
        return services

    async def list_pods(self):
        pods = await self._client.execute(
            "GET", PODS_PATH, response_type=_pods_from_list
        )
        logger.debug("Listed %d pods", len(pods))
        return pods


def _services_from_list(obj):
    services = []
    for item in meta.extract_list(obj):
        accessor = meta.accessor(item)
        services.append(
            Service(
                ip=accessor.cluster_ip,
                name=accessor.name,
                namespace=accessor.namespace,
            )
        )
    return services


def _pods_from_list(obj):
    pods = []
    for item in meta.extract_list(obj):
        accessor = meta.accessor(item)
        pods.append(
            Pod(ip=accessor.pod_ip, name=accessor.name, namespace=accessor.namespace)
        )
    return pods
