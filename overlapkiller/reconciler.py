import asyncio
import logging
from urllib.parse import quote

from overlapkiller import errors, lister, overlap
from overlapkiller.util import wait

logger = logging.getLogger(__name__)


def pod_path(namespace, name):
    return f"/api/v1/namespaces/{quote(namespace, safe='')}/pods/{quote(name, safe='')}"


class OverlapReconciler:
    def __init__(
        self,
        client,
        *,
        delete_overlapped_pods=False,
        interval_seconds=10,
        resource_lister=None,
    ):
        self._client = client
        self._lister = resource_lister or lister.new_lister(client)
        self.delete_overlapped_pods = delete_overlapped_pods
        self.interval_seconds = interval_seconds

    async def run(self, stop_event):
        logger.info(
            "Starting overlap reconciler (interval %ss, delete pods: %s)",
            self.interval_seconds,
            self.delete_overlapped_pods,
        )
        await wait.until(
            self._reconcile_logged, self.interval_seconds, stop_event, immediate=False
        )
        logger.info("Overlap reconciler stopped")

    async def reconcile(self):
        """Run one pass and return the overlaps found."""
        try:
            services = await self._lister.list_services()
        except errors.RequestError as e:
            logger.error("Failed to list services: %s", e)
            return []
        index = overlap.ServiceIPIndex(services)

        try:
            pods = await self._lister.list_pods()
        except errors.RequestError as e:
            logger.error("Failed to list pods: %s", e)
            return []

        overlaps = overlap.find_overlaps(index, pods)
        for o in overlaps:
            logger.warning("%s", o)
            if self.delete_overlapped_pods:
                await self._delete_pod(o.pod)
        logger.debug(
            "Checked %d pods against %d service IPs, %d overlapping",
            len(pods),
            len(index),
            len(overlaps),
        )
        return overlaps

    async def _reconcile_logged(self):
        try:
            await self.reconcile()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Reconcile failed")

    async def _delete_pod(self, pod):
        try:
            await self._client.execute("DELETE", pod_path(pod.namespace, pod.name))
        except errors.RequestError as e:
            logger.error("error deleting %s/pod/%s: %s", pod.namespace, pod.name, e)
        else:
            logger.info("Deleted %s/pod/%s", pod.namespace, pod.name)
