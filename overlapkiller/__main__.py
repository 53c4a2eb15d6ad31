"""

Detect pods whose IP collides with a service's virtual IP, and optionally delete them.

Usage:
DELETE_PODS=1 INTERVAL_SECONDS=10 python -m overlapkiller

Output:
... WARNING overlapkiller.reconciler: default/service/web and default/pod/web-7f9 overlap (10.0.0.1)
... INFO overlapkiller.reconciler: Deleted default/pod/web-7f9
"""

import asyncio
import logging
import signal
import sys

from overlapkiller import config, errors
from overlapkiller.client import client
from overlapkiller.reconciler import OverlapReconciler

logger = logging.getLogger("overlapkiller")


async def _run(cfg):
    kube_client = client.new(
        cfg.endpoint, ca_file=cfg.ca_file, token_file=cfg.token_file
    )
    async with kube_client:
        reconciler = OverlapReconciler(
            kube_client,
            delete_overlapped_pods=cfg.delete_overlapped_pods,
            interval_seconds=cfg.interval_seconds,
        )

        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for signal_ in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(signal_, stop.set)

        await reconciler.run(stop)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = config.from_env()
    try:
        logging.getLogger().setLevel(cfg.log_level.upper())
    except ValueError:
        logger.warning("bad LOG_LEVEL %s", cfg.log_level)
    try:
        asyncio.run(_run(cfg))
    except errors.StartupFailure as e:
        logger.critical("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
