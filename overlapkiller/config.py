import logging
import os
from typing import NamedTuple

from kubernetes_asyncio.config import incluster_config

from overlapkiller.client import client

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 10


class Config(NamedTuple):
    delete_overlapped_pods: bool = False
    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    endpoint: str = client.DEFAULT_ENDPOINT
    ca_file: str = client.CERT_FILENAME
    token_file: str = client.TOKEN_FILENAME
    log_level: str = "INFO"


def from_env(environ=None):
    if environ is None:
        environ = os.environ
    return Config(
        delete_overlapped_pods=bool(environ.get("DELETE_PODS")),
        interval_seconds=_interval_seconds(environ.get("INTERVAL_SECONDS")),
        endpoint=_endpoint(environ),
        log_level=environ.get("LOG_LEVEL") or "INFO",
    )


def _interval_seconds(value):
    if not value:
        return DEFAULT_INTERVAL_SECONDS
    try:
        interval = int(value)
    except ValueError:
        logger.warning("bad INTERVAL_SECONDS %s", value)
        return DEFAULT_INTERVAL_SECONDS
    if interval <= 0:
        logger.warning("bad INTERVAL_SECONDS %s: must be positive", value)
        return DEFAULT_INTERVAL_SECONDS
    return interval


def _endpoint(environ):
    host = environ.get(incluster_config.SERVICE_HOST_ENV_NAME)
    port = environ.get(incluster_config.SERVICE_PORT_ENV_NAME)
    if not host or not port:
        return client.DEFAULT_ENDPOINT
    if ":" in host:
        host = f"[{host}]"
    return f"https://{host}:{port}"
