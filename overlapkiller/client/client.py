import asyncio
import json
import logging

import aiohttp
from kubernetes_asyncio.config import incluster_config

from overlapkiller import errors
from overlapkiller.client import transport

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://kubernetes.default.svc.cluster.local"
TOKEN_FILENAME = incluster_config.SERVICE_TOKEN_FILENAME
CERT_FILENAME = incluster_config.SERVICE_CERT_FILENAME

_SUCCESS_STATUSES = frozenset((200, 201, 202))


def new(
    endpoint=DEFAULT_ENDPOINT, *, ca_file=CERT_FILENAME, token_file=TOKEN_FILENAME
):
    """
    Load the service account credentials and return a client for `endpoint`.

    Raises `StartupFailure` if either credential file is unusable. Must be called
    with a running event loop since it opens the session.
    """
    ssl_context = transport.new_ssl_context(load_ca(ca_file))
    token = load_token(token_file)
    logger.debug("Using API endpoint %s", endpoint)
    return Client(transport.new_session(ssl_context), endpoint, token)


def load_ca(path):
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise errors.StartupFailure(f"unable to read CA certificate {path}: {e}")


def load_token(path):
    try:
        with open(path) as f:
            token = f.read().strip()
    except (OSError, UnicodeDecodeError) as e:
        raise errors.StartupFailure(f"unable to read token {path}: {e}")
    if not token:
        raise errors.StartupFailure(f"token file {path} is empty")
    return token


class Client:
    def __init__(self, session, endpoint, token):
        self._session = session
        self._endpoint = endpoint.rstrip("/")
        self._headers = {"authorization": f"Bearer {token}"}

    async def execute(self, method, path, body=None, response_type=None):
        """
        Issue one request and return `response_type(decoded_json)`.

        Returns None when no `response_type` is given. The body is always read in
        full so the connection can be reused.
        """
        url = self._endpoint + path
        try:
            async with self._session.request(
                method, url, json=body, headers=self._headers
            ) as resp:
                status = resp.status
                data = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise errors.TransportError(f"{method} {url}: {e!r}") from e

        if status not in _SUCCESS_STATUSES:
            raise errors.APIError(status, data.decode("utf-8", errors="replace"))

        if response_type is None:
            return None
        try:
            return response_type(json.loads(data))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            raise errors.DecodeError(f"{method} {url}: {e}") from e
        except (KeyError, TypeError, AttributeError) as e:
            raise errors.DecodeError(f"{method} {url}: unexpected shape: {e!r}") from e

    async def close(self):
        await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
