import ssl

import aiohttp

from overlapkiller import errors

MAX_CONNECTIONS = 100
IDLE_CONNECTION_TIMEOUT = 90
DIAL_TIMEOUT = 30
TLS_HANDSHAKE_TIMEOUT = 10
REQUEST_TIMEOUT = 60


def new_ssl_context(ca_data):
    """Return a client context that trusts only the certificates in `ca_data`."""
    if isinstance(ca_data, bytes):
        try:
            ca_data = ca_data.decode("ascii")
        except UnicodeDecodeError as e:
            raise errors.StartupFailure(f"CA certificate is not PEM encoded: {e}")
    # An empty cadata would make create_default_context load the system store.
    if not ca_data.strip():
        raise errors.StartupFailure("CA certificate is empty")
    try:
        context = ssl.create_default_context(cadata=ca_data)
    except (ssl.SSLError, ValueError) as e:
        raise errors.StartupFailure(f"unable to load CA certificate: {e}")
    if not context.cert_store_stats()["x509_ca"]:
        raise errors.StartupFailure("no CA certificates found")
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


def new_session(ssl_context):
    # Must be called with a running event loop.
    connector = aiohttp.TCPConnector(
        ssl=ssl_context,
        limit=MAX_CONNECTIONS,
        keepalive_timeout=IDLE_CONNECTION_TIMEOUT,
    )
    timeout = aiohttp.ClientTimeout(
        total=REQUEST_TIMEOUT,
        connect=DIAL_TIMEOUT + TLS_HANDSHAKE_TIMEOUT,
        sock_connect=DIAL_TIMEOUT,
    )
    return aiohttp.ClientSession(connector=connector, timeout=timeout, trust_env=True)
