import os
import ssl
import tempfile
import unittest

import trustme
from aiohttp import test_utils, web

from overlapkiller import errors
from overlapkiller.client import client, transport
from overlapkiller.testing.util import async_test


def _pods_app():
    async def pods(request):
        return web.json_response({"kind": "PodList", "items": []})

    app = web.Application()
    app.router.add_get("/api/v1/pods", pods)
    return app


class TestSSLContext(unittest.TestCase):
    def test_garbage(self):
        with self.assertRaises(errors.StartupFailure):
            transport.new_ssl_context(b"not a certificate")

    def test_empty(self):
        with self.assertRaises(errors.StartupFailure):
            transport.new_ssl_context(b"")

    def test_binary(self):
        with self.assertRaises(errors.StartupFailure):
            transport.new_ssl_context(b"\xff\xfe\x00")

    def test_ca(self):
        ca = trustme.CA()
        context = transport.new_ssl_context(ca.cert_pem.bytes())
        self.assertEqual(context.minimum_version, ssl.TLSVersion.TLSv1_2)
        self.assertEqual(context.verify_mode, ssl.CERT_REQUIRED)
        self.assertTrue(context.check_hostname)
        self.assertEqual(context.cert_store_stats()["x509_ca"], 1)


class TestHandshake(unittest.TestCase):
    def setUp(self):
        self.ca = trustme.CA()
        self.server_context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
        self.ca.issue_cert("127.0.0.1").configure_cert(self.server_context)

    async def _get_pods(self, ca_pem):
        server = test_utils.TestServer(_pods_app())
        await server.start_server(ssl=self.server_context)
        try:
            session = transport.new_session(transport.new_ssl_context(ca_pem))
            endpoint = str(server.make_url("/"))
            async with client.Client(session, endpoint, "t") as c:
                return await c.execute(
                    "GET", "/api/v1/pods", response_type=lambda obj: obj["items"]
                )
        finally:
            await server.close()

    @async_test
    async def test_trusted_ca(self):
        self.assertEqual(await self._get_pods(self.ca.cert_pem.bytes()), [])

    @async_test
    async def test_untrusted_ca(self):
        other = trustme.CA()
        with self.assertRaises(errors.TransportError):
            await self._get_pods(other.cert_pem.bytes())


class TestCredentials(unittest.TestCase):
    def setUp(self):
        self._dir = tempfile.TemporaryDirectory()
        self.addCleanup(self._dir.cleanup)

    def _write(self, name, data):
        path = os.path.join(self._dir.name, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_load_token(self):
        path = self._write("token", b"abc.def\n")
        self.assertEqual(client.load_token(path), "abc.def")

    def test_load_token_missing(self):
        with self.assertRaises(errors.StartupFailure):
            client.load_token(os.path.join(self._dir.name, "missing"))

    def test_load_token_empty(self):
        path = self._write("token", b"\n")
        with self.assertRaises(errors.StartupFailure):
            client.load_token(path)

    def test_load_ca_missing(self):
        with self.assertRaises(errors.StartupFailure):
            client.load_ca(os.path.join(self._dir.name, "missing"))

    def test_new_with_bad_ca(self):
        ca_file = self._write("ca.crt", b"-----BEGIN CERTIFICATE-----\nnope\n")
        token_file = self._write("token", b"abc")
        with self.assertRaises(errors.StartupFailure):
            client.new(ca_file=ca_file, token_file=token_file)

    def test_new_with_missing_token(self):
        ca_file = self._write("ca.crt", trustme.CA().cert_pem.bytes())
        with self.assertRaises(errors.StartupFailure):
            client.new(
                ca_file=ca_file, token_file=os.path.join(self._dir.name, "missing")
            )

    @async_test
    async def test_new(self):
        ca_file = self._write("ca.crt", trustme.CA().cert_pem.bytes())
        token_file = self._write("token", b"abc\n")
        c = client.new("https://127.0.0.1:6443", ca_file=ca_file, token_file=token_file)
        await c.close()


if __name__ == "__main__":
    unittest.main()
