class Error(Exception):
    pass


class StartupFailure(Error):
    """Credential or trust material could not be loaded."""


class RequestError(Error):
    """A single API call failed; the caller may try again on the next tick."""


class TransportError(RequestError):
    pass


class APIError(RequestError):
    def __init__(self, status, body):
        super().__init__(f"bad status code: {status} ({body})")
        self.status = status
        self.body = body


class DecodeError(RequestError):
    pass
