"""Errors raised by the REST client, mirroring the server's error translation."""


class ClientError(Exception):
    """Base class for REST client errors."""
    def __init__(self, message, status_code=None, kind=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.kind = kind


class ResourceNotFound(ClientError):
    """The server answered 204: nothing matched the request."""
    def __init__(self, urn):
        super().__init__(f"Resource not found: {urn}", 204, "NotFound")
        self.urn = urn


class InvalidRequest(ClientError):
    """The server rejected the request (400)."""
    def __init__(self, message, kind="InvalidArgument"):
        super().__init__(message, 400, kind)


class ServerError(ClientError):
    """The server or the control plane behind it failed (5xx)."""
    def __init__(self, kind, message, status_code=500):
        super().__init__(f"{kind}: {message}", status_code, kind)
        self.detail = message


class TransportFailure(ClientError):
    """The request never got an HTTP answer."""
    pass
