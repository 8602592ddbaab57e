"""Errors returned by the message bus collaborator."""


class TransportError(Exception):
    """Failure of the bus transport or of the remote agent handling a request."""


class RequestTimeout(TransportError):
    """No reply arrived within the bus request timeout."""


class PublishError(TransportError):
    """The request could not be published on the bus."""


class ReplyWithError(TransportError):
    """The remote agent replied with an error."""


class DeserializeError(TransportError):
    """The reply could not be decoded into the expected type."""


def error_chain(error: BaseException) -> str:
    """Render an exception and its explicit causes as ``"outer: inner: ..."``."""
    parts = []
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        parts.append(str(error) or type(error).__name__)
        error = error.__cause__
    return ": ".join(parts)


class BusError(Exception):
    """Base class for errors surfaced by bus operations."""
    kind = "BusError"


class NotFound(BusError):
    """No resource matched the request."""
    kind = "NotFound"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)
        self.message = message


class NotUnique(BusError):
    """More than one resource matched a request expecting exactly one."""
    kind = "NotUnique"

    def __init__(self, message: str = "Multiple resources match the filter"):
        super().__init__(message)
        self.message = message


class MessageBusError(BusError):
    """Wraps a transport or backend failure."""
    kind = "MessageBusError"

    def __init__(self, source: Exception):
        super().__init__(f"Message Bus error: {source}")
        self.source = source
        self.__cause__ = source

    @property
    def source_kind(self) -> str:
        return type(self.source).__name__

    def full_string(self) -> str:
        return error_chain(self.source)
