"""Canonical URIs of nexus children.

A child is keyed by its URI alone. Paths may carry a full URI
(``nvmf://host:8420/nqn...``), possibly with a query split off by the HTTP
layer, or a bare legacy device path which defaults to the ``aio`` scheme.
"""
import re
from urllib.parse import urlsplit

from ..bus.errors import NotFound
from ..models.resources import Child, Nexus

LEGACY_SCHEME = "aio"

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
# schemes which are only valid with a non-empty host
_SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp"}


def is_absolute_url(value: str) -> bool:
    """True when value parses as an absolute URL (scheme required).

    A port that is out of range or not numeric fails the parse. Special
    schemes need a host, though the slashes before it may be missing or
    doubled (``http:foo`` is ``http://foo/``).
    """
    try:
        parts = urlsplit(value)
        parts.port
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        return False
    if not value.lower().startswith(f"{parts.scheme.lower()}:"):
        return False
    if parts.scheme.lower() in _SPECIAL_SCHEMES:
        authority = value[len(parts.scheme) + 1:].lstrip("/")
        try:
            return bool(urlsplit(f"//{authority}").hostname)
        except ValueError:
            return False
    return True


def build_child_uri(raw_id: str, query_string: str = "") -> str:
    """Canonical child URI for a path-supplied id and the request query.

    The query is appended verbatim to a URL-shaped id. Legacy ids get the
    ``aio://`` prefix and lose the query.
    """
    if is_absolute_url(raw_id):
        if not query_string:
            return raw_id
        return f"{raw_id}?{query_string}"
    return f"{LEGACY_SCHEME}://{raw_id}"


def find_child(nexus: Nexus, uri: str) -> Child:
    """Child of nexus whose URI is exactly uri."""
    for child in nexus.children:
        if child.uri == uri:
            return child
    raise NotFound(f"child {uri} not found in nexus {nexus.uuid}")
