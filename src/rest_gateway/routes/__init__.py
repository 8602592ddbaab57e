"""REST routes of the gateway, one module per resource type."""

from aiohttp import web

from . import children, nexuses, nodes, pools, replicas, volumes
from .base import BUS

ROUTES = (
    nodes.ROUTES
    + pools.ROUTES
    + replicas.ROUTES
    + nexuses.ROUTES
    + children.ROUTES
    + volumes.ROUTES
)


def register_routes(app: web.Application) -> None:
    for method, path, handler in ROUTES:
        app.router.add_route(method, path, handler)


__all__ = ['BUS', 'ROUTES', 'register_routes']
