"""Prometheus metrics of the gateway."""
import time

from aiohttp import web
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

# Custom registry so only gateway metrics are exposed
GATEWAY_REGISTRY = CollectorRegistry()

REQUEST_COUNT = Counter(
    'gateway_request_total',
    'Total requests processed',
    ['method', 'route', 'status'],
    registry=GATEWAY_REGISTRY
)

REQUEST_LATENCY = Histogram(
    'gateway_request_latency_seconds',
    'Request latency in seconds',
    ['method', 'route'],
    registry=GATEWAY_REGISTRY
)

ERROR_COUNT = Counter(
    'gateway_errors_total',
    'Errors translated into HTTP responses',
    ['kind'],
    registry=GATEWAY_REGISTRY
)


def _route_label(request: web.Request) -> str:
    """Route template of the request, so ids don't explode label cardinality."""
    resource = request.match_info.route.resource
    if resource is None:
        return 'unmatched'
    return resource.canonical


@web.middleware
async def metrics_middleware(request, handler):
    """Middleware to track request metrics"""
    start_time = time.time()
    status = 500
    try:
        response = await handler(request)
        status = response.status
        return response
    except web.HTTPException as e:
        status = e.status
        raise
    finally:
        route = _route_label(request)
        REQUEST_COUNT.labels(
            method=request.method,
            route=route,
            status=str(status)
        ).inc()
        REQUEST_LATENCY.labels(
            method=request.method,
            route=route
        ).observe(time.time() - start_time)


async def metrics(request):
    """Expose Prometheus metrics"""
    return web.Response(
        body=generate_latest(GATEWAY_REGISTRY),
        content_type='text/plain'
    )
