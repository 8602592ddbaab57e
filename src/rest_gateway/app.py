"""Main application entry point."""

import asyncio
import logging

from aiohttp import web

from .bus import InMemoryBus, MessageBus
from .config import BUS_URL, DEBUG, LOG_LEVEL, REST_HOST, REST_PORT, SEED_NODES
from .routes import BUS, register_routes
from .services.metrics import metrics, metrics_middleware
from .services.utils import error_middleware

logger = logging.getLogger(__name__)


async def health_check(request):
    """Health check endpoint."""
    return web.json_response({'status': 'healthy'})


def create_app(bus: MessageBus) -> web.Application:
    """Application serving the REST API on top of the given bus."""
    app = web.Application(middlewares=[metrics_middleware, error_middleware])
    app[BUS] = bus
    register_routes(app)
    app.add_routes([
        web.get('/health', health_check),
        web.get('/metrics', metrics),
    ])
    return app


async def serve(app: web.Application, host: str = REST_HOST, port: int = REST_PORT):
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f"REST gateway listening on {host}:{port}")
    try:
        while True:
            await asyncio.sleep(3600)  # Keep the server running
    finally:
        await runner.cleanup()


def main():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    bus = InMemoryBus()
    for node_id in SEED_NODES:
        bus.add_node(node_id)
    logger.info(f"Using in-memory message bus (configured bus: {BUS_URL}, nodes: {SEED_NODES})")
    if DEBUG:
        logger.debug("Debug mode enabled")

    try:
        asyncio.run(serve(create_app(bus)))
    except KeyboardInterrupt:
        logger.info("Shutting down REST gateway")


if __name__ == '__main__':
    main()
