"""
Application factory and main entry point.
"""

import asyncio
from aiohttp import web

from eyes_teamcity.core.config import settings
from eyes_teamcity.core.logging import setup_logging, get_logger
from eyes_teamcity.handlers import register_listeners
from eyes_teamcity.handlers.events import EventDispatcher
from eyes_teamcity.state.builds import known_builds
from eyes_teamcity.webhooks.server import create_webhook_app, start_webhook_server

# Initialize logging
setup_logging(settings.log_level_value)
logger = get_logger(__name__)


def create_app() -> web.Application:
    """Create the dispatcher, subscribe the listeners and build the web app."""
    dispatcher = EventDispatcher()
    register_listeners(dispatcher, store=known_builds)
    return create_webhook_app(dispatcher, known_builds)


async def main() -> None:
    """Main application entry point."""
    logger.info("Starting Applitools build listener...")

    app = create_app()
    runner = await start_webhook_server(app, settings.webhook_host, settings.webhook_port)

    # Keep running until cancelled
    stop_signal = asyncio.Event()
    try:
        await stop_signal.wait()
    except asyncio.CancelledError:
        pass
    finally:
        # Graceful shutdown
        await runner.cleanup()
