"""
Webhook server setup.
"""

from aiohttp import web

from eyes_teamcity.core.logging import get_logger
from eyes_teamcity.handlers.events import EventDispatcher
from eyes_teamcity.state.builds import BuildsStore
from eyes_teamcity.webhooks.keys import BUILDS_KEY, DISPATCHER_KEY
from eyes_teamcity.webhooks.pages import handle_feature, handle_overview
from eyes_teamcity.webhooks.teamcity import handle_build_finishing, handle_build_started

logger = get_logger(__name__)


def create_webhook_app(dispatcher: EventDispatcher, builds: BuildsStore) -> web.Application:
    """Build the aiohttp application serving lifecycle webhooks and page fragments."""
    app = web.Application()
    app[DISPATCHER_KEY] = dispatcher
    app[BUILDS_KEY] = builds

    app.router.add_post("/webhook/build/started", handle_build_started)
    app.router.add_post("/webhook/build/finishing", handle_build_finishing)
    app.router.add_get("/overview", handle_overview)
    app.router.add_get("/feature", handle_feature)
    return app


async def start_webhook_server(app: web.Application, host: str = "0.0.0.0", port: int = 8081) -> web.AppRunner:
    """
    Start the webhook server.

    Args:
        app: Application from create_webhook_app
        host: Host to bind to
        port: Port to bind to

    Returns:
        Runner to clean up on shutdown
    """
    runner = web.AppRunner(app)
    await runner.setup()

    site = web.TCPSite(runner, host, port)
    await site.start()

    logger.info(f"Webhook server started on {host}:{port}")
    return runner
