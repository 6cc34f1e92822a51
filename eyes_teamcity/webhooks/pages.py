"""
Build results page fragments: the Eyes overview iframe and the feature descriptor.
"""

import html
from aiohttp import web

from eyes_teamcity.core import constants
from eyes_teamcity.core.config import settings
from eyes_teamcity.services.eyes.overview import is_overview_available, overview_url
from eyes_teamcity.webhooks.keys import BUILDS_KEY


def render_overview(url: str) -> str:
    """HTML fragment embedding the batch dashboard."""
    if not url:
        return ""
    return (
        f'<iframe class="applitools-overview" src="{html.escape(url, quote=True)}" '
        'width="100%" height="600" frameborder="0"></iframe>'
    )


async def handle_overview(request: web.Request) -> web.Response:
    """Render the overview fragment for ``?buildId=<id>``."""
    raw_id = request.query.get("buildId", "")
    try:
        build_id = int(raw_id)
    except ValueError:
        return web.Response(status=400, text="Invalid buildId")

    build = request.app[BUILDS_KEY].get(build_id)
    if build is None or not is_overview_available(build):
        return web.Response(status=404, text="No Applitools overview for this build")

    url = overview_url(build, settings.overview_agent_id)
    return web.Response(
        text=render_overview(url),
        content_type="text/html",
        headers={"Content-Security-Policy": f"frame-src {constants.OVERVIEW_FRAME_SRC}"},
    )


async def handle_feature(request: web.Request) -> web.Response:
    """Describe the build feature so the host can offer it in the UI."""
    return web.json_response({
        "pluginId": constants.PLUGIN_ID,
        "type": constants.BUILD_FEATURE_TYPE,
        "displayName": constants.BUILD_FEATURE_DISPLAY_NAME,
        "parameters": list(constants.FEATURE_FIELDS),
        "defaults": {constants.SERVER_URL_FIELD: settings.default_server_url},
    })
