"""
Webhook handlers for build lifecycle events sent by the CI host.
"""

import hmac
import hashlib
import json
from aiohttp import web

from eyes_teamcity.core.config import settings
from eyes_teamcity.core.exceptions import InvalidPayloadError
from eyes_teamcity.core.logging import get_logger
from eyes_teamcity.handlers.events import BEFORE_BUILD_FINISH, BUILD_STARTED
from eyes_teamcity.models.build import RunningBuild
from eyes_teamcity.webhooks.keys import DISPATCHER_KEY

logger = get_logger(__name__)

SIGNATURE_HEADER = "X-Signature-256"


def verify_signature(body: bytes, signature: str | None, secret: str | None) -> bool:
    """Check an ``sha256=<hex>`` HMAC signature; always valid without a secret."""
    if not secret:
        return True
    if not signature:
        return False
    expected_signature = "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(signature.encode("utf-8", "surrogateescape"), expected_signature.encode())


async def _dispatch(request: web.Request, event: str) -> tuple[RunningBuild | None, web.Response | None]:
    body = await request.read()
    if not verify_signature(body, request.headers.get(SIGNATURE_HEADER), settings.webhook_secret):
        return None, web.Response(status=401, text="Invalid signature")

    try:
        payload = json.loads(body)
    except ValueError:
        return None, web.Response(status=400, text="Invalid JSON")

    try:
        build = RunningBuild.from_payload(payload)
    except InvalidPayloadError as e:
        return None, web.Response(status=400, text=str(e))

    logger.info("Received %s for build %s", event, build.build_id)
    await request.app[DISPATCHER_KEY].dispatch(event, build)
    return build, None


async def handle_build_started(request: web.Request) -> web.Response:
    """Handle build start; replies with the variables to add to the build."""
    try:
        build, error = await _dispatch(request, BUILD_STARTED)
        if error is not None:
            return error
        return web.json_response({"environment": build.environment, "log": build.log.lines()})
    except Exception as e:
        logger.error(f"Webhook error: {e}")
        return web.Response(status=500, text="Internal Server Error")


async def handle_build_finishing(request: web.Request) -> web.Response:
    """Handle the event sent right before a build finishes."""
    try:
        build, error = await _dispatch(request, BEFORE_BUILD_FINISH)
        if error is not None:
            return error
        return web.json_response({"status": "processed", "log": build.log.lines()})
    except Exception as e:
        logger.error(f"Webhook error: {e}")
        return web.Response(status=500, text="Internal Server Error")
