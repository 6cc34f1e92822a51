"""
Application keys shared by the webhook handlers.
"""

from aiohttp import web

from eyes_teamcity.handlers.events import EventDispatcher
from eyes_teamcity.state.builds import BuildsStore

DISPATCHER_KEY = web.AppKey("dispatcher", EventDispatcher)
BUILDS_KEY = web.AppKey("builds", BuildsStore)
