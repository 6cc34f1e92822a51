"""
Explicit subscription of build lifecycle listeners.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from eyes_teamcity.core.logging import get_logger
from eyes_teamcity.models.build import RunningBuild

logger = get_logger(__name__)

BUILD_STARTED = "build_started"
BEFORE_BUILD_FINISH = "before_build_finish"

Listener = Callable[[RunningBuild], Awaitable[None]]


@dataclass
class Subscription:
    """Handle returned by EventDispatcher.subscribe."""

    event: str
    callback: Listener
    dispatcher: "EventDispatcher"

    def cancel(self) -> None:
        self.dispatcher.unsubscribe(self)


class EventDispatcher:
    """Delivers lifecycle events to subscribed listeners in subscription order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> Subscription:
        self._listeners.setdefault(event, []).append(callback)
        return Subscription(event, callback, self)

    def unsubscribe(self, subscription: Subscription) -> None:
        listeners = self._listeners.get(subscription.event, [])
        if subscription.callback in listeners:
            listeners.remove(subscription.callback)

    def listeners(self, event: str) -> list[Listener]:
        return list(self._listeners.get(event, []))

    async def dispatch(self, event: str, build: RunningBuild) -> None:
        """
        Run every listener of the event for the build.

        A failing listener is logged and skipped; lifecycle events never fail.
        """
        for callback in self.listeners(event):
            try:
                await callback(build)
            except Exception as e:
                logger.exception("Listener for %s failed on build %s: %s", event, build.build_id, e)
                build.log.message(f"Applitools listener error: {e}")
