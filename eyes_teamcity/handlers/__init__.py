"""
Lifecycle listeners registration.
"""

from eyes_teamcity.handlers.events import BEFORE_BUILD_FINISH, BUILD_STARTED, EventDispatcher, Subscription


def register_listeners(dispatcher: EventDispatcher, notifier=None, store=None) -> list[Subscription]:
    """Subscribe the Applitools listeners to the dispatcher."""
    from eyes_teamcity.handlers.lifecycle import BatchLifecycle
    from eyes_teamcity.services.eyes.notifier import BatchNotifier
    from eyes_teamcity.state.builds import known_builds

    lifecycle = BatchLifecycle(notifier or BatchNotifier(), store if store is not None else known_builds)
    return [
        dispatcher.subscribe(BUILD_STARTED, lifecycle.on_build_started),
        dispatcher.subscribe(BEFORE_BUILD_FINISH, lifecycle.on_before_build_finish),
    ]
