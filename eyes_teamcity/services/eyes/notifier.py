"""
Best-effort batch notifications sent at build start and finish.
"""

from typing import Callable

from eyes_teamcity.core.constants import NOTIFICATION_LOG_BLOCK
from eyes_teamcity.core.exceptions import EyesAPIError
from eyes_teamcity.core.logging import get_logger
from eyes_teamcity.models.build import RunningBuild
from eyes_teamcity.models.feature import FeatureConfig
from .client import EyesClient

logger = get_logger(__name__)

ClientFactory = Callable[[str, str], EyesClient]


class BatchNotifier:
    """
    Binds and closes Eyes batches for builds.

    Each call is made at most once per feature instance and lifecycle edge.
    The outcome is only logged: failures never reach the caller and never
    change the build result.
    """

    def __init__(self, client_factory: ClientFactory = EyesClient):
        self._client_factory = client_factory

    async def bind(self, build: RunningBuild, config: FeatureConfig, batch_id: str) -> int | None:
        """
        Bind the build as a secondary pointer of the batch.

        Returns:
            Response status, or None when skipped or failed
        """
        if not config.has_api_key or not config.scm_integration_enabled:
            return None

        client = self._client_factory(config.resolved_server_url, config.api_key)
        return await self._notify(
            build,
            batch_id,
            "Bind pointers",
            lambda: client.bind_pointers(batch_id, str(build.build_id)),
        )

    async def close(self, build: RunningBuild, config: FeatureConfig, batch_id: str) -> int | None:
        """
        Ask the Eyes server to close the batch.

        Returns:
            Response status, or None when skipped or failed
        """
        if not config.has_api_key or not config.notify_by_completion:
            return None

        client = self._client_factory(config.resolved_server_url, config.api_key)
        return await self._notify(build, batch_id, "Delete batch", lambda: client.close_batch(batch_id))

    async def _notify(self, build: RunningBuild, batch_id: str, action: str, call) -> int | None:
        build.log.progress_message(f"Batch notification called with {batch_id}", NOTIFICATION_LOG_BLOCK)
        try:
            status = await call()
        except EyesAPIError as e:
            build.log.progress_message(str(e), NOTIFICATION_LOG_BLOCK)
            logger.warning("Build %s: %s", build.build_id, e)
            return None

        build.log.progress_message(f"{action} is done with {status} status", NOTIFICATION_LOG_BLOCK)
        logger.info("Build %s: %s for %s returned %s", build.build_id, action, batch_id, status)
        return status
