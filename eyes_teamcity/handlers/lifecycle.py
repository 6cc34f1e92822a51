"""
Build lifecycle listeners: environment export and batch notifications.
"""

from eyes_teamcity.core.logging import get_logger
from eyes_teamcity.models.build import RunningBuild
from eyes_teamcity.models.feature import FeatureConfig
from eyes_teamcity.services.batch import resolve_batch_id, scm_guarded
from eyes_teamcity.services.environment import batch_environment, export_environment
from eyes_teamcity.services.eyes.notifier import BatchNotifier
from eyes_teamcity.state.builds import BuildsStore

logger = get_logger(__name__)


class BatchLifecycle:
    """Listeners for build start and build finish."""

    def __init__(self, notifier: BatchNotifier, store: BuildsStore):
        self._notifier = notifier
        self._store = store

    def _features(self, build: RunningBuild) -> list[tuple[FeatureConfig, str]]:
        resolved = []
        for config in FeatureConfig.all_from_build(build):
            guarded = scm_guarded(build, config)
            if guarded is not config:
                build.log.message("SCM integration is enabled but the build has no VCS roots")
                logger.warning("Build %s: SCM integration without VCS roots", build.build_id)
            resolved.append((guarded, resolve_batch_id(build, guarded)))
        return resolved

    async def on_build_started(self, build: RunningBuild) -> None:
        """Export Applitools variables and bind the build to its batch."""
        build.log.message("Build Started, setting Applitools environment variables:")
        logger.info("Build %s started, setting Applitools environment variables", build.build_id)
        self._store.add(build)

        for config, batch_id in self._features(build):
            build.log.message("Creating Applitools environment variables:")
            export_environment(build, batch_environment(build, config, batch_id))
            await self._notifier.bind(build, config, batch_id)

    async def on_before_build_finish(self, build: RunningBuild) -> None:
        """Close the batches of a finishing build."""
        self._store.add(build)
        for config, batch_id in self._features(build):
            await self._notifier.close(build, config, batch_id)
