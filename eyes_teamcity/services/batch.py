"""
Batch identifiers shared by the agent environment, the Eyes calls and the overview page.
"""

from dataclasses import replace

from eyes_teamcity.core.constants import BATCH_ID_PREFIX
from eyes_teamcity.core.exceptions import MissingVcsRootError
from eyes_teamcity.models.build import RunningBuild
from eyes_teamcity.models.feature import FeatureConfig


def generate_batch_id(build_type_id: str, build_number: str, build_id: int) -> str:
    """Synthetic batch id, e.g. ``teamcity-Project_Build-17-42``."""
    return f"{BATCH_ID_PREFIX}-{build_type_id}-{build_number}-{build_id}"


def current_revision(build: RunningBuild) -> str:
    """
    Revision of the build's first VCS root.

    Raises:
        MissingVcsRootError: If the build has no VCS roots
    """
    if not build.vcs_roots:
        raise MissingVcsRootError(f"Build {build.build_id} has no VCS roots")
    return build.vcs_roots[0].current_revision


def resolve_batch_id(build: RunningBuild, config: FeatureConfig) -> str:
    """
    Batch id for a build under the given feature configuration.

    With SCM integration the revision is the batch id, so every build of the
    same commit reports into one batch.

    Raises:
        MissingVcsRootError: SCM integration is on but the build has no VCS roots
    """
    if config.scm_integration_enabled:
        return current_revision(build)
    return generate_batch_id(build.build_type_id, build.build_number, build.build_id)


def scm_guarded(build: RunningBuild, config: FeatureConfig) -> FeatureConfig:
    """Config with SCM integration turned off when the build has no VCS roots."""
    if config.scm_integration_enabled and not build.vcs_roots:
        return replace(config, scm_integration_enabled=False)
    return config
