"""
Export of Applitools settings as build-scoped environment variables.
"""

from eyes_teamcity.core import constants
from eyes_teamcity.core.logging import get_logger, mask_secret
from eyes_teamcity.models.build import RunningBuild
from eyes_teamcity.models.feature import FeatureConfig

logger = get_logger(__name__)


def batch_environment(
    build: RunningBuild,
    config: FeatureConfig,
    batch_id: str,
) -> list[tuple[str, str | None]]:
    """Ordered variables for one feature instance; None marks a skipped value."""
    return [
        (constants.API_KEY_ENV_VAR, config.api_key or None),
        (constants.SERVER_URL_ENV_VAR, config.resolved_server_url),
        (constants.BATCH_ID_ENV_VAR, batch_id),
        (constants.BATCH_NAME_ENV_VAR, f"{build.project_name} / {build.build_type_name}"),
        (constants.BATCH_SEQUENCE_ENV_VAR, build.project_name),
        (constants.DONT_CLOSE_BATCHES_ENV_VAR, "true"),
    ]


def export_environment(build: RunningBuild, pairs: list[tuple[str, str | None]]) -> int:
    """
    Publish each non-None pair as a shared environment variable.

    Returns:
        Number of variables set
    """
    exported = 0
    for key, value in pairs:
        if value is None:
            continue
        shown = mask_secret(value) if key == constants.API_KEY_ENV_VAR else value
        build.log.message(f"{key} = {shown}")
        logger.info("%s = %s", key, shown)
        build.add_shared_environment_variable(key, value)
        exported += 1
    return exported
