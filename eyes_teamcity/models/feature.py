"""
Resolved view of the Applitools build feature parameters.
"""

from dataclasses import dataclass

from eyes_teamcity.core import constants
from eyes_teamcity.core.config import settings
from eyes_teamcity.models.build import BuildFeatureDescriptor, RunningBuild


def find_feature(build: RunningBuild) -> BuildFeatureDescriptor | None:
    """Return the first Applitools feature of the build, if any."""
    features = build.get_build_features_of_type(constants.BUILD_FEATURE_TYPE)
    return features[0] if features else None


def resolve_server_url(url: str | None, default: str | None = None) -> str:
    """Fall back to the default Eyes server when no URL is configured."""
    if url:
        return url.rstrip("/")
    return default if default is not None else settings.default_server_url


def _is_true(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "true"


@dataclass(frozen=True)
class FeatureConfig:
    """Read-only parameters of one Applitools feature instance."""

    api_key: str | None = None
    server_url: str | None = None
    scm_integration_enabled: bool = False
    notify_by_completion: bool = False

    @classmethod
    def from_descriptor(cls, feature: BuildFeatureDescriptor) -> "FeatureConfig":
        params = feature.parameters
        return cls(
            api_key=params.get(constants.API_KEY_FIELD) or None,
            server_url=params.get(constants.SERVER_URL_FIELD) or None,
            scm_integration_enabled=_is_true(params.get(constants.SCM_INTEGRATION_FIELD)),
            notify_by_completion=_is_true(params.get(constants.NOTIFY_BY_COMPLETION_FIELD)),
        )

    @classmethod
    def from_build(cls, build: RunningBuild) -> "FeatureConfig | None":
        """Config of the first Applitools feature, or None when the build has none."""
        feature = find_feature(build)
        if feature is None:
            return None
        return cls.from_descriptor(feature)

    @classmethod
    def all_from_build(cls, build: RunningBuild) -> list["FeatureConfig"]:
        """Configs of the enabled Applitools features, in declaration order."""
        return [
            cls.from_descriptor(f)
            for f in build.get_build_features_of_type(constants.BUILD_FEATURE_TYPE)
            if f.enabled
        ]

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def resolved_server_url(self) -> str:
        return resolve_server_url(self.server_url)
