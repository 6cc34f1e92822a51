"""
Data model for builds reported by the CI host.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from eyes_teamcity.core.exceptions import InvalidPayloadError


@dataclass
class LogMessage:
    """Single line written to a build log."""

    text: str
    block: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class BuildLog:
    """Per-build message sink shown on the build results page."""

    def __init__(self) -> None:
        self._messages: list[LogMessage] = []

    def message(self, text: str) -> None:
        """Append a plain message."""
        self._messages.append(LogMessage(text))

    def progress_message(self, text: str, block: str) -> None:
        """Append a message grouped under a named progress block."""
        self._messages.append(LogMessage(text, block=block))

    @property
    def messages(self) -> list[LogMessage]:
        return list(self._messages)

    def lines(self) -> list[str]:
        return [m.text for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)


@dataclass
class BuildFeatureDescriptor:
    """A build feature attached to a build configuration."""

    type: str
    parameters: dict[str, str] = field(default_factory=dict)
    id: str = ""
    enabled: bool = True


@dataclass
class VcsRootEntry:
    """A VCS root of the build with the revision being built."""

    name: str
    current_revision: str


@dataclass
class RunningBuild:
    """Represents a build as seen by lifecycle listeners."""

    build_id: int
    build_type_id: str
    build_number: str
    project_name: str
    build_type_name: str
    features: list[BuildFeatureDescriptor] = field(default_factory=list)
    vcs_roots: list[VcsRootEntry] = field(default_factory=list)
    environment: dict[str, str] = field(default_factory=dict)
    log: BuildLog = field(default_factory=BuildLog)

    def get_build_features_of_type(self, feature_type: str) -> list[BuildFeatureDescriptor]:
        """Return the features of the given type in declaration order."""
        return [f for f in self.features if f.type == feature_type]

    def add_shared_environment_variable(self, key: str, value: str) -> None:
        """Make a variable visible to all subsequent build steps."""
        self.environment[key] = value

    @classmethod
    def from_payload(cls, payload: Any) -> "RunningBuild":
        """
        Build a RunningBuild from a host event payload.

        Expected shape::

            {
                "buildId": 42,
                "buildTypeId": "Project_Build",
                "buildNumber": "17",
                "projectName": "Project",
                "buildTypeName": "Build",
                "features": [{"type": "applitools", "id": "BUILD_EXT_1",
                              "enabled": true, "parameters": {...}}],
                "vcsRoots": [{"name": "origin", "currentRevision": "abc123"}]
            }

        Raises:
            InvalidPayloadError: If required fields are missing or mistyped
        """
        if not isinstance(payload, dict):
            raise InvalidPayloadError("Build payload must be a JSON object")

        try:
            build_id = int(payload["buildId"])
        except KeyError as exc:
            raise InvalidPayloadError("Missing field: buildId") from exc
        except (TypeError, ValueError) as exc:
            raise InvalidPayloadError(f"Invalid buildId: {payload['buildId']!r}") from exc

        strings = {}
        for key in ("buildTypeId", "buildNumber", "projectName", "buildTypeName"):
            value = payload.get(key)
            if value is None:
                raise InvalidPayloadError(f"Missing field: {key}")
            strings[key] = str(value)

        return cls(
            build_id=build_id,
            build_type_id=strings["buildTypeId"],
            build_number=strings["buildNumber"],
            project_name=strings["projectName"],
            build_type_name=strings["buildTypeName"],
            features=_parse_features(payload.get("features") or []),
            vcs_roots=_parse_vcs_roots(payload.get("vcsRoots") or []),
        )


def _parse_features(raw: Any) -> list[BuildFeatureDescriptor]:
    if not isinstance(raw, list):
        raise InvalidPayloadError("features must be a list")

    features: list[BuildFeatureDescriptor] = []
    for item in raw:
        if not isinstance(item, dict) or "type" not in item:
            raise InvalidPayloadError("Each feature needs a type")
        parameters = item.get("parameters") or {}
        if not isinstance(parameters, dict):
            raise InvalidPayloadError("Feature parameters must be an object")
        features.append(
            BuildFeatureDescriptor(
                type=str(item["type"]),
                # Host parameters are strings; null values stay absent
                parameters={str(k): str(v) for k, v in parameters.items() if v is not None},
                id=str(item.get("id", "")),
                enabled=_parse_enabled(item.get("enabled", True)),
            )
        )
    return features


def _parse_enabled(value: Any) -> bool:
    # Host flags may arrive as JSON booleans or as "true"/"false" strings
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    raise InvalidPayloadError(f"Invalid feature enabled flag: {value!r}")


def _parse_vcs_roots(raw: Any) -> list[VcsRootEntry]:
    if not isinstance(raw, list):
        raise InvalidPayloadError("vcsRoots must be a list")

    roots: list[VcsRootEntry] = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("currentRevision"):
            raise InvalidPayloadError("Each VCS root needs a currentRevision")
        roots.append(VcsRootEntry(name=str(item.get("name", "")), current_revision=str(item["currentRevision"])))
    return roots
