"""
Storage for builds seen by the lifecycle listeners.
"""

from collections import OrderedDict

from eyes_teamcity.core.config import settings
from eyes_teamcity.models.build import RunningBuild


class BuildsStore:
    """Bounded store of known builds, keyed by build id."""

    def __init__(self, max_builds: int = 1000):
        self._builds: OrderedDict[int, RunningBuild] = OrderedDict()
        self._max_builds = max_builds

    def add(self, build: RunningBuild) -> None:
        """Add or refresh a build, evicting the oldest past the limit."""
        self._builds[build.build_id] = build
        self._builds.move_to_end(build.build_id)
        while len(self._builds) > self._max_builds:
            self._builds.popitem(last=False)

    def pop(self, build_id: int) -> RunningBuild | None:
        """Remove and return a build by id."""
        return self._builds.pop(build_id, None)

    def get(self, build_id: int) -> RunningBuild | None:
        """Get a build by id without removing."""
        return self._builds.get(build_id)

    def get_all_ids(self) -> list[int]:
        """Get all known build ids, oldest first."""
        return list(self._builds.keys())

    def __contains__(self, build_id: int) -> bool:
        return build_id in self._builds

    def __len__(self) -> int:
        return len(self._builds)


# Singleton instance
known_builds = BuildsStore(settings.max_known_builds)
