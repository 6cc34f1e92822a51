"""
Overview iframe URLs for the build results page.
"""

import re
from urllib.parse import quote, urlsplit, urlunsplit

from eyes_teamcity.core.constants import OVERVIEW_PATH
from eyes_teamcity.models.build import RunningBuild
from eyes_teamcity.models.feature import FeatureConfig, find_feature
from eyes_teamcity.services.batch import resolve_batch_id, scm_guarded

# eyesapi.applitools.com -> eyes.applitools.com, foo-api.example.com -> foo.example.com
_API_HOST_RE = re.compile(r"^([^.]+?)-?api\.(.*)$")


def rewrite_api_host(url: str) -> str:
    """Serve the dashboard from the UI host instead of the API host."""
    try:
        parts = urlsplit(url)
        # Raises on a malformed port
        parts.port
    except ValueError:
        return url

    if not parts.hostname:
        return url

    # Only the host changes; userinfo, port and case stay as written
    userinfo, at, hostport = parts.netloc.rpartition("@")
    host, colon, port = hostport.partition(":")
    new_host = _API_HOST_RE.sub(r"\1.\2", host)
    if new_host == host:
        return url

    return urlunsplit(parts._replace(netloc=f"{userinfo}{at}{new_host}{colon}{port}"))


def build_iframe_url(server_url: str, batch_id: str, agent_id: str | None = None) -> str:
    """Dashboard URL showing a single batch without authentication."""
    url = (
        f"{server_url.rstrip('/')}{OVERVIEW_PATH}"
        f"?startInfoBatchId={quote(batch_id, safe='')}&hideBatchList=true&intercom=false"
    )
    if agent_id:
        url += f"&agentId={quote(agent_id, safe='')}"
    return rewrite_api_host(url)


def is_overview_available(build: RunningBuild) -> bool:
    """True when the build carries an enabled Applitools feature."""
    feature = find_feature(build)
    return feature is not None and feature.enabled


def overview_url(build: RunningBuild, agent_id: str | None = None) -> str:
    """Iframe URL for the build, or an empty string when it cannot be built."""
    config = FeatureConfig.from_build(build)
    if config is None or not config.server_url:
        return ""

    batch_id = resolve_batch_id(build, scm_guarded(build, config))
    return build_iframe_url(config.server_url, batch_id, agent_id)
