"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("WEBHOOK_PORT", "9090")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("WEBHOOK_SECRET", raising=False)
    monkeypatch.delenv("DEFAULT_SERVER_URL", raising=False)
    monkeypatch.delenv("OVERVIEW_AGENT_ID", raising=False)


# ============================================================================
# Build Fixtures
# ============================================================================

@pytest.fixture
def feature_params():
    """Parameters of a fully configured Applitools feature."""
    return {
        "applitoolsPlugin.apiKey": "secret-api-key",
        "applitoolsPlugin.serverURL": "https://eyesapi.applitools.com",
        "applitoolsPlugin.scmIntegrationEnabled": "false",
        "applitoolsPlugin.notifyByCompletion": "true",
    }


@pytest.fixture
def make_build(feature_params):
    """Factory for RunningBuild instances with an Applitools feature."""
    from eyes_teamcity.models.build import BuildFeatureDescriptor, RunningBuild, VcsRootEntry

    def _make(params=None, features=None, revisions=("abc123",), build_id=42, **overrides):
        if features is None:
            merged = dict(feature_params)
            merged.update(params or {})
            features = [BuildFeatureDescriptor(type="applitools", parameters=merged, id="BUILD_EXT_1")]
        fields = {
            "build_id": build_id,
            "build_type_id": "Project_Build",
            "build_number": "17",
            "project_name": "Project",
            "build_type_name": "Build",
        }
        fields.update(overrides)
        return RunningBuild(
            features=features,
            vcs_roots=[VcsRootEntry(name=f"root{i}", current_revision=r) for i, r in enumerate(revisions)],
            **fields,
        )

    return _make


@pytest.fixture
def build_payload():
    """JSON payload of a build event as sent by the CI host."""
    return {
        "buildId": 42,
        "buildTypeId": "Project_Build",
        "buildNumber": "17",
        "projectName": "Project",
        "buildTypeName": "Build",
        "features": [
            {
                "type": "applitools",
                "id": "BUILD_EXT_1",
                "enabled": True,
                "parameters": {
                    "applitoolsPlugin.apiKey": "secret-api-key",
                    "applitoolsPlugin.serverURL": "https://eyesapi.applitools.com",
                    "applitoolsPlugin.notifyByCompletion": "true",
                },
            }
        ],
        "vcsRoots": [{"name": "origin", "currentRevision": "abc123"}],
    }


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx AsyncClient."""
    with patch("httpx.AsyncClient") as mock:
        client_instance = AsyncMock()
        response = MagicMock()
        response.status_code = 200
        client_instance.request = AsyncMock(return_value=response)
        mock.return_value.__aenter__.return_value = client_instance
        yield client_instance


@pytest.fixture
def mock_eyes_client():
    """Create a mock EyesClient and a factory returning it."""
    client = MagicMock()
    client.bind_pointers = AsyncMock(return_value=200)
    client.close_batch = AsyncMock(return_value=200)
    factory = MagicMock(return_value=client)
    return client, factory


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def eyes_client():
    """Create an EyesClient with test config."""
    from eyes_teamcity.services.eyes.client import EyesClient
    return EyesClient("https://eyesapi.applitools.com/", "secret-api-key")


@pytest.fixture
def builds_store():
    """Create an empty BuildsStore."""
    from eyes_teamcity.state.builds import BuildsStore
    return BuildsStore(max_builds=10)
