"""
Tests for models and state modules.
"""

import pytest


class TestRunningBuild:
    """Tests for RunningBuild dataclass."""

    def test_from_payload(self, build_payload):
        """Test parsing a full host payload."""
        from eyes_teamcity.models.build import RunningBuild

        build = RunningBuild.from_payload(build_payload)

        assert build.build_id == 42
        assert build.build_type_id == "Project_Build"
        assert build.build_number == "17"
        assert build.project_name == "Project"
        assert build.build_type_name == "Build"
        assert len(build.features) == 1
        assert build.features[0].type == "applitools"
        assert build.features[0].enabled is True
        assert build.vcs_roots[0].current_revision == "abc123"
        assert build.environment == {}

    def test_from_payload_coerces_strings(self, build_payload):
        """Test numeric build numbers and string build ids are accepted."""
        from eyes_teamcity.models.build import RunningBuild

        build_payload["buildId"] = "42"
        build_payload["buildNumber"] = 17
        build = RunningBuild.from_payload(build_payload)

        assert build.build_id == 42
        assert build.build_number == "17"

    def test_from_payload_drops_null_parameters(self, build_payload):
        """Test that null feature parameters stay absent."""
        from eyes_teamcity.models.build import RunningBuild

        build_payload["features"][0]["parameters"]["applitoolsPlugin.apiKey"] = None
        build = RunningBuild.from_payload(build_payload)

        assert "applitoolsPlugin.apiKey" not in build.features[0].parameters

    def test_from_payload_without_optional_lists(self, build_payload):
        """Test that features and vcsRoots may be omitted."""
        from eyes_teamcity.models.build import RunningBuild

        del build_payload["features"]
        del build_payload["vcsRoots"]
        build = RunningBuild.from_payload(build_payload)

        assert build.features == []
        assert build.vcs_roots == []

    @pytest.mark.parametrize("field", ["buildId", "buildTypeId", "buildNumber", "projectName", "buildTypeName"])
    def test_from_payload_missing_field_raises(self, build_payload, field):
        """Test that each identity field is required."""
        from eyes_teamcity.core.exceptions import InvalidPayloadError
        from eyes_teamcity.models.build import RunningBuild

        del build_payload[field]
        with pytest.raises(InvalidPayloadError):
            RunningBuild.from_payload(build_payload)

    def test_from_payload_invalid_shapes_raise(self, build_payload):
        """Test rejection of malformed payloads."""
        from eyes_teamcity.core.exceptions import InvalidPayloadError
        from eyes_teamcity.models.build import RunningBuild

        with pytest.raises(InvalidPayloadError):
            RunningBuild.from_payload([1, 2, 3])

        build_payload["buildId"] = "not-a-number"
        with pytest.raises(InvalidPayloadError):
            RunningBuild.from_payload(build_payload)

    @pytest.mark.parametrize("raw,expected", [
        (True, True),
        (False, False),
        ("true", True),
        ("False", False),
        ("false", False),
    ])
    def test_from_payload_enabled_flag(self, build_payload, raw, expected):
        """Test that string flags are parsed, not truth-tested."""
        from eyes_teamcity.models.build import RunningBuild

        build_payload["features"][0]["enabled"] = raw
        build = RunningBuild.from_payload(build_payload)

        assert build.features[0].enabled is expected

    def test_from_payload_invalid_enabled_raises(self, build_payload):
        from eyes_teamcity.core.exceptions import InvalidPayloadError
        from eyes_teamcity.models.build import RunningBuild

        build_payload["features"][0]["enabled"] = 1
        with pytest.raises(InvalidPayloadError):
            RunningBuild.from_payload(build_payload)

    def test_from_payload_vcs_root_without_revision_raises(self, build_payload):
        from eyes_teamcity.core.exceptions import InvalidPayloadError
        from eyes_teamcity.models.build import RunningBuild

        build_payload["vcsRoots"] = [{"name": "origin"}]
        with pytest.raises(InvalidPayloadError):
            RunningBuild.from_payload(build_payload)

    def test_features_of_type(self, make_build):
        """Test filtering features by type."""
        from eyes_teamcity.models.build import BuildFeatureDescriptor

        build = make_build(features=[
            BuildFeatureDescriptor(type="perfmon"),
            BuildFeatureDescriptor(type="applitools", id="A"),
            BuildFeatureDescriptor(type="applitools", id="B"),
        ])

        found = build.get_build_features_of_type("applitools")
        assert [f.id for f in found] == ["A", "B"]

    def test_build_log(self, make_build):
        """Test build log collects plain and progress messages."""
        build = make_build()
        build.log.message("plain")
        build.log.progress_message("progress", "batchNotification")

        assert build.log.lines() == ["plain", "progress"]
        assert build.log.messages[1].block == "batchNotification"
        assert len(build.log) == 2


class TestFeatureConfig:
    """Tests for FeatureConfig resolution."""

    def test_from_build(self, make_build):
        from eyes_teamcity.models.feature import FeatureConfig

        config = FeatureConfig.from_build(make_build())

        assert config.api_key == "secret-api-key"
        assert config.server_url == "https://eyesapi.applitools.com"
        assert config.scm_integration_enabled is False
        assert config.notify_by_completion is True
        assert config.has_api_key

    def test_absent_feature_returns_none(self, make_build):
        from eyes_teamcity.models.feature import FeatureConfig

        assert FeatureConfig.from_build(make_build(features=[])) is None

    def test_flags_case_insensitive(self, make_build):
        from eyes_teamcity.models.feature import FeatureConfig

        config = FeatureConfig.from_build(make_build({
            "applitoolsPlugin.scmIntegrationEnabled": "TRUE",
            "applitoolsPlugin.notifyByCompletion": "yes",
        }))

        assert config.scm_integration_enabled is True
        assert config.notify_by_completion is False

    def test_empty_values_are_absent(self, make_build):
        from eyes_teamcity.models.feature import FeatureConfig

        config = FeatureConfig.from_build(make_build({
            "applitoolsPlugin.apiKey": "",
            "applitoolsPlugin.serverURL": "",
        }))

        assert config.api_key is None
        assert config.server_url is None
        assert not config.has_api_key
        assert config.resolved_server_url == "https://eyesapi.applitools.com"

    def test_resolve_server_url(self):
        from eyes_teamcity.models.feature import resolve_server_url

        assert resolve_server_url("https://eyes.example.com/") == "https://eyes.example.com"
        assert resolve_server_url(None, "https://fallback") == "https://fallback"
        assert resolve_server_url("", "https://fallback") == "https://fallback"

    def test_all_from_build_skips_disabled(self, make_build):
        from eyes_teamcity.models.build import BuildFeatureDescriptor
        from eyes_teamcity.models.feature import FeatureConfig

        build = make_build(features=[
            BuildFeatureDescriptor(type="applitools", parameters={"applitoolsPlugin.apiKey": "off"}, enabled=False),
            BuildFeatureDescriptor(type="applitools", parameters={"applitoolsPlugin.apiKey": "on"}),
        ])

        assert [c.api_key for c in FeatureConfig.all_from_build(build)] == ["on"]

    def test_all_from_build(self, make_build):
        from eyes_teamcity.models.build import BuildFeatureDescriptor
        from eyes_teamcity.models.feature import FeatureConfig

        build = make_build(features=[
            BuildFeatureDescriptor(type="applitools", parameters={"applitoolsPlugin.apiKey": "one"}),
            BuildFeatureDescriptor(type="other"),
            BuildFeatureDescriptor(type="applitools", parameters={"applitoolsPlugin.apiKey": "two"}),
        ])

        assert [c.api_key for c in FeatureConfig.all_from_build(build)] == ["one", "two"]


class TestBuildsStore:
    """Tests for BuildsStore class."""

    def test_add_and_get(self, builds_store, make_build):
        """Test adding and getting builds."""
        build = make_build(build_id=7)
        builds_store.add(build)

        assert 7 in builds_store
        assert builds_store.get(7) is build

    def test_pop_removes_build(self, builds_store, make_build):
        """Test that pop removes the build."""
        build = make_build(build_id=7)
        builds_store.add(build)

        assert builds_store.pop(7) is build
        assert 7 not in builds_store

    def test_pop_nonexistent_returns_none(self, builds_store):
        assert builds_store.pop(999) is None

    def test_oldest_evicted(self, make_build):
        """Test that the store keeps only the newest builds."""
        from eyes_teamcity.state.builds import BuildsStore

        store = BuildsStore(max_builds=2)
        for build_id in (1, 2, 3):
            store.add(make_build(build_id=build_id))

        assert store.get_all_ids() == [2, 3]
        assert len(store) == 2

    def test_re_adding_refreshes_position(self, make_build):
        from eyes_teamcity.state.builds import BuildsStore

        store = BuildsStore(max_builds=2)
        store.add(make_build(build_id=1))
        store.add(make_build(build_id=2))
        store.add(make_build(build_id=1))
        store.add(make_build(build_id=3))

        assert store.get_all_ids() == [1, 3]
