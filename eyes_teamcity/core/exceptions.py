"""
Custom application exceptions.
"""


class PluginError(Exception):
    """Base exception for plugin errors."""
    pass


class MissingVcsRootError(PluginError):
    """SCM integration requested for a build without VCS roots."""
    pass


class InvalidPayloadError(PluginError):
    """Build event payload from the CI host is malformed."""
    pass


class APIError(PluginError):
    """External API call failed."""
    pass


class EyesAPIError(APIError):
    """Eyes server call failed."""
    pass
