"""
Names shared by the build listeners, the page handlers and the agent-side environment.
"""

PLUGIN_ID = "applitools-eyes"

# Build feature
BUILD_FEATURE_TYPE = "applitools"
BUILD_FEATURE_DISPLAY_NAME = "Applitools Support"

API_KEY_FIELD = "applitoolsPlugin.apiKey"
SERVER_URL_FIELD = "applitoolsPlugin.serverURL"
SCM_INTEGRATION_FIELD = "applitoolsPlugin.scmIntegrationEnabled"
NOTIFY_BY_COMPLETION_FIELD = "applitoolsPlugin.notifyByCompletion"

FEATURE_FIELDS = (
    API_KEY_FIELD,
    SERVER_URL_FIELD,
    SCM_INTEGRATION_FIELD,
    NOTIFY_BY_COMPLETION_FIELD,
)

DEFAULT_EYES_SERVER_URL = "https://eyesapi.applitools.com"
BATCH_ID_PREFIX = "teamcity"

# Environment variables published to build steps
API_KEY_ENV_VAR = "APPLITOOLS_API_KEY"
SERVER_URL_ENV_VAR = "APPLITOOLS_SERVER_URL"
BATCH_ID_ENV_VAR = "APPLITOOLS_BATCH_ID"
BATCH_NAME_ENV_VAR = "APPLITOOLS_BATCH_NAME"
BATCH_SEQUENCE_ENV_VAR = "APPLITOOLS_BATCH_SEQUENCE"
DONT_CLOSE_BATCHES_ENV_VAR = "APPLITOOLS_DONT_CLOSE_BATCHES"

# Eyes REST endpoints
BIND_POINTERS_PATH = "/api/sessions/batches/bindpointers/{batch_id}"
CLOSE_BATCH_PATH = "/api/sessions/batches/{batch_id}/close/bypointerid"
OVERVIEW_PATH = "/app/batchesnoauth/"

# Build log block name for notification messages
NOTIFICATION_LOG_BLOCK = "batchNotification"

OVERVIEW_FRAME_SRC = "https://*"
