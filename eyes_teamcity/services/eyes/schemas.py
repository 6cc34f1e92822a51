"""
Request schemas for the Eyes batch API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import quote

from eyes_teamcity.core.constants import BIND_POINTERS_PATH, CLOSE_BATCH_PATH


class NotificationMethod(str, Enum):
    """Batch lifecycle calls and their HTTP verbs."""

    BIND = "POST"
    CLOSE = "DELETE"


@dataclass(frozen=True)
class NotificationRequest:
    """A single batch notification call."""

    method: NotificationMethod
    path: str
    api_key: str
    batch_id: str
    body: dict[str, Any] | None = None

    @classmethod
    def bind(cls, batch_id: str, api_key: str, pointer_id: str) -> "NotificationRequest":
        """Bind a secondary pointer (the build) to the batch."""
        return cls(
            method=NotificationMethod.BIND,
            path=BIND_POINTERS_PATH.format(batch_id=quote(batch_id, safe="")),
            api_key=api_key,
            batch_id=batch_id,
            body={"secondaryBatchPointerId": pointer_id},
        )

    @classmethod
    def close(cls, batch_id: str, api_key: str) -> "NotificationRequest":
        """Ask the server to close the batch."""
        return cls(
            method=NotificationMethod.CLOSE,
            path=CLOSE_BATCH_PATH.format(batch_id=quote(batch_id, safe="")),
            api_key=api_key,
            batch_id=batch_id,
        )

    def url(self, server_url: str) -> str:
        return f"{server_url.rstrip('/')}{self.path}"

    @property
    def params(self) -> dict[str, str]:
        return {"apiKey": self.api_key}
