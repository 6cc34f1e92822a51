"""
Eyes server client for batch lifecycle calls.
"""

import httpx

from eyes_teamcity.core.exceptions import EyesAPIError
from eyes_teamcity.core.logging import get_logger
from .schemas import NotificationRequest

logger = get_logger(__name__)


class EyesClient:
    """Client for the Eyes batch API of one server and API key."""

    JSON_CONTENT_TYPE = "application/json; charset=UTF-8"

    def __init__(self, server_url: str, api_key: str):
        self._server_url = server_url.rstrip("/")
        self._api_key = api_key

    @property
    def server_url(self) -> str:
        return self._server_url

    async def send(self, request: NotificationRequest) -> int:
        """
        Perform one notification call.

        Args:
            request: Call to perform

        Returns:
            HTTP status code of the response, whatever it is

        Raises:
            EyesAPIError: If the URL is unusable or the request fails in transit
        """
        url = request.url(self._server_url)
        headers = {"Content-Type": self.JSON_CONTENT_TYPE} if request.body is not None else None

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    request.method.value,
                    url,
                    params=request.params,
                    json=request.body,
                    headers=headers,
                )
        except httpx.InvalidURL as e:
            raise EyesAPIError(f"Failed to get API endpoint URL: {e}") from e
        except httpx.HTTPError as e:
            raise EyesAPIError(f"Failed to complete HTTP request: {e}") from e

        logger.debug("%s %s -> %s", request.method.value, request.path, response.status_code)
        return response.status_code

    async def bind_pointers(self, batch_id: str, pointer_id: str) -> int:
        """Link a build pointer to the batch."""
        return await self.send(NotificationRequest.bind(batch_id, self._api_key, pointer_id))

    async def close_batch(self, batch_id: str) -> int:
        """Request the batch to be closed."""
        return await self.send(NotificationRequest.close(batch_id, self._api_key))
