"""Single-endpoint RPC client for the remote storage backend.

Every repository operation is one HTTP request to the same URL with an
``action`` query parameter and a JSON body. The server answers JSON, or a
non-2xx status with an ``{"error": ...}`` payload.
"""

import logging
from typing import Any

import httpx

from app.domain.exceptions import RepositoryError
from app.infrastructure.logging.colored_logger import RpcLogger, RpcStage

logger = logging.getLogger(__name__)
rlog = RpcLogger("app.infrastructure.remote.rpc")


class RpcClient:
    """Infrastructure adapter — posts action requests to the dashboard API.

    Uses an injected httpx.AsyncClient when given (tests, connection
    pooling); otherwise opens a short-lived client per call.
    """

    def __init__(
        self,
        endpoint_url: str,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._endpoint_url = endpoint_url
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient()

    async def call(self, action: str, body: dict[str, Any] | None = None) -> Any:
        """Invoke one action and return the decoded JSON response.

        Raises:
            RepositoryError: On transport failure, non-2xx status or a
                response that is not JSON.
        """
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            with rlog.timed_step(RpcStage.for_action(action), action):
                try:
                    response = await client.post(
                        self._endpoint_url,
                        params={"action": action},
                        json=body or {},
                    )
                except httpx.HTTPError as exc:
                    raise RepositoryError("remote", f"{action} failed: {exc}") from exc

                if not response.is_success:
                    self._raise_backend_error(action, response)

                try:
                    return response.json()
                except ValueError as exc:
                    raise RepositoryError(
                        "remote", f"{action} returned invalid JSON", response.status_code
                    ) from exc
        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _raise_backend_error(action: str, response: httpx.Response) -> None:
        """Translate an error response into a RepositoryError."""
        try:
            message = response.json().get("error") or response.text
        except (ValueError, AttributeError):
            message = response.text or response.reason_phrase
        raise RepositoryError("remote", f"{action}: {message}", response.status_code)
