"""HTTP client for provider model-list endpoints."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from llmcatalog._internal.exceptions import RemoteFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0


class ModelListClient:
    """Fetch and decode a provider's model list with a bounded timeout.

    Args:
        timeout: Seconds allowed for the whole request.
        headers: Extra headers sent with every request.
        transport: Optional ``httpx`` transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._transport = transport

    def fetch(self, endpoint: str, *, api_key: Optional[str] = None) -> Any:
        """GET ``endpoint`` and return the decoded JSON body.

        Raises:
            RemoteFetchError: On network failure, non-success status, or a body
                that is not JSON.
        """
        headers = {"Accept": "application/json", **self.headers}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        try:
            with httpx.Client(
                timeout=self.timeout, headers=headers, transport=self._transport
            ) as client:
                response = client.get(endpoint)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise RemoteFetchError(
                f"HTTP {status} from {endpoint}",
                context={"endpoint": endpoint, "status": status},
            ) from exc
        except httpx.TimeoutException as exc:
            raise RemoteFetchError(
                f"Timed out after {self.timeout}s fetching {endpoint}",
                context={"endpoint": endpoint},
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RemoteFetchError(
                f"Could not connect to {endpoint}: {exc}",
                context={"endpoint": endpoint},
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteFetchError(
                f"{endpoint} returned invalid JSON",
                context={"endpoint": endpoint, "status": response.status_code},
            ) from exc

        logger.debug("Fetched model list from %s (%d bytes)", endpoint, len(response.content))
        return data


__all__ = ["DEFAULT_TIMEOUT", "ModelListClient"]
