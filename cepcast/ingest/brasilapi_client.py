"""BrasilAPI HTTP client shared by the CEP, city and forecast lookups."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

BRASILAPI_BASE_URL = "https://brasilapi.com.br/api"
DEFAULT_USER_AGENT = "cepcast/0.1.0"


class BrasilApiError(Exception):
    """Raised when BrasilAPI cannot be reached or returns an unusable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class BrasilApiClient:
    """Thin async wrapper around BrasilAPI GET endpoints.

    Every request is attempted exactly once. Callers decide how a failure
    degrades; this layer only normalizes httpx errors into BrasilApiError.
    """

    def __init__(
        self,
        base_url: str = BRASILAPI_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    async def get_json(self, path: str) -> Any:
        """GET {base_url}{path} and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("BrasilAPI %s returned %d", url, status)
            raise BrasilApiError(f"HTTP {status} from {url}", status) from e
        except httpx.RequestError as e:
            logger.warning("BrasilAPI request failed for %s: %s", url, e)
            raise BrasilApiError(f"Request failed: {e}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise BrasilApiError(f"Non-JSON response from {url}", resp.status_code) from e
