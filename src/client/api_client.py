"""HTTP client for submitting applications to the mailer API."""

import logging
from typing import Any

import httpx

from src.client.form import FormState, Submit, SubmitFailed, SubmitSucceeded, reduce, to_multipart
from src.config import settings

logger = logging.getLogger(__name__)

SUBMIT_PATH = "/api/send-email"


class ApplicationClient:
    """HTTP client for the application submission endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API URL (defaults to settings)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url or settings.api_url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ApplicationClient":
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client, raising if not initialized."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")
        return self._client

    async def post_application(self, state: FormState) -> httpx.Response:
        """Send the form contents as a multipart request."""
        data, files = to_multipart(state)
        return await self.client.post(SUBMIT_PATH, data=data, files=files)


async def submit_form(client: ApplicationClient, state: FormState) -> FormState:
    """Run one submission attempt through the form state machine.

    Pre-submit validation failures return without any network call.
    """
    state = reduce(state, Submit())
    if not state.is_submitting:
        return state

    try:
        response = await client.post_application(state)
    except httpx.HTTPError as e:
        logger.warning(f"Application submission failed: {e}")
        return reduce(state, SubmitFailed(reason=str(e)))

    if not response.is_success:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        detail = payload.get("error") if isinstance(payload, dict) else None
        detail = detail or response.text
        logger.warning(f"Application rejected ({response.status_code}): {detail}")
        return reduce(state, SubmitFailed(reason=detail))

    return reduce(state, SubmitSucceeded())
