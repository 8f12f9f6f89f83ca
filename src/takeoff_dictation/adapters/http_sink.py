"""HTTP adapter that posts committed lines to the takeoff record store."""

import logging

import httpx

from takeoff_dictation.domain.entities.committed_line import CommittedLine
from takeoff_dictation.infrastructure.retry import (
    PermanentError,
    RetryPolicy,
    TransientError,
    with_retry,
)
from takeoff_dictation.ports.record_sink import RecordSinkError

logger = logging.getLogger(__name__)


class HttpRecordSink:
    """Record store adapter implementing the RecordSink protocol.

    POSTs each committed line as JSON. 5xx responses and timeouts are
    retried with backoff; 4xx responses fail immediately.
    Uses lazy client initialization for connection reuse.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize adapter.

        Args:
            url: Endpoint that accepts committed lines
            timeout: Request timeout in seconds
            retry_policy: Backoff settings for transient failures
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self.retry_policy = retry_policy or RetryPolicy()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy client initialization for connection reuse."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def emit(self, line: CommittedLine) -> None:
        """Deliver one committed line.

        Raises:
            RecordSinkError: If the store rejected the line or stayed unreachable
        """
        try:
            await self._post(line)
        except (TransientError, PermanentError) as e:
            logger.error(f"Failed to deliver line {line.record_id or '(new)'}: {e}")
            raise RecordSinkError(str(e), record_id=line.record_id) from e
        logger.info(f"Delivered line {line.record_id or '(new)'} to {self._url}")

    @with_retry()
    async def _post(self, line: CommittedLine) -> None:
        client = await self._get_client()
        try:
            response = await client.post(self._url, json=line.to_dict())
        except httpx.TimeoutException as e:
            raise TransientError(f"Record store timed out: {e}") from e
        except httpx.TransportError as e:
            raise TransientError(f"Record store unreachable: {e}") from e

        if response.status_code >= 500:
            raise TransientError(f"Record store error {response.status_code}")
        if response.status_code >= 400:
            raise PermanentError(
                f"Record store rejected line ({response.status_code}): {response.text}"
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
