"""
HTTP upload transport backed by httpx.
"""

import logging
from typing import AsyncIterator, Optional

import httpx

from liora.core.protocols import ProgressCallback, ProviderMixin
from liora.core.providers import register
from liora.core.exceptions import UploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@register("upload", "http")
class HttpxUploadTransport(ProviderMixin):
    """
    Streams the file body to `endpoint` and reports progress per chunk.

    The file id and name travel in headers. A JSON body with a `url`
    key is expected back.
    """

    def __init__(
        self,
        endpoint: str,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        super().__init__()
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self._client = client
        self._owns_client = client is None

    @property
    def name(self) -> str:
        return "http"

    async def initialize(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds))
        self.mark_initialized()

    async def cleanup(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
        self._state.initialized = False

    async def _body(
        self,
        content: bytes,
        on_progress: ProgressCallback
    ) -> AsyncIterator[bytes]:
        total = len(content) or 1
        sent = 0
        for start in range(0, len(content), CHUNK_SIZE):
            chunk = content[start:start + CHUNK_SIZE]
            yield chunk
            sent += len(chunk)
            await on_progress(round(sent * 100 / total, 2))

    async def upload(
        self,
        file_id: str,
        filename: str,
        content: bytes,
        content_type: Optional[str],
        on_progress: ProgressCallback
    ) -> str:
        if self._client is None:
            await self.initialize()

        self.record_request()
        headers = {
            "Content-Type": content_type or "application/octet-stream",
            "X-File-Id": file_id,
            "X-File-Name": filename,
        }

        try:
            response = await self._client.post(
                self.endpoint,
                content=self._body(content, on_progress),
                headers=headers,
            )
        except httpx.TimeoutException as e:
            self.record_error()
            raise UploadError("Upload timeout", error_type="network",
                              retryable=True, original_error=e)
        except httpx.TransportError as e:
            self.record_error()
            raise UploadError("Network error during upload", error_type="network",
                              retryable=True, original_error=e)

        if response.status_code < 200 or response.status_code >= 300:
            self.record_error()
            raise UploadError(
                f"Upload failed with status {response.status_code}: "
                f"{response.reason_phrase}",
                error_type="server",
                retryable=response.status_code >= 500,
                details={"status_code": response.status_code}
            )

        try:
            url = response.json()["url"]
        except (ValueError, KeyError, TypeError) as e:
            raise UploadError("Invalid response from server", error_type="server",
                              retryable=True, original_error=e)

        logger.debug(f"Uploaded {filename} to {url}")
        return url
