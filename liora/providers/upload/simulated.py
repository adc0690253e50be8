"""
Simulated upload transport used in development and demos.
"""

import asyncio
import logging
import random
from typing import Optional

from liora.core.protocols import ProgressCallback
from liora.core.providers import register
from liora.core.exceptions import UploadError

logger = logging.getLogger(__name__)


@register("upload", "simulated")
class SimulatedUploadTransport:
    """
    Advances progress by 5-20% per tick, then succeeds with probability
    `success_rate`. Failures are retryable server errors.
    """

    def __init__(
        self,
        success_rate: float = 0.9,
        tick_seconds: float = 0.2,
        base_url: str = "https://example.com/uploads",
        rng: Optional[random.Random] = None
    ):
        self.success_rate = success_rate
        self.tick_seconds = tick_seconds
        self.base_url = base_url.rstrip("/")
        self._rng = rng or random.Random()

    @property
    def name(self) -> str:
        return "simulated"

    async def upload(
        self,
        file_id: str,
        filename: str,
        content: bytes,
        content_type: Optional[str],
        on_progress: ProgressCallback
    ) -> str:
        progress = 0.0
        while progress < 100:
            await asyncio.sleep(self.tick_seconds)
            progress = min(100.0, progress + self._rng.uniform(5, 20))
            await on_progress(progress)

        if self._rng.random() >= self.success_rate:
            logger.debug(f"Simulated failure for {file_id}")
            raise UploadError(
                "Simulated upload failure",
                error_type="server",
                retryable=True,
                details={"file_id": file_id}
            )

        return f"{self.base_url}/{file_id}/{filename}"
