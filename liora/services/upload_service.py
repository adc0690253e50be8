"""
Upload Service - validation, presets and the per-file upload state machine.

Each admitted file moves pending -> uploading -> completed | error.
Transfers run as asyncio tasks; cancelling the task aborts the upload and
puts the file back to pending.
"""

from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from datetime import datetime
import asyncio
import logging
import math
import random
import string
import time

from liora.core.events import event_bus, Event, EventType
from liora.core.exceptions import (
    ResourceNotFoundError,
    UploadError,
    ValidationError,
)
from liora.core.protocols import UploadTransport
from liora.models.schemas import (
    UploadBatchResponse,
    UploadedFile,
    UploadFileError,
    UploadPresetInfo,
    UploadProgressResponse,
    UploadRejection,
    UploadStatus,
)

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass(frozen=True)
class UploadPreset:
    """Size and type limits for one kind of upload."""

    name: str
    max_size: int
    accept: Tuple[str, ...]
    multiple: bool = False
    max_files: Optional[int] = None

    def info(self) -> UploadPresetInfo:
        return UploadPresetInfo(
            name=self.name,
            max_size=self.max_size,
            max_size_label=format_file_size(self.max_size),
            accept=list(self.accept),
            multiple=self.multiple,
            max_files=self.max_files,
        )


UPLOAD_PRESETS: Dict[str, UploadPreset] = {
    "PITCH_DECK": UploadPreset("PITCH_DECK", 50 * MB, (".pdf", ".ppt", ".pptx")),
    "PITCH_VIDEO": UploadPreset("PITCH_VIDEO", 500 * MB, (".mp4", ".mov", ".avi")),
    "PITCH_AUDIO": UploadPreset("PITCH_AUDIO", 100 * MB, (".mp3", ".wav", ".m4a")),
    "DOCUMENTS": UploadPreset(
        "DOCUMENTS", 10 * MB, (".pdf", ".doc", ".docx", ".txt"),
        multiple=True, max_files=5),
    "IMAGES": UploadPreset(
        "IMAGES", 5 * MB, (".jpg", ".jpeg", ".png", ".gif", ".webp"),
        multiple=True, max_files=10),
}


def get_preset(name: str) -> UploadPreset:
    preset = UPLOAD_PRESETS.get(name.upper())
    if preset is None:
        raise ResourceNotFoundError("UploadPreset", name)
    return preset


def format_file_size(size: int) -> str:
    """Human readable size using 1024-based units."""
    if size <= 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB", "TB"]
    exponent = min(int(math.floor(math.log(size, 1024))), len(units) - 1)
    value = round(size / 1024 ** exponent, 2)
    return f"{value:g} {units[exponent]}"


def generate_file_id() -> str:
    suffix = "".join(random.choices(
        string.ascii_lowercase + string.digits, k=9))
    return f"file_{int(time.time() * 1000)}_{suffix}"


def file_extension(filename: str) -> str:
    return "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def validate_file(filename: str, size: int, preset: UploadPreset) -> Optional[UploadFileError]:
    """
    Check a file against a preset before admission.
    Size is checked first, then extension. Neither is retryable.
    """
    if size > preset.max_size:
        return UploadFileError(
            type="size",
            message=(
                f"File size ({format_file_size(size)}) exceeds maximum allowed "
                f"size ({format_file_size(preset.max_size)})"
            ),
            retryable=False,
        )

    extension = file_extension(filename)
    if extension not in preset.accept:
        return UploadFileError(
            type="type",
            message=(
                f"File type {extension or '(none)'} is not allowed. "
                f"Supported types: {','.join(preset.accept)}"
            ),
            retryable=False,
        )
    return None


@dataclass
class TrackedUpload:
    """An admitted file, its bytes until delivered, and the task moving them."""

    record: UploadedFile
    content: bytes = field(repr=False)
    task: Optional[asyncio.Task] = None


class UploadService:
    """
    Tracks uploads across presets. Nothing here outlives the process.
    """

    def __init__(self, transport: UploadTransport):
        self._transport = transport
        self._files: Dict[str, TrackedUpload] = {}

    @property
    def transport(self) -> UploadTransport:
        return self._transport

    def list_presets(self) -> List[UploadPresetInfo]:
        return [preset.info() for preset in UPLOAD_PRESETS.values()]

    def list_files(self, preset: Optional[str] = None) -> List[UploadedFile]:
        return [
            t.record for t in self._files.values()
            if preset is None or t.record.preset == preset.upper()
        ]

    def get_file(self, file_id: str) -> UploadedFile:
        return self._get(file_id).record

    def _get(self, file_id: str) -> TrackedUpload:
        tracked = self._files.get(file_id)
        if tracked is None:
            raise ResourceNotFoundError("UploadedFile", file_id)
        return tracked

    # ------------------------------------------------------------------
    # Admission
    # ------------------------------------------------------------------

    def check_batch(self, preset_name: str, count: int) -> UploadPreset:
        """Resolve the preset and check a batch of `count` files fits it."""
        preset = get_preset(preset_name)
        if count == 0:
            raise ValidationError("No files provided", field="files")

        if not preset.multiple:
            if count > 1:
                raise ValidationError(
                    f"{preset.name} accepts a single file", field="files")
        elif preset.max_files is not None:
            existing = len(self.list_files(preset.name))
            if existing + count > preset.max_files:
                raise ValidationError(
                    f"{preset.name} accepts at most {preset.max_files} files",
                    field="files")
        return preset

    async def add_files(
        self,
        preset_name: str,
        files: Sequence[Tuple[str, bytes, Optional[str]]],
        auto_upload: bool = True
    ) -> UploadBatchResponse:
        """
        Validate and admit `(filename, content, content_type)` tuples.

        Single-file presets take exactly one file and replace whatever was
        there before.
        """
        preset = self.check_batch(preset_name, len(files))

        accepted: List[TrackedUpload] = []
        rejected: List[UploadRejection] = []
        for filename, content, content_type in files:
            error = validate_file(filename, len(content), preset)
            if error:
                logger.info(f"Rejected {filename}: {error.message}")
                rejected.append(UploadRejection(name=filename, error=error))
                continue

            accepted.append(TrackedUpload(
                record=UploadedFile(
                    id=generate_file_id(),
                    name=filename,
                    size=len(content),
                    content_type=content_type,
                    preset=preset.name,
                ),
                content=content,
            ))

        if accepted and not preset.multiple:
            for existing in self.list_files(preset.name):
                await self.remove(existing.id)

        for tracked in accepted:
            self._files[tracked.record.id] = tracked
            if auto_upload:
                self.start(tracked.record.id)

        return UploadBatchResponse(
            accepted=[t.record for t in accepted],
            rejected=rejected,
        )

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def start(self, file_id: str) -> asyncio.Task:
        """Launch the transfer for a pending file."""
        tracked = self._get(file_id)
        if tracked.record.status != UploadStatus.PENDING:
            raise ValidationError(
                f"Upload {file_id} is {tracked.record.status.value}, not pending",
                field="file_id")

        tracked.task = asyncio.create_task(self._run(tracked))
        return tracked.task

    async def _run(self, tracked: TrackedUpload) -> None:
        record = tracked.record
        record.status = UploadStatus.UPLOADING
        record.progress = 0
        record.error = None
        await event_bus.publish(Event(
            type=EventType.UPLOAD_STARTED,
            data={"file_id": record.id, "name": record.name},
            source="upload_service"
        ))

        async def on_progress(value: float) -> None:
            # Never move backwards; completion alone sets 100 exactly
            record.progress = max(record.progress, min(float(value), 99.99))

        try:
            url = await self._transport.upload(
                record.id, record.name, tracked.content,
                record.content_type, on_progress)
        except asyncio.CancelledError:
            record.status = UploadStatus.PENDING
            record.progress = 0
            logger.info(f"Upload cancelled: {record.name}")
            raise
        except UploadError as e:
            await self._mark_failed(record, UploadFileError(
                type=e.error_type, message=e.message, retryable=e.retryable))
            return
        except Exception as e:
            await self._mark_failed(record, UploadFileError(
                type="network", message=str(e) or "Upload failed", retryable=True))
            return

        record.status = UploadStatus.COMPLETED
        record.progress = 100
        # Bytes are only kept for retrying a failed transfer
        tracked.content = b""
        record.url = url
        record.uploaded_at = datetime.utcnow()
        logger.info(f"Upload completed: {record.name} -> {url}")
        await event_bus.publish(Event(
            type=EventType.UPLOAD_COMPLETED,
            data={"file_id": record.id, "url": url},
            source="upload_service"
        ))

    async def _mark_failed(self, record: UploadedFile, error: UploadFileError) -> None:
        record.status = UploadStatus.ERROR
        record.error = error
        logger.warning(f"Upload failed: {record.name}: {error.message}")
        await event_bus.publish(Event(
            type=EventType.UPLOAD_FAILED,
            data={"file_id": record.id, "type": error.type,
                  "retryable": error.retryable},
            source="upload_service"
        ))

    async def cancel(self, file_id: str) -> UploadedFile:
        """Abort an in-flight transfer. The file returns to pending."""
        tracked = self._get(file_id)
        if tracked.record.status not in (UploadStatus.PENDING, UploadStatus.UPLOADING):
            raise ValidationError(
                f"Upload {file_id} is already {tracked.record.status.value}",
                field="file_id")

        await self._abort(tracked)
        tracked.record.status = UploadStatus.PENDING
        tracked.record.progress = 0
        return tracked.record

    async def _abort(self, tracked: TrackedUpload) -> None:
        task = tracked.task
        tracked.task = None
        if task is None or task.done():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def retry(self, file_id: str) -> UploadedFile:
        """Re-run a failed upload whose error is retryable."""
        tracked = self._get(file_id)
        record = tracked.record
        if record.status != UploadStatus.ERROR or record.error is None:
            raise ValidationError(
                "Only failed uploads can be retried", field="file_id")
        if not record.error.retryable:
            raise ValidationError(
                f"Upload error is not retryable: {record.error.message}",
                field="file_id")

        record.status = UploadStatus.PENDING
        record.progress = 0
        record.error = None
        self.start(file_id)
        return record

    async def remove(self, file_id: str) -> None:
        tracked = self._get(file_id)
        await self._abort(tracked)
        del self._files[file_id]

    async def clear(self, preset: Optional[str] = None) -> int:
        """Abort and drop every tracked file, or only one preset's."""
        targets = [f.id for f in self.list_files(preset)]
        for file_id in targets:
            await self.remove(file_id)
        return len(targets)

    async def wait_all(self) -> None:
        """Wait for every in-flight transfer to settle."""
        tasks = [t.task for t in self._files.values()
                 if t.task is not None and not t.task.done()]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    def progress(self, preset: Optional[str] = None) -> UploadProgressResponse:
        files = self.list_files(preset)
        overall = sum(f.progress for f in files) / len(files) if files else 0
        return UploadProgressResponse(
            overall_progress=round(overall, 2),
            is_uploading=any(f.status == UploadStatus.UPLOADING for f in files),
            has_errors=any(f.status == UploadStatus.ERROR for f in files),
            all_completed=bool(files) and all(
                f.status == UploadStatus.COMPLETED for f in files),
            files=files,
        )
