"""
Unit tests for upload validation and the UploadService state machine.
"""

from liora.core.exceptions import ResourceNotFoundError, UploadError, ValidationError
from liora.models.schemas import UploadStatus
from liora.providers.upload.http import CHUNK_SIZE, HttpxUploadTransport
from liora.providers.upload.simulated import SimulatedUploadTransport
from liora.services.upload_service import (
    MB,
    UPLOAD_PRESETS,
    UploadService,
    file_extension,
    format_file_size,
    generate_file_id,
    get_preset,
    validate_file,
)
import sys
from pathlib import Path
import asyncio
import random
import httpx
import pytest

# Ensure project root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class ScriptedTransport:
    """Reports a fixed sequence of progress values, then succeeds."""

    name = "scripted"

    def __init__(self, steps, service_ref=None):
        self.steps = steps
        self.observed = []
        self.service_ref = service_ref

    async def upload(self, file_id, filename, content, content_type, on_progress):
        for value in self.steps:
            await on_progress(value)
            self.observed.append(self.service_ref().get_file(file_id).progress)
        return f"https://files.example/{file_id}"


class BlockingTransport:
    """Never finishes until cancelled."""

    name = "blocking"

    def __init__(self):
        self.started = asyncio.Event()

    async def upload(self, file_id, filename, content, content_type, on_progress):
        self.started.set()
        await on_progress(25)
        await asyncio.Event().wait()


class BrokenTransport:
    """Fails with an unexpected exception."""

    name = "broken"

    async def upload(self, file_id, filename, content, content_type, on_progress):
        raise ConnectionResetError("connection reset by peer")


class TestUploadHelpers:
    """Tests for validation and formatting helpers."""

    def test_format_file_size(self):
        """Test 1024-based size labels."""
        assert format_file_size(0) == "0 Bytes"
        assert format_file_size(512) == "512 Bytes"
        assert format_file_size(1024) == "1 KB"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(50 * MB) == "50 MB"

    def test_generate_file_id(self):
        """Test file ids look like file_<ts>_<rand>."""
        file_id = generate_file_id()

        parts = file_id.split("_")
        assert parts[0] == "file"
        assert parts[1].isdigit()
        assert len(parts[2]) == 9

    def test_file_extension(self):
        """Test extensions are lower-cased with the dot."""
        assert file_extension("Deck.PDF") == ".pdf"
        assert file_extension("README") == ""

    def test_get_preset_is_case_insensitive(self):
        """Test presets resolve regardless of case."""
        assert get_preset("pitch_deck").name == "PITCH_DECK"
        with pytest.raises(ResourceNotFoundError):
            get_preset("SPREADSHEETS")

    def test_presets(self):
        """Test only documents and images accept several files."""
        multiple = {name for name, p in UPLOAD_PRESETS.items() if p.multiple}

        assert multiple == {"DOCUMENTS", "IMAGES"}
        assert UPLOAD_PRESETS["DOCUMENTS"].max_files == 5
        assert UPLOAD_PRESETS["IMAGES"].max_files == 10

    def test_oversized_file_rejected(self):
        """Test size is checked and is not retryable."""
        error = validate_file("deck.pdf", 51 * MB, UPLOAD_PRESETS["PITCH_DECK"])

        assert error.type == "size"
        assert error.retryable is False
        assert "exceeds maximum allowed size (50 MB)" in error.message

    def test_wrong_extension_rejected(self):
        """Test extension is checked and is not retryable."""
        error = validate_file("deck.exe", 1024, UPLOAD_PRESETS["PITCH_DECK"])

        assert error.type == "type"
        assert error.retryable is False
        assert "Supported types: .pdf,.ppt,.pptx" in error.message

    def test_size_checked_before_type(self):
        """Test a file that is both too big and the wrong type fails on size."""
        error = validate_file("movie.exe", 60 * MB, UPLOAD_PRESETS["PITCH_DECK"])

        assert error.type == "size"

    def test_valid_file(self):
        """Test a good file passes."""
        assert validate_file("deck.pptx", 1024, UPLOAD_PRESETS["PITCH_DECK"]) is None


class TestUploadService:
    """Tests for the per-file upload state machine."""

    def fast_service(self, success_rate=1.0):
        transport = SimulatedUploadTransport(
            success_rate=success_rate, tick_seconds=0, rng=random.Random(7))
        return UploadService(transport)

    @pytest.mark.asyncio
    async def test_upload_completes(self):
        """Test a valid file ends completed at exactly 100 with a URL."""
        service = self.fast_service()

        result = await service.add_files(
            "PITCH_DECK", [("deck.pdf", b"%PDF-1.4", "application/pdf")])
        await service.wait_all()

        record = service.get_file(result.accepted[0].id)
        assert record.status == UploadStatus.COMPLETED
        assert record.progress == 100
        assert record.url.endswith(f"/{record.id}/deck.pdf")
        assert record.uploaded_at is not None

    @pytest.mark.asyncio
    async def test_completed_upload_releases_bytes(self):
        """Test a delivered file no longer holds its content in memory."""
        service = self.fast_service()

        result = await service.add_files(
            "DOCUMENTS", [("notes.txt", b"x" * 5_000_000, "text/plain")])
        await service.wait_all()

        file_id = result.accepted[0].id
        assert service.get_file(file_id).status == UploadStatus.COMPLETED
        assert service.get_file(file_id).size == 5_000_000
        assert len(service._get(file_id).content) == 0

    @pytest.mark.asyncio
    async def test_failed_upload_keeps_bytes_for_retry(self):
        """Test a failed file keeps its content so it can be retried."""
        service = self.fast_service(success_rate=0.0)

        result = await service.add_files("IMAGES", [("logo.png", b"png", None)])
        await service.wait_all()

        assert service._get(result.accepted[0].id).content == b"png"

    @pytest.mark.asyncio
    async def test_progress_is_monotonic(self):
        """Test progress never moves backwards and only completion reaches 100."""
        service = None
        transport = ScriptedTransport(
            [10, 40, 30, 100, 100], service_ref=lambda: service)
        service = UploadService(transport)

        result = await service.add_files(
            "DOCUMENTS", [("notes.txt", b"hello", "text/plain")])
        await service.wait_all()

        assert transport.observed == sorted(transport.observed)
        assert max(transport.observed) < 100
        assert service.get_file(result.accepted[0].id).progress == 100

    @pytest.mark.asyncio
    async def test_rejected_files_never_upload(self):
        """Test invalid files are reported and not tracked."""
        service = self.fast_service()

        result = await service.add_files("DOCUMENTS", [
            ("notes.txt", b"ok", "text/plain"),
            ("virus.exe", b"bad", "application/octet-stream"),
        ])

        assert len(result.accepted) == 1
        assert result.rejected[0].name == "virus.exe"
        assert result.rejected[0].error.type == "type"
        assert [f.name for f in service.list_files()] == ["notes.txt"]
        await service.wait_all()

    @pytest.mark.asyncio
    async def test_single_preset_replaces_previous_file(self):
        """Test a single-file preset keeps only the newest file."""
        service = self.fast_service()

        await service.add_files("PITCH_DECK", [("v1.pdf", b"1", None)])
        await service.add_files("PITCH_DECK", [("v2.pdf", b"2", None)])
        await service.wait_all()

        assert [f.name for f in service.list_files("PITCH_DECK")] == ["v2.pdf"]

    @pytest.mark.asyncio
    async def test_single_preset_rejects_many_files(self):
        """Test several files for a single-file preset are refused."""
        service = self.fast_service()

        with pytest.raises(ValidationError):
            await service.add_files(
                "PITCH_DECK", [("a.pdf", b"1", None), ("b.pdf", b"2", None)])

    @pytest.mark.asyncio
    async def test_max_files_enforced(self):
        """Test a multi-file preset stops at its limit."""
        service = self.fast_service()
        files = [(f"doc{i}.txt", b"x", None) for i in range(6)]

        with pytest.raises(ValidationError):
            await service.add_files("DOCUMENTS", files)
        assert service.list_files() == []

    @pytest.mark.asyncio
    async def test_no_files(self):
        """Test an empty batch is refused."""
        service = self.fast_service()

        with pytest.raises(ValidationError):
            await service.add_files("IMAGES", [])

    @pytest.mark.asyncio
    async def test_failed_upload_is_retryable(self):
        """Test a simulated server failure can be retried to completion."""
        service = self.fast_service(success_rate=0.0)
        result = await service.add_files("IMAGES", [("logo.png", b"png", "image/png")])
        await service.wait_all()

        file_id = result.accepted[0].id
        record = service.get_file(file_id)
        assert record.status == UploadStatus.ERROR
        assert record.error.type == "server"
        assert record.error.retryable is True

        service.transport.success_rate = 1.0
        await service.retry(file_id)
        await service.wait_all()

        record = service.get_file(file_id)
        assert record.status == UploadStatus.COMPLETED
        assert record.error is None

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_network_error(self):
        """Test transport crashes are retryable network errors."""
        service = UploadService(BrokenTransport())
        result = await service.add_files("IMAGES", [("logo.png", b"png", None)])
        await service.wait_all()

        record = service.get_file(result.accepted[0].id)
        assert record.status == UploadStatus.ERROR
        assert record.error.type == "network"
        assert record.error.retryable is True

    @pytest.mark.asyncio
    async def test_retry_requires_error(self):
        """Test only failed uploads can be retried."""
        service = self.fast_service()
        result = await service.add_files("IMAGES", [("logo.png", b"png", None)])
        await service.wait_all()

        with pytest.raises(ValidationError):
            await service.retry(result.accepted[0].id)

    @pytest.mark.asyncio
    async def test_non_retryable_error_cannot_retry(self):
        """Test a non-retryable failure stays failed."""

        class RejectingTransport:
            name = "rejecting"

            async def upload(self, file_id, filename, content, content_type, on_progress):
                raise UploadError("Forbidden", error_type="server", retryable=False)

        service = UploadService(RejectingTransport())
        result = await service.add_files("IMAGES", [("logo.png", b"png", None)])
        await service.wait_all()

        file_id = result.accepted[0].id
        assert service.get_file(file_id).error.retryable is False
        with pytest.raises(ValidationError):
            await service.retry(file_id)

    @pytest.mark.asyncio
    async def test_cancel_returns_file_to_pending(self):
        """Test cancelling an in-flight upload resets it."""
        transport = BlockingTransport()
        service = UploadService(transport)
        result = await service.add_files("IMAGES", [("logo.png", b"png", None)])
        await transport.started.wait()

        file_id = result.accepted[0].id
        assert service.get_file(file_id).status == UploadStatus.UPLOADING

        record = await service.cancel(file_id)

        assert record.status == UploadStatus.PENDING
        assert record.progress == 0

    @pytest.mark.asyncio
    async def test_cancel_completed_is_rejected(self):
        """Test a finished upload cannot be cancelled."""
        service = self.fast_service()
        result = await service.add_files("IMAGES", [("logo.png", b"png", None)])
        await service.wait_all()

        with pytest.raises(ValidationError):
            await service.cancel(result.accepted[0].id)

    @pytest.mark.asyncio
    async def test_manual_start(self):
        """Test files admitted without auto upload wait as pending."""
        service = self.fast_service()
        result = await service.add_files(
            "IMAGES", [("logo.png", b"png", None)], auto_upload=False)

        file_id = result.accepted[0].id
        assert service.get_file(file_id).status == UploadStatus.PENDING

        await service.start(file_id)
        assert service.get_file(file_id).status == UploadStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_overall_progress(self):
        """Test overall progress is the mean of per-file progress."""
        service = self.fast_service()
        await service.add_files("IMAGES", [
            ("a.png", b"a", None), ("b.png", b"b", None)], auto_upload=False)

        progress = service.progress()
        assert progress.overall_progress == 0
        assert progress.all_completed is False

        for record in service.list_files():
            await service.start(record.id)

        progress = service.progress()
        assert progress.overall_progress == 100
        assert progress.all_completed is True
        assert progress.is_uploading is False
        assert progress.has_errors is False

    @pytest.mark.asyncio
    async def test_remove_and_clear(self):
        """Test removing one file and clearing a preset."""
        service = self.fast_service()
        result = await service.add_files("IMAGES", [
            ("a.png", b"a", None), ("b.png", b"b", None)])
        await service.wait_all()

        await service.remove(result.accepted[0].id)
        assert len(service.list_files()) == 1

        assert await service.clear("IMAGES") == 1
        assert service.list_files() == []


class TestHttpxUploadTransport:
    """Tests for the httpx upload transport against a mocked endpoint."""

    ENDPOINT = "https://uploads.example/files"

    def transport_for(self, handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpxUploadTransport(self.ENDPOINT, client=client)

    async def send(self, transport, content=b"deck", progress=None):
        async def on_progress(value):
            if progress is not None:
                progress.append(value)

        return await transport.upload(
            "file_1_abc", "deck.pdf", content, "application/pdf", on_progress)

    @pytest.mark.asyncio
    async def test_successful_upload(self):
        """Test headers are sent and progress ends at 100."""
        seen = {}

        def handler(request):
            seen["headers"] = request.headers
            seen["body"] = request.content
            return httpx.Response(200, json={"url": "https://cdn.example/deck.pdf"})

        transport = self.transport_for(handler)
        content = b"x" * (CHUNK_SIZE * 2 + 100)
        progress = []

        url = await self.send(transport, content, progress)

        assert url == "https://cdn.example/deck.pdf"
        assert seen["headers"]["X-File-Id"] == "file_1_abc"
        assert seen["headers"]["X-File-Name"] == "deck.pdf"
        assert seen["headers"]["Content-Type"] == "application/pdf"
        assert seen["body"] == content
        assert len(progress) == 3
        assert progress == sorted(progress)
        assert progress[-1] == 100

    @pytest.mark.asyncio
    async def test_client_error_is_not_retryable(self):
        """Test a 4xx answer is a final server error."""
        transport = self.transport_for(lambda request: httpx.Response(404))

        with pytest.raises(UploadError) as exc_info:
            await self.send(transport)

        assert exc_info.value.error_type == "server"
        assert exc_info.value.retryable is False
        assert "404" in exc_info.value.message
        assert transport.state.error_count == 1

    @pytest.mark.asyncio
    async def test_server_error_is_retryable(self):
        """Test a 5xx answer can be retried."""
        transport = self.transport_for(lambda request: httpx.Response(503))

        with pytest.raises(UploadError) as exc_info:
            await self.send(transport)

        assert exc_info.value.error_type == "server"
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_connection_error_is_network_error(self):
        """Test transport failures become retryable network errors."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = self.transport_for(handler)

        with pytest.raises(UploadError) as exc_info:
            await self.send(transport)

        assert exc_info.value.error_type == "network"
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self):
        """Test timeouts become retryable network errors."""
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        transport = self.transport_for(handler)

        with pytest.raises(UploadError) as exc_info:
            await self.send(transport)

        assert exc_info.value.message == "Upload timeout"
        assert exc_info.value.error_type == "network"
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_missing_url_in_response(self):
        """Test a success without a url is a retryable server error."""
        transport = self.transport_for(
            lambda request: httpx.Response(200, json={"ok": True}))

        with pytest.raises(UploadError) as exc_info:
            await self.send(transport)

        assert exc_info.value.message == "Invalid response from server"
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_failure_flows_into_upload_service(self):
        """Test a 503 leaves the tracked file in a retryable error state."""
        transport = self.transport_for(lambda request: httpx.Response(503))
        service = UploadService(transport)

        result = await service.add_files(
            "PITCH_DECK", [("deck.pdf", b"%PDF", "application/pdf")])
        await service.wait_all()

        record = service.get_file(result.accepted[0].id)
        assert record.status == UploadStatus.ERROR
        assert record.error.type == "server"
        assert record.error.retryable is True
