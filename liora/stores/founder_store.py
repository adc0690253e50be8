"""
Founder store: company form progress, pitch files and analysis status.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
import asyncio
import logging

from liora.models.schemas import AnalysisStatus, CompanyDetailsUpdate
from liora.stores.local_state import PersistedStore

logger = logging.getLogger(__name__)

UPLOAD_SLOTS = ("pitch_deck", "pitch_video", "pitch_audio")


class FounderStore(PersistedStore):

    storage_key = "liora-founder"
    persisted_fields = (
        "company_data",
        "uploaded_files",
        "current_step",
        "is_form_complete",
        "last_saved",
        "analysis_status",
        "analysis_progress",
    )

    def __init__(self, storage, save_delay: float = 0.5):
        super().__init__(storage)
        self.save_delay = save_delay
        self._reset_fields()

    def _reset_fields(self) -> None:
        self.company_data: Dict[str, Any] = {}
        self.uploaded_files: Dict[str, List[Dict[str, Any]]] = {}
        self.current_step: int = 0
        self.is_form_complete: bool = False
        self.last_saved: Optional[str] = None
        self.analysis_status: AnalysisStatus = AnalysisStatus.PENDING
        self.analysis_progress: float = 0

    def snapshot(self) -> Dict[str, Any]:
        return self.partialize()

    def update_company_data(self, data: CompanyDetailsUpdate) -> Dict[str, Any]:
        self.company_data = {
            **self.company_data,
            **data.model_dump(exclude_unset=True),
        }
        self.last_saved = datetime.utcnow().isoformat()
        self.persist()
        return self.company_data

    def set_uploaded_files(self, slot: str, files: List[Dict[str, Any]]) -> None:
        if slot not in UPLOAD_SLOTS:
            raise ValueError(f"Unknown upload slot: {slot}")
        self.uploaded_files = {**self.uploaded_files, slot: files}
        self.persist()

    def set_current_step(self, step: int) -> None:
        self.current_step = step
        self.persist()

    def set_form_complete(self, complete: bool) -> None:
        self.is_form_complete = complete
        self.persist()

    def set_analysis_status(self, status: AnalysisStatus) -> None:
        self.analysis_status = status
        self.persist()

    def set_analysis_progress(self, progress: float) -> None:
        self.analysis_progress = min(max(progress, 0), 100)
        self.persist()

    def reset(self) -> None:
        self._reset_fields()
        self.persist()

    async def save_company_data(self) -> str:
        """Pretend to sync the draft upstream and stamp `last_saved`."""
        logger.info(
            f"Saving company data ({len(self.company_data)} fields)")
        await asyncio.sleep(self.save_delay)
        self.last_saved = datetime.utcnow().isoformat()
        self.persist()
        return self.last_saved

    def _apply(self, data: Dict[str, Any]) -> None:
        self.company_data = dict(data.get("company_data") or {})
        self.uploaded_files = {
            k: list(v) for k, v in (data.get("uploaded_files") or {}).items()
            if k in UPLOAD_SLOTS
        }
        self.current_step = int(data.get("current_step", 0))
        self.is_form_complete = bool(data.get("is_form_complete", False))
        self.last_saved = data.get("last_saved")
        self.analysis_status = AnalysisStatus(
            data.get("analysis_status", AnalysisStatus.PENDING.value))
        self.analysis_progress = min(
            max(float(data.get("analysis_progress", 0)), 0), 100)
