"""
Founder profile API routes: the company form draft, pitch files and
analysis progress.
"""

from typing import List
import logging

from fastapi import APIRouter, Body, Depends, status

from liora.core.deps import get_founder_store, get_upload_service, require_founder
from liora.core.exceptions import ValidationError
from liora.models.auth import User
from liora.models.schemas import (
    CompanyDetailsUpdate,
    FounderAnalysisUpdate,
    FounderProfileResponse,
    FounderStepUpdate,
)
from liora.services.upload_service import UploadService
from liora.stores.founder_store import FounderStore, UPLOAD_SLOTS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/founder", tags=["founder"])


def _profile(store: FounderStore) -> FounderProfileResponse:
    return FounderProfileResponse(**store.snapshot())


@router.get("/profile", response_model=FounderProfileResponse)
async def get_profile(
    user: User = Depends(require_founder),
    store: FounderStore = Depends(get_founder_store)
):
    return _profile(store)


@router.patch("/profile", response_model=FounderProfileResponse)
async def update_profile(
    data: CompanyDetailsUpdate,
    user: User = Depends(require_founder),
    store: FounderStore = Depends(get_founder_store)
):
    """Merge company form fields into the draft."""
    store.update_company_data(data)
    return _profile(store)


@router.post("/profile/save", response_model=FounderProfileResponse)
async def save_profile(
    user: User = Depends(require_founder),
    store: FounderStore = Depends(get_founder_store)
):
    await store.save_company_data()
    return _profile(store)


@router.put("/profile/step", response_model=FounderProfileResponse)
async def set_step(
    body: FounderStepUpdate,
    user: User = Depends(require_founder),
    store: FounderStore = Depends(get_founder_store)
):
    store.set_current_step(body.current_step)
    if body.is_form_complete is not None:
        store.set_form_complete(body.is_form_complete)
    return _profile(store)


@router.put("/profile/analysis", response_model=FounderProfileResponse)
async def set_analysis(
    body: FounderAnalysisUpdate,
    user: User = Depends(require_founder),
    store: FounderStore = Depends(get_founder_store)
):
    """Progress is clamped to [0, 100]."""
    if body.analysis_status is not None:
        store.set_analysis_status(body.analysis_status)
    if body.analysis_progress is not None:
        store.set_analysis_progress(body.analysis_progress)
    return _profile(store)


@router.put("/profile/files/{slot}", response_model=FounderProfileResponse)
async def attach_files(
    slot: str,
    file_ids: List[str] = Body(...),
    user: User = Depends(require_founder),
    store: FounderStore = Depends(get_founder_store),
    uploads: UploadService = Depends(get_upload_service)
):
    """
    Attach tracked uploads to a pitch slot (pitch_deck, pitch_video or
    pitch_audio). An empty list clears the slot.
    """
    if slot not in UPLOAD_SLOTS:
        raise ValidationError(f"Unknown upload slot: {slot}", field="slot")

    files = [uploads.get_file(file_id).model_dump(mode="json")
             for file_id in file_ids]
    store.set_uploaded_files(slot, files)
    return _profile(store)


@router.delete("/profile", status_code=status.HTTP_204_NO_CONTENT)
async def reset_profile(
    user: User = Depends(require_founder),
    store: FounderStore = Depends(get_founder_store)
):
    store.reset()
