"""
Call request and meeting API routes.
"""

from typing import List
import logging

from fastapi import APIRouter, Depends, status

from liora.core.deps import (
    get_calls_service,
    get_current_user,
    require_founder,
    require_investor,
)
from liora.models.auth import User
from liora.models.schemas import (
    CallRequest,
    CallResponse,
    CallsStateResponse,
    MeetingSchedule,
    RespondToCallRequest,
    ScheduleMeetingRequest,
    SendCallRequest,
    UpdateCallStatus,
)
from liora.services.calls_service import CallsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/calls", tags=["calls"])


@router.post("/requests", response_model=CallRequest, status_code=status.HTTP_201_CREATED)
async def send_call_request(
    body: SendCallRequest,
    user: User = Depends(require_investor),
    calls: CallsService = Depends(get_calls_service)
):
    """
    Ask a company's founder for a call.

    The investor defaults to the logged-in user.
    """
    return await calls.send_call_request(
        investor_id=body.investor_id or user.id,
        investor_name=body.investor_name or user.name,
        company_id=body.company_id,
        message=body.message,
    )


@router.get("/requests", response_model=List[CallRequest])
async def list_call_requests(
    user: User = Depends(get_current_user),
    calls: CallsService = Depends(get_calls_service)
):
    """Call requests visible to the logged-in user."""
    return calls.get_call_requests_for_user(user.id, user.type, user.company_id)


@router.post("/requests/{request_id}/respond", response_model=CallRequest)
async def respond_to_call_request(
    request_id: str,
    body: RespondToCallRequest,
    user: User = Depends(require_founder),
    calls: CallsService = Depends(get_calls_service)
):
    """Accept or decline a call request."""
    response = CallResponse(
        request_id=request_id,
        status=body.status,
        message=body.message,
        proposed_times=body.proposed_times,
    )
    return await calls.respond_to_call_request(request_id, response)


@router.patch("/requests/{request_id}/status", response_model=CallRequest)
async def update_call_status(
    request_id: str,
    body: UpdateCallStatus,
    user: User = Depends(get_current_user),
    calls: CallsService = Depends(get_calls_service)
):
    return await calls.update_call_status(request_id, body.status)


@router.post("/meetings", response_model=MeetingSchedule, status_code=status.HTTP_201_CREATED)
async def schedule_meeting(
    body: ScheduleMeetingRequest,
    user: User = Depends(get_current_user),
    calls: CallsService = Depends(get_calls_service)
):
    """Book a meeting for an existing call request."""
    return await calls.schedule_meeting(
        call_request_id=body.call_request_id,
        scheduled_time=body.scheduled_time,
        duration=body.duration,
        meeting_link=body.meeting_link,
        notes=body.notes,
    )


@router.get("/meetings", response_model=List[MeetingSchedule])
async def list_meetings(
    user: User = Depends(get_current_user),
    calls: CallsService = Depends(get_calls_service)
):
    return calls.get_meetings_for_user(user.id)


@router.post("/meetings/{meeting_id}/cancel", response_model=MeetingSchedule)
async def cancel_meeting(
    meeting_id: str,
    user: User = Depends(get_current_user),
    calls: CallsService = Depends(get_calls_service)
):
    return await calls.cancel_meeting(meeting_id)


@router.get("/state", response_model=CallsStateResponse)
async def calls_state(calls: CallsService = Depends(get_calls_service)):
    """Everything in the call flow, plus the last stored error."""
    return CallsStateResponse(
        call_requests=calls.call_requests,
        meetings=calls.meetings,
        is_loading=calls.is_loading,
        error=calls.error,
    )
