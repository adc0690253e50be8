"""
Interview API routes.

Responses use the `{success, ...}` envelope and camelCase keys that the
interview client expects, not the `/api/v1` error format.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from liora.core.deps import get_interview_service
from liora.core.exceptions import SessionNotFoundError, ValidationError
from liora.models.schemas import InterviewAction, InterviewRequest
from liora.services.interview_service import InterviewService, to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["interview"])


def _failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error}
    )


@router.post("/interview")
async def interview_action(
    request: Request,
    service: InterviewService = Depends(get_interview_service)
):
    """
    Run one interview action.

    - **action**: initialize | processResponse | reset | getStats
    - **sessionId**: client-generated session id
    - **data**: `{response}` for processResponse
    """
    try:
        try:
            body = InterviewRequest.model_validate(await request.json())
        except (PydanticValidationError, ValueError):
            return _failure(status.HTTP_400_BAD_REQUEST, "Invalid request body")

        session_id = body.session_id
        if body.action not in {a.value for a in InterviewAction}:
            return _failure(status.HTTP_400_BAD_REQUEST, "Invalid action")
        if not session_id:
            return _failure(status.HTTP_400_BAD_REQUEST, "Session ID required")

        action = InterviewAction(body.action)
        if action == InterviewAction.INITIALIZE:
            result = await service.initialize(session_id)
        elif action == InterviewAction.PROCESS_RESPONSE:
            result = await service.process_response(
                session_id, body.data.get("response"))
        elif action == InterviewAction.RESET:
            result = await service.reset(session_id)
        else:
            result = service.get_stats(session_id)

        return to_response(result)

    except SessionNotFoundError as e:
        return _failure(status.HTTP_404_NOT_FOUND, e.message)
    except ValidationError as e:
        return _failure(status.HTTP_400_BAD_REQUEST, e.message)
    except Exception as e:
        logger.error(f"Interview API error: {e}", exc_info=True)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@router.get("/interview")
async def interview_state(
    session_id: Optional[str] = Query(default=None, alias="sessionId"),
    service: InterviewService = Depends(get_interview_service)
):
    """Current state of an interview session."""
    if not session_id:
        return _failure(status.HTTP_400_BAD_REQUEST, "Session ID required")

    try:
        return to_response(service.get_stats(session_id))
    except SessionNotFoundError as e:
        return _failure(status.HTTP_404_NOT_FOUND, e.message)
