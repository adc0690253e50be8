"""
Calls Service - call requests, responses and meeting scheduling.

Every action mutates local state, waits a fixed simulated delay and then
drops a paired notification in the recipient's inbox. Failures are kept
in `error` and re-raised to the caller.
"""

from typing import List, Optional
from datetime import datetime
import asyncio
import logging
import random
import string
import time

from liora.core.events import event_bus, Event, EventType
from liora.core.exceptions import AppException, CallFlowError, ResourceNotFoundError
from liora.data.seed import find_company
from liora.models.auth import UserType
from liora.models.schemas import (
    CallRequest,
    CallResponse,
    CallStatus,
    MeetingSchedule,
    MeetingStatus,
    CallRequestNotification,
    CallRequestPayload,
    CallResponseNotification,
    CallResponsePayload,
    MeetingUpdateNotification,
    MeetingUpdatePayload,
    CallStatusNotification,
    CallStatusPayload,
)
from liora.services.notification_service import (
    NotificationService,
    generate_notification_id,
)

logger = logging.getLogger(__name__)


def _suffix(length: int = 9) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(random.choices(alphabet, k=length))


def generate_call_id() -> str:
    return f"call-{int(time.time() * 1000)}-{_suffix()}"


def generate_meeting_id() -> str:
    return f"meeting-{int(time.time() * 1000)}-{_suffix()}"


def founder_for_company(company_id: str) -> str:
    """Founder user who owns a company in the catalogue."""
    company = find_company(company_id)
    if company and company.founder_id:
        return company.founder_id
    return f"founder-{company_id}"


class CallsService:
    """
    Service for the call request / meeting flow.

    State is kept in memory only. There is no conflict handling,
    idempotency or retry.

    `is_loading` is a single flag shared by every action, so the first
    of several overlapping actions to finish clears it.
    """

    def __init__(
        self,
        notifications: NotificationService,
        delay_seconds: float = 1.0,
        call_requests: Optional[List[CallRequest]] = None,
        meetings: Optional[List[MeetingSchedule]] = None
    ):
        self._notifications = notifications
        self.delay_seconds = delay_seconds
        self.call_requests: List[CallRequest] = list(call_requests or [])
        self.meetings: List[MeetingSchedule] = list(meetings or [])
        self.is_loading = False
        self.error: Optional[str] = None

    async def _simulate_latency(self, factor: float = 1.0) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds * factor)

    def _begin(self) -> None:
        self.is_loading = True
        self.error = None

    def _fail(self, error: Exception, fallback: str) -> None:
        if isinstance(error, AppException):
            self.error = error.message
        else:
            self.error = str(error) or fallback
        logger.error(f"{fallback}: {self.error}")

    async def _toast(self, user_id: str, title: str, description: str) -> None:
        await event_bus.publish(Event(
            type=EventType.TOAST,
            data={"user_id": user_id, "title": title,
                  "description": description},
            source="calls_service"
        ))

    def get_call_request(self, request_id: str) -> CallRequest:
        for request in self.call_requests:
            if request.id == request_id:
                return request
        raise ResourceNotFoundError(
            "CallRequest", request_id, message="Call request not found")

    def get_meeting(self, meeting_id: str) -> MeetingSchedule:
        for meeting in self.meetings:
            if meeting.id == meeting_id:
                return meeting
        raise ResourceNotFoundError(
            "Meeting", meeting_id, message="Meeting not found")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def send_call_request(
        self,
        investor_id: str,
        investor_name: str,
        company_id: str,
        message: Optional[str] = None
    ) -> CallRequest:
        self._begin()
        try:
            call_request = CallRequest(
                id=generate_call_id(),
                investor_id=investor_id,
                investor_name=investor_name,
                company_id=company_id,
                message=message,
                timestamp=datetime.utcnow(),
                status=CallStatus.PENDING,
            )

            await self._simulate_latency()
            self.call_requests.append(call_request)

            await self.create_call_notification(call_request)
            await event_bus.publish(Event(
                type=EventType.CALL_REQUESTED,
                data={"request_id": call_request.id, "company_id": company_id},
                source="calls_service"
            ))
            company = find_company(company_id)
            await self._toast(
                investor_id,
                "Call request sent",
                f"Your request was sent to {company.name if company else 'the company'}"
            )
            logger.info(
                f"Call request {call_request.id} from {investor_id} to company {company_id}")
            return call_request
        except Exception as e:
            self._fail(e, "Failed to send call request")
            raise
        finally:
            self.is_loading = False

    async def create_call_notification(
        self, call_request: CallRequest
    ) -> CallRequestNotification:
        """Tell the company's founder about a new call request."""
        notification = CallRequestNotification(
            id=generate_notification_id(),
            title="New Call Request",
            message=f"{call_request.investor_name} wants to schedule a call",
            user_id=founder_for_company(call_request.company_id),
            payload=CallRequestPayload(
                call_request=call_request, request_id=call_request.id),
        )
        await self._notifications.add(notification)
        return notification

    async def respond_to_call_request(
        self,
        request_id: str,
        response: CallResponse
    ) -> CallRequest:
        """Accept or decline one call request. Others are left untouched."""
        self._begin()
        try:
            call_request = self.get_call_request(request_id)
            await self._simulate_latency(0.5)

            status = CallStatus(response.status)
            self.call_requests = [
                r.model_copy(update={"status": status}) if r.id == request_id else r
                for r in self.call_requests
            ]
            call_request = self.get_call_request(request_id)

            accepted = status == CallStatus.ACCEPTED
            await self._notifications.add(CallResponseNotification(
                id=generate_notification_id(),
                title="Call Request Accepted" if accepted else "Call Request Declined",
                message=response.message or f"Your call request has been {status.value}",
                user_id=call_request.investor_id,
                payload=CallResponsePayload(call_response=response),
            ))
            await event_bus.publish(Event(
                type=EventType.CALL_RESPONDED,
                data={"request_id": request_id, "status": status.value},
                source="calls_service"
            ))
            await self._toast(
                founder_for_company(call_request.company_id),
                "Call accepted" if accepted else "Call declined",
                f"You {status.value} the call with {call_request.investor_name}"
            )
            return call_request
        except Exception as e:
            self._fail(e, "Failed to respond to call request")
            raise
        finally:
            self.is_loading = False

    async def schedule_meeting(
        self,
        call_request_id: str,
        scheduled_time: datetime,
        duration: int = 30,
        meeting_link: Optional[str] = None,
        notes: Optional[str] = None
    ) -> MeetingSchedule:
        self._begin()
        try:
            call_request = self.get_call_request(call_request_id)

            meeting = MeetingSchedule(
                id=generate_meeting_id(),
                call_request_id=call_request_id,
                investor_id=call_request.investor_id,
                founder_id=founder_for_company(call_request.company_id),
                scheduled_time=scheduled_time,
                duration=duration,
                meeting_link=meeting_link,
                status=MeetingStatus.SCHEDULED,
                notes=notes,
            )

            await self._simulate_latency()
            self.meetings.append(meeting)

            for user_id in (meeting.founder_id, meeting.investor_id):
                await self._notifications.add(MeetingUpdateNotification(
                    id=generate_notification_id(),
                    title="Meeting Scheduled",
                    message=(
                        f"A {meeting.duration} minute meeting is scheduled for "
                        f"{meeting.scheduled_time.isoformat()}"
                    ),
                    user_id=user_id,
                    payload=MeetingUpdatePayload(
                        meeting=meeting, action="scheduled"),
                ))
            await event_bus.publish(Event(
                type=EventType.MEETING_SCHEDULED,
                data={"meeting_id": meeting.id,
                      "call_request_id": call_request_id},
                source="calls_service"
            ))
            await self._toast(
                meeting.investor_id,
                "Meeting scheduled",
                f"Meeting scheduled for {meeting.scheduled_time.isoformat()}"
            )
            return meeting
        except Exception as e:
            self._fail(e, "Failed to schedule meeting")
            raise
        finally:
            self.is_loading = False

    async def cancel_meeting(self, meeting_id: str) -> MeetingSchedule:
        self._begin()
        try:
            meeting = self.get_meeting(meeting_id)
            if meeting.status != MeetingStatus.SCHEDULED:
                raise CallFlowError(
                    f"Meeting is already {meeting.status.value}",
                    details={"meeting_id": meeting_id})
            await self._simulate_latency(0.5)

            self.meetings = [
                m.model_copy(update={"status": MeetingStatus.CANCELLED})
                if m.id == meeting_id else m
                for m in self.meetings
            ]
            meeting = self.get_meeting(meeting_id)

            for user_id in (meeting.founder_id, meeting.investor_id):
                await self._notifications.add(MeetingUpdateNotification(
                    id=generate_notification_id(),
                    title="Meeting Cancelled",
                    message="A scheduled meeting has been cancelled",
                    user_id=user_id,
                    payload=MeetingUpdatePayload(
                        meeting=meeting, action="cancelled"),
                ))
            await event_bus.publish(Event(
                type=EventType.MEETING_CANCELLED,
                data={"meeting_id": meeting_id},
                source="calls_service"
            ))
            await self._toast(meeting.investor_id, "Meeting cancelled",
                              "The meeting has been cancelled")
            return meeting
        except Exception as e:
            self._fail(e, "Failed to cancel meeting")
            raise
        finally:
            self.is_loading = False

    async def update_call_status(self, request_id: str, status: CallStatus) -> CallRequest:
        self._begin()
        try:
            self.get_call_request(request_id)
            await self._simulate_latency(0.5)

            self.call_requests = [
                r.model_copy(update={"status": status}) if r.id == request_id else r
                for r in self.call_requests
            ]
            call_request = self.get_call_request(request_id)

            await self._notifications.add(CallStatusNotification(
                id=generate_notification_id(),
                title="Call Status Updated",
                message=f"Call request status changed to {status.value}",
                user_id=call_request.investor_id,
                payload=CallStatusPayload(request_id=request_id, status=status),
            ))
            await event_bus.publish(Event(
                type=EventType.CALL_STATUS_CHANGED,
                data={"request_id": request_id, "status": status.value},
                source="calls_service"
            ))
            return call_request
        except Exception as e:
            self._fail(e, "Failed to update call status")
            raise
        finally:
            self.is_loading = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_call_requests_for_user(
        self,
        user_id: str,
        user_type: UserType,
        company_id: Optional[str] = None
    ) -> List[CallRequest]:
        """
        Investors see the requests they sent. Founders see requests made to
        companies they founded, or to the company on their profile.
        """
        if user_type == UserType.INVESTOR:
            return [r for r in self.call_requests if r.investor_id == user_id]

        return [
            r for r in self.call_requests
            if r.company_id == company_id
            or founder_for_company(r.company_id) == user_id
        ]

    def get_meetings_for_user(self, user_id: str) -> List[MeetingSchedule]:
        return [
            m for m in self.meetings
            if m.investor_id == user_id or m.founder_id == user_id
        ]
