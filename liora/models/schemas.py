"""
Pydantic models and schemas for the application.
"""

from pydantic import BaseModel, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any, Literal, Union, Annotated
from datetime import datetime
from enum import Enum


class CallStatus(str, Enum):
    """Lifecycle of a call request."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class MeetingStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class NotificationType(str, Enum):
    """Discriminator values for the notification union."""
    CALL_REQUEST = "call-request"
    CALL_RESPONSE = "call-response"
    MEETING_UPDATE = "meeting-update"
    CALL_STATUS = "call-status"
    MEMO_UPDATE = "memo-update"
    SYSTEM = "system"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ============================================================================
# Calls & Meetings
# ============================================================================

class CallRequest(BaseModel):
    """An investor-initiated ask to talk with a founder."""

    id: str
    investor_id: str
    investor_name: str
    company_id: str
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    status: CallStatus = CallStatus.PENDING


class CallResponse(BaseModel):
    """Founder's answer to a call request."""

    request_id: str
    status: Literal["accepted", "declined"]
    message: Optional[str] = None
    proposed_times: Optional[List[datetime]] = None


class MeetingSchedule(BaseModel):
    """A meeting booked from a call request."""

    id: str
    call_request_id: str
    investor_id: str
    founder_id: str
    scheduled_time: datetime
    duration: int = Field(default=30, ge=1, description="Minutes")
    meeting_link: Optional[str] = None
    status: MeetingStatus = MeetingStatus.SCHEDULED
    notes: Optional[str] = None


class SendCallRequest(BaseModel):
    """Body for creating a call request."""

    company_id: str = Field(..., min_length=1)
    message: Optional[str] = Field(default=None, max_length=2000)
    investor_id: Optional[str] = None
    investor_name: Optional[str] = None


class RespondToCallRequest(BaseModel):
    status: Literal["accepted", "declined"]
    message: Optional[str] = Field(default=None, max_length=2000)
    proposed_times: Optional[List[datetime]] = None


class UpdateCallStatus(BaseModel):
    status: CallStatus


class ScheduleMeetingRequest(BaseModel):
    call_request_id: str
    scheduled_time: datetime
    duration: int = Field(default=30, ge=1, le=480)
    meeting_link: Optional[str] = None
    notes: Optional[str] = None


class CallsStateResponse(BaseModel):
    """Snapshot of the call flow, including the last stored error."""

    call_requests: List[CallRequest]
    meetings: List[MeetingSchedule]
    is_loading: bool = False
    error: Optional[str] = None


# ============================================================================
# Notifications (tagged union keyed on type)
# ============================================================================

class CallRequestPayload(BaseModel):
    call_request: CallRequest
    request_id: str


class CallResponsePayload(BaseModel):
    call_response: CallResponse


class MeetingUpdatePayload(BaseModel):
    meeting: MeetingSchedule
    action: Literal["scheduled", "cancelled"]


class CallStatusPayload(BaseModel):
    request_id: str
    status: CallStatus


class MemoUpdatePayload(BaseModel):
    company_id: str
    memo_id: Optional[str] = None


class SystemPayload(BaseModel):
    meeting_id: Optional[str] = None
    detail: Optional[str] = None


class NotificationBase(BaseModel):
    """Fields shared by every notification variant."""

    id: str
    title: str
    message: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    read: bool = False
    user_id: str


class CallRequestNotification(NotificationBase):
    type: Literal["call-request"] = "call-request"
    payload: CallRequestPayload


class CallResponseNotification(NotificationBase):
    type: Literal["call-response"] = "call-response"
    payload: CallResponsePayload


class MeetingUpdateNotification(NotificationBase):
    type: Literal["meeting-update"] = "meeting-update"
    payload: MeetingUpdatePayload


class CallStatusNotification(NotificationBase):
    type: Literal["call-status"] = "call-status"
    payload: CallStatusPayload


class MemoUpdateNotification(NotificationBase):
    type: Literal["memo-update"] = "memo-update"
    payload: MemoUpdatePayload


class SystemNotification(NotificationBase):
    type: Literal["system"] = "system"
    payload: SystemPayload = Field(default_factory=SystemPayload)


Notification = Annotated[
    Union[
        CallRequestNotification,
        CallResponseNotification,
        MeetingUpdateNotification,
        CallStatusNotification,
        MemoUpdateNotification,
        SystemNotification,
    ],
    Field(discriminator="type"),
]

notification_adapter: TypeAdapter = TypeAdapter(Notification)


class UnreadCountResponse(BaseModel):
    user_id: str
    unread: int


# ============================================================================
# Investor Preferences & Filters
# ============================================================================

class SectorPreference(BaseModel):
    name: str = Field(..., min_length=1)
    weight: float = Field(..., ge=0, le=1)


class StagePreference(BaseModel):
    stage: str = Field(..., min_length=1)
    weight: float = Field(..., ge=0, le=1)


class InvestmentRange(BaseModel):
    """Cheque size bounds. `max` may equal `min`."""

    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)

    @model_validator(mode="after")
    def max_not_below_min(self) -> "InvestmentRange":
        if self.max < self.min:
            raise ValueError(
                "Maximum investment must be greater than or equal to minimum")
        return self


class PreferenceCriteria(BaseModel):
    """Relative weights of the five evaluation criteria."""

    revenue_weight: float = Field(default=0.2, ge=0, le=1)
    team_weight: float = Field(default=0.2, ge=0, le=1)
    market_weight: float = Field(default=0.2, ge=0, le=1)
    product_weight: float = Field(default=0.2, ge=0, le=1)
    traction_weight: float = Field(default=0.2, ge=0, le=1)


class InvestorPreferences(BaseModel):
    """Full preference set, validated on replacement."""

    sectors: List[SectorPreference] = Field(..., min_length=1)
    stages: List[StagePreference] = Field(..., min_length=1)
    geographies: List[str] = Field(..., min_length=1)
    investment_range: InvestmentRange
    risk_tolerance: RiskLevel
    criteria: PreferenceCriteria = Field(default_factory=PreferenceCriteria)


class PreferencesUpdate(BaseModel):
    """
    Partial preference update. Stored preferences may be incomplete
    after a merge, which is what completeness measures.
    """

    sectors: Optional[List[SectorPreference]] = None
    stages: Optional[List[StagePreference]] = None
    geographies: Optional[List[str]] = None
    investment_range: Optional[Dict[str, float]] = None
    risk_tolerance: Optional[RiskLevel] = None
    criteria: Optional[PreferenceCriteria] = None


class FundingRange(BaseModel):
    min: float = 0
    max: float = 100_000_000


class CompanyFilters(BaseModel):
    sectors: List[str] = Field(default_factory=list)
    stages: List[str] = Field(default_factory=list)
    funding_range: FundingRange = Field(default_factory=FundingRange)
    location: Optional[str] = ""
    search_query: Optional[str] = ""


class CompletenessResponse(BaseModel):
    completeness: float
    populated: int
    total: int = 5
    is_preferences_setup_complete: bool


# ============================================================================
# Uploads
# ============================================================================

class UploadStatus(str, Enum):
    PENDING = "pending"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    ERROR = "error"


class UploadFileError(BaseModel):
    type: Literal["size", "type", "network", "server"]
    message: str
    retryable: bool = False


class UploadedFile(BaseModel):
    """Public view of a tracked upload."""

    id: str
    name: str
    size: int
    content_type: Optional[str] = None
    preset: Optional[str] = None
    progress: float = 0
    status: UploadStatus = UploadStatus.PENDING
    error: Optional[UploadFileError] = None
    url: Optional[str] = None
    uploaded_at: Optional[datetime] = None


class UploadPresetInfo(BaseModel):
    name: str
    max_size: int
    max_size_label: str
    accept: List[str]
    multiple: bool
    max_files: Optional[int] = None


class UploadProgressResponse(BaseModel):
    overall_progress: float
    is_uploading: bool
    has_errors: bool
    all_completed: bool
    files: List[UploadedFile]


class UploadRejection(BaseModel):
    name: str
    error: UploadFileError


class UploadBatchResponse(BaseModel):
    accepted: List[UploadedFile]
    rejected: List[UploadRejection] = Field(default_factory=list)


# ============================================================================
# Founder profile
# ============================================================================

class AnalysisStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ERROR = "error"


class CompanyDetailsUpdate(BaseModel):
    """Partial company form data; every field optional while drafting."""

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=10)
    sector: Optional[str] = None
    stage: Optional[Literal["pre-seed", "seed",
                            "series-a", "series-b", "series-c+"]] = None
    founded_year: Optional[int] = Field(default=None, ge=1900)
    location: Optional[str] = Field(default=None, min_length=1)
    website: Optional[str] = None
    tagline: Optional[str] = Field(default=None, min_length=1)
    employee_count: Optional[int] = Field(default=None, ge=1)
    funding_raised: Optional[float] = Field(default=None, ge=0)
    valuation: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def founded_year_not_future(self) -> "CompanyDetailsUpdate":
        if self.founded_year is not None and self.founded_year > datetime.utcnow().year:
            raise ValueError("Founded year cannot be in the future")
        return self


class FounderStepUpdate(BaseModel):
    current_step: int = Field(..., ge=0)
    is_form_complete: Optional[bool] = None


class FounderAnalysisUpdate(BaseModel):
    analysis_status: Optional[AnalysisStatus] = None
    analysis_progress: Optional[float] = None


class FounderProfileResponse(BaseModel):
    company_data: Dict[str, Any] = Field(default_factory=dict)
    uploaded_files: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)
    current_step: int = 0
    is_form_complete: bool = False
    last_saved: Optional[str] = None
    analysis_status: AnalysisStatus = AnalysisStatus.PENDING
    analysis_progress: float = 0


# ============================================================================
# Interview API (camelCase wire format)
# ============================================================================

class InterviewAction(str, Enum):
    INITIALIZE = "initialize"
    PROCESS_RESPONSE = "processResponse"
    RESET = "reset"
    GET_STATS = "getStats"


class InterviewRequest(BaseModel):
    """Body of POST /api/interview."""

    action: Optional[str] = None
    session_id: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class MemoryStats(BaseModel):
    total_conversations: int
    memory_health: Literal["good", "fair", "poor"] = "good"

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class WorkflowStatus(BaseModel):
    current_step: Literal["active", "completed"]
    progress: float
    questions_remaining: int

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# ============================================================================
# Service
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    environment: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Error response model."""

    error: Dict[str, Any]
