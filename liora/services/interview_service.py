"""
Interview Service - keeps one coordinator per interview session and
exposes the four interview actions.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass
import logging

from langchain_core.messages import BaseMessage, HumanMessage
from pydantic.alias_generators import to_camel

from liora.agents import InterviewCoordinator, InterviewState
from liora.config import get_settings
from liora.core.events import event_bus, Event, EventType
from liora.core.exceptions import SessionNotFoundError, ValidationError
from liora.core.protocols import LLMConfig, LLMProvider, SessionStore
from liora.core.providers import get_llm
from liora.models.schemas import MemoryStats, WorkflowStatus
from liora.services.session_store import InMemorySessionStore

logger = logging.getLogger(__name__)


@dataclass
class InterviewSession:
    """A coordinator and the last state it produced."""

    coordinator: InterviewCoordinator
    state: InterviewState


def serialize_message(message: BaseMessage) -> Dict[str, Any]:
    return {
        "id": message.id,
        "type": "human" if isinstance(message, HumanMessage) else "ai",
        "content": message.content,
        "additional_kwargs": message.additional_kwargs,
        "response_metadata": message.response_metadata,
    }


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_camel(k): _camelize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camelize(v) for v in value]
    return value


def serialize_state(state: InterviewState) -> Dict[str, Any]:
    """Wire form of an interview state: camelCase keys, flat messages."""
    wire = {
        to_camel(key): _camelize(value)
        for key, value in state.items()
        if key != "messages"
    }
    wire["messages"] = [serialize_message(m)
                        for m in state.get("messages", [])]
    return wire


class InterviewService:
    """
    Service for the interview actions: initialize, processResponse,
    reset and getStats.

    Sessions live only in the injected SessionStore. An unknown session
    id is never rebuilt.
    """

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        max_questions: Optional[int] = None,
        llm_enabled: Optional[bool] = None
    ):
        settings = get_settings()
        self._store = store or InMemorySessionStore(
            ttl_minutes=settings.session_ttl_minutes,
            max_entries=settings.max_sessions,
        )
        self.max_questions = max_questions or settings.interview_max_questions
        self.llm_enabled = (settings.interview_llm_enabled
                            if llm_enabled is None else llm_enabled)

    @property
    def store(self) -> SessionStore:
        return self._store

    async def _get_llm(self) -> Optional[LLMProvider]:
        """LLM used for rephrasing, or None when disabled or unconfigured."""
        if not self.llm_enabled:
            return None

        settings = get_settings()
        provider = settings.default_llm_provider
        if not settings.is_provider_configured(provider):
            logger.warning(
                f"Interview LLM enabled but {provider} has no API key")
            return None

        try:
            config = settings.get_llm_config(provider)
            return await get_llm(provider, LLMConfig(model_name=config["model"]))
        except Exception as e:
            logger.error(f"Failed to initialize {provider} for interviews: {e}")
            return None

    def _get_session(self, session_id: str) -> InterviewSession:
        session = self._store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def _result(self, session: InterviewSession) -> Dict[str, Any]:
        coordinator = session.coordinator
        return {
            "state": session.state,
            "memory_stats": coordinator.get_memory_stats(),
            "workflow_status": coordinator.get_workflow_status(session.state),
        }

    async def initialize(self, session_id: str) -> Dict[str, Any]:
        """Start a fresh interview, replacing any session with this id."""
        coordinator = InterviewCoordinator(
            max_questions=self.max_questions,
            llm=await self._get_llm(),
        )
        state = await coordinator.initialize_interview()
        session = InterviewSession(coordinator=coordinator, state=state)
        self._store.set(session_id, session)

        logger.info(f"Interview session created: {session_id}")
        await event_bus.publish(Event(
            type=EventType.INTERVIEW_INITIALIZED,
            data={"session_id": session_id},
            source="interview_service"
        ))
        return self._result(session)

    async def process_response(self, session_id: str, response: Any) -> Dict[str, Any]:
        session = self._get_session(session_id)
        if not isinstance(response, str) or not response.strip():
            raise ValidationError("Response required", field="response")

        was_complete = session.state.get("is_complete", False)
        session.state = await session.coordinator.process_response(
            session.state, response)
        self._store.set(session_id, session)

        await event_bus.publish(Event(
            type=EventType.INTERVIEW_RESPONSE_PROCESSED,
            data={
                "session_id": session_id,
                "question_count": session.state.get("question_count", 0),
            },
            source="interview_service"
        ))
        if session.state.get("is_complete") and not was_complete:
            await event_bus.publish(Event(
                type=EventType.INTERVIEW_COMPLETED,
                data={"session_id": session_id},
                source="interview_service"
            ))
        return self._result(session)

    async def reset(self, session_id: str) -> Dict[str, Any]:
        """Clear memory and restart the interview in place."""
        session = self._get_session(session_id)
        session.coordinator.clear_memory()
        session.state = await session.coordinator.initialize_interview()
        self._store.set(session_id, session)
        logger.info(f"Interview session reset: {session_id}")
        return self._result(session)

    def get_stats(self, session_id: str) -> Dict[str, Any]:
        """Last stored state and derived status. Mutates nothing."""
        return self._result(self._get_session(session_id))

    def end_session(self, session_id: str) -> bool:
        return self._store.delete(session_id)


def to_response(result: Dict[str, Any]) -> Dict[str, Any]:
    """Success envelope for the interview endpoint."""
    return {
        "success": True,
        "state": serialize_state(result["state"]),
        "memoryStats": MemoryStats(**result["memory_stats"]).model_dump(by_alias=True),
        "workflowStatus": WorkflowStatus(
            **result["workflow_status"]).model_dump(by_alias=True),
    }
