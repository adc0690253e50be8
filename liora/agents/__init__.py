"""
Interview agents.
"""

from liora.agents.state import InterviewState
from liora.agents.interview_coordinator import (
    InterviewCoordinator,
    COMPLETION_MESSAGE,
)

__all__ = ["InterviewState", "InterviewCoordinator", "COMPLETION_MESSAGE"]
