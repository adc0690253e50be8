"""
State definition for the founder interview graph.

`messages` accumulates through the add_messages reducer; every other
field is overwritten by whichever node returns it.
"""

from typing import Annotated, Any, Dict, List
from typing_extensions import TypedDict
from langchain_core.messages import AnyMessage
from langgraph.graph import add_messages


class InterviewState(TypedDict):
    messages: Annotated[List[AnyMessage], add_messages]

    # The question the founder is currently answering
    current_question: str

    # Set by the caller for a turn, cleared once the next question is asked
    founder_response: str

    # Snapshot of the coordinator's memory entries
    conversation_history: List[Dict[str, Any]]

    is_complete: bool

    # Incremented only when a question is generated
    question_count: int
    max_questions: int
