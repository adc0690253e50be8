"""
Interview coordinator built on a LangGraph state graph.

The graph flow is:
START -> generate_question -> END                       (first turn)
START -> process_response -> store_memory -> check_completion
      -> [generate_question OR finalize] -> END          (every answer)

Each call into the coordinator is exactly one graph invocation. The
caller keeps the returned state and passes it back on the next turn.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
import logging
import random
import time

from langchain_core.messages import AIMessage, HumanMessage
from langgraph.graph import StateGraph, START, END

from liora.agents.state import InterviewState
from liora.core.protocols import LLMProvider

logger = logging.getLogger(__name__)

OPENING_QUESTION = (
    "Hi! I'm excited to learn about your startup. Can you start by telling me "
    "what problem you're solving and who your target customers are?"
)

MONETIZATION_WITH_CONTEXT = (
    "Based on what you've shared, I'd like to understand your business model "
    "better. How do you plan to monetize this solution?"
)

MONETIZATION_PLAIN = (
    "That's interesting! How do you plan to make money from this solution?"
)

FOLLOW_UP_QUESTIONS = [
    "What's your competitive landscape like? Who are your main competitors "
    "and what makes you different?",
    "Tell me about your team. What's your background and what key roles do "
    "you still need to fill?",
    "What are your biggest challenges right now, and how can investors help "
    "you overcome them?",
]

CLOSING_QUESTION = (
    "Is there anything else you'd like investors to know about your startup?"
)

COMPLETION_MESSAGE = (
    "Thank you for sharing! That gives me a great overview of your startup. "
    "I'll compile this information for our investment committee."
)

REPHRASE_PROMPT = """Rewrite the next interview question so it follows naturally from the founder's answers.
Keep its intent. Return only the question.

Next question: {question}"""


class InterviewCoordinator:
    """
    Runs one founder interview and keeps its question/answer memory.

    An optional LLM provider rephrases follow-up questions. Any failure
    falls back to the scripted wording.
    """

    def __init__(self, max_questions: int = 5, llm: Optional[LLMProvider] = None):
        self.max_questions = max_questions
        self.llm = llm
        self._memory: List[Dict[str, Any]] = []
        self.graph = self._build_graph()

    def _build_graph(self):
        builder = StateGraph(InterviewState)

        builder.add_node("process_response", self._process_response_node)
        builder.add_node("store_memory", self._store_memory_node)
        builder.add_node("check_completion", self._check_completion_node)
        builder.add_node("generate_question", self._generate_question_node)
        builder.add_node("finalize", self._finalize_node)

        builder.add_conditional_edges(
            START,
            self._route_entry,
            {
                "ask": "generate_question",
                "respond": "process_response",
            }
        )
        builder.add_edge("process_response", "store_memory")
        builder.add_edge("store_memory", "check_completion")
        builder.add_conditional_edges(
            "check_completion",
            self._route_after_check,
            {
                "generate": "generate_question",
                "finalize": "finalize",
            }
        )
        builder.add_edge("generate_question", END)
        builder.add_edge("finalize", END)

        return builder.compile()

    # ------------------------------------------------------------------
    # Routing (read-only)
    # ------------------------------------------------------------------

    def _route_entry(self, state: InterviewState) -> str:
        return "respond" if state.get("founder_response") else "ask"

    def _route_after_check(self, state: InterviewState) -> str:
        return "finalize" if state.get("is_complete") else "generate"

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    async def _generate_question_node(self, state: InterviewState) -> Dict:
        count = state.get("question_count", 0)
        question = self._scripted_question(count)

        if count > 0 and self.llm is not None:
            question = await self._rephrase(question)

        logger.info(
            f"Asking question {count + 1}/{state.get('max_questions', self.max_questions)}")
        return {
            "messages": [AIMessage(content=question)],
            "current_question": question,
            "founder_response": "",
            "question_count": count + 1,
        }

    def _process_response_node(self, state: InterviewState) -> Dict:
        response = state["founder_response"]
        return {"messages": [HumanMessage(content=response)]}

    def _store_memory_node(self, state: InterviewState) -> Dict:
        answer = state["founder_response"]
        self._memory.append({
            "id": f"conv-{int(time.time() * 1000)}-{random.randint(0, 99999):05d}",
            "question": state.get("current_question", ""),
            "answer": answer,
            "timestamp": datetime.utcnow().isoformat(),
            "metadata": {
                "question_number": state.get("question_count", 0),
                "response_length": len(answer),
            },
        })
        return {"conversation_history": list(self._memory)}

    def _check_completion_node(self, state: InterviewState) -> Dict:
        count = state.get("question_count", 0)
        limit = state.get("max_questions", self.max_questions)
        logger.debug(f"Completion check - Q:{count}/{limit}")
        return {"is_complete": count >= limit}

    def _finalize_node(self, state: InterviewState) -> Dict:
        logger.info(
            f"Interview complete after {state.get('question_count', 0)} questions")
        return {
            "messages": [AIMessage(content=COMPLETION_MESSAGE)],
            "current_question": "",
            "founder_response": "",
            "is_complete": True,
        }

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def _scripted_question(self, index: int) -> str:
        if index == 0:
            return OPENING_QUESTION
        if index == 1:
            return MONETIZATION_WITH_CONTEXT if self._memory else MONETIZATION_PLAIN
        if index - 2 < len(FOLLOW_UP_QUESTIONS):
            return FOLLOW_UP_QUESTIONS[index - 2]
        return CLOSING_QUESTION

    async def _rephrase(self, question: str) -> str:
        try:
            rephrased = await self.llm.generate_response(
                REPHRASE_PROMPT.format(question=question),
                context={"memory": self._memory[-3:]},
            )
        except Exception as e:
            logger.warning(f"Question rephrasing failed, using script: {e}")
            return question
        return rephrased or question

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def initial_state(self) -> InterviewState:
        return {
            "messages": [],
            "current_question": "",
            "founder_response": "",
            "conversation_history": [],
            "is_complete": False,
            "question_count": 0,
            "max_questions": self.max_questions,
        }

    async def initialize_interview(self) -> InterviewState:
        """Ask the opening question."""
        return await self.graph.ainvoke(self.initial_state())

    async def process_response(
        self,
        state: InterviewState,
        response: str
    ) -> InterviewState:
        """Record one answer and either ask the next question or wrap up."""
        if state.get("is_complete"):
            logger.info("Ignoring response to a completed interview")
            return state

        return await self.graph.ainvoke({**state, "founder_response": response})

    def clear_memory(self) -> None:
        self._memory = []

    @property
    def memory(self) -> List[Dict[str, Any]]:
        return list(self._memory)

    def get_memory_stats(self) -> Dict[str, Any]:
        return {
            "total_conversations": len(self._memory),
            "memory_health": "good",
        }

    def get_workflow_status(self, state: InterviewState) -> Dict[str, Any]:
        count = state.get("question_count", 0)
        limit = state.get("max_questions", self.max_questions) or 1
        return {
            "current_step": "completed" if state.get("is_complete") else "active",
            "progress": count / limit * 100,
            "questions_remaining": max(0, limit - count),
        }
