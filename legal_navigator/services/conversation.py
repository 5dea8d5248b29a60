"""
Conversation state machine

Walks a conversation through the question catalog one accepted answer at a
time. `advance` is pure: it never persists anything and never raises for user
input. Every (state, message) pair maps to exactly one transition:

    1. greeting      step 0 and no message
    2. answer        message and step < catalog length (may be rejected)
    3. confirmation  completed conversation and the message contains "yes"
    4. fallback      anything else
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from legal_navigator.models.chat import ConversationState
from legal_navigator.services.catalog import QuestionCatalog, APPEARANCE_FORM_CATALOG

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hello! I'm here to help you fill out your Appearance form for your eviction case in Indiana. "
    "I'll ask you a series of questions to gather the information needed for your court documents. "
    "Let's get started!"
)
ANSWER_PREFIX = "Thank you! "
YES_NO_REPROMPT = "Please answer 'yes' or 'no' to whether you agree to notify the court of address changes."
COMPLETION_MESSAGE = (
    "Perfect! I've collected all the information needed for your Appearance form. "
    "Your form is now ready to be generated. Would you like me to create your PDF document?"
)
GENERATING_PDF_MESSAGE = "Great! I'll generate your PDF now. Please wait a moment..."
FALLBACK_MESSAGE = "I'm sorry, I didn't understand that. Could you please try again?"


class TurnKind(str, Enum):
    """Which transition a turn took"""
    GREETING = "greeting"
    ANSWERED = "answered"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CONFIRMED = "confirmed"
    FALLBACK = "fallback"


@dataclass
class TurnResult:
    """Outcome of one call to `ConversationMachine.advance`"""
    kind: TurnKind
    state: ConversationState
    response: str
    next_question: Optional[str] = None
    form_completed: bool = False
    generate_pdf: bool = False

    @property
    def state_changed(self) -> bool:
        """True when the step or form data moved forward"""
        return self.kind in (TurnKind.ANSWERED, TurnKind.COMPLETED)

    @property
    def transcript_text(self) -> str:
        """Full AI text as it belongs in the message log"""
        if self.next_question:
            return f"{self.response}\n\n{self.next_question}"
        return self.response


class ConversationMachine:
    """Linear question-by-question interview over an injected catalog"""

    def __init__(self, catalog: QuestionCatalog = APPEARANCE_FORM_CATALOG):
        self.catalog = catalog

    def advance(self, state: ConversationState, message: Optional[str]) -> TurnResult:
        """
        Compute the next state and reply for one turn

        Args:
            state: Current conversation snapshot (not modified)
            message: User input, None for the greeting

        Returns:
            TurnResult with a new state object
        """
        if state.current_step == 0 and message is None:
            return TurnResult(
                kind=TurnKind.GREETING,
                state=_copy(state),
                response=WELCOME_MESSAGE,
                next_question=self.catalog.at(0).prompt,
            )

        if message is not None and state.current_step < self.catalog.length:
            return self._answer(state, message)

        if state.completed and message is not None and "yes" in message.lower():
            return TurnResult(
                kind=TurnKind.CONFIRMED,
                state=_copy(state),
                response=GENERATING_PDF_MESSAGE,
                generate_pdf=True,
            )

        return TurnResult(
            kind=TurnKind.FALLBACK,
            state=_copy(state),
            response=FALLBACK_MESSAGE,
        )

    def _answer(self, state: ConversationState, message: str) -> TurnResult:
        question = self.catalog.at(state.current_step)
        value = question.coerce(message)

        if value is None:
            logger.warning(f"Rejected answer for '{question.id}' at step {state.current_step}")
            return TurnResult(
                kind=TurnKind.REJECTED,
                state=_copy(state),
                response=YES_NO_REPROMPT,
            )

        form_data = dict(state.form_data)
        form_data[question.field] = value
        next_step = state.current_step + 1

        if next_step < self.catalog.length:
            return TurnResult(
                kind=TurnKind.ANSWERED,
                state=state.model_copy(update={"current_step": next_step, "form_data": form_data}),
                response=ANSWER_PREFIX + self.catalog.at(next_step).prompt,
            )

        return TurnResult(
            kind=TurnKind.COMPLETED,
            state=state.model_copy(update={
                "current_step": next_step,
                "form_data": form_data,
                "completed": True,
            }),
            response=COMPLETION_MESSAGE,
            form_completed=True,
        )


def _copy(state: ConversationState) -> ConversationState:
    return state.model_copy(deep=True)
