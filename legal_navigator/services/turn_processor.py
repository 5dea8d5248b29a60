"""
Turn processors

A turn processor runs one request through session resolution, the
conversation state machine and (optionally) persistence. The implementation
is picked once at startup from settings.conversation_mode:

- PersistentTurnProcessor stores conversations and messages in Supabase
- DemoTurnProcessor is a scripted in-memory responder with no storage
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional
import logging

from legal_navigator.errors import StaleConversationError
from legal_navigator.models.chat import (
    ChatMessage,
    ChatTurnRequest,
    ChatTurnResponse,
    ConversationHistoryResponse,
    ConversationState,
)
from legal_navigator.services.conversation import ConversationMachine, TurnKind, TurnResult
from legal_navigator.services.persistence import ConversationRepository
from legal_navigator.services.session import generate_session_id, resolve_session, state_from_record

logger = logging.getLogger(__name__)


# Sample answers used by the demo, keyed by form field
DEMO_ANSWERS: Dict[str, str] = {
    "county": "Marion",
    "court": "Superior Court",
    "caseNumber": "49D01-2024-EV-001234",
    "plaintiff": "ABC Property Management",
    "defendant": "John Smith",
    "agreeToNotify": "yes",
    "mailingAddress": "123 Main St, Indianapolis, IN 46202",
    "phone": "(317) 555-0123",
    "email": "john.smith@email.com",
}


def build_response(result: TurnResult, state: ConversationState) -> ChatTurnResponse:
    """Shape a state machine result for the client"""
    return ChatTurnResponse(
        response=result.response,
        conversation_state=state,
        next_question=result.next_question,
        form_completed=True if result.form_completed else None,
        generate_pdf=True if result.generate_pdf else None,
    )


class TurnProcessor(ABC):
    """Runs conversation turns for one operating mode"""

    def __init__(self, machine: Optional[ConversationMachine] = None):
        self.machine = machine or ConversationMachine()

    @abstractmethod
    def process(self, request: ChatTurnRequest) -> ChatTurnResponse:
        """Handle one turn"""

    @abstractmethod
    def get_history(self, session_id: str) -> Optional[ConversationHistoryResponse]:
        """Transcript for a session, None if the session is unknown"""

    @abstractmethod
    def record_pdf_generated(self, conversation_id: str) -> None:
        """Note that a document was rendered for a conversation"""


class PersistentTurnProcessor(TurnProcessor):
    """Turn processor backed by Supabase"""

    def __init__(
        self,
        repository: ConversationRepository,
        machine: Optional[ConversationMachine] = None,
        form_type: str = "appearance_form"
    ):
        super().__init__(machine)
        self.repository = repository
        self.form_type = form_type

    def process(self, request: ChatTurnRequest) -> ChatTurnResponse:
        state = resolve_session(self.repository, request.conversation_state, request.session_id)
        result = self.machine.advance(state, request.message)

        if not state.conversation_id or result.kind is TurnKind.FALLBACK:
            return build_response(result, result.state)

        new_state = self._claim_turn(state, result)
        self._log_turn(new_state, result, request.message)
        return build_response(result, new_state)

    def _claim_turn(self, state: ConversationState, result: TurnResult) -> ConversationState:
        """
        Write the new state guarded by the snapshot's revision

        Raises:
            StaleConversationError: If another turn was persisted since the snapshot,
                carrying the stored state so the client can continue from it
        """
        updates = {}
        if result.state_changed:
            updates = {
                "current_step": result.state.current_step,
                "form_data": result.state.form_data,
                "completed": result.state.completed,
            }

        record = self.repository.update_conversation(
            state.conversation_id,
            updates,
            expected_revision=state.revision
        )
        if record is None:
            logger.warning(
                f"Stale state for conversation {state.conversation_id} at revision {state.revision}"
            )
            stored = self.repository.get_conversation(state.conversation_id)
            raise StaleConversationError(
                state.conversation_id,
                state.revision,
                current_state=state_from_record(stored) if stored else None
            )

        return result.state.model_copy(update={"revision": state.revision + 1})

    def _log_turn(self, state: ConversationState, result: TurnResult, message: Optional[str]) -> None:
        conversation_id = state.conversation_id
        order = self.repository.count_messages(conversation_id)

        if message is not None:
            self.repository.save_message(conversation_id, message, "user", order)
            order += 1

        if result.kind is TurnKind.CONFIRMED:
            self.repository.create_form_submission(conversation_id, state.form_data, self.form_type)

        self.repository.save_message(conversation_id, result.transcript_text, "ai", order)

    def get_history(self, session_id: str) -> Optional[ConversationHistoryResponse]:
        conversation = self.repository.get_conversation_by_session_id(session_id)
        if not conversation:
            return None

        messages = self.repository.get_messages_by_conversation_id(conversation["id"])
        return ConversationHistoryResponse(
            session_id=session_id,
            conversation_id=conversation["id"],
            messages=[
                ChatMessage(
                    id=msg.get("id"),
                    text=msg["message_text"],
                    sender=msg["sender"],
                    order=msg["message_order"],
                    created_at=msg.get("created_at"),
                )
                for msg in messages
            ],
        )

    def record_pdf_generated(self, conversation_id: str) -> None:
        if self.repository.mark_pdf_generated(conversation_id) is None:
            logger.warning(f"No form submission to mark for conversation {conversation_id}")


class DemoTurnProcessor(TurnProcessor):
    """
    Scripted responder for demos

    Whatever the user types, the scripted sample answer for the current
    question is recorded instead, so the walkthrough always produces the
    same form. Nothing is stored.
    """

    def __init__(self, machine: Optional[ConversationMachine] = None, answers: Optional[Dict[str, str]] = None):
        super().__init__(machine)
        self.answers = DEMO_ANSWERS if answers is None else answers

    def process(self, request: ChatTurnRequest) -> ChatTurnResponse:
        state = request.conversation_state or ConversationState(session_id=generate_session_id())

        message = request.message
        catalog = self.machine.catalog
        if message is not None and state.current_step < catalog.length:
            field = catalog.at(state.current_step).field
            message = self.answers.get(field, message)

        result = self.machine.advance(state, message)
        return build_response(result, result.state)

    def get_history(self, session_id: str) -> Optional[ConversationHistoryResponse]:
        return ConversationHistoryResponse(session_id=session_id)

    def record_pdf_generated(self, conversation_id: str) -> None:
        logger.info(f"Demo mode, not recording PDF for conversation {conversation_id}")
