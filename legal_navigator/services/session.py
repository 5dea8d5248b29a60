"""Session resolution: turn a session ID or client snapshot into a conversation state"""
from typing import Dict, Optional
import secrets
import time
import logging

from legal_navigator.models.chat import ConversationState
from legal_navigator.services.persistence import ConversationRepository

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_session_id() -> str:
    """
    Generate a new session identifier

    Format is session_<unix millis>_<9 random base36 chars>, so IDs sort by
    creation time and concurrent creations practically never collide.
    """
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


def state_from_record(conversation: Dict) -> ConversationState:
    """Rebuild a conversation state from a `conversations` row"""
    return ConversationState(
        current_step=conversation["current_step"],
        form_data=conversation.get("form_data") or {},
        completed=conversation.get("completed", False),
        conversation_id=conversation["id"],
        session_id=conversation["session_id"],
        revision=conversation.get("revision") or 0,
    )


def start_conversation(repository: ConversationRepository) -> ConversationState:
    """Create a fresh persisted conversation under a new session ID"""
    session_id = generate_session_id()
    conversation = repository.create_conversation(session_id)
    return state_from_record(conversation)


def resolve_session(
    repository: ConversationRepository,
    supplied_state: Optional[ConversationState],
    supplied_session_id: Optional[str]
) -> ConversationState:
    """
    Map the client's state and/or session ID to the state for this turn

    Args:
        repository: Persistence gateway
        supplied_state: Full snapshot sent by the client, used verbatim when present
        supplied_session_id: Session ID remembered by the client

    Returns:
        Conversation state; a new conversation is created when nothing usable was supplied
    """
    if supplied_state is not None:
        logger.info(f"Using client-supplied state for conversation {supplied_state.conversation_id}")
        return supplied_state

    if supplied_session_id:
        conversation = repository.get_conversation_by_session_id(supplied_session_id)
        if conversation:
            logger.info(f"Resumed conversation {conversation['id']} for session {supplied_session_id}")
            return state_from_record(conversation)
        logger.info(f"Unknown session {supplied_session_id}, starting a new conversation")

    return start_conversation(repository)
