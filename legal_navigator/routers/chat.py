"""Chat endpoints - guided Appearance form conversation"""
from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse
import logging

from legal_navigator.dependencies import get_turn_processor
from legal_navigator.errors import StaleConversationError
from legal_navigator.models.chat import (
    ChatTurnRequest,
    ChatTurnResponse,
    ConversationHistoryResponse
)
from legal_navigator.services.turn_processor import TurnProcessor

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ChatTurnResponse, response_model_exclude_none=True)
async def handle_chat_turn(
    request: ChatTurnRequest,
    processor: TurnProcessor = Depends(get_turn_processor)
):
    """
    Main chat endpoint - one turn of the conversation

    Send no message and no state to start (or resume, with a sessionId).
    Afterwards send back the conversationState from the previous response.
    """
    try:
        return processor.process(request)

    except StaleConversationError as e:
        # Send the stored state back so the client can continue from it
        content = {"error": str(e)}
        if e.current_state is not None:
            content["conversationState"] = e.current_state.model_dump(by_alias=True, exclude_none=True)
        return JSONResponse(status_code=409, content=content)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Chat API error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/sessions/{session_id}/messages",
    response_model=ConversationHistoryResponse,
    response_model_exclude_none=True
)
async def get_session_messages(
    session_id: str,
    processor: TurnProcessor = Depends(get_turn_processor)
):
    """Persisted transcript for a session, oldest message first"""
    try:
        history = processor.get_history(session_id)

        if history is None:
            raise HTTPException(status_code=404, detail="Session not found")

        return history

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Chat history error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
