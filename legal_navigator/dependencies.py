"""FastAPI dependencies shared by the routers"""
from functools import lru_cache
import logging

from legal_navigator.config import get_settings
from legal_navigator.services.persistence import ConversationRepository
from legal_navigator.services.turn_processor import (
    DemoTurnProcessor,
    PersistentTurnProcessor,
    TurnProcessor,
)

logger = logging.getLogger(__name__)


@lru_cache()
def get_turn_processor() -> TurnProcessor:
    """Build the turn processor for the configured mode (once per process)"""
    settings = get_settings()

    if settings.conversation_mode == "demo":
        logger.info("Conversation mode: demo (no persistence)")
        return DemoTurnProcessor()

    if not settings.supabase_configured:
        logger.error("Conversation mode: live, but Supabase is not configured")
    else:
        logger.info("Conversation mode: live")

    return PersistentTurnProcessor(
        repository=ConversationRepository(),
        form_type=settings.form_type
    )
