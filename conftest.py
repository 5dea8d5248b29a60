import itertools
from typing import Any, Dict, List, Optional

import pytest

from legal_navigator.config import get_settings
from legal_navigator.database import get_supabase_admin
from legal_navigator.dependencies import get_turn_processor


class FakeRepository:
    """In-memory stand-in for ConversationRepository."""

    def __init__(self):
        self.conversations: Dict[str, Dict] = {}
        self.messages: List[Dict] = []
        self.submissions: List[Dict] = []
        self.calls: List[str] = []
        self._ids = itertools.count(1)

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def create_conversation(self, session_id: str) -> Dict:
        self.calls.append("create_conversation")
        record = {
            "id": self._next_id("conv"),
            "session_id": session_id,
            "current_step": 0,
            "form_data": {},
            "completed": False,
            "revision": 0,
        }
        self.conversations[record["id"]] = record
        return dict(record)

    def get_conversation(self, conversation_id: str) -> Optional[Dict]:
        record = self.conversations.get(conversation_id)
        return dict(record) if record else None

    def get_conversation_by_session_id(self, session_id: str) -> Optional[Dict]:
        self.calls.append("get_conversation_by_session_id")
        for record in reversed(list(self.conversations.values())):
            if record["session_id"] == session_id:
                return dict(record)
        return None

    def update_conversation(self, conversation_id: str, updates: Dict[str, Any],
                            expected_revision: Optional[int] = None) -> Optional[Dict]:
        self.calls.append("update_conversation")
        record = self.conversations.get(conversation_id)
        if record is None:
            return None
        if expected_revision is not None:
            if record["revision"] != expected_revision:
                return None
            record["revision"] = expected_revision + 1
        record.update(updates)
        return dict(record)

    def save_message(self, conversation_id: str, message_text: str, sender: str, message_order: int) -> Dict:
        self.calls.append(f"save_message:{sender}")
        record = {
            "id": self._next_id("msg"),
            "conversation_id": conversation_id,
            "message_text": message_text,
            "sender": sender,
            "message_order": message_order,
        }
        self.messages.append(record)
        return dict(record)

    def get_messages_by_conversation_id(self, conversation_id: str) -> List[Dict]:
        rows = [m for m in self.messages if m["conversation_id"] == conversation_id]
        return sorted(rows, key=lambda m: m["message_order"])

    def count_messages(self, conversation_id: str) -> int:
        return len([m for m in self.messages if m["conversation_id"] == conversation_id])

    def create_form_submission(self, conversation_id: str, form_data: Dict[str, Any],
                               form_type: str = "appearance_form") -> Dict:
        self.calls.append("create_form_submission")
        record = {
            "id": self._next_id("sub"),
            "conversation_id": conversation_id,
            "form_type": form_type,
            "form_data": dict(form_data),
            "pdf_generated": False,
        }
        self.submissions.append(record)
        return dict(record)

    def get_form_submission_by_conversation_id(self, conversation_id: str) -> Optional[Dict]:
        rows = [s for s in self.submissions if s["conversation_id"] == conversation_id]
        return dict(rows[-1]) if rows else None

    def mark_pdf_generated(self, conversation_id: str) -> Optional[Dict]:
        rows = [s for s in self.submissions if s["conversation_id"] == conversation_id]
        for row in rows:
            row["pdf_generated"] = True
        return dict(rows[-1]) if rows else None


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture(autouse=True)
def clear_cached_settings(monkeypatch):
    """Every test starts from default settings with no Supabase project."""
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    monkeypatch.delenv("CONVERSATION_MODE", raising=False)
    get_settings.cache_clear()
    get_turn_processor.cache_clear()
    get_supabase_admin.cache_clear()
    yield
    get_settings.cache_clear()
    get_turn_processor.cache_clear()
    get_supabase_admin.cache_clear()
