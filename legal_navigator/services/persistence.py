"""Supabase persistence for conversations, messages and form submissions"""
from typing import Any, Callable, Dict, List, Literal, Optional
from supabase import Client
import logging

from legal_navigator.database import get_supabase_admin
from legal_navigator.errors import PersistenceNotConfiguredError, StorageError

logger = logging.getLogger(__name__)

Sender = Literal["user", "ai"]


class ConversationRepository:
    """
    Gateway to the `conversations`, `messages` and `form_submissions` tables

    Records are returned as plain dicts with the table's column names.
    Lookups that find nothing return None instead of raising.
    """

    def __init__(self, client: Optional[Client] = None, client_factory: Callable[[], Client] = get_supabase_admin):
        self._client = client
        self._client_factory = client_factory

    @property
    def client(self) -> Client:
        # Lazy client
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def _run(self, operation: str, query_func: Callable[[], Any]) -> Any:
        try:
            return query_func()
        except PersistenceNotConfiguredError:
            raise
        except Exception as e:
            logger.error(f"Error {operation}: {e}")
            raise StorageError(operation, e) from e

    # Conversations

    def create_conversation(self, session_id: str) -> Dict:
        """Create a new conversation at step 0"""
        result = self._run("creating conversation", lambda: self.client.table("conversations").insert({
            "session_id": session_id,
            "current_step": 0,
            "form_data": {},
            "completed": False,
            "revision": 0
        }).execute())

        conversation = result.data[0]
        logger.info(f"Created conversation {conversation['id']} for session {session_id}")
        return conversation

    def get_conversation(self, conversation_id: str) -> Optional[Dict]:
        """Get a conversation by ID"""
        result = self._run("fetching conversation", lambda: self.client.table("conversations").select(
            "*"
        ).eq("id", conversation_id).limit(1).execute())

        return result.data[0] if result.data else None

    def get_conversation_by_session_id(self, session_id: str) -> Optional[Dict]:
        """Get the most recent conversation for a session"""
        result = self._run("fetching conversation", lambda: self.client.table("conversations").select(
            "*"
        ).eq("session_id", session_id).order("created_at", desc=True).limit(1).execute())

        return result.data[0] if result.data else None

    def update_conversation(
        self,
        conversation_id: str,
        updates: Dict[str, Any],
        expected_revision: Optional[int] = None
    ) -> Optional[Dict]:
        """
        Update conversation progress

        Args:
            conversation_id: Conversation UUID
            updates: Any of current_step, form_data, completed
            expected_revision: When given, the update only applies if the stored
                revision still equals it, and the revision is bumped by one

        Returns:
            Updated record, or None when no row matched
        """
        payload = {k: v for k, v in updates.items() if k in ("current_step", "form_data", "completed")}

        def query():
            q = self.client.table("conversations")
            if expected_revision is None:
                return q.update(payload).eq("id", conversation_id).execute()
            payload["revision"] = expected_revision + 1
            return q.update(payload).eq("id", conversation_id).eq("revision", expected_revision).execute()

        result = self._run("updating conversation", query)
        return result.data[0] if result.data else None

    # Messages

    def save_message(self, conversation_id: str, message_text: str, sender: Sender, message_order: int) -> Dict:
        """Append a message to the conversation log"""
        result = self._run("saving message", lambda: self.client.table("messages").insert({
            "conversation_id": conversation_id,
            "message_text": message_text,
            "sender": sender,
            "message_order": message_order
        }).execute())

        return result.data[0]

    def get_messages_by_conversation_id(self, conversation_id: str) -> List[Dict]:
        """Get all messages for a conversation, oldest first"""
        result = self._run("fetching messages", lambda: self.client.table("messages").select(
            "*"
        ).eq("conversation_id", conversation_id).order("message_order", desc=False).execute())

        return result.data or []

    def count_messages(self, conversation_id: str) -> int:
        """Number of messages already logged for a conversation"""
        result = self._run("counting messages", lambda: self.client.table("messages").select(
            "id", count="exact"
        ).eq("conversation_id", conversation_id).execute())

        return result.count or 0

    # Form submissions

    def create_form_submission(
        self,
        conversation_id: str,
        form_data: Dict[str, Any],
        form_type: str = "appearance_form"
    ) -> Dict:
        """Record that the user asked for a document from a completed conversation"""
        result = self._run("creating form submission", lambda: self.client.table("form_submissions").insert({
            "conversation_id": conversation_id,
            "form_type": form_type,
            "form_data": form_data,
            "pdf_generated": False
        }).execute())

        submission = result.data[0]
        logger.info(f"Created {form_type} submission {submission['id']} for conversation {conversation_id}")
        return submission

    def get_form_submission_by_conversation_id(self, conversation_id: str) -> Optional[Dict]:
        """Get the latest form submission for a conversation"""
        result = self._run("fetching form submission", lambda: self.client.table("form_submissions").select(
            "*"
        ).eq("conversation_id", conversation_id).order("created_at", desc=True).limit(1).execute())

        return result.data[0] if result.data else None

    def mark_pdf_generated(self, conversation_id: str) -> Optional[Dict]:
        """Flag the conversation's submissions as rendered"""
        result = self._run("updating form submission", lambda: self.client.table("form_submissions").update({
            "pdf_generated": True
        }).eq("conversation_id", conversation_id).execute())

        return result.data[0] if result.data else None
