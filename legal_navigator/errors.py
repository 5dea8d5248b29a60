"""Application exceptions"""


class LegalNavigatorError(Exception):
    """Base class for errors raised by the service"""


class PersistenceNotConfiguredError(LegalNavigatorError):
    """Supabase credentials are missing while running in live mode"""

    def __init__(self):
        super().__init__(
            "Supabase is not configured. Please set SUPABASE_URL and "
            "SUPABASE_SERVICE_ROLE_KEY environment variables."
        )


class StorageError(LegalNavigatorError):
    """A Supabase call failed"""

    def __init__(self, operation: str, cause: Exception):
        super().__init__(f"Error {operation}: {cause}")
        self.operation = operation
        self.cause = cause


class StaleConversationError(LegalNavigatorError):
    """The supplied conversation snapshot is behind the stored record"""

    def __init__(self, conversation_id: str, revision: int, current_state=None):
        super().__init__(
            f"Conversation {conversation_id} has moved past revision {revision}"
        )
        self.conversation_id = conversation_id
        self.revision = revision
        # Stored ConversationState the client can continue from, None if the conversation is gone
        self.current_state = current_state
