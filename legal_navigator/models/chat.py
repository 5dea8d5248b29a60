"""Chat-related Pydantic models"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Union, Literal
from datetime import datetime


FormValue = Union[bool, str]


class CamelModel(BaseModel):
    """Base model that reads and writes the client's camelCase keys"""
    model_config = ConfigDict(populate_by_name=True)


class ConversationState(CamelModel):
    """Snapshot of one conversation, round-tripped by the client every turn"""
    current_step: int = Field(0, alias="currentStep", ge=0)
    form_data: Dict[str, FormValue] = Field(default_factory=dict, alias="formData")
    completed: bool = False
    conversation_id: Optional[str] = Field(None, alias="conversationId")
    session_id: Optional[str] = Field(None, alias="sessionId")
    revision: int = Field(0, ge=0, description="Number of persisted turns")


class ChatTurnRequest(CamelModel):
    """Request model for one conversation turn"""
    message: Optional[str] = Field(None, description="User message, null for the greeting")
    conversation_state: Optional[ConversationState] = Field(None, alias="conversationState")
    session_id: Optional[str] = Field(None, alias="sessionId")


class ChatTurnResponse(CamelModel):
    """Response model for one conversation turn"""
    response: str
    conversation_state: ConversationState = Field(..., alias="conversationState")
    next_question: Optional[str] = Field(None, alias="nextQuestion")
    form_completed: Optional[bool] = Field(None, alias="formCompleted")
    generate_pdf: Optional[bool] = Field(None, alias="generatePdf")


class ChatMessage(CamelModel):
    """A persisted message in a conversation transcript"""
    id: Optional[str] = None
    text: str
    sender: Literal["user", "ai"]
    order: int
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class ConversationHistoryResponse(CamelModel):
    """Transcript for a session"""
    session_id: str = Field(..., alias="sessionId")
    conversation_id: Optional[str] = Field(None, alias="conversationId")
    messages: List[ChatMessage] = Field(default_factory=list)
