"""Form-related Pydantic models"""
from pydantic import Field
from typing import Dict, Optional

from legal_navigator.models.chat import CamelModel, FormValue


class GeneratePdfRequest(CamelModel):
    """Document generation request"""
    form_data: Optional[Dict[str, FormValue]] = Field(None, alias="formData")
    conversation_id: Optional[str] = Field(None, alias="conversationId")
