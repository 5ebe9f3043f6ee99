from pydantic import BaseModel, Field
from typing import List, Literal, Optional


class Message(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ReportChunkRequest(BaseModel):
    system_instruction: str
    payload_messages: List[dict]
    partial_report: Optional[str] = None  # prior model output, sent back as assistant context
    model: Optional[str] = None


class ReportGenerationRequest(BaseModel):
    base_instruction: str = Field(min_length=1)
    messages: List[Message]
    threshold_count: Optional[int] = Field(default=None, gt=0)
    max_parts: Optional[int] = Field(default=None, gt=0)
    model: Optional[str] = None


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"] = "user"
    content: str = ""
    roleContext: Optional[str] = None


class ChatRequest(BaseModel):
    messages: List[ChatMessage]
    active_role: str = "ceo"


class TitleRequest(BaseModel):
    userMsg: str = Field(min_length=1)
