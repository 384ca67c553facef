from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatTurn(BaseModel):
    """A conversation turn as the mobile and web clients send it.

    Clients may attach ``userData`` or a pre-built ``context`` to any turn;
    unknown keys are kept.
    """

    model_config = ConfigDict(extra="allow")

    role: Optional[str] = Field(default="user", description="'user' or 'assistant'")
    content: Optional[str] = None
    message: Optional[str] = None
    userData: Optional[Dict[str, Any]] = None
    context: Optional[str] = None


class ChatRequest(BaseModel):
    message: Any = Field(default=None, description="User's latest message")
    conversation: List[ChatTurn] = Field(default_factory=list)
    userData: Optional[Dict[str, Any]] = Field(
        default=None, description="Record bundle used to build the system context"
    )
    context: Optional[str] = Field(default=None, description="Pre-built system context")


class ContextRequest(BaseModel):
    userData: Optional[Dict[str, Any]] = None


class ChatWithContextRequest(BaseModel):
    message: Any = None
    conversation: List[ChatTurn] = Field(default_factory=list)
    userData: Optional[Dict[str, Any]] = None


class OcrRequest(BaseModel):
    text: Any = None
    documentType: str = "modeling_document"
