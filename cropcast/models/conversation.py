from enum import Enum
from typing import Any, Dict, Optional, Tuple

from langchain_core.messages import AIMessage, BaseMessage
from pydantic import BaseModel, Field


class ConversationState(str, Enum):
    START = "start"
    AWAITING_MODEL = "awaiting_model"
    AWAITING_TOOL = "awaiting_tool"
    DONE = "done"
    FAILED = "failed"


class ToolRequest(BaseModel):
    """The model asked the caller to run a tool before it answers."""

    tool_name: str
    tool_input: Dict[str, Any] = Field(default_factory=dict)
    call_id: Optional[str] = None
    message: AIMessage = Field(
        description="Raw model message carrying the tool call, replayed in history."
    )


ConversationTurn = Tuple[BaseMessage, ...]
