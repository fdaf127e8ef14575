from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict


class TurnRole(str, Enum):
    """Conversation turn roles."""
    SYSTEM = "system"
    DEVELOPER = "developer"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


MessageContent = Union[str, List[Dict[str, Any]], None]


class ChatMessage(BaseModel):
    """Message format shared by the generic and OpenAI-shaped interfaces."""
    model_config = ConfigDict(extra="allow", use_enum_values=True)

    role: TurnRole
    content: MessageContent = None
    name: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None
    tool_call_id: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        """Dump as an OpenAI message dict, omitting unset fields."""
        return self.model_dump(exclude_none=True)


class ToolFunction(BaseModel):
    """Function definition attached to a tool."""
    name: str
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    strict: Optional[bool] = None


class Tool(BaseModel):
    """Tool definition offered to the model."""
    type: str = "function"
    function: ToolFunction


def render_chat_message(message: Optional[Union[ChatMessage, Dict[str, Any]]]) -> str:
    """Render message content as plain text.

    List content keeps only its text parts, joined by newlines.
    """
    if message is None:
        return ""
    content = message.get("content") if isinstance(message, dict) else message.content
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "\n".join(
        part.get("text", "") for part in content
        if isinstance(part, dict) and part.get("type") == "text"
    )
