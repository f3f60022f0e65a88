from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """One entry of a conversation. Frozen once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Author of the message")
    content: str = Field(..., description="Plain text content of the message")

    def as_wire(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}
