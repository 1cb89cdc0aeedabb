"""Schemas for the chat endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Request body for POST /chat. History is stored server-side by conversationId."""

    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(..., min_length=1, description="User message for the assistant.")
    conversationId: str = Field(..., min_length=1, description="Conversation ID; chat memory and preferences are scoped to it.")


class TranscribedMessageReply(BaseModel):
    """Response for POST /audio-in-text-out-chat."""

    transcribedInputText: str = Field(..., description="What the transcription model heard.")
    outputText: str = Field(..., description="The assistant's reply.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "transcribedInputText": "Are there any talks about Kotlin?",
                    "outputText": "Yes! 'Kotlin Coroutines in Practice' starts at 11:00 in Room 2.",
                }
            ]
        }
    }
