"""Pydantic schemas for chat endpoints."""

from pydantic import BaseModel, Field


class ChatPromptRequest(BaseModel):
    """Request body for a plain streamed completion."""

    prompt: str | None = Field(
        default=None, description="Prompt to complete; a greeting is sent when omitted"
    )


class AskRequest(BaseModel):
    """Request body for questions answered with retrieved context."""

    query: str = Field(..., min_length=1)
    db: str | None = Field(default=None, description="Base64-obfuscated connection string")


class ChatAnswerSchema(BaseModel):
    """One accumulated answer."""

    mode: str  # "direct" | "rag"
    content: str
    done: bool
    error: str | None = None
    context: list[str] = []


class AskResponse(BaseModel):
    """Direct and RAG answers to the same question."""

    direct: ChatAnswerSchema
    rag: ChatAnswerSchema
