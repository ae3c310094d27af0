"""Chat endpoints: streamed completions, with and without retrieved context."""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from rag_tutorial.application.schemas import (
    AskRequest,
    AskResponse,
    ChatAnswerSchema,
    ChatPromptRequest,
)
from rag_tutorial.application.services import ChatService, RagChatService
from rag_tutorial.application.services.chat_service import HELLO_PROMPT
from rag_tutorial.domain.entities import ChatAnswer, ChatMode
from rag_tutorial.infrastructure.dependencies import (
    DocumentStoreFactory,
    get_chat_service,
    get_document_store_factory,
    get_rag_chat_service,
)
from rag_tutorial.presentation.api.v1.procedures import (
    PROCEDURE_ERRORS,
    SSE_HEADERS,
    sse_event,
)

router = APIRouter(prefix="/chat", tags=["Chat"])


def _to_answer_schema(answer: ChatAnswer) -> ChatAnswerSchema:
    return ChatAnswerSchema(
        mode=answer.mode.value,
        content=answer.content,
        done=answer.done,
        error=answer.error,
        context=answer.context,
    )


@router.post("/stream")
async def chat_stream(
    body: ChatPromptRequest,
    service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Stream a completion for the prompt as Server-Sent Events.

    Each event is ``data: {"text": "..."}``; the stream ends with
    ``data: [DONE]`` or a single ``data: {"error": "..."}`` event.
    """

    async def event_generator():
        try:
            async for chunk in service.stream(body.prompt or HELLO_PROMPT):
                yield sse_event({"text": chunk})
        except PROCEDURE_ERRORS as e:
            yield sse_event({"error": str(e)})
            return
        yield sse_event("[DONE]")

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/rag/stream")
async def chat_rag_stream(
    body: AskRequest,
    service: RagChatService = Depends(get_rag_chat_service),
    store_factory: DocumentStoreFactory = Depends(get_document_store_factory),
) -> StreamingResponse:
    """Retrieve and rerank context, then stream the augmented answer as SSE."""

    async def event_generator():
        try:
            async with store_factory(body.db) as store:
                async for chunk in service.stream_rag(body.query, store):
                    yield sse_event({"text": chunk})
        except PROCEDURE_ERRORS as e:
            yield sse_event({"error": str(e)})
            return
        yield sse_event("[DONE]")

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/ask", response_model=AskResponse)
async def ask(
    body: AskRequest,
    service: RagChatService = Depends(get_rag_chat_service),
    store_factory: DocumentStoreFactory = Depends(get_document_store_factory),
) -> AskResponse:
    """Answer directly and with RAG concurrently, returning both answers."""
    try:
        async with store_factory(body.db) as store:
            direct, rag = await service.ask_both(body.query, store)
    except PROCEDURE_ERRORS as e:
        # The store could not be opened: still answer directly
        direct = await service.answer_direct(body.query)
        rag = ChatAnswer(mode=ChatMode.RAG, error=str(e))

    return AskResponse(direct=_to_answer_schema(direct), rag=_to_answer_schema(rag))
