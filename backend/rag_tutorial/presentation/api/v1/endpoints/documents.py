"""Document endpoints: schema setup, segmentation demo and URL indexing."""

import logging

from fastapi import APIRouter, Depends

from rag_tutorial.application.schemas import (
    DatabaseRequest,
    IndexingOutcomeSchema,
    IndexUrlRequest,
    ProcedureResult,
    SchemaSqlResponse,
    SegmentationSchema,
    SegmentRequest,
)
from rag_tutorial.application.services import IndexingService
from rag_tutorial.infrastructure.database.repositories import render_schema_sql
from rag_tutorial.infrastructure.dependencies import (
    DocumentStoreFactory,
    get_document_store_factory,
    get_indexing_service,
)
from rag_tutorial.presentation.api.v1.procedures import PROCEDURE_ERRORS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Documents"])


@router.get("/documents/schema", response_model=SchemaSqlResponse)
async def get_schema_sql() -> SchemaSqlResponse:
    """Return the ``CREATE TABLE`` statement for the documents table."""
    return SchemaSqlResponse(sql=render_schema_sql())


@router.post("/documents/schema", response_model=ProcedureResult[str])
async def ensure_schema(
    body: DatabaseRequest,
    store_factory: DocumentStoreFactory = Depends(get_document_store_factory),
) -> ProcedureResult[str]:
    """Create the vector extension and documents table if they are missing."""
    try:
        async with store_factory(body.db) as store:
            await store.ensure_schema()
    except PROCEDURE_ERRORS as e:
        return ProcedureResult[str].fail(str(e))
    return ProcedureResult[str].ok("documents table is ready")


@router.post("/segment", response_model=ProcedureResult[SegmentationSchema])
async def segment_text(
    body: SegmentRequest,
    service: IndexingService = Depends(get_indexing_service),
) -> ProcedureResult[SegmentationSchema]:
    """Split text (or the built-in sample paragraph) into chunks."""
    try:
        result = await service.segment(body.content)
    except PROCEDURE_ERRORS as e:
        return ProcedureResult[SegmentationSchema].fail(str(e))

    return ProcedureResult[SegmentationSchema].ok(
        SegmentationSchema(
            num_tokens=result.num_tokens,
            num_chunks=result.num_chunks,
            chunk_positions=result.chunk_positions,
            chunks=result.chunks,
        )
    )


@router.post("/documents/index", response_model=ProcedureResult[IndexingOutcomeSchema])
async def index_url(
    body: IndexUrlRequest,
    service: IndexingService = Depends(get_indexing_service),
    store_factory: DocumentStoreFactory = Depends(get_document_store_factory),
) -> ProcedureResult[IndexingOutcomeSchema]:
    """Fetch, segment, embed and store a web page.

    A URL that already has stored chunks is skipped and reported as a
    success with ``status="already_indexed"``.
    """
    try:
        async with store_factory(body.db) as store:
            outcome = await service.index_url(body.url, store)
    except PROCEDURE_ERRORS as e:
        return ProcedureResult[IndexingOutcomeSchema].fail(str(e))

    message = (
        f"{outcome.url} is already indexed"
        if outcome.already_indexed
        else f"Indexed {outcome.chunks} chunks from {outcome.url}"
    )
    return ProcedureResult[IndexingOutcomeSchema].ok(
        IndexingOutcomeSchema(
            url=outcome.url,
            status=outcome.status,
            chunks=outcome.chunks,
            num_tokens=outcome.num_tokens,
            message=message,
        )
    )
