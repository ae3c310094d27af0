"""Retrieval endpoints: nearest-neighbour queries and reranking."""

from fastapi import APIRouter, Depends

from rag_tutorial.application.schemas import (
    NearestDocumentSchema,
    ProcedureResult,
    QueryDocumentsRequest,
    RerankDocumentSchema,
    RerankRequest,
    RerankResultSchema,
)
from rag_tutorial.application.services import RetrievalService
from rag_tutorial.infrastructure.dependencies import (
    DocumentStoreFactory,
    get_document_store_factory,
    get_retrieval_service,
)
from rag_tutorial.presentation.api.v1.procedures import PROCEDURE_ERRORS

router = APIRouter(tags=["Retrieval"])


@router.post("/documents/query", response_model=ProcedureResult[list[NearestDocumentSchema]])
async def query_documents(
    body: QueryDocumentsRequest,
    service: RetrievalService = Depends(get_retrieval_service),
    store_factory: DocumentStoreFactory = Depends(get_document_store_factory),
) -> ProcedureResult[list[NearestDocumentSchema]]:
    """Embed the question and return stored chunks by ascending cosine distance."""
    try:
        async with store_factory(body.db) as store:
            results = await service.query_documents(body.query, store, limit=body.limit)
    except PROCEDURE_ERRORS as e:
        return ProcedureResult[list[NearestDocumentSchema]].fail(str(e))

    return ProcedureResult[list[NearestDocumentSchema]].ok(
        [
            NearestDocumentSchema(url=r.url, content=r.content, distance=r.distance)
            for r in results
        ]
    )


@router.post("/rerank", response_model=ProcedureResult[list[RerankResultSchema]])
async def rerank(
    body: RerankRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> ProcedureResult[list[RerankResultSchema]]:
    """Reorder candidate documents by relevance, best first."""
    try:
        results = await service.rerank(body.query, body.documents, top_n=body.top_n)
    except PROCEDURE_ERRORS as e:
        return ProcedureResult[list[RerankResultSchema]].fail(str(e))

    return ProcedureResult[list[RerankResultSchema]].ok(
        [
            RerankResultSchema(
                index=r.index,
                document=RerankDocumentSchema(text=r.text),
                relevance_score=r.relevance_score,
            )
            for r in results
        ]
    )
