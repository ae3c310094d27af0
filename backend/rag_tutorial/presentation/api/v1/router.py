"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from rag_tutorial.presentation.api.v1.endpoints.health import router as health_router
from rag_tutorial.presentation.api.v1.endpoints.connection import router as connection_router
from rag_tutorial.presentation.api.v1.endpoints.documents import router as documents_router
from rag_tutorial.presentation.api.v1.endpoints.retrieval import router as retrieval_router
from rag_tutorial.presentation.api.v1.endpoints.chat import router as chat_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(connection_router)
router.include_router(documents_router)
router.include_router(retrieval_router)
router.include_router(chat_router)
