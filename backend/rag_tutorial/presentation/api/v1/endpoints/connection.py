"""Connection endpoint: probes the database behind a connection descriptor."""

from fastapi import APIRouter, Depends

from rag_tutorial.application.schemas import ConnectionTestRequest, ProcedureResult
from rag_tutorial.application.services import ConnectionService
from rag_tutorial.infrastructure.dependencies import get_connection_service

router = APIRouter(prefix="/connection", tags=["Connection"])


@router.post("/test", response_model=ProcedureResult[str])
async def test_connection(
    body: ConnectionTestRequest,
    service: ConnectionService = Depends(get_connection_service),
) -> ProcedureResult[str]:
    """Run ``SELECT VERSION()`` and report the server version or the error."""
    result = await service.test_connection(body.conn)
    if result.success:
        return ProcedureResult[str].ok(result.version or "")
    return ProcedureResult[str].fail(result.error or "Connection failed")
