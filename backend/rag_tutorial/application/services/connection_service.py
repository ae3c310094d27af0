"""Connection test use case: decodes a descriptor and probes the database."""

import logging

from rag_tutorial.application.interfaces.document_store import ConnectionProbe
from rag_tutorial.domain.entities import ConnectionDescriptor, ConnectionTestResult

logger = logging.getLogger(__name__)


class ConnectionService:
    """Application service for the "test connection" step."""

    def __init__(self, probe: ConnectionProbe):
        self._probe = probe

    async def test_connection(self, encoded: str) -> ConnectionTestResult:
        """Probe the database behind an obfuscated connection string.

        Always returns a result: malformed descriptors, unreachable hosts
        and rejected credentials all become ``success=False`` with the
        underlying error message.
        """
        try:
            descriptor = ConnectionDescriptor.from_encoded(encoded)
            version = await self._probe.server_version(descriptor)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            logger.warning("Connection test failed: %s", message)
            return ConnectionTestResult(success=False, error=message)

        logger.info("Connection test succeeded (server %s)", version)
        return ConnectionTestResult(success=True, version=version)
