"""Pydantic schemas for connection testing and schema setup."""

from pydantic import BaseModel, Field


class ConnectionTestRequest(BaseModel):
    """Request body for the connection probe."""

    conn: str = Field(..., description="Base64-obfuscated database connection string")


class DatabaseRequest(BaseModel):
    """Request body for procedures that only need a database."""

    db: str | None = Field(
        default=None,
        description="Base64-obfuscated connection string; the configured DATABASE_URL is used when omitted",
    )


class SchemaSqlResponse(BaseModel):
    """DDL for the documents table, for running by hand."""

    sql: str
