from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "RAG Tutorial API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Fallback database used when a request carries no connection descriptor
    database_url: str = ""

    # Jina AI services (reader, segmenter, embeddings, reranker)
    jina_api_key: str = ""
    jina_reader_base_url: str = "https://r.jina.ai"
    jina_segmenter_url: str = "https://segment.jina.ai/"
    jina_api_base_url: str = "https://api.jina.ai/v1"

    embedding_model: str = "jina-embeddings-v3"
    embedding_dimensions: int = 768
    segmenter_max_chunk_length: int = 1000
    segmenter_return_tokens: bool = False
    reranker_model: str = "jina-reranker-v2-base-multilingual"
    reranker_top_n: int = 5
    query_limit: int = 50

    # Local LLM runtime
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    http_timeout: float = 120.0

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore: outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_pipeline: str = "INFO"         # IndexingService / RagChatService stages
    log_level_jina: str = "INFO"             # Jina service adapters
    log_level_ollama: str = "INFO"           # Ollama streaming client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
