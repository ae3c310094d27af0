"""Unit tests for application settings configuration."""

from pathlib import Path

from rag_tutorial.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_pipeline_defaults_match_document_table():
    """Embedding width and pipeline limits default to the tutorial's values."""
    settings = Settings(_env_file=None)

    assert settings.embedding_dimensions == 768
    assert settings.segmenter_max_chunk_length == 1000
    assert settings.reranker_top_n == 5
    assert settings.query_limit == 50
    assert settings.ollama_model == "llama3.2"


def test_settings_read_environment(monkeypatch):
    """Environment variables override defaults."""
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
    monkeypatch.setenv("RERANKER_TOP_N", "3")

    settings = Settings(_env_file=None)

    assert settings.ollama_base_url == "http://gpu-box:11434"
    assert settings.reranker_top_n == 3
