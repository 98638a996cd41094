"""
Configuration management.

Loads settings from environment variables and .env file.
Prefix: MNEMO_
"""

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mnemo.memory.system import MemorySystemConfig

if TYPE_CHECKING:
    from mnemo.memory.summarizer import LLMSummarizer


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MNEMO_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Retrieval scoring
    w_similarity: float = Field(default=1.0, description="Weight of cosine similarity")
    w_graph: float = Field(default=0.5, description="Weight of the graph score")
    graph_boost: float = Field(
        default=0.2, description="Score bonus for neighbors of the context memory"
    )

    # Consolidation
    consolidation_threshold: float = Field(
        default=0.85, description="Minimum similarity to join a consolidation cluster"
    )

    # Reference vector index
    index_limit: int = Field(default=32, ge=1, description="Candidates returned per query")

    # Models used by the LLM summarizer
    summarizer_model: str = Field(
        default="anthropic/claude-3-haiku-20240307", description="LiteLLM model for summaries"
    )
    embedding_model: str = Field(
        default="text-embedding-3-small", description="LiteLLM model for embeddings"
    )
    llm_api_key: str = Field(default="", description="API key passed to LiteLLM calls")
    llm_api_base: str = Field(default="", description="Base URL for local or proxied models")

    # Runtime
    data_dir: Path = Field(default=Path("data"), description="Data and log directory")
    log_level: str = Field(default="INFO", description="Logging level name")

    @property
    def log_path(self) -> Path:
        return self.data_dir / "mnemo.log"

    def summarizer(self) -> "LLMSummarizer":
        """LLM summarizer and embedder built from the model settings."""
        from mnemo.memory.summarizer import LLMSummarizer, litellm_embedder

        api_key = self.llm_api_key or None
        api_base = self.llm_api_base or None
        return LLMSummarizer(
            model=self.summarizer_model,
            embed=litellm_embedder(self.embedding_model, api_key=api_key, api_base=api_base),
            api_key=api_key,
            api_base=api_base,
        )

    def system_config(self) -> MemorySystemConfig:
        """Scoring and consolidation weights for a MemorySystem."""
        return MemorySystemConfig(
            w_similarity=self.w_similarity,
            w_graph=self.w_graph,
            graph_boost=self.graph_boost,
            consolidation_threshold=self.consolidation_threshold,
        )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
