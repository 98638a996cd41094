"""
Summarizers for memory consolidation.

A summarizer reduces the contents of a memory cluster to one content,
embedding and optional emotion. LLM calls are made synchronously and must
complete before the summarizer returns; timeouts and retries belong to
the caller.
"""

from collections.abc import Callable, Sequence

import litellm

from mnemo.core.logging import get_logger
from mnemo.memory.base import Embedding, Emotion, MemoryContent
from mnemo.memory.errors import SummarizerError
from mnemo.memory.vectors import as_embedding

logger = get_logger("memory.summarizer")

# Disable LiteLLM's verbose logging
litellm.suppress_debug_info = True

Embedder = Callable[[str], Embedding]

CONSOLIDATE_PROMPT = """These memories describe related experiences.
Create a single consolidated memory that preserves key information but is more concise.

Memories:
{memories}

Consolidated memory (2-3 sentences):"""


def litellm_embedder(
    model: str,
    api_key: str | None = None,
    api_base: str | None = None,
) -> Embedder:
    """Build an embed(text) callable backed by litellm.embedding."""

    def embed(text: str) -> Embedding:
        params = {"model": model, "input": [text]}
        if api_key:
            params["api_key"] = api_key
        if api_base:
            params["api_base"] = api_base

        try:
            response = litellm.embedding(**params)
        except Exception as e:
            raise SummarizerError(f"Embedding request failed: {e}") from e

        data = response.data[0]
        values = data["embedding"] if isinstance(data, dict) else data.embedding
        return as_embedding(values)

    return embed


class LLMSummarizer:
    """Summarizer that asks an LLM to merge the cluster contents."""

    def __init__(
        self,
        model: str,
        embed: Embedder,
        max_tokens: int = 256,
        temperature: float = 0.3,
        api_key: str | None = None,
        api_base: str | None = None,
    ):
        self.model = model
        self.embed = embed
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.api_key = api_key
        self.api_base = api_base

    def build_messages(self, contents: Sequence[MemoryContent]) -> list[dict]:
        memories = "\n".join(f"- {c}" for c in contents)
        return [{"role": "user", "content": CONSOLIDATE_PROMPT.format(memories=memories)}]

    def __call__(
        self, contents: Sequence[MemoryContent]
    ) -> tuple[MemoryContent, Embedding, Emotion | None]:
        params = {
            "model": self.model,
            "messages": self.build_messages(contents),
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        if self.api_key:
            params["api_key"] = self.api_key
        if self.api_base:
            params["api_base"] = self.api_base

        logger.debug(f"Summarizing {len(contents)} memories with {self.model}")
        try:
            response = litellm.completion(**params)
        except Exception as e:
            raise SummarizerError(f"Summary request failed: {e}") from e

        summary = (response.choices[0].message.content or "").strip()
        if not summary:
            raise SummarizerError("Model returned an empty summary")

        return summary, self.embed(summary), None


def concat_summarizer(embed: Embedder, separator: str = " | "):
    """Offline summarizer that joins the contents and embeds the result."""

    def summarize(
        contents: Sequence[MemoryContent],
    ) -> tuple[MemoryContent, Embedding, Emotion | None]:
        if not contents:
            raise SummarizerError("Nothing to summarize")
        summary = separator.join(contents)
        return summary, embed(summary), None

    return summarize
