"""Anthropic Claude backend."""

from coderag.errors import QuotaExceededError
from coderag.llms.prompts import answer_prompt, parse_ranked_ids, rerank_prompt
from coderag.protocols import RerankCandidate


class ClaudeBackend:
    """Answers and reranks with the Anthropic Messages API."""

    name = "claude"

    ANSWER_MAX_TOKENS = 2048
    RERANK_MAX_TOKENS = 1024

    def __init__(self, api_key: str, model: str, timeout_seconds: float = 120.0):
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = None

    @property
    def client(self):
        if self._client is None:
            import anthropic

            self._client = anthropic.Anthropic(api_key=self.api_key, timeout=self.timeout_seconds)
        return self._client

    def answer(self, query: str, context: str) -> str:
        return self._complete(answer_prompt(query, context), self.ANSWER_MAX_TOKENS)

    def rerank(self, query: str, chunks: list[RerankCandidate], top_k: int) -> list[str]:
        response_text = self._complete(rerank_prompt(query, chunks, top_k), self.RERANK_MAX_TOKENS)
        return parse_ranked_ids(response_text, top_k)

    def _complete(self, prompt: str, max_tokens: int) -> str:
        import anthropic

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.RateLimitError as exc:
            raise QuotaExceededError(f"Claude rate limit or quota exceeded: {exc}") from exc

        text_parts = [
            getattr(block, "text", "")
            for block in message.content or []
            if getattr(block, "type", None) == "text"
        ]
        return "\n".join(t for t in text_parts if t).strip()
