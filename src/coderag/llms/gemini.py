"""Google Gemini backend."""

from coderag.errors import QuotaExceededError
from coderag.llms.prompts import answer_prompt, parse_ranked_ids, rerank_prompt
from coderag.protocols import RerankCandidate


class GeminiBackend:
    """Answers and reranks with the google-generativeai SDK."""

    name = "gemini"

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model
        self._model = None

    @property
    def generative_model(self):
        if self._model is None:
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model)
        return self._model

    def answer(self, query: str, context: str) -> str:
        return self._generate(answer_prompt(query, context))

    def rerank(self, query: str, chunks: list[RerankCandidate], top_k: int) -> list[str]:
        return parse_ranked_ids(self._generate(rerank_prompt(query, chunks, top_k)), top_k)

    def _generate(self, prompt: str) -> str:
        from google.api_core import exceptions as google_exceptions

        try:
            response = self.generative_model.generate_content(prompt)
        except google_exceptions.ResourceExhausted as exc:
            raise QuotaExceededError(f"Gemini rate limit or quota exceeded: {exc}") from exc

        return (getattr(response, "text", "") or "").strip()
