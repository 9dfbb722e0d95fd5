"""
Gemini client implementing the inference gateway.
"""

from google import genai
from google.genai import types

from lead_inbox.config import settings
from lead_inbox.core.logging import get_logger
from lead_inbox.services.base import InferenceGateway

log = get_logger(__name__)


class InferenceError(RuntimeError):
    """A Gemini call failed or produced no text."""


class GeminiClient(InferenceGateway):
    """Inference gateway backed by Google's Gemini models."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
        client: genai.Client | None = None,
    ):
        self.api_key = api_key or settings.gemini_api_key
        self.model_name = model or settings.gemini_model
        timeout_seconds = timeout_seconds or settings.inference_timeout_seconds

        if client is None:
            if not self.api_key:
                raise ValueError("GEMINI_API_KEY is required")
            client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
            )
        self._client = client

    def complete(
        self,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int | None = None,
    ) -> str:
        """
        Generate a completion for a single user prompt.

        Raises:
            InferenceError: On any provider failure or an empty completion
        """
        try:
            response = self._client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=temperature,
                    max_output_tokens=max_output_tokens,
                ),
            )
            text = response.text
        except Exception as e:
            error_str = str(e).lower()
            if any(x in error_str for x in ["rate", "429", "quota"]):
                log.error("gemini_rate_limit", error=str(e))
            elif any(x in error_str for x in ["api key", "auth", "401", "403"]):
                log.error("gemini_auth_error", error=str(e))
            else:
                log.error("gemini_error", error=str(e))
            raise InferenceError(f"Gemini request failed: {e}") from e

        if not text or not text.strip():
            log.warning("gemini_empty_completion", model=self.model_name)
            raise InferenceError("Gemini returned an empty completion")

        return text
