"""OpenRouter chat client.

Sends the extraction prompts through the OpenAI SDK pointed at OpenRouter and
returns the raw response envelope as a dict. Provider extras such as
Perplexity's `citations` stay in the dict for the citation fallback chain.
"""

from typing import Any, Dict, Optional
from openai import OpenAI, APIConnectionError, APIStatusError, APITimeoutError
from tenacity import retry, stop_after_attempt, wait_fixed, retry_if_exception_type, RetryError
from ..config import get_settings
from ..log import get_logger
from ..store.key_store import get_api_key
from .prompts import build_messages

logger = get_logger("llm")


class ProviderError(Exception):
    """Readable failure talking to the chat provider."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def describe_status_error(status_code: int, detail: str = "") -> str:
    if status_code == 401:
        return "Authentication failed: the API key is invalid. Check your key settings."
    if status_code == 429:
        return "Rate limit exceeded: wait a moment before trying again."
    if status_code == 404:
        return "Model or endpoint not found (404). Check the model configuration."
    if 500 <= status_code < 600:
        return "OpenRouter is having problems (server error). Try again later."
    return detail or f"HTTP {status_code}"


class OpenRouterClient:
    def __init__(self, api_key: Optional[str] = None):
        self.settings = get_settings()
        self._api_key = api_key
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            api_key = self._api_key or get_api_key()
            if not api_key:
                raise ProviderError("OPENROUTER_API_KEY is not configured. Save a key with `sonar-extract key set`.")
            self._client = OpenAI(
                api_key=api_key,
                base_url=self.settings.OPENROUTER_BASE_URL,
                timeout=self.settings.REQUEST_TIMEOUT,
                max_retries=0,
                default_headers={
                    "HTTP-Referer": self.settings.OPENROUTER_REFERER,
                    "X-Title": self.settings.OPENROUTER_APP_TITLE,
                },
            )
        return self._client

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(2),
        retry=retry_if_exception_type((APIConnectionError, APITimeoutError)),
    )
    def _create(self, model: str, messages: list, temperature: float):
        return self.client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            stream=False,
        )

    def fetch_completion(self, query: str, model: Optional[str] = None, temperature: Optional[float] = None) -> Dict[str, Any]:
        """
        Returns the response envelope for one extraction request.
        Raises ValueError for blank input and ProviderError for provider failures.
        """
        model = model if model is not None else self.settings.MODEL
        temperature = temperature if temperature is not None else self.settings.TEMPERATURE
        if not model or not model.strip():
            raise ValueError("Model is required")
        if not query or not query.strip():
            raise ValueError("Query is required")

        logger.info(f"Requesting claims for {query!r} from {model}")
        try:
            completion = self._create(model, build_messages(query), temperature)
        except APIStatusError as e:
            raise ProviderError(describe_status_error(e.status_code, e.message), status_code=e.status_code) from e
        except (APIConnectionError, RetryError) as e:
            raise ProviderError("Network error: unable to reach OpenRouter. Check your internet connection.") from e

        envelope = completion.model_dump()
        choices = envelope.get("choices") or []
        if not choices:
            raise ProviderError("Invalid response structure from OpenRouter")
        if not ((choices[0].get("message") or {}).get("content")):
            raise ProviderError("No content in response from OpenRouter")
        return envelope

llm_client = OpenRouterClient()
