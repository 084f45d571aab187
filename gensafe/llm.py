import logging

from openai import AsyncOpenAI

from gensafe.config import settings

log = logging.getLogger(__name__)

_client: AsyncOpenAI | None = None

# Models that require max_completion_tokens instead of max_tokens.
_USES_MAX_COMPLETION_TOKENS = {"gpt-5", "gpt-5-mini", "gpt-5-nano", "gpt-5.1", "gpt-5.2",
                                "o1", "o1-mini", "o1-pro", "o3", "o3-mini", "o4-mini"}


class AIServiceError(Exception):
    """A completion failure the caller must see instead of canned data."""

    message = "AI service error."
    status_code = 503

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class QuotaExceededError(AIServiceError):
    message = "OpenAI API quota exceeded. Please check your API usage and billing."


class InvalidCredentialError(AIServiceError):
    message = "Invalid OpenAI API key. Please check your configuration."


class RateLimitedError(AIServiceError):
    message = "OpenAI API rate limit exceeded. Please try again later."
    status_code = 429


class LLMNotConfiguredError(RuntimeError):
    """No API key is configured; treated like any other transport failure."""


def classify_error(exc: BaseException) -> AIServiceError | None:
    """Map a completion exception to a caller-visible error, or None if it is generic.

    Checked in order: quota exhaustion, bad credential, HTTP 429. Quota errors
    arrive as 429s too, so the error code has to be checked first.
    """
    if isinstance(exc, AIServiceError):
        return exc
    code = getattr(exc, "code", None)
    if code == "insufficient_quota":
        return QuotaExceededError()
    if code == "invalid_api_key":
        return InvalidCredentialError()
    if getattr(exc, "status_code", None) == 429:
        return RateLimitedError()
    return None


def _needs_max_completion_tokens(model: str) -> bool:
    """Check if a model uses the newer max_completion_tokens parameter."""
    m = model.lower()
    for prefix in _USES_MAX_COMPLETION_TOKENS:
        if m == prefix or m.startswith(prefix + "-"):
            return True
    return False


def get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        cfg = settings.openai
        if not cfg.configured:
            raise LLMNotConfiguredError("OpenAI API key is not configured")
        # One attempt per call: no client-side retries.
        _client = AsyncOpenAI(
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            max_retries=0,
        )
    return _client


def get_model() -> str:
    return settings.openai.model


async def chat(
    system_prompt: str,
    user_message: str,
    *,
    temperature: float,
    max_tokens: int,
) -> str:
    """Send a two-message chat completion request and return the reply text."""
    client = get_client()
    model = get_model()

    kwargs: dict = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
    }

    if _needs_max_completion_tokens(model):
        # gpt-5 / o-series: max_completion_tokens, no temperature control
        kwargs["max_completion_tokens"] = max_tokens
    else:
        kwargs["max_tokens"] = max_tokens
        kwargs["temperature"] = temperature

    resp = await client.chat.completions.create(**kwargs)
    choice = resp.choices[0]
    if choice.finish_reason == "length":
        log.warning("Completion truncated at %d tokens", max_tokens)
    return choice.message.content or ""
