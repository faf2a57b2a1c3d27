"""LiteLLM handler for OpenAI, Google and other LiteLLM-backed providers.

One handler instance serves one provider name. The catalog's vendor model
identifier is prefixed with the LiteLLM provider route (``gemini/...`` for
Google) before the call.
"""

import os
from typing import Any

import litellm
import structlog

from axcess.core.errors import ErrorKind, ProviderError
from axcess.providers.base import ProviderResponse, ProviderUsage
from axcess.routing.models import RouteDecision, RouteParameters

log = structlog.get_logger(__name__)

# Provider name -> LiteLLM model prefix
LITELLM_PREFIXES: dict[str, str] = {
    "openai": "openai",
    "google": "gemini",
    "anthropic": "anthropic",
    "openrouter": "openrouter",
}

# Provider name -> environment variables checked in order
API_KEY_ENV_VARS: dict[str, tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "google": ("GOOGLE_API_KEY", "GOOGLE_AI_API_KEY", "GEMINI_API_KEY"),
    "anthropic": ("ANTHROPIC_API_KEY",),
    "openrouter": ("OPENROUTER_API_KEY",),
}


class LiteLLMHandler:
    """Provider handler using LiteLLM's unified completion API.

    Example:
        openai = LiteLLMHandler("openai")
        google = LiteLLMHandler("google", api_key="AIza...")
    """

    def __init__(
        self,
        provider: str,
        *,
        api_key: str | None = None,
        api_base: str | None = None,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the LiteLLM handler.

        Args:
            provider: Provider name as used in the models catalog.
            api_key: Optional API key (overrides environment variables).
            api_base: Optional API base URL for custom endpoints.
            timeout: Request timeout in seconds.
        """
        self._provider = provider
        self._api_key = api_key
        self._api_base = api_base
        self._timeout = timeout

    @property
    def provider(self) -> str:
        return self._provider

    def _get_api_key(self) -> str | None:
        """Return the explicit key, else the first set environment variable."""
        if self._api_key and self._api_key.strip():
            return self._api_key.strip()
        for env_var in API_KEY_ENV_VARS.get(self._provider, ()):
            value = os.environ.get(env_var, "").strip()
            if value:
                return value
        return None

    def _litellm_model(self, model: str) -> str:
        """Prefix the vendor model with its LiteLLM route."""
        prefix = LITELLM_PREFIXES.get(self._provider, self._provider)
        if model.startswith(f"{prefix}/"):
            return model
        return f"{prefix}/{model}"

    def _build_completion_kwargs(
        self,
        prompt: str,
        decision: RouteDecision,
        parameters: RouteParameters,
        api_key: str,
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self._litellm_model(decision.model),
            "messages": [{"role": "user", "content": prompt}],
            "temperature": parameters.temperature,
            "max_tokens": parameters.max_output_tokens,
            "timeout": self._timeout,
            "num_retries": 0,
            "api_key": api_key,
        }
        if self._api_base:
            kwargs["api_base"] = self._api_base
        return kwargs

    async def __call__(
        self,
        prompt: str,
        decision: RouteDecision,
        parameters: RouteParameters,
    ) -> ProviderResponse:
        api_key = self._get_api_key()
        if api_key is None:
            env_vars = API_KEY_ENV_VARS.get(self._provider, (f"{self._provider.upper()}_API_KEY",))
            raise ProviderError(
                f"{self._provider}: API key not configured. Set {env_vars[0]}.",
                provider=self._provider,
                kind=ErrorKind.AUTH,
                status_code=401,
            )

        kwargs = self._build_completion_kwargs(prompt, decision, parameters, api_key)
        log.debug(
            "llm.request.started",
            provider=self._provider,
            model=kwargs["model"],
            temperature=parameters.temperature,
            max_tokens=parameters.max_output_tokens,
        )

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as e:
            raise self._normalize_error(e, decision.model) from e

        return self._parse_response(response)

    def _parse_response(self, response: Any) -> ProviderResponse:
        choice = response.choices[0]
        content = choice.message.content or ""

        usage = getattr(response, "usage", None)
        return ProviderResponse(
            output_text=content,
            usage=ProviderUsage(
                input_tokens=getattr(usage, "prompt_tokens", None),
                output_tokens=getattr(usage, "completion_tokens", None),
                total_tokens=getattr(usage, "total_tokens", None),
            )
            if usage
            else None,
            raw=response.model_dump() if hasattr(response, "model_dump") else response,
        )

    def _normalize_error(self, exc: Exception, model: str) -> ProviderError:
        """Convert a LiteLLM exception into a ProviderError."""
        provider = self._provider

        if isinstance(exc, litellm.AuthenticationError | litellm.PermissionDeniedError):
            log.warning("llm.request.failed.auth", provider=provider, model=model)
            return ProviderError(
                f"{provider}: authentication failed. Check the API key.",
                provider=provider,
                kind=ErrorKind.AUTH,
                status_code=401,
            )

        if isinstance(exc, litellm.RateLimitError):
            log.warning("llm.request.failed.rate_limit", provider=provider, model=model)
            return ProviderError(
                f"{provider}: rate limit or quota exhausted.",
                provider=provider,
                kind=ErrorKind.RATE_LIMIT,
                status_code=429,
            )

        if isinstance(exc, litellm.Timeout):
            log.warning("llm.request.failed.timeout", provider=provider, model=model)
            return ProviderError(
                f"{provider}: request timed out.",
                provider=provider,
                kind=ErrorKind.TIMEOUT,
                status_code=408,
            )

        if isinstance(exc, litellm.APIConnectionError | litellm.ServiceUnavailableError):
            log.warning(
                "llm.request.failed.network", provider=provider, model=model, error=str(exc)
            )
            return ProviderError(
                f"{provider}: connection to the API failed ({exc}).",
                provider=provider,
                kind=ErrorKind.NETWORK,
            )

        if isinstance(exc, litellm.APIError | litellm.BadRequestError):
            log.warning(
                "llm.request.failed.api_error",
                provider=provider,
                model=model,
                error=str(exc),
                status_code=getattr(exc, "status_code", None),
            )
            return ProviderError.from_exception(exc, provider=provider)

        log.exception(
            "llm.request.failed.unexpected", provider=provider, model=model, error=str(exc)
        )
        return ProviderError(
            f"{provider}: unexpected failure ({exc})",
            provider=provider,
            details={"original_exception": type(exc).__name__},
        )
