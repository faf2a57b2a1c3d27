"""Anthropic SDK handler for direct Claude API access.

Calls the Messages API through the official Anthropic Python SDK and
normalizes SDK exceptions into provider-prefixed ProviderErrors.
"""

import os
from typing import Any

import anthropic
import structlog

from axcess.core.errors import ErrorKind, ProviderError
from axcess.providers.base import ProviderResponse, ProviderUsage
from axcess.routing.models import RouteDecision, RouteParameters

log = structlog.get_logger(__name__)

PROVIDER = "anthropic"


class AnthropicHandler:
    """Provider handler using the official Anthropic Python SDK.

    The API key comes from the constructor or ANTHROPIC_API_KEY. A missing
    key is reported when the handler is called, so the Delegate can record
    it and move on to the next candidate.

    Example:
        handler = AnthropicHandler()
        response = await handler(prompt, decision, parameters)
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        timeout: float = 120.0,
    ) -> None:
        """Initialize the Anthropic handler.

        Args:
            api_key: Optional API key (overrides ANTHROPIC_API_KEY env var).
            timeout: Request timeout in seconds.
        """
        self._api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._timeout = timeout
        self._client: anthropic.AsyncAnthropic | None = None

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """Lazy-initialize the async client.

        SDK retries are disabled; moving to the next candidate is the
        Delegate's job.
        """
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    async def __call__(
        self,
        prompt: str,
        decision: RouteDecision,
        parameters: RouteParameters,
    ) -> ProviderResponse:
        if not self._api_key or not self._api_key.strip():
            raise ProviderError(
                "anthropic: API key not configured. Set ANTHROPIC_API_KEY.",
                provider=PROVIDER,
                kind=ErrorKind.AUTH,
                status_code=401,
            )

        log.debug(
            "anthropic.request.started",
            model=decision.model,
            max_output_tokens=parameters.max_output_tokens,
            temperature=parameters.temperature,
        )

        try:
            response = await self._get_client().messages.create(
                model=decision.model,
                max_tokens=parameters.max_output_tokens,
                temperature=parameters.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            raise self._normalize_error(e, decision.model) from e

        return self._parse_response(response)

    def _parse_response(self, response: Any) -> ProviderResponse:
        """Join text blocks and lift usage out of a Messages API response."""
        content = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )

        usage = response.usage
        return ProviderResponse(
            output_text=content,
            usage=ProviderUsage(
                input_tokens=usage.input_tokens if usage else None,
                output_tokens=usage.output_tokens if usage else None,
            ),
            raw=response,
        )

    def _normalize_error(self, exc: Exception, model: str) -> ProviderError:
        """Convert an Anthropic SDK exception into a ProviderError."""
        if isinstance(exc, anthropic.AuthenticationError | anthropic.PermissionDeniedError):
            log.warning("anthropic.request.failed.auth", model=model)
            return ProviderError(
                "anthropic: authentication failed. Check ANTHROPIC_API_KEY and its scopes.",
                provider=PROVIDER,
                kind=ErrorKind.AUTH,
                status_code=getattr(exc, "status_code", 401),
            )

        if isinstance(exc, anthropic.RateLimitError):
            log.warning("anthropic.request.failed.rate_limit", model=model)
            return ProviderError(
                "anthropic: rate limit reached.",
                provider=PROVIDER,
                kind=ErrorKind.RATE_LIMIT,
                status_code=429,
            )

        if isinstance(exc, anthropic.APITimeoutError) or (
            isinstance(exc, anthropic.APIStatusError) and exc.status_code == 408
        ):
            log.warning("anthropic.request.failed.timeout", model=model)
            return ProviderError(
                "anthropic: request timed out.",
                provider=PROVIDER,
                kind=ErrorKind.TIMEOUT,
                status_code=408,
            )

        if isinstance(exc, anthropic.APIConnectionError):
            log.warning("anthropic.request.failed.network", model=model, error=str(exc))
            return ProviderError(
                f"anthropic: connection failed ({exc}).",
                provider=PROVIDER,
                kind=ErrorKind.NETWORK,
            )

        if isinstance(exc, anthropic.APIError):
            log.warning("anthropic.request.failed.api_error", model=model, error=str(exc))
            return ProviderError.from_exception(exc, provider=PROVIDER)

        log.exception("anthropic.request.failed.unexpected", model=model, error=str(exc))
        return ProviderError(
            f"anthropic: unexpected failure ({exc})",
            provider=PROVIDER,
            details={"original_exception": type(exc).__name__},
        )
