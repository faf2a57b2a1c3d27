"""Provider handler protocol, response models and registry.

A provider handler turns a routed call into one vendor request. Handlers
either return a ProviderResponse or raise; the Delegate records any raised
exception as a failed attempt and moves on to the next candidate.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from axcess.core.errors import ErrorKind, ProviderError
from axcess.core.types import Result
from axcess.routing.models import RouteDecision, RouteParameters


@dataclass(frozen=True, slots=True)
class ProviderUsage:
    """Token usage as reported by a provider.

    Any field may be missing or malformed; the Delegate sanitizes them.
    """

    input_tokens: Any = None
    output_tokens: Any = None
    total_tokens: Any = None


@dataclass(frozen=True, slots=True)
class ProviderResponse:
    """Output of a successful handler call.

    Attributes:
        output_text: Generated text.
        usage: Reported token usage, if any.
        raw: Raw vendor response for debugging.
    """

    output_text: str
    usage: ProviderUsage | None = None
    raw: Any = None


class ProviderHandler(Protocol):
    """Protocol for provider handlers.

    Implementations must be reentrant: concurrent requests may share one
    handler instance. Timeouts are the handler's responsibility.

    Example:
        class EchoHandler:
            async def __call__(self, prompt, decision, parameters):
                return ProviderResponse(output_text=prompt)
    """

    async def __call__(
        self,
        prompt: str,
        decision: RouteDecision,
        parameters: RouteParameters,
    ) -> ProviderResponse:
        """Generate text for ``prompt`` on ``decision.model``.

        Raises:
            ProviderError: Normalized, provider-prefixed failure.
        """
        ...


@dataclass(frozen=True)
class ProviderRegistry:
    """Mapping from provider name to handler.

    Lookups of unregistered providers return an explicit error Result
    instead of None.

    Example:
        registry = ProviderRegistry({"anthropic": AnthropicHandler()})
        found = registry.get("openai")
        if found.is_err:
            print(found.error.message)  # Provider "openai" is not registered.
    """

    handlers: Mapping[str, ProviderHandler] = field(default_factory=dict)

    def get(self, provider: str) -> Result[ProviderHandler, ProviderError]:
        handler = self.handlers.get(provider)
        if handler is None:
            return Result.err(
                ProviderError(
                    f'Provider "{provider}" is not registered.',
                    provider=provider,
                    kind=ErrorKind.UNKNOWN,
                )
            )
        return Result.ok(handler)

    def with_handler(self, provider: str, handler: ProviderHandler) -> "ProviderRegistry":
        """Return a new registry with ``handler`` registered under ``provider``."""
        return ProviderRegistry({**self.handlers, provider: handler})

    def __contains__(self, provider: object) -> bool:
        return provider in self.handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self.handlers)

    def __len__(self) -> int:
        return len(self.handlers)
