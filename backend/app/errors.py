"""Error types raised by the content pipeline."""


class PipelineError(Exception):
    """Base error for pipeline failures."""


class KeysUnavailableError(PipelineError):
    """Provider credentials could not be loaded from storage."""


class ProviderError(PipelineError):
    """Base error for LLM provider calls."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class ProviderUnavailableError(ProviderError):
    """The provider is unknown or has no usable credential."""


class ProviderRequestError(ProviderError):
    """The provider SDK call failed (network, auth, rate limit)."""


class ProviderResponseError(ProviderError):
    """The provider answered without usable text."""


class ProvidersExhaustedError(ProviderError):
    """The requested provider and the fallback provider both failed."""

    def __init__(self, attempted: list[str]) -> None:
        self.attempted = attempted
        super().__init__(attempted[-1], f"all providers failed ({', '.join(attempted)})")
