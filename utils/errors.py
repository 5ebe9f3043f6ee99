class ProviderError(Exception):
    """Base class for failures talking to an LLM provider."""


class ConfigurationError(ProviderError):
    """Raised before any network call when a provider credential is missing."""


class UpstreamError(ProviderError):
    """The provider answered with a non-success status (or could not be reached)."""

    def __init__(self, provider, status, body):
        self.provider = provider
        self.status = status
        self.body = body
        super().__init__(f"{provider} error {status}: {body}")


class EmptyResponseError(ProviderError):
    """The provider answered successfully but no usable text could be extracted."""


def http_status_for(error):
    """HTTP status a route handler should answer with for a provider failure."""
    if isinstance(error, ConfigurationError):
        return 500
    return 502
