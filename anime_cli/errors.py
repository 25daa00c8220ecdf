"""Error hierarchy for anime-cli.

Error layers:
- AnimeCliError: Base class for all anime-cli errors
- ClientError: The catalog search failed (transport, HTTP status, decoding)
- ConfigurationError: Local configuration could not be loaded

Client errors are never retried. The search command reports them and exits
non-zero; the interactive viewer shows them inline.
"""


class AnimeCliError(Exception):
    """Base class for all anime-cli errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Client Errors (catalog requests)
# =============================================================================


class ClientError(AnimeCliError):
    """Base class for catalog client failures."""


class TransportError(ClientError):
    """The request could not be sent or no response was received."""


class ServiceError(ClientError):
    """The catalog answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, code="SERVICE_ERROR")
        self.status_code = status_code


class DecodeError(ClientError):
    """The response body is not valid JSON or does not match the schema."""


class InvalidQueryError(ClientError):
    """The query cannot be encoded into a request URL."""


# =============================================================================
# Local Errors
# =============================================================================


class ConfigurationError(AnimeCliError):
    """Configuration file is unreadable or invalid."""
