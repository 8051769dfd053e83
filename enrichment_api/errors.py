"""Exception hierarchy for the enrichment pipeline.

Each error is raised where the failure happens and carries the HTTP status
and public message it maps to, so the API layer never has to inspect
exception text to decide how to respond.

Hierarchy::

    EnrichmentError (500, raw message)
    ├── ValidationError (400)
    ├── FetchError (502)
    │   ├── FetchTimeout
    │   ├── SiteUnreachable
    │   ├── BadStatus
    │   │   └── FetchRateLimited (429)
    │   └── InvalidWebsiteUrl
    ├── ContentParseError (422)
    └── ProviderError
        ├── QuotaExceeded (429)
        ├── AuthFailure (500)
        └── ProviderNetworkError (500)

``ParseError`` is not an EnrichmentError: it is recovered inside the
pipeline and never reaches a caller.
"""

from fastapi import status


class EnrichmentError(Exception):
    """Base class for caller-facing enrichment failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str | None = None

    def __init__(self, message: str = "Enrichment failed") -> None:
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        """Message shown to API callers."""
        return self.public_message or self.message


class ValidationError(EnrichmentError):
    """The request did not carry a usable website URL."""

    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Website URL is required"


class FetchError(EnrichmentError):
    """The target website could not be retrieved."""

    status_code = status.HTTP_502_BAD_GATEWAY
    public_message = "Failed to fetch website content. The website may be unreachable."

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Failed to fetch website {url}: {message}")
        self.url = url


class FetchTimeout(FetchError):
    """The website did not answer within the fetch timeout."""


class SiteUnreachable(FetchError):
    """DNS resolution or the connection to the website failed."""


class BadStatus(FetchError):
    """The website answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(url, f"HTTP error status {status_code}")
        self.response_status = status_code


class FetchRateLimited(BadStatus):
    """The website refused the request with HTTP 429."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    public_message = "API quota exceeded. Please try again later."

    def __init__(self, url: str) -> None:
        super().__init__(url, 429)


class InvalidWebsiteUrl(FetchError):
    """The URL is malformed or uses a scheme that cannot be fetched."""


class ContentParseError(EnrichmentError):
    """The fetched document could not be reduced to text."""

    status_code = 422
    public_message = "Failed to parse website content."


class ProviderError(EnrichmentError):
    """Classified failure from the AI provider."""


class QuotaExceeded(ProviderError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    public_message = "API quota exceeded. Please try again later."


class AuthFailure(ProviderError):
    public_message = "API authentication failed."


class ProviderNetworkError(ProviderError):
    public_message = "Network error connecting to AI service."


class ParseError(ValueError):
    """The model reply did not contain a usable JSON object."""
