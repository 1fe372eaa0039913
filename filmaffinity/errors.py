class ScraperError(Exception):
    """Base exception for the Filmaffinity scraper."""


class ValidationError(ScraperError):
    """Raised when a caller passes a blank URL, blank query or bad year hint."""


class NetworkError(ScraperError):
    """Raised when a page cannot be fetched (connection, timeout, HTTP status)."""


class ParseFailure(ScraperError):
    """Raised when an unexpected error happens while extracting a page."""

    def __init__(self, message: str, source_url: str = "", cause: Exception | None = None):
        super().__init__(message)
        self.source_url = source_url
        self.cause = cause


class MissingRequiredField(ScraperError):
    """Raised when the title of a detail page cannot be found."""

    def __init__(self, message: str, source_url: str = "", field: str = "title"):
        super().__init__(message)
        self.source_url = source_url
        self.field = field
