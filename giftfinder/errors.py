from typing import Optional


class GiftFinderError(Exception):
    """Base class for failures the app reports to the user."""


class GatewayError(GiftFinderError):
    """Transport failure, missing API key, or non-2xx reply from the generative API."""

    def __init__(self, message: str, status: Optional[int] = None, reason: str = ""):
        self.status = status
        self.reason = reason
        self.upstream_message = message
        if status is None:
            text = f"API error: {message}"
        else:
            head = f"{status} {reason}".strip()
            text = f"API error: {head} - {message}"
        super().__init__(text)


class MalformedResponseError(GiftFinderError):
    """The API answered 2xx but the payload was missing or not valid JSON."""


class UnexpectedShapeError(GiftFinderError):
    """The payload parsed as JSON but was not an array of gift objects."""

    def __init__(self, message: str = "Received unexpected data format from API. Please try again."):
        super().__init__(message)


class InvalidLinkError(GiftFinderError):
    """A purchase link could not be parsed as an absolute URL."""
