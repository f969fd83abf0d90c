"""Custom exception hierarchy for ReddiList."""


class ReddiListError(Exception):
    """Base exception for all ReddiList errors."""

    def __init__(self, message: str = "An error occurred in ReddiList"):
        self.message = message
        super().__init__(self.message)


class RangeError(ReddiListError, ValueError):
    """A numeric parameter is outside its valid range.

    Raised before any request is made.
    """

    def __init__(self, param: str, value: int, bounds: tuple[int, int | None]):
        self.param = param
        self.value = value
        self.bounds = bounds
        if bounds[1] is None:
            valid = f">= {bounds[0]}"
        else:
            valid = f"[{bounds[0]}, {bounds[1]}]"
        super().__init__(f"{param}={value} is out of range. Valid range: {valid}")


class NetworkError(ReddiListError):
    """Base exception for network-related errors."""

    def __init__(self, message: str = "A network error occurred"):
        super().__init__(message)


class FetchError(NetworkError):
    """Error fetching a page from Reddit."""

    def __init__(self, message: str = "Failed to fetch data from Reddit"):
        super().__init__(message)


class NotFoundError(FetchError):
    """HTTP 404 - User or resource does not exist."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class ForbiddenError(FetchError):
    """HTTP 403 - Resource is private or needs a logged-in user."""

    def __init__(self, message: str = "Access to resource is forbidden"):
        super().__init__(message)


class MalformedResponseError(FetchError):
    """Response body does not have the expected listing shape."""

    def __init__(self, message: str = "Malformed response from Reddit"):
        super().__init__(message)


class ConfigError(ReddiListError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message)
