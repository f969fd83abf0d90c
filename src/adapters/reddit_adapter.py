"""Abstract base class for Reddit data access."""

from abc import ABC, abstractmethod


class RedditAdapter(ABC):
    """Abstract interface for fetching raw Reddit JSON."""

    @abstractmethod
    def fetch_json(self, path: str, query: str = "") -> dict | list:
        """Perform a GET and return the parsed JSON body.

        Args:
            path: Resource path (e.g., "/user/alice/comments.json")
            query: Query string including the leading "?" (may be empty)

        Returns:
            Parsed JSON document

        Raises:
            FetchError: Transport failure or non-success status
            NotFoundError: 404 Not Found
            ForbiddenError: 403 Forbidden
            MalformedResponseError: Body is not JSON
        """
        ...
