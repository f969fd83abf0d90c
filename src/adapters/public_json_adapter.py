"""Reddit JSON endpoint adapter built on requests."""

import logging
from typing import Optional

import requests

from src.adapters.reddit_adapter import RedditAdapter
from src.core.exceptions import (
    FetchError,
    ForbiddenError,
    MalformedResponseError,
    NotFoundError,
)


logger = logging.getLogger("reddilist")

# App version for User-Agent
_APP_VERSION = "1.0.0"


class PublicJSONAdapter(RedditAdapter):
    """Fetches Reddit JSON, anonymously or with an OAuth bearer token.

    Without a token requests go to the public www host. With a token they go
    to the OAuth host, which is required for liked/disliked/saved and
    subscribed-subreddit listings of the logged-in user.
    """

    BASE_URL = "https://www.reddit.com"
    OAUTH_URL = "https://oauth.reddit.com"

    def __init__(
        self,
        access_token: Optional[str] = None,
        timeout: float = 30,
        user_agent: Optional[str] = None,
    ):
        self._timeout = timeout
        self._base_url = self.OAUTH_URL if access_token else self.BASE_URL
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": user_agent or f"python:reddilist:v{_APP_VERSION} (by /u/ReddiListApp)",
            "Accept": "application/json",
        })
        if access_token:
            self._session.headers["Authorization"] = f"bearer {access_token}"

    @property
    def base_url(self) -> str:
        return self._base_url

    def fetch_json(self, path: str, query: str = "") -> dict | list:
        """Fetch JSON from Reddit. One request, no retries.

        raw_json=1 is appended so bodies come back without HTML escaping.
        """
        separator = "&" if query else "?"
        url = f"{self._base_url}{path}{query}{separator}raw_json=1"
        logger.debug(f"GET {url}")

        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning(f"Request failed: {e}")
            raise FetchError(f"Failed to fetch {path}: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"Not found: {path}")
        if response.status_code == 403:
            raise ForbiddenError(f"Forbidden: {path}")
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.warning(f"HTTP {response.status_code} for {path}")
            raise FetchError(f"HTTP {response.status_code} fetching {path}") from e

        # Reddit serves an HTML page instead of JSON when it suspects a bot
        content_type = response.headers.get("Content-Type", "")
        if "json" not in content_type and "text/html" in content_type:
            raise MalformedResponseError("Reddit returned HTML instead of JSON")

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON from {path}: {e}") from e
