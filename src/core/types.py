"""Data Transfer Objects and request types for ReddiList."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

# Reddit refuses to return more than this many items per request.
MAX_LIMIT = 100

T = TypeVar("T")


class SortOrder(str, Enum):
    """Ordering of a user listing. Value is the query-string token."""

    NEW = "new"
    HOT = "hot"
    TOP = "top"
    CONTROVERSIAL = "controversial"


class TimeWindow(str, Enum):
    """Time range for TOP and CONTROVERSIAL orderings."""

    ALL = "all"
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"


@dataclass
class PostDTO:
    """Reddit post (kind t3) data transfer object."""

    id: str                          # Reddit post ID (e.g., "8xwlg")
    title: str
    selftext: str = ""               # body (empty for link posts)
    author: str = "[deleted]"
    subreddit: str = ""
    score: int = 0                   # approximate (fuzzed by Reddit)
    num_comments: int = 0
    url: str = ""
    permalink: str = ""
    created_utc: float = 0.0
    is_self: bool = True

    @property
    def fullname(self) -> str:
        return f"t3_{self.id}"


@dataclass
class CommentDTO:
    """Reddit comment (kind t1) data transfer object."""

    id: str
    author: str = "[deleted]"
    body: str = ""                   # Raw markdown
    score: int = 0
    subreddit: str = ""
    link_id: str = ""                # fullname of the post (t3_*)
    link_title: str = ""             # only present in user listings
    parent_id: str = ""              # parent ID (t3_* or t1_*)
    permalink: str = ""
    created_utc: float = 0.0

    @property
    def fullname(self) -> str:
        return f"t1_{self.id}"


@dataclass
class SubredditDTO:
    """Subreddit (kind t5) data transfer object."""

    id: str
    name: str                        # display name, without r/ prefix
    title: str = ""
    public_description: str = ""
    subscribers: int = 0
    over18: bool = False
    url: str = ""
    created_utc: float = 0.0

    @property
    def fullname(self) -> str:
        return f"t5_{self.id}"


# Overview and saved listings mix posts and comments.
Votable = Union[PostDTO, CommentDTO]


@dataclass
class UserDTO:
    """Reddit account (kind t2) profile fields."""

    name: str
    id: str = ""
    has_gold: bool = False
    is_moderator: bool = False
    link_karma: int = 0
    comment_karma: int = 0
    created: datetime = field(
        default_factory=lambda: datetime.fromtimestamp(0, tz=timezone.utc)
    )


@dataclass
class ListingRequest:
    """Parameters of one listing page request.

    sort and window are None for listings that leave ordering to the server.
    """

    base_path: str
    sort: Optional[SortOrder] = None
    window: Optional[TimeWindow] = None
    page_size: int = MAX_LIMIT
    cursor: Optional[str] = None

    def query(self, limit: Optional[int] = None) -> str:
        """Render the query string, e.g. "?sort=new&limit=25&t=all".

        Args:
            limit: Override for the per-request limit (defaults to page_size)
        """
        limit = self.page_size if limit is None else limit
        if self.sort is not None:
            window = self.window or TimeWindow.ALL
            query = f"?sort={self.sort.value}&limit={limit}&t={window.value}"
        else:
            query = f"?limit={limit}"
        if self.cursor:
            query += f"&after={self.cursor}"
        return query


@dataclass
class Page(Generic[T]):
    """One fetched page of a listing."""

    items: list[T] = field(default_factory=list)
    next_cursor: Optional[str] = None  # None on the last page
