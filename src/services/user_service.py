"""Reddit user profile accessor and its paginated sub-resources."""

import logging
from datetime import datetime

from src.adapters.mappers import (
    parse_comment,
    parse_post,
    parse_subreddit,
    parse_user,
    parse_votable,
)
from src.adapters.reddit_adapter import RedditAdapter
from src.core.listing import Listing
from src.core.types import (
    MAX_LIMIT,
    CommentDTO,
    PostDTO,
    SortOrder,
    SubredditDTO,
    TimeWindow,
    UserDTO,
    Votable,
)

logger = logging.getLogger("reddilist")

SUBSCRIBED_SUBREDDITS_PATH = "/subreddits/mine.json"


class RedditUser:
    """A Reddit user and the listings hanging off their profile.

    Each get_* method returns a new lazy Listing; no request is made until
    it is iterated. The plain methods use Reddit's default order and an
    optional total bound (max_items). The *_sorted methods and get_saved take
    an explicit sort, per-request limit and time window instead.

    Liked, disliked, saved and subscribed listings only work for the
    logged-in user, so the adapter must carry an access token.
    """

    def __init__(self, adapter: RedditAdapter, profile: UserDTO):
        self._adapter = adapter
        self._profile = profile

    @property
    def name(self) -> str:
        return self._profile.name

    @property
    def has_gold(self) -> bool:
        return self._profile.has_gold

    @property
    def is_moderator(self) -> bool:
        return self._profile.is_moderator

    @property
    def link_karma(self) -> int:
        return self._profile.link_karma

    @property
    def comment_karma(self) -> int:
        return self._profile.comment_karma

    @property
    def created(self) -> datetime:
        return self._profile.created

    @property
    def profile(self) -> UserDTO:
        return self._profile

    # Resource paths

    @property
    def overview_path(self) -> str:
        return f"/user/{self.name}.json"

    @property
    def comments_path(self) -> str:
        return f"/user/{self.name}/comments.json"

    @property
    def posts_path(self) -> str:
        return f"/user/{self.name}/submitted.json"

    @property
    def liked_path(self) -> str:
        return f"/user/{self.name}/liked.json"

    @property
    def disliked_path(self) -> str:
        return f"/user/{self.name}/disliked.json"

    @property
    def saved_path(self) -> str:
        return f"/user/{self.name}/saved.json"

    # Default-order listings

    def get_overview(self, max_items: int = -1, page_size: int = MAX_LIMIT) -> Listing[Votable]:
        """Comments and posts by the user, newest first."""
        return Listing.create(self._adapter, self.overview_path, max_items, page_size, parse_votable)

    def get_liked_posts(self, max_items: int = -1, page_size: int = MAX_LIMIT) -> Listing[PostDTO]:
        return Listing.create(self._adapter, self.liked_path, max_items, page_size, parse_post)

    def get_disliked_posts(self, max_items: int = -1, page_size: int = MAX_LIMIT) -> Listing[PostDTO]:
        return Listing.create(self._adapter, self.disliked_path, max_items, page_size, parse_post)

    def get_comments(self, max_items: int = -1, page_size: int = MAX_LIMIT) -> Listing[CommentDTO]:
        return Listing.create(self._adapter, self.comments_path, max_items, page_size, parse_comment)

    def get_posts(self, max_items: int = -1, page_size: int = MAX_LIMIT) -> Listing[PostDTO]:
        return Listing.create(self._adapter, self.posts_path, max_items, page_size, parse_post)

    def get_subscribed_subreddits(self, max_items: int = -1, page_size: int = MAX_LIMIT) -> Listing[SubredditDTO]:
        """Subreddits the logged-in user subscribes to."""
        return Listing.create(
            self._adapter, SUBSCRIBED_SUBREDDITS_PATH, max_items, page_size, parse_subreddit
        )

    # Sorted listings

    def get_overview_sorted(
        self,
        sort: SortOrder = SortOrder.NEW,
        limit: int = 25,
        from_time: TimeWindow = TimeWindow.ALL,
    ) -> Listing[Votable]:
        """Comments and posts by the user.

        Args:
            sort: How to sort (hot, new, top, controversial)
            limit: How many items to fetch per request (1-100)
            from_time: Time frame for top/controversial (hour ... all)

        Raises:
            RangeError: limit outside [1, 100]
        """
        return Listing.parameterized(
            self._adapter, self.overview_path, sort, limit, from_time, parse_votable
        )

    def get_comments_sorted(
        self,
        sort: SortOrder = SortOrder.NEW,
        limit: int = 25,
        from_time: TimeWindow = TimeWindow.ALL,
    ) -> Listing[CommentDTO]:
        return Listing.parameterized(
            self._adapter, self.comments_path, sort, limit, from_time, parse_comment
        )

    def get_posts_sorted(
        self,
        sort: SortOrder = SortOrder.NEW,
        limit: int = 25,
        from_time: TimeWindow = TimeWindow.ALL,
    ) -> Listing[PostDTO]:
        return Listing.parameterized(
            self._adapter, self.posts_path, sort, limit, from_time, parse_post
        )

    def get_saved(
        self,
        sort: SortOrder = SortOrder.NEW,
        limit: int = 25,
        from_time: TimeWindow = TimeWindow.ALL,
    ) -> Listing[Votable]:
        """Comments and posts saved by the logged-in user."""
        return Listing.parameterized(
            self._adapter, self.saved_path, sort, limit, from_time, parse_votable
        )

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<RedditUser {self.name}>"


class UserService:
    """Looks up Reddit users by name."""

    def __init__(self, reddit: RedditAdapter):
        self._reddit = reddit

    def get_user(self, name: str) -> RedditUser:
        """Fetch a user's profile.

        Args:
            name: Username (without u/ prefix)

        Returns:
            RedditUser bound to this service's adapter

        Raises:
            NotFoundError: No such user
            FetchError: General fetch failure
            MalformedResponseError: Profile body has no name
        """
        data = self._reddit.fetch_json(f"/user/{name}/about.json")
        profile = parse_user(data)
        logger.info(f"Fetched profile for u/{profile.name}")
        return RedditUser(self._reddit, profile)

    def user_from_name(self, name: str) -> RedditUser:
        """RedditUser for a known name, without fetching the profile."""
        return RedditUser(self._reddit, UserDTO(name=name))
