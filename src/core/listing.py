"""Lazy, paginated Reddit listings."""

import itertools
import logging
from typing import Callable, Generic, Iterator, Optional, TypeVar

from src.adapters.mappers import parse_page, parse_thing
from src.adapters.reddit_adapter import RedditAdapter
from src.core.exceptions import RangeError
from src.core.types import (
    MAX_LIMIT,
    ListingRequest,
    Page,
    SortOrder,
    TimeWindow,
)

logger = logging.getLogger("reddilist")

T = TypeVar("T")


def check_range(param: str, value: int, max_limit: int = MAX_LIMIT) -> None:
    """Raise RangeError unless 1 <= value <= max_limit."""
    if value < 1 or value > max_limit:
        raise RangeError(param, value, (1, max_limit))


class Listing(Generic[T]):
    """A lazily fetched sequence of items from a paginated Reddit endpoint.

    Nothing is requested until the first item is asked for. Each further
    page is fetched only once the previous one has been consumed, using the
    "after" cursor from the last response. The sequence ends when Reddit
    stops returning a cursor or max_items items have been produced.

    A Listing cannot be rewound; build a new one to read from the start.
    It is not safe to advance one Listing from several threads at once.

    Use the create() or parameterized() constructors rather than calling
    __init__ directly.
    """

    def __init__(
        self,
        adapter: RedditAdapter,
        request: ListingRequest,
        mapper: Callable[[dict], T] = parse_thing,
        max_items: int = -1,
    ):
        self._adapter = adapter
        self._request = request
        self._mapper = mapper
        self._max_items = max_items
        self._page: Optional[Page[T]] = None
        self._index = 0
        self._count = 0
        self._done = max_items == 0

    @classmethod
    def create(
        cls,
        adapter: RedditAdapter,
        endpoint: str,
        max_items: int = -1,
        page_size: int = MAX_LIMIT,
        mapper: Callable[[dict], T] = parse_thing,
    ) -> "Listing[T]":
        """Listing in the server's default order, bounded by max_items.

        Args:
            adapter: Transport used to fetch pages
            endpoint: Resource path (e.g., "/user/alice/comments.json")
            max_items: Total items to produce across pages (-1 = no bound)
            page_size: Items requested per page (1-100)
            mapper: Converts one child thing into an item

        Raises:
            RangeError: page_size outside [1, 100], or max_items below -1
        """
        check_range("page_size", page_size)
        if max_items < -1:
            raise RangeError("max_items", max_items, (-1, None))
        request = ListingRequest(base_path=endpoint, page_size=page_size)
        return cls(adapter, request, mapper, max_items)

    @classmethod
    def parameterized(
        cls,
        adapter: RedditAdapter,
        endpoint: str,
        sort: SortOrder = SortOrder.NEW,
        page_size: int = 25,
        window: TimeWindow = TimeWindow.ALL,
        mapper: Callable[[dict], T] = parse_thing,
    ) -> "Listing[T]":
        """Listing with explicit sort, page size and time window.

        The window is sent even for sorts that ignore it. There is no
        overall bound; iteration stops when Reddit runs out of pages.

        Raises:
            RangeError: page_size outside [1, 100]
        """
        check_range("page_size", page_size)
        request = ListingRequest(
            base_path=endpoint,
            sort=SortOrder(sort),
            window=TimeWindow(window),
            page_size=page_size,
        )
        return cls(adapter, request, mapper)

    @property
    def request(self) -> ListingRequest:
        return self._request

    @property
    def url(self) -> str:
        """Path and query of the next page request."""
        return self._request.base_path + self._request.query(self._next_limit())

    @property
    def count(self) -> int:
        """Number of items produced so far."""
        return self._count

    @property
    def max_items(self) -> int:
        return self._max_items

    def advance(self) -> T:
        """Return the next item, fetching the next page when needed.

        Raises:
            StopIteration: No more items
            FetchError: The page request failed (the listing is then finished)
        """
        if self._done:
            raise StopIteration
        if self._max_items > 0 and self._count >= self._max_items:
            self._finish()
            raise StopIteration

        if self._page is None or self._index >= len(self._page.items):
            if self._page is not None and self._page.next_cursor is None:
                self._finish()
                raise StopIteration
            self._fetch_next_page()
            if not self._page.items:
                self._finish()
                raise StopIteration

        item = self._page.items[self._index]
        self._index += 1
        self._count += 1
        return item

    def has_more(self) -> bool:
        """Whether advance() would return an item.

        May fetch the next page if the buffered one is used up.
        """
        if self._done:
            return False
        if self._max_items > 0 and self._count >= self._max_items:
            return False
        if self._page is not None and self._index < len(self._page.items):
            return True
        if self._page is not None and self._page.next_cursor is None:
            return False
        self._fetch_next_page()
        if not self._page.items:
            self._finish()
            return False
        return True

    def take(self, n: int) -> list[T]:
        """Return up to n further items. n <= 0 consumes nothing."""
        if n <= 0:
            return []
        return list(itertools.islice(self, n))

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        return self.advance()

    def _next_limit(self) -> int:
        """Per-request limit, never more than the items still wanted."""
        if self._max_items > 0:
            return max(1, min(self._request.page_size, self._max_items - self._count))
        return self._request.page_size

    def _fetch_next_page(self) -> None:
        if self._page is not None:
            self._request.cursor = self._page.next_cursor
        query = self._request.query(self._next_limit())
        logger.debug(f"Fetching listing page {self._request.base_path}{query}")

        try:
            body = self._adapter.fetch_json(self._request.base_path, query)
            page = parse_page(body, self._mapper)
        except Exception:
            self._finish()
            raise

        self._page = page
        self._index = 0
        logger.debug(
            f"Fetched {len(page.items)} items from {self._request.base_path} "
            f"(after={page.next_cursor})"
        )

    def _finish(self) -> None:
        if not self._done:
            logger.debug(f"Listing {self._request.base_path} finished after {self._count} items")
        self._done = True
        self._page = None
        self._index = 0

    def __repr__(self) -> str:
        return f"<Listing {self.url} count={self._count}>"
