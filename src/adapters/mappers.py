"""Convert Reddit JSON "things" and listing envelopes into DTOs."""

from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from src.core.exceptions import MalformedResponseError
from src.core.types import (
    CommentDTO,
    Page,
    PostDTO,
    SubredditDTO,
    UserDTO,
    Votable,
)

T = TypeVar("T")

ItemMapper = Callable[[dict], Any]


def _thing_data(item: Any, kind: str | tuple[str, ...]) -> dict:
    """Check the kind of a {"kind", "data"} thing and return its data."""
    kinds = (kind,) if isinstance(kind, str) else kind
    if not isinstance(item, dict) or not isinstance(item.get("data"), dict):
        raise MalformedResponseError(f"Expected a Reddit thing, got {type(item).__name__}")
    if item.get("kind") not in kinds:
        raise MalformedResponseError(
            f"Unexpected kind {item.get('kind')!r}, expected one of {kinds}"
        )
    if "id" not in item["data"]:
        raise MalformedResponseError(f"Thing of kind {item.get('kind')!r} has no 'id'")
    return item["data"]


def parse_post(item: dict) -> PostDTO:
    d = _thing_data(item, "t3")
    return PostDTO(
        id=d["id"],
        title=d.get("title", ""),
        selftext=d.get("selftext", ""),
        author=d.get("author", "[deleted]"),
        subreddit=d.get("subreddit", ""),
        score=d.get("score", 0),
        num_comments=d.get("num_comments", 0),
        url=d.get("url", ""),
        permalink=d.get("permalink", ""),
        created_utc=d.get("created_utc", 0.0),
        is_self=d.get("is_self", True),
    )


def parse_comment(item: dict) -> CommentDTO:
    d = _thing_data(item, "t1")
    return CommentDTO(
        id=d["id"],
        author=d.get("author", "[deleted]"),
        body=d.get("body", ""),
        score=d.get("score", 0),
        subreddit=d.get("subreddit", ""),
        link_id=d.get("link_id", ""),
        link_title=d.get("link_title", ""),
        parent_id=d.get("parent_id", ""),
        permalink=d.get("permalink", ""),
        created_utc=d.get("created_utc", 0.0),
    )


def parse_subreddit(item: dict) -> SubredditDTO:
    d = _thing_data(item, "t5")
    return SubredditDTO(
        id=d["id"],
        name=d.get("display_name", ""),
        title=d.get("title", ""),
        public_description=d.get("public_description", ""),
        subscribers=d.get("subscribers") or 0,
        over18=d.get("over18", False),
        url=d.get("url", ""),
        created_utc=d.get("created_utc", 0.0),
    )


def parse_votable(item: dict) -> Votable:
    """Parse an overview/saved item, which is either a comment or a post."""
    if isinstance(item, dict) and item.get("kind") == "t1":
        return parse_comment(item)
    return parse_post(item)


_PARSERS: dict[str, ItemMapper] = {
    "t1": parse_comment,
    "t3": parse_post,
    "t5": parse_subreddit,
}


def parse_thing(item: dict) -> Any:
    """Parse any supported thing, dispatching on its kind."""
    kind = item.get("kind") if isinstance(item, dict) else None
    parser = _PARSERS.get(kind)
    if parser is None:
        raise MalformedResponseError(f"Unsupported thing kind: {kind!r}")
    return parser(item)


def parse_page(body: Any, mapper: Callable[[dict], T]) -> Page[T]:
    """Extract the items and the "after" cursor from a listing envelope.

    Args:
        body: Parsed JSON of a listing response
        mapper: Converts one child thing into an item

    Returns:
        Page with mapped items; next_cursor is None on the last page

    Raises:
        MalformedResponseError: Envelope has no data.children list
    """
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, dict):
        raise MalformedResponseError("Listing response has no 'data' object")
    children = data.get("children")
    if not isinstance(children, list):
        raise MalformedResponseError("Listing response has no 'children' array")
    after = data.get("after")
    if after is not None and not isinstance(after, str):
        raise MalformedResponseError(f"Invalid 'after' cursor: {after!r}")

    return Page(items=[mapper(child) for child in children], next_cursor=after or None)


def parse_user(body: Any) -> UserDTO:
    """Parse a user profile, either a bare object or wrapped in {kind, data}."""
    if not isinstance(body, dict):
        raise MalformedResponseError("User response is not an object")
    d = body if body.get("name") is not None else body.get("data")
    if not isinstance(d, dict) or not d.get("name"):
        raise MalformedResponseError("User response has no 'name'")

    created = d.get("created_utc", d.get("created", 0)) or 0
    return UserDTO(
        name=d["name"],
        id=d.get("id", ""),
        has_gold=bool(d.get("is_gold", False)),
        is_moderator=bool(d.get("is_mod", False)),
        link_karma=d.get("link_karma", 0),
        comment_karma=d.get("comment_karma", 0),
        created=datetime.fromtimestamp(created, tz=timezone.utc),
    )
