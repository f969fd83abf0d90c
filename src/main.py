"""ReddiList command-line entry point."""

import argparse
import sys
from typing import Optional

from src.adapters.public_json_adapter import PublicJSONAdapter
from src.core.config_manager import ConfigManager
from src.core.exceptions import ReddiListError
from src.core.listing import Listing
from src.core.logger import setup_logger
from src.core.types import MAX_LIMIT, CommentDTO, PostDTO, SortOrder, SubredditDTO, TimeWindow
from src.services.user_service import RedditUser, UserService

# Endpoints that accept sort/limit/time parameters
SORTED_ENDPOINTS = {
    "overview": RedditUser.get_overview_sorted,
    "comments": RedditUser.get_comments_sorted,
    "posts": RedditUser.get_posts_sorted,
    "saved": RedditUser.get_saved,
}

DEFAULT_ENDPOINTS = {
    "overview": RedditUser.get_overview,
    "comments": RedditUser.get_comments,
    "posts": RedditUser.get_posts,
    "liked": RedditUser.get_liked_posts,
    "disliked": RedditUser.get_disliked_posts,
    "subscribed": RedditUser.get_subscribed_subreddits,
}


def build_parser(config: ConfigManager) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reddilist",
        description="List a Reddit user's comments, posts and other profile listings.",
    )
    parser.add_argument("user", help="Reddit username (without u/)")
    parser.add_argument(
        "-e", "--endpoint",
        choices=sorted(set(SORTED_ENDPOINTS) | set(DEFAULT_ENDPOINTS)),
        default="overview",
    )
    parser.add_argument("-s", "--sort", choices=[s.value for s in SortOrder],
                        help="Sort order (uses the sorted listing form)")
    parser.set_defaults(
        default_sort=config.get("listing.default_sort", "new"),
        default_page_size=config.get("listing.default_page_size", 25),
    )
    parser.add_argument("-t", "--time", choices=[t.value for t in TimeWindow],
                        default=config.get("listing.default_time", "all"))
    parser.add_argument("-l", "--limit", type=int,
                        help="Items per request (1-100; default listing.default_page_size "
                             "when sorted, 100 otherwise)")
    parser.add_argument("-m", "--max", type=int, default=-1, dest="max_items",
                        help="Total items to print (-1 = all)")
    parser.add_argument("--about", action="store_true",
                        help="Fetch and print the user's profile first")
    return parser


def open_listing(user: RedditUser, args: argparse.Namespace) -> Listing:
    """Pick the sorted or default-order listing for the parsed arguments."""
    if args.sort or args.endpoint not in DEFAULT_ENDPOINTS:
        if args.endpoint not in SORTED_ENDPOINTS:
            raise ReddiListError(f"'{args.endpoint}' does not support sorting")
        sort = SortOrder(args.sort or args.default_sort)
        limit = args.default_page_size if args.limit is None else args.limit
        return SORTED_ENDPOINTS[args.endpoint](user, sort, limit, TimeWindow(args.time))
    limit = MAX_LIMIT if args.limit is None else args.limit
    return DEFAULT_ENDPOINTS[args.endpoint](user, args.max_items, limit)


def format_item(item) -> str:
    if isinstance(item, CommentDTO):
        body = item.body.replace("\n", " ")
        return f"[comment] r/{item.subreddit} ({item.score}) {body[:80]}"
    if isinstance(item, PostDTO):
        return f"[post] r/{item.subreddit} ({item.score}) {item.title}"
    if isinstance(item, SubredditDTO):
        return f"[subreddit] r/{item.name} ({item.subscribers} subscribers)"
    return repr(item)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Startup sequence:
    1. ConfigManager init (loads or creates settings.yaml)
    2. Logger init (reads log_level from config)
    3. Adapter and service creation
    4. Listing iteration
    """
    config = ConfigManager()

    log_level = config.get("app.log_level", "INFO")
    mask_logs = config.get("security.mask_logs", True)
    logger = setup_logger(log_level=log_level, mask_logs=mask_logs)

    args = build_parser(config).parse_args(argv)

    adapter = PublicJSONAdapter(
        access_token=config.get_access_token() or None,
        timeout=config.get("reddit.timeout", 30),
        user_agent=config.get("reddit.user_agent") or None,
    )
    service = UserService(adapter)

    try:
        if args.about:
            user = service.get_user(args.user)
            print(f"u/{user.name}: {user.link_karma} link karma, "
                  f"{user.comment_karma} comment karma, since {user.created:%Y-%m-%d}")
        else:
            user = service.user_from_name(args.user)

        listing = open_listing(user, args)
        for item in listing:
            print(format_item(item))
            if args.max_items > 0 and listing.count >= args.max_items:
                break
    except ReddiListError as e:
        logger.error(f"{type(e).__name__}: {e.message}")
        return 1

    logger.info(f"Printed {listing.count} items from {args.endpoint} of u/{args.user}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
