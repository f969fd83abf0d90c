"""Shared test fixtures for ReddiList tests."""

import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

from src.core.config_manager import ConfigManager, DEFAULT_CONFIG


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset all singletons before each test."""
    yield
    ConfigManager.reset()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def config_file(tmp_dir):
    """Create a temporary settings.yaml and return its path."""
    config_dir = tmp_dir / "config"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "settings.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(dict(DEFAULT_CONFIG), f, default_flow_style=False, sort_keys=False)

    return config_path


def make_comment(comment_id="c1", body="test comment", **extra):
    """A t1 thing as it appears in a listing's children."""
    data = {
        "id": comment_id,
        "author": "alice",
        "body": body,
        "score": 10,
        "subreddit": "python",
        "link_id": "t3_abc123",
        "link_title": "Test Post",
        "parent_id": "t3_abc123",
        "permalink": f"/r/python/comments/abc123/test/{comment_id}/",
        "created_utc": 1700000000.0,
    }
    data.update(extra)
    return {"kind": "t1", "data": data}


def make_post(post_id="p1", title="Test Post", **extra):
    """A t3 thing as it appears in a listing's children."""
    data = {
        "id": post_id,
        "title": title,
        "selftext": "body",
        "author": "alice",
        "subreddit": "python",
        "score": 42,
        "num_comments": 3,
        "url": "https://reddit.com/test",
        "permalink": f"/r/python/comments/{post_id}/test/",
        "created_utc": 1700000000.0,
        "is_self": True,
    }
    data.update(extra)
    return {"kind": "t3", "data": data}


def make_subreddit(sub_id="2qh0y", name="python", **extra):
    data = {
        "id": sub_id,
        "display_name": name,
        "title": "Python",
        "public_description": "News about Python",
        "subscribers": 1200000,
        "over18": False,
        "url": f"/r/{name}/",
        "created_utc": 1201233135.0,
    }
    data.update(extra)
    return {"kind": "t5", "data": data}


def make_listing(*children, after=None):
    """A Reddit listing envelope."""
    return {"kind": "Listing", "data": {"children": list(children), "after": after, "before": None}}
