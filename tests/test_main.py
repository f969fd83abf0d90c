"""Tests for the command-line entry point."""

import pytest
from unittest.mock import MagicMock, patch

from src import main as cli
from src.core.exceptions import NotFoundError

from conftest import make_comment, make_listing, make_post


@pytest.fixture
def config():
    cm = MagicMock()
    cm.get.side_effect = lambda key, default=None: default
    cm.get_access_token.return_value = ""
    return cm


@pytest.fixture
def adapter():
    with patch("src.main.ConfigManager") as cm_cls, \
            patch("src.main.setup_logger"), \
            patch("src.main.PublicJSONAdapter") as adapter_cls:
        cm = cm_cls.return_value
        cm.get.side_effect = lambda key, default=None: default
        cm.get_access_token.return_value = ""
        yield adapter_cls.return_value


class TestOpenListing:
    def _args(self, config, *argv):
        return cli.build_parser(config).parse_args(["alice", *argv])

    def test_default_endpoint(self, config):
        user = cli.UserService(MagicMock()).user_from_name("alice")
        listing = cli.open_listing(user, self._args(config))
        assert listing.url == "/user/alice.json?limit=100"

    def test_sort_selects_sorted_form(self, config):
        user = cli.UserService(MagicMock()).user_from_name("alice")
        args = self._args(config, "-e", "comments", "-s", "top", "-t", "week", "-l", "10")
        assert cli.open_listing(user, args).url == "/user/alice/comments.json?sort=top&limit=10&t=week"

    def test_saved_always_sorted(self, config):
        user = cli.UserService(MagicMock()).user_from_name("alice")
        args = self._args(config, "-e", "saved")
        assert cli.open_listing(user, args).url == "/user/alice/saved.json?sort=new&limit=25&t=all"

    def test_config_default_sort_used(self):
        config = MagicMock()
        settings = {"listing.default_sort": "top", "listing.default_page_size": 40}
        config.get.side_effect = lambda key, default=None: settings.get(key, default)
        user = cli.UserService(MagicMock()).user_from_name("alice")
        args = self._args(config, "-e", "saved")
        assert cli.open_listing(user, args).url == "/user/alice/saved.json?sort=top&limit=40&t=all"

    def test_explicit_sort_overrides_config(self):
        config = MagicMock()
        config.get.side_effect = lambda key, default=None: "top" if key == "listing.default_sort" else default
        user = cli.UserService(MagicMock()).user_from_name("alice")
        args = self._args(config, "-e", "posts", "-s", "hot")
        assert cli.open_listing(user, args).url == "/user/alice/submitted.json?sort=hot&limit=25&t=all"

    def test_limit_used_as_page_size_on_default_endpoint(self, config):
        user = cli.UserService(MagicMock()).user_from_name("alice")
        args = self._args(config, "-e", "liked", "-l", "10")
        assert cli.open_listing(user, args).url == "/user/alice/liked.json?limit=10"

    def test_limit_validated_on_default_endpoint(self, config):
        user = cli.UserService(MagicMock()).user_from_name("alice")
        args = self._args(config, "-e", "comments", "-l", "500")
        with pytest.raises(cli.ReddiListError):
            cli.open_listing(user, args)

    def test_sort_on_unsortable_endpoint(self, config):
        user = cli.UserService(MagicMock()).user_from_name("alice")
        args = self._args(config, "-e", "liked", "-s", "top")
        with pytest.raises(cli.ReddiListError):
            cli.open_listing(user, args)


class TestMain:
    def test_prints_items(self, adapter, capsys):
        adapter.fetch_json.return_value = make_listing(
            make_comment("c1", body="Nice"), make_post("p1", title="Hello")
        )
        assert cli.main(["alice"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["[comment] r/python (10) Nice", "[post] r/python (42) Hello"]

    def test_max_stops_output(self, adapter, capsys):
        adapter.fetch_json.return_value = make_listing(make_comment("a"), make_comment("b"))
        assert cli.main(["alice", "-m", "1"]) == 0
        assert len(capsys.readouterr().out.splitlines()) == 1

    def test_error_returns_1(self, adapter):
        adapter.fetch_json.side_effect = NotFoundError("Not found")
        assert cli.main(["nobody", "--about"]) == 1

    def test_bad_limit_returns_1(self, adapter):
        assert cli.main(["alice", "-s", "new", "-l", "500"]) == 1
        adapter.fetch_json.assert_not_called()

    def test_malformed_item_returns_1(self, adapter, capsys):
        adapter.fetch_json.return_value = make_listing({"kind": "t1", "data": {"body": "x"}})
        assert cli.main(["alice"]) == 1
        assert capsys.readouterr().out == ""
