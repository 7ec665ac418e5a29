# Tests for thumper.utils.paths
# Remote name normalization and prefix matching

from thumper.utils.paths import is_html, join_remote, matches_any_prefix, normalize_remote_root, remote_dir


class TestNormalizeRemoteRoot:
    """Tests for normalize_remote_root."""

    def test_root(self):
        assert normalize_remote_root("/") == ""
        assert normalize_remote_root("") == ""

    def test_strips_slashes(self):
        assert normalize_remote_root("/site/") == "site"
        assert normalize_remote_root("site/blog") == "site/blog"


class TestRemoteDir:
    """Tests for remote_dir."""

    def test_root(self):
        assert remote_dir("/") == ""

    def test_nested(self):
        assert remote_dir("/site/blog") == "site/blog/"
        assert remote_dir("site/") == "site/"


class TestJoinRemote:
    """Tests for join_remote."""

    def test_empty_prefix(self):
        assert join_remote("", "index.html") == "index.html"

    def test_with_prefix(self):
        assert join_remote("site", "css/a.css") == "site/css/a.css"


class TestMatchesAnyPrefix:
    """Tests for matches_any_prefix."""

    def test_no_prefixes(self):
        assert not matches_any_prefix("a.txt", [])

    def test_match(self):
        assert matches_any_prefix("uploads/a.png", ["media/", "uploads/"])

    def test_plain_string_prefix(self):
        assert matches_any_prefix("assets-old/y.css", ["assets"])

    def test_no_match(self):
        assert not matches_any_prefix("css/a.css", ["uploads/"])


class TestIsHtml:
    """Tests for is_html."""

    def test_html(self):
        assert is_html("index.html")
        assert is_html("blog/post.htm")

    def test_not_html(self):
        assert not is_html("style.css")
        assert not is_html("html/readme.txt")
