"""Tests for root-confined path resolution."""

from pathlib import Path
from unittest.mock import patch

import pytest

from mediashelf.errors import InvalidPathError
from mediashelf.paths import PathConfiner


class TestConstruction:
    def test_rejects_relative_root(self):
        with pytest.raises(ValueError, match="absolute"):
            PathConfiner(Path("relative/dir"))

    def test_normalizes_root(self):
        c = PathConfiner(Path("/www/media/../data/"))
        assert c.root == Path("/www/data")

    def test_is_immutable(self):
        c = PathConfiner(Path("/www"))
        with pytest.raises(AttributeError):
            c.root = Path("/etc")


class TestResolve:
    @pytest.fixture
    def c(self):
        return PathConfiner(Path("/www"))

    @pytest.mark.parametrize("rel", ["", "/", ".", "./", "//"])
    def test_root_aliases(self, c, rel):
        assert c.resolve(rel) == Path("/www")

    def test_none_is_root(self, c):
        assert c.resolve(None) == Path("/www")

    def test_simple_child(self, c):
        assert c.resolve("movies/clip.mp4") == Path("/www/movies/clip.mp4")

    def test_leading_slash_stays_under_root(self, c):
        assert c.resolve("/etc/passwd") == Path("/www/etc/passwd")

    def test_dotdot_inside_root_collapses(self, c):
        assert c.resolve("movies/../photos/a.png") == Path("/www/photos/a.png")

    def test_backslash_separators(self, c):
        assert c.resolve("movies\\clip.mp4") == Path("/www/movies/clip.mp4")

    @pytest.mark.parametrize(
        "rel",
        [
            "..",
            "../",
            "../etc/passwd",
            "movies/../../etc",
            "/../www-evil/x",
            "a/b/../../../x",
            "..\\..\\etc",
        ],
    )
    def test_escapes_rejected(self, c, rel):
        with pytest.raises(InvalidPathError):
            c.resolve(rel)

    def test_sibling_with_common_prefix_rejected(self, c):
        with pytest.raises(InvalidPathError):
            c.resolve("../www-evil")

    def test_nul_byte_rejected(self, c):
        with pytest.raises(InvalidPathError):
            c.resolve("movies/\x00clip.mp4")

    def test_never_touches_filesystem(self, c):
        with patch("os.stat") as mock_stat, patch("os.lstat") as mock_lstat:
            with pytest.raises(InvalidPathError):
                c.resolve("../../etc/shadow")
            c.resolve("movies/clip.mp4")
        mock_stat.assert_not_called()
        mock_lstat.assert_not_called()

    def test_error_carries_reason(self, c):
        with pytest.raises(InvalidPathError) as exc_info:
            c.resolve("../x")
        assert exc_info.value.status_code == 400
        assert exc_info.value.reason == "invalid_path"


class TestToRelative:
    @pytest.fixture
    def c(self):
        return PathConfiner(Path("/www"))

    def test_child(self, c):
        assert c.to_relative(Path("/www/movies/clip.mp4")) == "movies/clip.mp4"

    def test_root_itself(self, c):
        assert c.to_relative("/www") == "."

    def test_outside_root_returns_empty(self, c, caplog):
        assert c.to_relative("/www-evil/clip.mp4") == ""
        assert "Cannot express" in caplog.text

    @pytest.mark.parametrize(
        "rel", ["", "movies", "movies/clip.mp4", "a/./b/../c.png", "/deep/er/file"]
    )
    def test_round_trip_is_stable(self, c, rel):
        resolved = c.resolve(rel)
        assert c.resolve(c.to_relative(resolved)) == resolved
