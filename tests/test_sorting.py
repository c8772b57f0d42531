"""Tests for torrent sorting."""

from engine import set_sort, sort_torrents, toggle_sort
from engine.sorting import natural_key
from model import SortDirection, SortSpec

from conftest import make_torrent


def names(torrents):
    return [t.name for t in torrents]


class TestNaturalKey:
    """Name ordering treats digit runs as numbers."""

    def test_digit_runs_compare_numerically(self):
        assert natural_key("ep2") < natural_key("ep10")
        assert natural_key("file 9.txt") < natural_key("file 10.txt")

    def test_superscript_digits_sort_as_text(self):
        """Characters that are digits but not decimal don't break the key."""
        assert natural_key("x²") == ((1, 0, "x²"),)
        assert natural_key("²") == ((1, 0, "²"),)

    def test_case_insensitive(self):
        assert natural_key("Alpha") == natural_key("alpha")

    def test_sorted_names(self):
        items = [make_torrent(str(i), name=n) for i, n in enumerate(["ep10", "Ep2", "ep1", "b"])]
        assert names(sort_torrents(items, SortSpec("name"))) == ["b", "ep1", "Ep2", "ep10"]


class TestSortTorrents:
    """Column sorting, direction and tie-breaking."""

    def test_numeric_column_ascending(self, torrents):
        result = sort_torrents(torrents, SortSpec("size"))
        assert [t.hash for t in result] == ["h4", "h3", "h2", "h1"]

    def test_descending_reverses(self, torrents):
        result = sort_torrents(torrents, SortSpec("size", SortDirection.DESC))
        assert [t.hash for t in result] == ["h1", "h2", "h3", "h4"]

    def test_added_on(self, torrents):
        result = sort_torrents(torrents, SortSpec("added_on"))
        assert [t.hash for t in result] == ["h4", "h2", "h3", "h1"]

    def test_secondary_breaks_ties(self):
        items = [
            make_torrent("a", name="zeta", size=5),
            make_torrent("b", name="alpha", size=5),
            make_torrent("c", name="mid", size=1),
        ]
        result = sort_torrents(items, SortSpec("size", secondary="name"))
        assert names(result) == ["mid", "alpha", "zeta"]

    def test_descending_applies_to_secondary_too(self):
        items = [make_torrent("a", name="alpha", size=5), make_torrent("b", name="beta", size=5)]
        result = sort_torrents(items, SortSpec("size", SortDirection.DESC, secondary="name"))
        assert names(result) == ["beta", "alpha"]

    def test_ties_keep_input_order(self):
        """Without a secondary, equal keys stay in input order."""
        items = [make_torrent(h, size=1) for h in ("x", "y", "z")]
        assert [t.hash for t in sort_torrents(items, SortSpec("size"))] == ["x", "y", "z"]

    def test_resorting_sorted_list_is_identical(self, torrents):
        """Sorting an already sorted list by the same key gives the same sequence."""
        items = torrents + [make_torrent(h, name="same", size=1) for h in ("x", "y", "z")]
        for spec in (SortSpec("size"), SortSpec("name", SortDirection.DESC), SortSpec("status")):
            once = sort_torrents(items, spec)
            assert [t.hash for t in sort_torrents(once, spec)] == [t.hash for t in once]

    def test_unknown_column_keeps_order(self, torrents):
        result = sort_torrents(torrents, SortSpec("nonsense"))
        assert [t.hash for t in result] == ["h1", "h2", "h3", "h4"]


class TestToggleSort:
    """Choosing a sort column."""

    def test_same_column_flips_direction(self):
        spec = toggle_sort(SortSpec("name"), "name")
        assert spec.direction is SortDirection.DESC
        assert toggle_sort(spec, "name").direction is SortDirection.ASC

    def test_new_column_starts_ascending(self):
        spec = toggle_sort(SortSpec("name", SortDirection.DESC, secondary="name"), "size")
        assert spec.column == "size"
        assert spec.direction is SortDirection.ASC
        assert spec.secondary == "name"

    def test_set_sort(self):
        spec = set_sort(SortSpec(), "ratio", SortDirection.DESC)
        assert (spec.column, spec.direction) == ("ratio", SortDirection.DESC)
