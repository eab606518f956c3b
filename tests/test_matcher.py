"""Tests for wildcard prefix matching."""

from treecomplete.completion.matcher import dedupe, filter_matches, make_pattern, matches


class TestMatches:
    def test_empty_word_matches_everything(self):
        assert make_pattern("") is None
        assert matches("", "anything")

    def test_prefix_ignoring_case(self):
        assert matches("--out", "--output")
        assert matches("--OUT", "--output")
        assert matches("--output", "--output")

    def test_explicit_trailing_wildcard(self):
        assert matches("--output*", "--output")
        assert matches("--output*", "--output-format")

    def test_prefix_is_required(self):
        assert not matches("output", "--output")
        assert not matches("put", "output")

    def test_inner_wildcards(self):
        assert matches("--o*put", "--output")
        assert matches("St?ndard", "Standard_B1s")
        assert not matches("--x*put", "--output")

    def test_longer_word_does_not_match(self):
        assert not matches("--outputs", "--output")


class TestFilter:
    def test_keeps_declaration_order(self):
        items = ["table", "tsv", "json", "TEXT"]
        assert filter_matches("t", items) == ["table", "tsv", "TEXT"]

    def test_empty_word_returns_all(self):
        assert filter_matches("", ["b", "a"]) == ["b", "a"]

    def test_key_function(self):
        items = [("create", 1), ("delete", 2), ("config", 3)]
        assert filter_matches("c", items, key=lambda i: i[0]) == [("create", 1), ("config", 3)]


class TestDedupe:
    def test_case_insensitive_first_wins(self):
        assert dedupe(["--Name", "--name", "-n", "--NAME", "-N"]) == ["--Name", "-n"]

    def test_key_function(self):
        items = [{"t": "a"}, {"t": "A"}, {"t": "b"}]
        assert dedupe(items, key=lambda i: i["t"]) == [{"t": "a"}, {"t": "b"}]
