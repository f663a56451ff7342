"""Tests for deduplicate()."""

from service_hangar.domain.discovery.deduplicator import deduplicate


class Alpha:
    def __init__(self, tag):
        self.tag = tag


class Beta(Alpha):
    pass


class TestDeduplicate:
    """Tests for streaming deduplication by concrete class."""

    def test_first_instance_of_each_class_wins(self):
        """Later instances of an already seen class are dropped."""
        items = [Alpha("first"), Beta("first"), Alpha("second"), Beta("second")]

        result = list(deduplicate(items))

        assert [(type(i), i.tag) for i in result] == [(Alpha, "first"), (Beta, "first")]

    def test_subclass_is_a_distinct_class(self):
        """Deduplication uses the concrete class, not isinstance."""
        result = list(deduplicate([Alpha("a"), Beta("b")]))
        assert len(result) == 2

    def test_empty_input(self):
        """Empty input yields nothing."""
        assert list(deduplicate([])) == []

    def test_consumes_input_lazily(self):
        """Should pull one element at a time from upstream."""
        pulled = []

        def source():
            for tag in ("a", "b", "c"):
                pulled.append(tag)
                yield Alpha(tag)

        result = deduplicate(source())
        assert pulled == []

        first = next(result)
        assert first.tag == "a"
        assert pulled == ["a"]

    def test_seen_set_is_per_call(self):
        """Two passes do not share state."""
        first = list(deduplicate([Alpha("x")]))
        second = list(deduplicate([Alpha("y")]))
        assert first[0].tag == "x"
        assert second[0].tag == "y"
