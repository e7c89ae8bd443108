"""Tests for loading.text_domain: first-writer-wins merging."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from textdomains.loading import TextDomain

_mappings = st.dictionaries(st.text(min_size=1, max_size=8), st.text(max_size=8), max_size=10)


class TestTextDomainMapping:
    """Read-only mapping behavior."""

    def test_mapping_protocol(self) -> None:
        """Supports lookup, iteration, len and containment."""
        domain = TextDomain({"a": "1", "b": "2"})

        assert domain["a"] == "1"
        assert list(domain) == ["a", "b"]
        assert len(domain) == 2
        assert "b" in domain
        assert "c" not in domain

    def test_equality_with_plain_mapping(self) -> None:
        """Equality is content equality."""
        assert TextDomain({"a": "1"}) == {"a": "1"}
        assert TextDomain({"a": "1", "b": "2"}) == TextDomain({"b": "2", "a": "1"})
        assert TextDomain({"a": "1"}) != TextDomain({"a": "2"})

    def test_hashable(self) -> None:
        """Equal domains hash equal."""
        assert hash(TextDomain({"a": "1"})) == hash(TextDomain({"a": "1"}))

    def test_as_dict_is_a_copy(self) -> None:
        """Mutating as_dict() output leaves the domain unchanged."""
        domain = TextDomain({"a": "1"})
        copy = domain.as_dict()
        copy["a"] = "changed"

        assert domain["a"] == "1"

    def test_view_is_read_only(self) -> None:
        """view() cannot be used to write."""
        view = TextDomain({"a": "1"}).view()

        assert dict(view) == {"a": "1"}
        with pytest.raises(TypeError):
            view["a"] = "x"  # type: ignore[index]


class TestTextDomainMerging:
    """Layer merging semantics."""

    def test_first_writer_wins(self) -> None:
        """The highest-priority layer keeps its value."""
        merged = TextDomain.merge_layers([{"k": "child"}, {"k": "parent", "p": "only"}])

        assert dict(merged) == {"k": "child", "p": "only"}

    def test_order_follows_first_appearance(self) -> None:
        """Keys appear in order of first definition across layers."""
        merged = TextDomain.merge_layers([{"b": "1"}, {"a": "2", "b": "3"}, {"c": "4"}])

        assert list(merged) == ["b", "a", "c"]

    def test_fill_missing_and_missing_from(self) -> None:
        """fill_missing only adds keys reported by missing_from."""
        upper = TextDomain({"a": "1"})
        lower = {"a": "x", "b": "2"}

        assert upper.missing_from(lower) == ("b",)
        assert dict(upper.fill_missing(lower)) == {"a": "1", "b": "2"}
        assert dict(upper) == {"a": "1"}

    @given(upper=_mappings, lower=_mappings)
    def test_upper_values_never_overwritten(self, upper: dict[str, str], lower: dict[str, str]) -> None:
        """Every key of the upper layer keeps its value after merging."""
        merged = TextDomain(upper).fill_missing(lower)

        for key, value in upper.items():
            assert merged[key] == value
        assert set(merged) == set(upper) | set(lower)

    @given(layers=st.lists(_mappings, max_size=5))
    def test_merge_is_deterministic(self, layers: list[dict[str, str]]) -> None:
        """Merging the same layers twice gives identical item order."""
        first = TextDomain.merge_layers(layers)
        second = TextDomain.merge_layers(layers)

        assert list(first.items()) == list(second.items())
