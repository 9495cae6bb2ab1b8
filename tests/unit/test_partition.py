"""Tests for entity location and text partitioning."""
import pytest

from ehl.extraction.types import Entity
from ehl.highlight.partition import TextSegment, locate, partition


def _joined(segments):
    return "".join(s.text for s in segments)


def _tagged(segments):
    return [(s.text, s.category) for s in segments if s.is_entity]


class TestLosslessPartition:
    """Concatenated segments always reproduce the source text."""

    @pytest.mark.parametrize(
        "text, entities",
        [
            ("New York City is in New York.", [Entity("New York", "LOC", 0.9)]),
            ("  Ada\n\tLovelace  ", [Entity("Ada", "PERSON", 0.9)]),
            ("aaaa", [Entity("aa", "X", 0.5), Entity("a", "Y", 0.5)]),
            ("no match here", [Entity("Paris", "LOC", 0.9)]),
            ("C++ (and) [x]", [Entity("C++", "LANG", 0.9), Entity("(and)", "X", 0.5)]),
            ("abcde", [Entity("bcd", "A", 0.9), Entity("ab", "B", 0.9), Entity("de", "C", 0.9)]),
        ],
    )
    def test_concatenation_equals_text(self, text, entities):
        assert _joined(partition(text, entities)) == text

    def test_sample_text(self, sample_text, sample_entities):
        assert _joined(partition(sample_text, sample_entities)) == sample_text


class TestLongestWins:
    def test_longer_entity_not_split_by_shorter(self):
        """'New York' must not be tagged inside 'New York City'."""
        segments = partition(
            "New York City",
            [Entity("New York", "LOCATION", 0.9), Entity("New York City", "LOCATION", 0.9)],
        )
        assert segments == [TextSegment("New York City", True, "LOCATION")]

    def test_shorter_entity_still_tags_remaining_text(self):
        segments = partition(
            "New York City and New York",
            [Entity("New York", "STATE", 0.9), Entity("New York City", "CITY", 0.9)],
        )
        assert segments == [
            TextSegment("New York City", True, "CITY"),
            TextSegment(" and "),
            TextSegment("New York", True, "STATE"),
        ]

    def test_overlapping_candidate_loses(self):
        """The shorter candidates overlapping a tagged region find no match."""
        segments = partition(
            "abcde",
            [Entity("ab", "B", 0.9), Entity("bcd", "A", 0.9), Entity("de", "C", 0.9)],
        )
        assert segments == [
            TextSegment("a"),
            TextSegment("bcd", True, "A"),
            TextSegment("e"),
        ]


class TestGlobalScan:
    def test_all_occurrences_tagged(self):
        segments = partition("Paris and Paris", [Entity("Paris", "LOCATION", 0.9)])
        assert segments == [
            TextSegment("Paris", True, "LOCATION"),
            TextSegment(" and "),
            TextSegment("Paris", True, "LOCATION"),
        ]

    def test_occurrences_do_not_overlap(self):
        assert _tagged(partition("aaa", [Entity("aa", "X", 0.5)])) == [("aa", "X")]
        assert partition("aaa", [Entity("aa", "X", 0.5)])[-1] == TextSegment("a")

    def test_adjacent_occurrences(self):
        segments = partition("aaaa", [Entity("aa", "X", 0.5)])
        assert segments == [TextSegment("aa", True, "X"), TextSegment("aa", True, "X")]


class TestTieBreaks:
    def test_locate_orders_by_length_then_first_index(self):
        located = locate(
            "Bob met Ann and Christina",
            [Entity("Ann", "P", 0.9), Entity("Christina", "P", 0.9), Entity("Bob", "P", 0.9)],
        )
        assert [(e.text, i) for e, i in located] == [("Christina", 16), ("Bob", 0), ("Ann", 8)]

    def test_duplicate_text_first_processed_category_wins(self):
        segments = partition(
            "I ate an Apple at Apple.",
            [Entity("Apple", "ORGANIZATION", 0.9), Entity("Apple", "FRUIT", 0.8)],
        )
        assert _tagged(segments) == [("Apple", "ORGANIZATION"), ("Apple", "ORGANIZATION")]

    def test_duplicate_entities_are_idempotent(self):
        entity = Entity("Paris", "LOCATION", 0.9)
        text = "Paris and Paris"
        assert partition(text, [entity, entity, entity]) == partition(text, [entity])


class TestLeniency:
    def test_missing_entity_skipped(self):
        segments = partition("Ada Lovelace", [Entity("Babbage", "PERSON", 0.9)])
        assert segments == [TextSegment("Ada Lovelace")]

    def test_empty_entity_text_skipped(self):
        segments = partition("Ada Lovelace", [Entity("", "PERSON", 0.9)])
        assert segments == [TextSegment("Ada Lovelace")]

    def test_match_is_case_sensitive(self):
        assert _tagged(partition("paris", [Entity("Paris", "LOCATION", 0.9)])) == []

    def test_regex_metacharacters_are_literal(self):
        text = "Use C++ or .NET (v4.*) today"
        segments = partition(
            text,
            [Entity("C++", "LANG", 0.9), Entity(".NET", "FRAMEWORK", 0.9), Entity("(v4.*)", "VERSION", 0.9)],
        )
        assert _tagged(segments) == [
            ("C++", "LANG"),
            (".NET", "FRAMEWORK"),
            ("(v4.*)", "VERSION"),
        ]
        assert _joined(segments) == text

    def test_dot_does_not_match_any_character(self):
        assert _tagged(partition("abc", [Entity("a.c", "X", 0.9)])) == []


class TestEmptyInputs:
    def test_empty_text(self):
        assert partition("", [Entity("x", "X", 0.9)]) == []

    def test_no_entities(self):
        assert partition("Just text.", []) == [TextSegment("Just text.")]

    def test_whitespace_text_is_one_plain_segment(self):
        assert partition("  \n ", []) == [TextSegment("  \n ")]
