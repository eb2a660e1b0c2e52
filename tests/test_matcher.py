"""
Test Pattern Matcher Module
===========================

Unit tests for bindings, pattern notation and the segment-aware matcher.
"""

import pytest
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from rules.bindings import (
    BindingSet, FAIL, NO_BINDINGS, MatchFailure, extend, lookup, match_variable, is_fail
)
from rules.patterns import Literal, SimpleVar, SegmentVar, parse_pattern, parse_template
from rules.matcher import match_pattern, match_segment
from core.exceptions import PatternError


def toks(text):
    return text.split()


class TestBindingSet:
    """Tests for the binding environment."""

    def test_extend_from_start_state(self):
        """Extending the start state yields exactly one entry."""
        bindings = extend("x", ("a", "b"), NO_BINDINGS)

        assert len(bindings) == 1
        assert lookup("x", bindings) == ("a", "b")
        assert len(NO_BINDINGS) == 0

    def test_extend_does_not_mutate(self):
        """Extending returns a new set and leaves the original alone."""
        first = NO_BINDINGS.extend("x", ["a"])
        second = first.extend("y", ["b"])

        assert "y" not in first
        assert second.as_dict() == {"x": ("a",), "y": ("b",)}

    def test_extend_rejects_bound_name(self):
        """Extending with an already bound name raises instead of duplicating it."""
        bindings = NO_BINDINGS.extend("x", ("a",))

        with pytest.raises(ValueError):
            bindings.extend("x", ("b",))

        assert bindings.as_dict() == {"x": ("a",)}
        assert len(bindings) == 1

    def test_lookup_missing(self):
        """Unbound variables look up as None."""
        assert NO_BINDINGS.lookup("x") is None

    def test_empty_set_is_not_failure(self):
        """An empty binding set is a success, FAIL is not."""
        assert NO_BINDINGS is not FAIL
        assert bool(NO_BINDINGS) is True
        assert bool(FAIL) is False
        assert not isinstance(FAIL, BindingSet)
        assert is_fail(FAIL)
        assert not is_fail(NO_BINDINGS)

    def test_fail_is_singleton(self):
        """MatchFailure always returns the same instance."""
        assert MatchFailure() is FAIL

    def test_match_variable_rebind_equal(self):
        """Binding an already bound variable to an equal value keeps the set."""
        bindings = NO_BINDINGS.extend("x", ("a", "b"))
        assert match_variable("x", ["a", "b"], bindings) is bindings

    def test_match_variable_rebind_different(self):
        """Binding an already bound variable to a different value fails."""
        bindings = NO_BINDINGS.extend("x", ("a", "b"))
        assert match_variable("x", ("a",), bindings) is FAIL

    def test_match_variable_propagates_fail(self):
        """A failed outcome stays failed."""
        assert match_variable("x", ("a",), FAIL) is FAIL


class TestPatternNotation:
    """Tests for pattern parsing."""

    def test_parse_variables_and_literals(self):
        """Notation decodes into tagged elements."""
        pattern = parse_pattern("?*x Hello ?y")
        assert pattern == (SegmentVar("x"), Literal("hello"), SimpleVar("y"))

    def test_question_marks_in_words_are_literals(self):
        """Words that are not ?name or ?*name stay literal."""
        template = parse_template("Sup? ? ?!")
        assert template == (Literal("Sup?"), Literal("?"), Literal("?!"))

    def test_explicit_literal_mapping(self):
        """A literal that looks like a variable can be written as a mapping."""
        pattern = parse_pattern([{"literal": "?x"}, "and", {"segment": "rest"}])
        assert pattern == (Literal("?x"), Literal("and"), SegmentVar("rest"))

    def test_unknown_mapping_kind(self):
        """Unknown mapping keys are rejected."""
        with pytest.raises(PatternError):
            parse_pattern([{"wildcard": "x"}])

    def test_template_keeps_case(self):
        """Templates keep the authored case."""
        assert parse_template("Hey There") == (Literal("Hey"), Literal("There"))


class TestMatchPattern:
    """Tests for match_pattern."""

    def test_literals_only(self):
        """All-literal patterns match only identical input."""
        assert match_pattern(parse_pattern("bye"), ["bye"]) == NO_BINDINGS
        assert match_pattern(parse_pattern("bye"), ["bye", "now"]) is FAIL
        assert match_pattern(parse_pattern("bye"), []) is FAIL

    def test_empty_pattern_and_input(self):
        """Empty pattern matches empty input with no bindings."""
        outcome = match_pattern((), [])
        assert outcome is not FAIL
        assert len(outcome) == 0

    def test_simple_variable(self):
        """A simple variable binds exactly one token."""
        outcome = match_pattern(parse_pattern("?who said hi"), toks("bob said hi"))
        assert outcome.lookup("who") == ("bob",)

        assert match_pattern(parse_pattern("?who said hi"), toks("bob smith said hi")) is FAIL

    def test_segment_anchor_scan(self):
        """Segment variables bind up to the first occurrence of the anchor."""
        pattern = parse_pattern("?*x hello ?*y")

        outcome = match_pattern(pattern, toks("well hello there friend"))
        assert outcome.lookup("x") == ("well",)
        assert outcome.lookup("y") == ("there", "friend")

    def test_segment_anchor_missing(self):
        """No anchor in the input means no match."""
        pattern = parse_pattern("?*x hello ?*y")
        assert match_pattern(pattern, toks("goodbye now")) is FAIL

    def test_segment_binds_empty(self):
        """Segment variables may bind zero tokens."""
        outcome = match_pattern(parse_pattern("?*x hello ?*y"), toks("hello"))
        assert outcome.lookup("x") == ()
        assert outcome.lookup("y") == ()

    def test_trailing_segment_takes_rest(self):
        """A segment variable at the end takes every remaining token."""
        outcome = match_pattern(parse_pattern("i am ?*y"), toks("i am very sad today"))
        assert outcome.lookup("y") == ("very", "sad", "today")

    def test_catch_all_matches_empty_input(self):
        """A bare segment variable matches the empty input."""
        outcome = match_pattern(parse_pattern("?*x"), [])
        assert outcome is not FAIL
        assert outcome.lookup("x") == ()

    def test_repeated_variable_consistent(self):
        """A repeated variable matches only equal spans."""
        pattern = parse_pattern("?*x and ?*x")

        outcome = match_pattern(pattern, toks("a b and a b"))
        assert outcome.as_dict() == {"x": ("a", "b")}

        assert match_pattern(pattern, toks("a b and c d")) is FAIL

    def test_first_anchor_only(self):
        """A failing remainder is not retried at a later anchor."""
        pattern = parse_pattern("?*x a b")

        # A backtracking matcher would bind x = (a c)
        assert match_pattern(pattern, toks("a c a b")) is FAIL
        assert match_pattern(pattern, toks("c a b")).lookup("x") == ("c",)

    def test_no_retry_with_two_segments(self):
        """The scan for a second anchor starts after the first one."""
        pattern = parse_pattern("?*x a ?*y a ?*z")

        assert match_pattern(pattern, toks("p a q")) is FAIL

        outcome = match_pattern(pattern, toks("p a q a r"))
        assert outcome.as_dict() == {"x": ("p",), "y": ("q",), "z": ("r",)}

    def test_starting_bindings_respected(self):
        """Existing bindings constrain the match."""
        bindings = NO_BINDINGS.extend("x", ("well",))
        pattern = parse_pattern("?*x hello")

        assert match_pattern(pattern, toks("well hello"), bindings) == bindings
        assert match_pattern(pattern, toks("oh hello"), bindings) is FAIL

    def test_fail_input_propagates(self):
        """Starting from FAIL gives FAIL."""
        assert match_pattern(parse_pattern("?*x"), ["a"], FAIL) is FAIL

    def test_long_input(self):
        """Long inputs match without deep recursion."""
        tokens = ["word"] * 50000 + ["end"]
        outcome = match_pattern(parse_pattern("?*x end"), tokens)
        assert len(outcome.lookup("x")) == 50000


class TestMatchSegment:
    """Tests for match_segment."""

    def test_returns_cursor_at_anchor(self):
        """The cursor points at the anchor so the remainder can match it."""
        pattern = parse_pattern("?*x hello ?*y")
        tokens = tuple(toks("oh well hello there"))

        outcome, cursor = match_segment(pattern, 0, tokens, 0, NO_BINDINGS)
        assert outcome.lookup("x") == ("oh", "well")
        assert tokens[cursor] == "hello"

    def test_unanchored_segment_raises(self):
        """A segment followed by a variable cannot be matched."""
        pattern = (SegmentVar("x"), SimpleVar("y"))
        with pytest.raises(PatternError):
            match_segment(pattern, 0, ("a", "b"), 0, NO_BINDINGS)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
