"""
Test Response Templates Module
==============================

Unit tests for viewpoint switching, substitution and response generation.
"""

import random
import pytest
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from rules.bindings import NO_BINDINGS
from rules.engine import Rule
from rules.patterns import parse_pattern, parse_template
from rules.templates import (
    switch_tokens, switch_viewpoint, substitute, flatten, generate_response
)


class TestViewpoint:
    """Tests for viewpoint switching."""

    def test_i_am(self):
        """Test overlapping swaps are applied exactly once."""
        assert switch_tokens(["I", "am", "happy"]) == ("you", "are", "happy")

    def test_lowercase_input(self):
        """Test tokenizer output (lower case) is switched too."""
        assert switch_tokens(["i", "am", "happy"]) == ("you", "are", "happy")

    def test_you_and_me(self):
        """Test you and me swap in the same value."""
        assert switch_tokens(["you", "hate", "me"]) == ("I", "hate", "you")

    def test_unmapped_words_kept(self):
        """Test words outside the table are left alone."""
        assert switch_tokens(["my", "dog", "__i__"]) == ("my", "dog", "__i__")

    def test_switch_viewpoint_binding_set(self):
        """Test every bound value is switched and names are kept."""
        bindings = NO_BINDINGS.extend("x", ("i", "am")).extend("y", ("you",))

        switched = switch_viewpoint(bindings)

        assert switched.as_dict() == {"x": ("you", "are"), "y": ("I",)}
        assert bindings.lookup("x") == ("i", "am")


class TestSubstitution:
    """Tests for substitution and flattening."""

    def test_substitute_segment(self):
        """Test a segment reference becomes its bound tokens."""
        bindings = NO_BINDINGS.extend("y", ("a", "cat"))
        result = substitute(parse_template("Why do you want ?*y ?"), bindings)

        assert result == ["Why", "do", "you", "want", ("a", "cat"), "?"]

    def test_substitute_unbound(self):
        """Test an unbound reference raises KeyError."""
        with pytest.raises(KeyError):
            substitute(parse_template("?*y"), NO_BINDINGS)

    def test_flatten_flat(self):
        """Test flattening a flat list returns it unchanged."""
        assert flatten(["a", "b", "c"]) == ["a", "b", "c"]

    def test_flatten_nested(self):
        """Test one nested value is spliced in place."""
        nested = ["why", ("a", "cat"), "?"]
        flat = flatten(nested)

        assert flat == ["why", "a", "cat", "?"]
        assert len(flat) == 4

    def test_flatten_empty_segment(self):
        """Test an empty bound value disappears."""
        assert flatten(["go", (), "on"]) == ["go", "on"]


class TestGenerateResponse:
    """Tests for response generation."""

    def test_template_picked_from_rule(self):
        """Test the output is one of the rule's templates verbatim."""
        rule = Rule(
            name="greeting",
            pattern=parse_pattern("?*x hello ?*y"),
            responses=(parse_template("Sup?"), parse_template("Hey there")),
        )
        bindings = NO_BINDINGS.extend("x", ()).extend("y", ("there",))
        rng = random.Random(0)

        seen = {tuple(generate_response(rule, bindings, rng)) for _ in range(50)}

        assert seen == {("Sup?",), ("Hey", "there")}

    def test_seeded_rng_is_reproducible(self):
        """Test the same seed gives the same sequence of choices."""
        rule = Rule(
            name="r",
            pattern=parse_pattern("?*x"),
            responses=tuple(parse_template(t) for t in ("a", "b", "c", "d")),
        )

        rng_a, rng_b = random.Random(11), random.Random(11)
        run_a = [generate_response(rule, NO_BINDINGS, rng_a) for _ in range(20)]
        run_b = [generate_response(rule, NO_BINDINGS, rng_b) for _ in range(20)]

        assert run_a == run_b
        assert all(response[0] in {"a", "b", "c", "d"} for response in run_a)

    def test_viewpoint_applied_before_substitution(self):
        """Test bound values are switched in the response."""
        rule = Rule(
            name="i-am",
            pattern=parse_pattern("?*x i am ?*y"),
            responses=(parse_template("Why are you ?*y ?"),),
        )
        match = rule.matches(["well", "i", "am", "angry", "at", "you"])

        assert generate_response(rule, match.bindings, random.Random(1)) == [
            "Why", "are", "you", "angry", "at", "I", "?"
        ]


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
