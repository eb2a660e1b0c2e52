"""
Pattern Matcher - Match rule patterns against token sequences
=============================================================

Matching walks the pattern and the input left to right with two index
cursors, so stack depth does not grow with input length.

Segment variables are resolved by scanning for the first occurrence of
the literal that follows them. If the rest of the pattern then fails to
match, the scan is not retried at a later occurrence; the whole match
fails. For example ``?*x a b`` does not match ``a c a b``: the first
``a`` is chosen as the anchor, ``b`` then fails against ``c``, and the
second ``a`` is never tried. Rules are written against this behavior.
"""

from typing import Sequence, Tuple

from core.exceptions import PatternError
from .bindings import FAIL, NO_BINDINGS, MatchOutcome, match_variable
from .patterns import Literal, Pattern, SegmentVar, SimpleVar


def match_pattern(
    pattern: Pattern,
    tokens: Sequence[str],
    bindings: MatchOutcome = NO_BINDINGS
) -> MatchOutcome:
    """
    Match a whole pattern against a whole token sequence.

    Args:
        pattern: Pattern elements
        tokens: Input tokens
        bindings: Bindings to start from

    Returns:
        The resulting BindingSet, or FAIL
    """
    if bindings is FAIL:
        return FAIL

    pattern = tuple(pattern)
    tokens = tuple(tokens)
    position = 0
    cursor = 0

    while True:
        if position == len(pattern):
            return bindings if cursor == len(tokens) else FAIL

        element = pattern[position]

        if isinstance(element, SegmentVar):
            bindings, cursor = match_segment(pattern, position, tokens, cursor, bindings)
            if bindings is FAIL:
                return FAIL
            position += 1
            continue

        if cursor == len(tokens):
            return FAIL

        if isinstance(element, SimpleVar):
            bindings = match_variable(element.name, (tokens[cursor],), bindings)
            if bindings is FAIL:
                return FAIL
        elif isinstance(element, Literal):
            if element.token != tokens[cursor]:
                return FAIL
        else:
            return FAIL

        position += 1
        cursor += 1


def match_segment(
    pattern: Pattern,
    position: int,
    tokens: Tuple[str, ...],
    start: int,
    bindings: MatchOutcome
) -> Tuple[MatchOutcome, int]:
    """
    Bind the segment variable at ``pattern[position]``.

    The variable takes every remaining token when it ends the pattern;
    otherwise it takes the tokens up to the first occurrence of the
    following literal.

    Args:
        pattern: Full pattern
        position: Index of the segment variable within ``pattern``
        tokens: Full input
        start: Index of the first input token still to be matched
        bindings: Current outcome

    Returns:
        ``(outcome, cursor)`` where ``cursor`` is the input index the rest
        of the pattern continues from

    Raises:
        PatternError: If the segment variable is followed by a variable
    """
    variable = pattern[position]

    if position + 1 == len(pattern):
        end = len(tokens)
    else:
        anchor = pattern[position + 1]
        if not isinstance(anchor, Literal):
            raise PatternError(
                f"Segment variable {variable} is not followed by a literal",
                {"following": str(anchor)}
            )
        try:
            end = tokens.index(anchor.token, start)
        except ValueError:
            return FAIL, start

    return match_variable(variable.name, tokens[start:end], bindings), end
