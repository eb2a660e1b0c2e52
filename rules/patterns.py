"""
Pattern Elements - Literals and variables of rule patterns and templates
========================================================================

Patterns and response templates are tuples of elements:

- ``Literal("hello")``   matches the token ``hello`` exactly
- ``SimpleVar("x")``     matches exactly one token
- ``SegmentVar("x")``    matches zero or more tokens

Rules files use a compact text notation, decoded once here::

    "?*x hello ?*y"     ->  SegmentVar(x), Literal(hello), SegmentVar(y)
    "?who said"         ->  SimpleVar(who), Literal(said)

A word is a variable only when it is ``?`` or ``?*`` followed by an
identifier; ``?``, ``Sup?`` and ``?!`` are literals. A literal that looks
like a variable can be written as the mapping ``{literal: "?x"}``.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Tuple, Union

from core.exceptions import PatternError


VARIABLE_RE = re.compile(r"^\?(\*?)([A-Za-z_][A-Za-z0-9_-]*)$")


@dataclass(frozen=True)
class Literal:
    """A concrete token."""
    token: str

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class SimpleVar:
    """A variable that binds exactly one token."""
    name: str

    def __str__(self) -> str:
        return f"?{self.name}"


@dataclass(frozen=True)
class SegmentVar:
    """A variable that binds a run of zero or more tokens."""
    name: str

    def __str__(self) -> str:
        return f"?*{self.name}"


PatternElement = Union[Literal, SimpleVar, SegmentVar]
Pattern = Tuple[PatternElement, ...]

ELEMENT_TYPES = (Literal, SimpleVar, SegmentVar)
VARIABLE_TYPES = (SimpleVar, SegmentVar)


def is_variable(element: PatternElement) -> bool:
    """True for simple and segment variables."""
    return isinstance(element, VARIABLE_TYPES)


def normalize_token(token: str) -> str:
    """Case-normalize a token the way the tokenizer does."""
    return token.lower()


def parse_word(word: str, normalize: bool = True) -> PatternElement:
    """
    Decode a single word of pattern notation.

    Args:
        word: ``?*name``, ``?name`` or a literal token
        normalize: Lower-case literal tokens (patterns yes, templates no)

    Returns:
        The corresponding pattern element
    """
    match = VARIABLE_RE.match(word)
    if match:
        segment, name = match.groups()
        return SegmentVar(name) if segment else SimpleVar(name)
    return Literal(normalize_token(word) if normalize else word)


def parse_element(item: Any, normalize: bool = True) -> Tuple[PatternElement, ...]:
    """
    Decode one item of a pattern list.

    Strings may hold several words; mappings hold exactly one of
    ``literal``, ``var`` or ``segment``.

    Raises:
        PatternError: If the item has an unsupported shape
    """
    if isinstance(item, ELEMENT_TYPES):
        return (item,)

    if isinstance(item, str):
        return tuple(parse_word(word, normalize) for word in item.split())

    if isinstance(item, dict) and len(item) == 1:
        kind, value = next(iter(item.items()))
        if not isinstance(value, str) or not value:
            raise PatternError(f"Pattern element '{kind}' needs a non-empty string", {"item": item})
        if kind == "literal":
            return (Literal(normalize_token(value) if normalize else value),)
        if kind == "var":
            return (SimpleVar(value),)
        if kind == "segment":
            return (SegmentVar(value),)
        raise PatternError(f"Unknown pattern element kind: {kind}", {"item": item})

    # YAML turns bare numbers and booleans into scalars; keep them as literals
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        return (Literal(str(item)),)

    raise PatternError("Unsupported pattern element", {"item": repr(item)})


def parse_pattern(source: Union[str, Iterable[Any]], normalize: bool = True) -> Pattern:
    """
    Build a pattern from notation.

    Args:
        source: A notation string, a single mapping, or a list of strings,
            mappings and elements
        normalize: Lower-case literal tokens

    Returns:
        Tuple of pattern elements

    Example:
        >>> parse_pattern("?*x hello ?*y")
        (SegmentVar(name='x'), Literal(token='hello'), SegmentVar(name='y'))
    """
    if isinstance(source, (str, dict) + ELEMENT_TYPES):
        return parse_element(source, normalize)

    if not isinstance(source, (list, tuple)):
        raise PatternError("Pattern must be a string or a list", {"source": repr(source)})

    elements = []
    for item in source:
        elements.extend(parse_element(item, normalize))
    return tuple(elements)


def parse_template(source: Union[str, Iterable[Any]]) -> Pattern:
    """Build a response template; literal case is preserved."""
    return parse_pattern(source, normalize=False)


def variable_names(pattern: Pattern) -> set:
    """Names of all variables occurring in a pattern."""
    return {element.name for element in pattern if is_variable(element)}


def check_segment_anchors(pattern: Pattern) -> None:
    """
    Ensure every segment variable is last or followed by a literal.

    Raises:
        PatternError: If a segment variable is followed by a variable
    """
    for position, element in enumerate(pattern[:-1]):
        following = pattern[position + 1]
        if isinstance(element, SegmentVar) and not isinstance(following, Literal):
            raise PatternError(
                f"Segment variable {element} must be followed by a literal, not {following}",
                {"pattern": format_pattern(pattern)}
            )


def format_pattern(pattern: Pattern) -> str:
    """Render a pattern back into notation."""
    return " ".join(str(element) for element in pattern)



def pattern_to_notation(pattern: Pattern) -> Union[str, list]:
    """
    Render a pattern in the form a rules file accepts.

    Literals that read as variable notation are written as
    ``{literal: ...}`` mappings so they load back as literals.
    """
    if not any(_needs_escape(element) for element in pattern):
        return format_pattern(pattern)
    return [
        {"literal": element.token} if _needs_escape(element) else str(element)
        for element in pattern
    ]


def _needs_escape(element: PatternElement) -> bool:
    return isinstance(element, Literal) and VARIABLE_RE.match(element.token) is not None
