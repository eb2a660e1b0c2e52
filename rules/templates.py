"""
Response Templates - Viewpoint switching, substitution and flattening
=====================================================================

This module turns a matched rule and its bindings into response tokens:

1. Switch the viewpoint of every bound value (I <-> you, me -> you, am -> are)
2. Pick one of the rule's templates at random
3. Substitute bound values for variable references
4. Flatten the result into a single token list
"""

import random
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .bindings import BindingSet
from .patterns import Pattern, is_variable


class _Placeholder:
    """Intermediate marker used between the two viewpoint passes."""

    __slots__ = ("source",)

    def __init__(self, source: str):
        self.source = source

    def __repr__(self) -> str:
        return f"__{self.source}__"


# (source word, replacement), looked up case-insensitively
VIEWPOINT_SWAPS: Tuple[Tuple[str, str], ...] = (
    ("i", "you"),
    ("you", "I"),
    ("me", "you"),
    ("am", "are"),
)

_TO_PLACEHOLDER = {source: _Placeholder(source) for source, _ in VIEWPOINT_SWAPS}
_FROM_PLACEHOLDER = {_TO_PLACEHOLDER[source]: target for source, target in VIEWPOINT_SWAPS}


def switch_tokens(tokens: Sequence[str]) -> Tuple[str, ...]:
    """
    Rewrite first/second person words in a token sequence.

    Every original occurrence is rewritten exactly once: the first pass
    replaces swap words with placeholders, the second replaces
    placeholders with their targets. Words not in the table are kept.

    Example:
        >>> switch_tokens(["i", "am", "happy"])
        ('you', 'are', 'happy')
    """
    marked = [_TO_PLACEHOLDER.get(token.lower(), token) for token in tokens]
    return tuple(
        _FROM_PLACEHOLDER[token] if isinstance(token, _Placeholder) else token
        for token in marked
    )


def switch_viewpoint(bindings: BindingSet) -> BindingSet:
    """Return a copy of ``bindings`` with every bound value viewpoint-switched."""
    switched = BindingSet()
    for binding in bindings:
        switched = switched.extend(binding.name, switch_tokens(binding.value))
    return switched


def substitute(template: Pattern, bindings: BindingSet) -> List[Any]:
    """
    Replace variable references in ``template`` with their bound values.

    Literals become their token; variables become the tuple of tokens they
    are bound to, so the result may hold nested sequences.

    Raises:
        KeyError: If the template references an unbound variable
    """
    result: List[Any] = []
    for element in template:
        if is_variable(element):
            value = bindings.lookup(element.name)
            if value is None:
                raise KeyError(element.name)
            result.append(value)
        else:
            result.append(element.token)
    return result


def flatten(items: Iterable[Any]) -> List[str]:
    """Flatten one level of nesting into a flat token list."""
    flat: List[str] = []
    for item in items:
        if isinstance(item, (list, tuple)):
            flat.extend(item)
        else:
            flat.append(item)
    return flat


def choose_template(templates: Sequence[Pattern], rng: Optional[random.Random] = None) -> Pattern:
    """Pick one template uniformly at random."""
    return (rng or random).choice(templates)


def generate_response(rule, bindings: BindingSet, rng: Optional[random.Random] = None) -> List[str]:
    """
    Generate response tokens for a matched rule.

    Args:
        rule: The matched Rule
        bindings: Bindings produced by matching the rule's pattern
        rng: Random source for template choice (module ``random`` if omitted)

    Returns:
        Flat list of response tokens
    """
    switched = switch_viewpoint(bindings)
    template = choose_template(rule.responses, rng)
    return flatten(substitute(template, switched))
