"""
Binding Environment - Variable bindings produced by pattern matching
====================================================================

A successful match produces a ``BindingSet``; a failed match produces
the ``FAIL`` singleton. The two never share a value space: an empty
``BindingSet`` is a success with no variables bound, and ``FAIL`` is
not a ``BindingSet`` at all.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple, Union


Tokens = Tuple[str, ...]


@dataclass(frozen=True)
class Binding:
    """
    A single variable binding.

    Attributes:
        name (str): Variable name
        value (tuple): Matched tokens (a singleton for simple variables)
    """
    name: str
    value: Tokens


class BindingSet:
    """
    Immutable ordered collection of bindings, unique by variable name.

    ``extend`` returns a new set sharing the existing entries; the
    receiver is never modified.
    """

    __slots__ = ("_entries", "_index")

    def __init__(self, entries: Tuple[Binding, ...] = ()):
        self._entries = tuple(entries)
        self._index: Dict[str, Binding] = {}
        for entry in self._entries:
            if entry.name in self._index:
                raise ValueError(f"Variable '{entry.name}' is already bound")
            self._index[entry.name] = entry

    def lookup(self, name: str) -> Optional[Tokens]:
        """Return the tokens bound to ``name``, or None if unbound."""
        entry = self._index.get(name)
        return entry.value if entry is not None else None

    def extend(self, name: str, value) -> "BindingSet":
        """
        Return a new set with ``name`` bound to ``value`` appended.

        Raises:
            ValueError: If ``name`` is already bound
        """
        if name in self._index:
            raise ValueError(f"Variable '{name}' is already bound")
        return BindingSet(self._entries + (Binding(name, tuple(value)),))

    def as_dict(self) -> Dict[str, Tokens]:
        """Return bindings as a plain ``{name: tokens}`` dict, in binding order."""
        return {entry.name: entry.value for entry in self._entries}

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[Binding]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        # Any binding set, even an empty one, is a successful match
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BindingSet):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        inner = ", ".join(f"{b.name}={list(b.value)}" for b in self._entries)
        return f"BindingSet({inner})"


class MatchFailure:
    """Outcome of a match that did not succeed. Use the ``FAIL`` singleton."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "FAIL"


FAIL = MatchFailure()

# Start state for every match
NO_BINDINGS = BindingSet()

MatchOutcome = Union[BindingSet, MatchFailure]


def is_fail(outcome: MatchOutcome) -> bool:
    """True if ``outcome`` is the failure value."""
    return outcome is FAIL


def lookup(name: str, bindings: BindingSet) -> Optional[Tokens]:
    """Return the tokens bound to ``name`` in ``bindings``, or None."""
    return bindings.lookup(name)


def extend(name: str, value, bindings: BindingSet) -> BindingSet:
    """Return ``bindings`` extended with ``name`` bound to ``value``."""
    return bindings.extend(name, value)


def match_variable(name: str, value, bindings: MatchOutcome) -> MatchOutcome:
    """
    Bind ``name`` to ``value`` or check it against an existing binding.

    Args:
        name: Variable name
        value: Candidate tokens
        bindings: Current outcome

    Returns:
        The extended set if ``name`` was unbound, ``bindings`` unchanged if
        it was already bound to an equal value, FAIL otherwise
    """
    if bindings is FAIL:
        return FAIL

    value = tuple(value)
    existing = bindings.lookup(name)

    if existing is None:
        return bindings.extend(name, value)
    if existing == value:
        return bindings
    return FAIL
