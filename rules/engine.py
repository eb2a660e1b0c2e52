"""
Rules Engine - Ordered rule selection and rule set loading
==========================================================

This module implements the core rules engine that matches incoming
token sequences against rule patterns and generates responses.

Rules are tried strictly in declared order and the first one whose
pattern matches the whole input wins. A rule set is validated when it
is built, so a loaded rule set always ends in a catch-all rule and
selection never comes up empty.
"""

import random
import yaml
from pathlib import Path
from typing import Optional, List, Dict, Any, Sequence, Tuple, Union
from dataclasses import dataclass, field

from core.exceptions import EmptyTemplateListError, PatternError, RuleSetError
from core.logging import get_logger
from .bindings import BindingSet, NO_BINDINGS, FAIL
from .defaults import DEFAULT_RULES
from .matcher import match_pattern
from .patterns import (
    Pattern,
    SegmentVar,
    check_segment_anchors,
    format_pattern,
    parse_pattern,
    parse_template,
    pattern_to_notation,
    variable_names,
)
from .templates import generate_response

logger = get_logger("rules.engine")


@dataclass
class RuleMatch:
    """
    Result of a rule matching a token sequence.

    Attributes:
        rule (Rule): The matching rule
        tokens (tuple): The matched input tokens
        bindings (BindingSet): Variable bindings captured by the pattern
    """
    rule: 'Rule'
    tokens: Tuple[str, ...]
    bindings: BindingSet = field(default_factory=BindingSet)

    def get_response(self, rng: Optional[random.Random] = None) -> List[str]:
        """Generate response tokens from the matched rule."""
        return self.rule.generate_response(self.bindings, rng)


@dataclass(frozen=True)
class Rule:
    """
    A single transformation rule.

    Attributes:
        name (str): Rule name, used in logs and diagnostics
        pattern (tuple): Pattern elements matched against the input
        responses (tuple): Response templates, one picked per reply
    """
    name: str
    pattern: Pattern
    responses: Tuple[Pattern, ...]

    def __post_init__(self):
        object.__setattr__(self, "pattern", tuple(self.pattern))
        object.__setattr__(self, "responses", tuple(tuple(t) for t in self.responses))

        if not self.responses:
            raise EmptyTemplateListError(
                f"Rule '{self.name}' has no response templates",
                {"pattern": format_pattern(self.pattern)}
            )

        check_segment_anchors(self.pattern)

        bound = variable_names(self.pattern)
        for template in self.responses:
            unbound = variable_names(template) - bound
            if unbound:
                raise RuleSetError(
                    f"Rule '{self.name}' template references unbound variables",
                    {
                        "template": format_pattern(template),
                        "unbound": sorted(unbound),
                    }
                )

    @property
    def is_catch_all(self) -> bool:
        """True if the pattern is a single segment variable."""
        return len(self.pattern) == 1 and isinstance(self.pattern[0], SegmentVar)

    def matches(self, tokens: Sequence[str]) -> Optional[RuleMatch]:
        """
        Check if this rule matches a token sequence.

        Args:
            tokens: Input tokens

        Returns:
            RuleMatch if matched, None otherwise
        """
        outcome = match_pattern(self.pattern, tokens, NO_BINDINGS)
        if outcome is FAIL:
            return None
        return RuleMatch(rule=self, tokens=tuple(tokens), bindings=outcome)

    def generate_response(
        self,
        bindings: BindingSet,
        rng: Optional[random.Random] = None
    ) -> List[str]:
        """
        Generate response tokens for this rule.

        Args:
            bindings: Bindings from matching this rule's pattern
            rng: Random source for template choice

        Returns:
            Flat list of response tokens
        """
        return generate_response(self, bindings, rng)

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule to dictionary (rules file notation)."""
        return {
            "name": self.name,
            "pattern": pattern_to_notation(self.pattern),
            "responses": [pattern_to_notation(template) for template in self.responses],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_name: str = "rule") -> 'Rule':
        """
        Create rule from dictionary.

        ``pattern`` is a notation string, a single element mapping or a
        list; ``responses`` is one template or a list of templates in the
        same forms.

        Raises:
            RuleSetError: If required fields are missing or malformed
        """
        if not isinstance(data, dict):
            raise RuleSetError("Rule entry must be a mapping", {"entry": repr(data)})

        name = str(data.get("name") or default_name)

        if "pattern" not in data:
            raise RuleSetError(f"Rule '{name}' has no pattern")

        source = data["pattern"]
        if not isinstance(source, (str, list, dict)):
            raise RuleSetError(
                f"Rule '{name}' pattern must be a string, mapping or list",
                {"pattern": repr(source)}
            )

        responses = data.get("responses") or []
        if isinstance(responses, (str, dict)):
            responses = [responses]
        if not isinstance(responses, list):
            raise RuleSetError(
                f"Rule '{name}' responses must be a list of templates",
                {"responses": repr(responses)}
            )
        for template in responses:
            if not isinstance(template, (str, list, dict)):
                raise RuleSetError(
                    f"Rule '{name}' response template must be a string, mapping or list",
                    {"template": repr(template)}
                )

        pattern = parse_pattern(source)
        if not pattern:
            raise PatternError(f"Rule '{name}' has an empty pattern")

        return cls(
            name=name,
            pattern=pattern,
            responses=tuple(parse_template(template) for template in responses),
        )


@dataclass(frozen=True)
class RuleSet:
    """
    Immutable ordered sequence of rules.

    Construction fails fast if the rule set is empty or its last rule is
    not a catch-all.
    """
    rules: Tuple[Rule, ...]

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))

        if not self.rules:
            raise RuleSetError("Rule set is empty")

        last = self.rules[-1]
        if not last.is_catch_all:
            raise RuleSetError(
                "Last rule must be a catch-all with a single segment variable pattern",
                {"rule": last.name, "pattern": format_pattern(last.pattern)}
            )

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def get_rule(self, name: str) -> Optional[Rule]:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the rule set to rules file data, loadable with ``from_dict``."""
        return {"rules": [rule.to_dict() for rule in self.rules]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RuleSet':
        """
        Build a rule set from ``{"rules": [...]}``.

        Raises:
            RuleSetError: If the data is malformed
        """
        if not isinstance(data, dict) or not isinstance(data.get("rules"), list):
            raise RuleSetError("Rules data must be a mapping with a 'rules' list")

        rules = [
            Rule.from_dict(entry, default_name=f"rule-{index + 1}")
            for index, entry in enumerate(data["rules"])
        ]
        return cls(tuple(rules))

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'RuleSet':
        """
        Load a rule set from a YAML rules file.

        Raises:
            RuleSetError: If the file cannot be read, parsed or validated
        """
        path = Path(path).expanduser()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RuleSetError(f"Failed to parse rules file: {e}", {"path": str(path)})
        except IOError as e:
            raise RuleSetError(f"Failed to read rules file: {e}", {"path": str(path)})

        rule_set = cls.from_dict(data)
        logger.info(f"Loaded {len(rule_set)} rules from {path}")
        return rule_set

    @classmethod
    def default(cls) -> 'RuleSet':
        """The built-in rule set."""
        return cls.from_dict(DEFAULT_RULES)


def select(tokens: Sequence[str], rule_set: RuleSet) -> RuleMatch:
    """
    Return the first rule in ``rule_set`` that matches ``tokens``.

    Args:
        tokens: Input tokens
        rule_set: Validated rule set

    Returns:
        RuleMatch for the first matching rule

    Raises:
        RuleSetError: If no rule matches; a validated rule set ends in a
            catch-all, so this only happens for hand-built rule lists
    """
    for rule in rule_set:
        match = rule.matches(tokens)
        if match:
            logger.debug(f"Rule selected: {rule.name} {match.bindings!r}")
            return match
    raise RuleSetError("No rule matched input", {"tokens": list(tokens)})


class RulesEngine:
    """
    Main rules engine for selecting rules and generating responses.

    Holds one immutable rule set for its whole lifetime.

    Example:
        engine = RulesEngine()

        match = engine.select(["well", "hello", "there"])
        print(" ".join(match.get_response()))
    """

    def __init__(self, rule_set: Optional[RuleSet] = None):
        """
        Initialize rules engine.

        Args:
            rule_set: Rule set to use (built-in rules if omitted)
        """
        self.rule_set = rule_set if rule_set is not None else RuleSet.default()

    @classmethod
    def from_path(cls, rules_path: Optional[str] = None) -> 'RulesEngine':
        """
        Create an engine from a rules file, or the built-in rules.

        Args:
            rules_path: YAML rules file; empty or None for built-in rules
        """
        if rules_path:
            return cls(RuleSet.from_yaml(rules_path))
        return cls(RuleSet.default())

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self.rule_set.rules

    def get_rule(self, name: str) -> Optional[Rule]:
        """
        Get a rule by name.

        Args:
            name: Rule name

        Returns:
            Rule if found, None otherwise
        """
        return self.rule_set.get_rule(name)

    def select(self, tokens: Sequence[str]) -> RuleMatch:
        """
        Find the first matching rule for a token sequence.

        Args:
            tokens: Input tokens

        Returns:
            RuleMatch of the first rule, in declared order, that matches
        """
        return select(tokens, self.rule_set)

    def match_all(self, tokens: Sequence[str]) -> List[RuleMatch]:
        """
        Find all matching rules for a token sequence, in declared order.

        Args:
            tokens: Input tokens

        Returns:
            List of all matches
        """
        matches = []
        for rule in self.rule_set:
            match = rule.matches(tokens)
            if match:
                matches.append(match)
        return matches
