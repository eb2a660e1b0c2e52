"""
Rules Module - Pattern matching and template-based responses
============================================================

This module provides the rule-driven response engine:
- Binding environment for matched variables
- Literal, simple-variable and segment-variable patterns
- First-match rule selection over an ordered rule set
- Viewpoint switching and template substitution
"""

from .bindings import BindingSet, Binding, MatchFailure, FAIL, NO_BINDINGS, match_variable
from .patterns import Literal, SimpleVar, SegmentVar, parse_pattern, parse_template
from .matcher import match_pattern, match_segment
from .engine import RulesEngine, Rule, RuleSet, RuleMatch, select
from .templates import switch_viewpoint, substitute, flatten, generate_response

__all__ = [
    "BindingSet",
    "Binding",
    "MatchFailure",
    "FAIL",
    "NO_BINDINGS",
    "match_variable",
    "Literal",
    "SimpleVar",
    "SegmentVar",
    "parse_pattern",
    "parse_template",
    "match_pattern",
    "match_segment",
    "RulesEngine",
    "Rule",
    "RuleSet",
    "RuleMatch",
    "select",
    "switch_viewpoint",
    "substitute",
    "flatten",
    "generate_response",
]
