"""
Responder - Turn user input into a rule-driven reply
====================================================

``respond`` is the single entry point into the rule engine: tokens in,
tokens out. ``Responder`` wraps it for the session loop and the UIs,
holding the rule engine and the random source for a whole conversation.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from core.config import Config
from core.logging import get_logger
from rules.engine import RulesEngine, RuleSet, select
from .tokenizer import tokenize, detokenize

logger = get_logger("services.responder")


def respond(
    input_tokens: Sequence[str],
    rule_set: RuleSet,
    rng: Optional[random.Random] = None
) -> List[str]:
    """
    Produce response tokens for a tokenized input line.

    Args:
        input_tokens: Tokens of one input line
        rule_set: Validated rule set
        rng: Random source for template choice

    Returns:
        Flat list of response tokens
    """
    match = select(input_tokens, rule_set)
    return match.get_response(rng)


def is_farewell(tokens: Sequence[str], exit_response: Sequence[str]) -> bool:
    """True if ``tokens`` is exactly the exit response."""
    return list(tokens) == list(exit_response)


@dataclass
class ResponderResult:
    """
    Result of answering one input line.

    Attributes:
        tokens (list): Response tokens
        rule_name (str): Name of the rule that produced the response
        input_tokens (tuple): Tokens the input was split into
        bindings (dict): Variable bindings captured by the rule, before
            viewpoint switching
        latency_ms (int): Time taken to answer
    """
    tokens: List[str]
    rule_name: str
    input_tokens: Tuple[str, ...] = ()
    bindings: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    latency_ms: int = 0

    @property
    def text(self) -> str:
        """Response tokens joined for display."""
        return detokenize(self.tokens)

    def is_farewell(self, exit_response: Sequence[str]) -> bool:
        return is_farewell(self.tokens, exit_response)


class Responder:
    """
    Rule-driven responder for one conversation.

    Example:
        responder = Responder(RulesEngine(), random.Random(42))

        result = responder.reply("Well, hello there!")
        print(result.text)
    """

    def __init__(self, engine: RulesEngine, rng: Optional[random.Random] = None):
        """
        Initialize responder.

        Args:
            engine: Rules engine holding the rule set
            rng: Random source for template choice (unseeded if omitted)
        """
        self.engine = engine
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def from_config(cls, config: Config) -> "Responder":
        """Build a responder from the configured rules file and seed."""
        engine = RulesEngine.from_path(config.responder.rules_path)
        return cls(engine, random.Random(config.responder.seed))

    def respond(self, input_tokens: Sequence[str]) -> List[str]:
        """Response tokens for already tokenized input."""
        return respond(input_tokens, self.engine.rule_set, self.rng)

    def reply(self, line: str) -> ResponderResult:
        """
        Answer one raw input line.

        Args:
            line: Raw user input

        Returns:
            ResponderResult with the response and the rule that produced it
        """
        start = time.monotonic()
        tokens = tokenize(line)

        match = self.engine.select(tokens)
        response = match.get_response(self.rng)

        latency_ms = int((time.monotonic() - start) * 1000)
        logger.debug(f"Rule '{match.rule.name}' answered in {latency_ms}ms")

        return ResponderResult(
            tokens=response,
            rule_name=match.rule.name,
            input_tokens=tuple(tokens),
            bindings=match.bindings.as_dict(),
            latency_ms=latency_ms,
        )
