#!/usr/bin/env python3
"""
ELIZA Responder - Main Entry Point
==================================

This is the main entry point for ELIZA Responder.
It provides a command-line interface for running a conversation
in various modes.

Usage:
    python main.py                  # Console conversation
    python main.py --tui            # Terminal chat UI
    python main.py --test "Hello"   # Answer a single message
    python main.py --check-rules    # Validate and list the rules
    python main.py --help           # Show help
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import load_config, Config
from core.logging import setup_logging, get_logger
from core.exceptions import ElizaError
from rules.engine import RulesEngine
from rules.patterns import format_pattern

logger = get_logger("main")


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="ELIZA Responder - rule-driven conversational responder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                          Talk on the console
  python main.py --tui                    Talk in the terminal UI
  python main.py --test "I am sad"        Answer one message
  python main.py --rules my_rules.yaml    Use a custom rules file
  python main.py --check-rules            Validate the rules file
        """
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--chat",
        action="store_true",
        help="Console conversation (default)"
    )
    mode_group.add_argument(
        "--tui",
        action="store_true",
        help="Start terminal chat UI"
    )
    mode_group.add_argument(
        "--test",
        nargs="+",
        metavar="MESSAGE",
        help="Answer a single message and show which rule matched"
    )
    mode_group.add_argument(
        "--check-rules",
        action="store_true",
        help="Load and validate the rules, then list them"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--rules",
        type=str,
        metavar="PATH",
        help="Path to a YAML rules file"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for response selection"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def run_chat(config: Config) -> None:
    """Run a console conversation."""
    from services.session import ConversationSession

    session = ConversationSession.from_config(config)
    session.run()


def run_terminal_ui(config: Config) -> None:
    """Run the terminal UI."""
    from ui.terminal.app import run_tui

    run_tui(config=config)


def run_test_message(config: Config, message: str) -> None:
    """Answer one message and show how it was matched."""
    from services.responder import Responder

    responder = Responder.from_config(config)
    result = responder.reply(message)

    print(f"\nTest Message: {message}")
    print("-" * 50)
    print(f"  Tokens:   {' '.join(result.input_tokens) or '(none)'}")
    print(f"  Rule:     {result.rule_name}")
    for name, value in result.bindings.items():
        print(f"  ?{name:<8} {' '.join(value) or '(empty)'}")
    print(f"  Response: {result.text}")
    print(f"  Latency:  {result.latency_ms}ms")

    others = [
        match.rule.name
        for match in responder.engine.match_all(result.input_tokens)
        if match.rule.name != result.rule_name
    ]
    if others:
        print(f"  Also matched: {', '.join(others)}")


def run_check_rules(config: Config) -> None:
    """Validate the configured rules and list them."""
    engine = RulesEngine.from_path(config.responder.rules_path)
    source = config.responder.rules_path or "built-in rules"

    print(f"\n✓ {len(engine.rules)} rules loaded from {source}")
    print("-" * 50)
    for index, rule in enumerate(engine.rules, start=1):
        print(f"  {index:>3}. {rule.name:<18} {format_pattern(rule.pattern)}"
              f"  ({len(rule.responses)} responses)")


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)

        # Apply command-line overrides
        if args.rules:
            config.responder.rules_path = args.rules
        if args.seed is not None:
            config.responder.seed = args.seed
        if args.debug:
            config.debug = True
        config.validate()

        setup_logging(
            log_dir=config.log_dir or None,
            log_level="DEBUG" if config.debug else "WARNING",
            json_format=config.log_json,
            console_output=True
        )
        logger.debug(f"Config directory: {config.config_dir}")

        if args.tui:
            run_terminal_ui(config)
        elif args.test:
            run_test_message(config, " ".join(args.test))
        elif args.check_rules:
            run_check_rules(config)
        else:
            run_chat(config)

        return 0

    except ElizaError as e:
        print(f"\nError: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 0


if __name__ == "__main__":
    sys.exit(main())
