"""
Tokenizer - Turn a raw input line into tokens
=============================================
"""

from typing import List

# Characters removed before splitting
PUNCTUATION = '.,;:`!?#-()\\"'

_STRIP_TABLE = str.maketrans("", "", PUNCTUATION)


def tokenize(line: str) -> List[str]:
    """
    Strip punctuation, lower-case and split a line on whitespace.

    Args:
        line: Raw input line

    Returns:
        List of tokens; empty for a blank line

    Example:
        >>> tokenize("Well, hello there!")
        ['well', 'hello', 'there']
    """
    if not line:
        return []
    return line.translate(_STRIP_TABLE).lower().split()


def detokenize(tokens: List[str]) -> str:
    """Join response tokens with single spaces."""
    return " ".join(tokens)
