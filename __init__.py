"""
ELIZA Responder - Rule-driven conversational responder
======================================================

Answers a line of text by picking the first matching rule from an
ordered rule set, capturing sub-phrases with pattern variables and
substituting them, with I/you viewpoint switched, into one of the
rule's response templates.

Author: ELIZA Responder Team
License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "ELIZA Responder Team"
__license__ = "MIT"
