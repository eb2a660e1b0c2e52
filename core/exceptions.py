"""
Exception Definitions - Custom exceptions for ELIZA Responder
============================================================

This module defines all custom exceptions used throughout the application,
providing clear error handling and meaningful error messages.

A pattern that does not match an input is not an error: the matcher
returns a failure value and the rule selector moves on to the next rule.
"""


class ElizaError(Exception):
    """
    Base exception for all ELIZA Responder errors.

    All custom exceptions in this application inherit from this base class,
    allowing for easy catching of all application-specific errors.

    Attributes:
        message (str): Human-readable error description
        details (dict): Additional error details for debugging
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            details: Optional dictionary with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return formatted error message with details if present."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(ElizaError):
    """
    Configuration-related errors.

    Raised when there are issues with:
    - Unreadable configuration files
    - Invalid configuration values
    - Environment variable issues
    - Configuration parsing errors
    """
    pass


class RuleSetError(ElizaError):
    """
    Malformed rule set.

    Raised while a rule set is being built when:
    - The rule set is empty
    - The last rule is not a bare segment-variable catch-all
    - A response template references a variable its pattern never binds
    - A rule entry in a rules file is missing fields or has the wrong shape
    """
    pass


class EmptyTemplateListError(RuleSetError):
    """
    A rule was declared without any response templates.
    """
    pass


class PatternError(RuleSetError):
    """
    Invalid pattern element.

    Raised when:
    - A pattern element mapping uses an unknown key
    - A segment variable is followed by something other than a literal anchor
    """
    pass

