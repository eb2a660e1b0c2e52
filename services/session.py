"""
Conversation Session - Console read/respond/print loop
======================================================

Reads lines, answers each through the responder and prints the reply.
The session ends when a reply is exactly the configured exit response,
or when input runs out.
"""

from typing import Callable, List, Optional, Sequence

from core.config import Config, SessionConfig
from core.logging import get_logger, set_log_context, clear_log_context
from .responder import Responder, ResponderResult

logger = get_logger("services.session")


class ConversationSession:
    """
    One console conversation.

    Input and output functions are injectable so the loop can be driven
    without a terminal.

    Example:
        session = ConversationSession(Responder.from_config(config))
        session.run()
    """

    def __init__(
        self,
        responder: Responder,
        exit_response: Sequence[str] = ("good", "bye"),
        session_config: Optional[SessionConfig] = None,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None
    ):
        self.responder = responder
        self.exit_response = list(exit_response)
        self.settings = session_config or SessionConfig()
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print
        self.turns = 0
        self.history: List[ResponderResult] = []

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "ConversationSession":
        return cls(
            Responder.from_config(config),
            exit_response=config.responder.exit_response,
            session_config=config.session,
            **kwargs
        )

    def step(self, line: str) -> ResponderResult:
        """
        Answer one line and print the reply.

        Returns:
            The responder result for the line
        """
        self.turns += 1
        set_log_context(turn=self.turns)
        try:
            result = self.responder.reply(line)
        finally:
            clear_log_context()

        self.history.append(result)
        self.output_fn(result.text)
        return result

    def run(self) -> int:
        """
        Run the loop until the exit response or end of input.

        Returns:
            Number of turns answered
        """
        if self.settings.greeting:
            self.output_fn(self.settings.greeting)

        logger.info("Session started")

        while True:
            try:
                line = self.input_fn(self.settings.prompt)
            except (EOFError, KeyboardInterrupt):
                logger.info("Input closed")
                break

            result = self.step(line)
            if result.is_farewell(self.exit_response):
                logger.info(f"Exit response after {self.turns} turns")
                break

        if self.settings.farewell:
            self.output_fn(self.settings.farewell)

        return self.turns
