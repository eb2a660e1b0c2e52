"""
Textual Application - Chat TUI
==============================

This module implements a Textual chat screen for ELIZA Responder:
a scrolling transcript above a single input line.
"""

from typing import Optional, List, Tuple

from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Header, Footer, Static, Input
from textual.binding import Binding

from core.config import Config, load_config
from core.logging import get_logger, set_log_context, clear_log_context
from services.responder import Responder

logger = get_logger("tui.app")


class ChatLine(Static):
    """One line of the transcript."""

    def __init__(self, speaker: str, text: str, **kwargs):
        super().__init__(f"{speaker}: {text}", markup=False, **kwargs)
        self.speaker = speaker
        self.line_text = text


class ElizaChatApp(App):
    """
    ELIZA Responder terminal chat.

    Each submitted line is answered by the responder; the app exits once
    it has shown the configured exit response.
    """

    CSS = """
    Screen {
        background: $surface;
    }

    #transcript {
        height: 1fr;
        padding: 0 1;
    }

    .user-line {
        color: $text;
        margin: 1 0 0 0;
    }

    .eliza-line {
        color: $primary;
        text-style: bold;
    }

    .rule-name {
        color: $text-muted;
    }

    Input {
        dock: bottom;
        margin: 0 0 1 0;
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("escape", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: Optional[Config] = None,
        responder: Optional[Responder] = None
    ):
        super().__init__()

        self.config = config or load_config()
        self.responder = responder or Responder.from_config(self.config)
        self.transcript: List[Tuple[str, str]] = []
        self.turns = 0
        self.title = self.config.ui.tui_title

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(id="transcript")
        yield Input(placeholder="Say something...", id="message")
        yield Footer()

    def on_mount(self) -> None:
        if self.config.session.greeting:
            self.add_line("ELIZA", self.config.session.greeting, "eliza-line")
        self.query_one("#message", Input).focus()

    def add_line(self, speaker: str, text: str, classes: str) -> None:
        """Append a line to the transcript and scroll to it."""
        self.transcript.append((speaker, text))
        scroll = self.query_one("#transcript", VerticalScroll)
        scroll.mount(ChatLine(speaker, text, classes=classes))
        scroll.scroll_end(animate=False)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        line = event.value
        event.input.value = ""

        self.turns += 1
        set_log_context(turn=self.turns)
        try:
            result = self.responder.reply(line)
        finally:
            clear_log_context()

        self.add_line("You", line, "user-line")
        self.add_line("ELIZA", result.text, "eliza-line")

        if self.config.ui.show_rule_names:
            scroll = self.query_one("#transcript", VerticalScroll)
            scroll.mount(Static(f"  rule: {result.rule_name}", classes="rule-name"))

        if result.is_farewell(self.config.responder.exit_response):
            logger.info(f"Exit response after {self.turns} turns")
            self.exit(self.turns)

    def action_quit(self) -> None:
        self.exit(self.turns)


def run_tui(config: Optional[Config] = None) -> None:
    app = ElizaChatApp(config=config)
    app.run()


if __name__ == "__main__":
    run_tui()
