"""
Test Terminal UI Module
=======================

Drives the Textual chat app headlessly.
"""

import asyncio
import random
import pytest
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import Config
from rules.engine import RulesEngine
from services.responder import Responder
from ui.terminal.app import ElizaChatApp


def make_app():
    config = Config()
    responder = Responder(RulesEngine(), random.Random(0))
    return ElizaChatApp(config=config, responder=responder)


class TestElizaChatApp:
    """Tests for ElizaChatApp."""

    def test_greeting_shown(self):
        """Test the greeting opens the transcript."""
        app = make_app()

        async def run():
            async with app.run_test() as pilot:
                await pilot.pause()

        asyncio.run(run())

        assert app.transcript[0] == ("ELIZA", Config().session.greeting)

    def test_reply_to_input(self):
        """Test a submitted line is answered."""
        app = make_app()

        async def run():
            async with app.run_test() as pilot:
                await pilot.press(*"bye")
                await pilot.press("enter")
                await pilot.pause()

        asyncio.run(run())

        assert ("You", "bye") in app.transcript
        assert ("ELIZA", "Adios!") in app.transcript

    def test_exit_response_closes_app(self):
        """Test the app exits after the exit response."""
        app = make_app()

        async def run():
            async with app.run_test() as pilot:
                await pilot.press(*"goodbye")
                await pilot.press("enter")

        asyncio.run(run())

        assert app.transcript[-1] == ("ELIZA", "good bye")
        assert app.return_value == 1


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
