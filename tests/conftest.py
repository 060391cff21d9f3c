"""Shared fixtures for the post wizard tests."""

from typing import List

import pytest

from fyipost.bot import PostBot
from fyipost.storage import MemoryStorage
from fyipost.turn import TurnContext


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def bot(storage):
    return PostBot(storage)


@pytest.fixture
def converse(bot):
    """Send messages as one user and return every turn."""

    def _converse(messages: List[str], user_id: str = "alice", conversation_id: str = "conv-1"):
        turns = []
        for text in messages:
            turn = TurnContext(user_id=user_id, conversation_id=conversation_id, text=text)
            bot.on_turn(turn)
            turns.append(turn)
        return turns

    return _converse
