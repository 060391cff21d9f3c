"""
Post Bot

Hosts the post wizard: routes each turn into the dialog and saves
state afterwards.
"""

import logging
from typing import Optional

from .config.defaults import USER_POST_PROPERTY, WELCOME_TEXT
from .config.models import AppSettings, FyiPost, StorageBackend
from .storage import ConversationState, FileStorage, MemoryStorage, Storage, UserState
from .turn import TurnContext
from .wizard import DialogStatus, PostDialog

logger = logging.getLogger(__name__)


class PostBot:
    """Turn host for the post wizard."""

    def __init__(self, storage: Storage):
        """
        Initialize the bot.

        Args:
            storage: Backend for user and conversation state
        """
        self.storage = storage
        self.conversation_state = ConversationState(storage)
        self.user_state = UserState(storage)
        self.dialog = PostDialog(self.conversation_state, self.user_state)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "PostBot":
        """Create a bot with the storage backend named in settings."""
        if settings.storage == StorageBackend.MEMORY:
            storage: Storage = MemoryStorage()
        else:
            storage = FileStorage(settings.state_file)
        logger.debug("Using %s storage", settings.storage.value)
        return cls(storage)

    def welcome(self) -> str:
        """Greeting shown when a user joins."""
        return WELCOME_TEXT

    def on_turn(self, turn: TurnContext) -> DialogStatus:
        """
        Handle one inbound message.

        Returns:
            Dialog status after the turn
        """
        status = self.dialog.run(turn)
        self.conversation_state.save_changes(turn)
        self.user_state.save_changes(turn)
        return status

    def get_post(self, user_id: str) -> Optional[FyiPost]:
        """Read a user's stored post outside of a conversation."""
        turn = TurnContext(user_id=user_id, conversation_id="")
        data = self.user_state.create_property(USER_POST_PROPERTY).get(turn)
        if data is None:
            return None
        return FyiPost(**data)

    def reset(self, user_id: str, conversation_id: str) -> bool:
        """
        Abandon any active run and delete the user's stored state.

        Returns:
            True if a run was active
        """
        turn = TurnContext(user_id=user_id, conversation_id=conversation_id)
        was_active = self.dialog.cancel(turn)
        self.conversation_state.save_changes(turn)
        self.user_state.clear(turn)
        return was_active
