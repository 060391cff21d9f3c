"""State storage for the post wizard."""

from .base import Storage, MemoryStorage, FileStorage, StorageError
from .state import BotState, UserState, ConversationState, StateProperty

__all__ = [
    "Storage",
    "MemoryStorage",
    "FileStorage",
    "StorageError",
    "BotState",
    "UserState",
    "ConversationState",
    "StateProperty",
]
