"""
Bot State

User- and conversation-scoped state on top of a Storage backend.
State is read once per turn, cached on the turn, and written back by
save_changes() only when it changed.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional

from ..turn import TurnContext
from .base import Storage

logger = logging.getLogger(__name__)


class BotState:
    """Base class for a scoped slice of bot state."""

    namespace: str = "state"

    def __init__(self, storage: Storage):
        self.storage = storage
        self._cache_key = f"{self.__class__.__name__}:{id(self)}"

    def storage_key(self, turn: TurnContext) -> str:
        """Storage key for this turn's scope."""
        raise NotImplementedError

    def load(self, turn: TurnContext, force: bool = False) -> Dict[str, Any]:
        """
        Load state for the turn, reading storage at most once.

        Args:
            turn: Current turn
            force: Re-read from storage even if cached

        Returns:
            The mutable state dict for this scope
        """
        cached = turn.turn_state.get(self._cache_key)
        if cached is not None and not force:
            return cached["state"]

        key = self.storage_key(turn)
        items = self.storage.read([key])
        state = items.get(key, {})
        turn.turn_state[self._cache_key] = {
            "state": state,
            "snapshot": self._snapshot(state),
        }
        return state

    def save_changes(self, turn: TurnContext, force: bool = False) -> bool:
        """
        Write cached state back if it changed.

        Returns:
            True if anything was written
        """
        cached = turn.turn_state.get(self._cache_key)
        if cached is None:
            return False

        snapshot = self._snapshot(cached["state"])
        if not force and snapshot == cached["snapshot"]:
            return False

        key = self.storage_key(turn)
        if cached["state"]:
            self.storage.write({key: cached["state"]})
        else:
            # Empty scopes are not kept
            self.storage.delete([key])
        cached["snapshot"] = snapshot
        logger.debug("Saved %s", key)
        return True

    def clear(self, turn: TurnContext) -> None:
        """Delete this scope's state from storage and the turn cache."""
        self.storage.delete([self.storage_key(turn)])
        turn.turn_state.pop(self._cache_key, None)

    def create_property(self, name: str) -> "StateProperty":
        """Create an accessor for one named property in this scope."""
        return StateProperty(self, name)

    @staticmethod
    def _snapshot(state: Dict[str, Any]) -> str:
        return json.dumps(state, sort_keys=True, default=str)


class UserState(BotState):
    """State that follows a user across conversations."""

    namespace = "users"

    def storage_key(self, turn: TurnContext) -> str:
        return f"{self.namespace}/{turn.user_id}"


class ConversationState(BotState):
    """State scoped to a single conversation."""

    namespace = "conversations"

    def storage_key(self, turn: TurnContext) -> str:
        return f"{self.namespace}/{turn.conversation_id}"


class StateProperty:
    """Accessor for a single named property inside a BotState scope."""

    def __init__(self, state: BotState, name: str):
        self.state = state
        self.name = name

    def get(
        self,
        turn: TurnContext,
        default_factory: Optional[Callable[[], Any]] = None,
    ) -> Any:
        """
        Get the property value.

        If the property is missing and a default_factory is given, the
        default is stored and returned.
        """
        data = self.state.load(turn)
        if self.name not in data and default_factory is not None:
            data[self.name] = default_factory()
        return data.get(self.name)

    def set(self, turn: TurnContext, value: Any) -> None:
        """Set the property value."""
        self.state.load(turn)[self.name] = value

    def delete(self, turn: TurnContext) -> None:
        """Remove the property."""
        self.state.load(turn).pop(self.name, None)
