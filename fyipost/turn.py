"""
Turn Context

One inbound message and the responses produced while handling it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class TurnContext:
    """A single inbound-message/outbound-response cycle."""
    user_id: str
    conversation_id: str
    text: str = ""
    responses: List[str] = field(default_factory=list)
    # Per-turn cache, filled by the state layer
    turn_state: Dict[str, Any] = field(default_factory=dict)

    def send(self, text: str) -> None:
        """Queue an outbound plain-text message."""
        self.responses.append(text)
