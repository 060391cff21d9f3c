"""
Wizard State Management

The dialog cursor that survives between turns: which step runs next,
the draft collected so far, and the prompt the user is answering.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config.models import PostDraft


class DialogError(Exception):
    """The stored dialog cursor cannot be resumed."""
    pass


class DialogStatus(str, Enum):
    """Outcome of dispatching one turn."""
    WAITING = "waiting"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


@dataclass
class PromptRequest:
    """A question sent to the user and awaited on the next turn."""
    prompt_id: str
    text: str
    choices: List[str] = field(default_factory=list)
    retry_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prompt_id": self.prompt_id,
            "text": self.text,
            "choices": list(self.choices),
            "retry_text": self.retry_text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptRequest":
        return cls(
            prompt_id=data["prompt_id"],
            text=data.get("text", ""),
            choices=list(data.get("choices", [])),
            retry_text=data.get("retry_text"),
        )


@dataclass
class StepResult:
    """Result of executing a wizard step."""
    prompt: Optional[PromptRequest] = None
    messages: List[str] = field(default_factory=list)
    end: bool = False
    status: DialogStatus = DialogStatus.WAITING

    @property
    def should_continue(self) -> bool:
        """Whether the wizard waits for another turn."""
        return not self.end and self.prompt is not None


@dataclass
class DialogState:
    """Durable cursor for one wizard run."""
    step_index: int = 0
    draft: PostDraft = field(default_factory=PostDraft)
    pending_prompt: Optional[PromptRequest] = None
    attempts: int = 0
    started_at: str = ""
    last_updated: str = ""

    @classmethod
    def begin(cls) -> "DialogState":
        """Create the cursor for a new run."""
        now = datetime.now().isoformat()
        return cls(started_at=now, last_updated=now)

    def advance(self) -> None:
        """Move the cursor to the next step."""
        self.step_index += 1
        self.attempts = 0
        self.touch()

    def touch(self) -> None:
        self.last_updated = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_index": self.step_index,
            "draft": self.draft.model_dump(),
            "pending_prompt": self.pending_prompt.to_dict() if self.pending_prompt else None,
            "attempts": self.attempts,
            "started_at": self.started_at,
            "last_updated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DialogState":
        if not isinstance(data, dict):
            raise DialogError(f"Invalid dialog state: expected an object, got {type(data).__name__}")
        try:
            pending = data.get("pending_prompt")
            return cls(
                step_index=int(data["step_index"]),
                draft=PostDraft(**(data.get("draft") or {})),
                pending_prompt=PromptRequest.from_dict(pending) if pending else None,
                attempts=int(data.get("attempts", 0)),
                started_at=data.get("started_at", ""),
                last_updated=data.get("last_updated", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DialogError(f"Invalid dialog state: {e}")
