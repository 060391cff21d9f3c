"""
Base Wizard Step

Abstract base class for all wizard steps.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

from ...config.models import PostDraft
from ...storage.state import StateProperty
from ...turn import TurnContext
from ..state import DialogStatus, PromptRequest, StepResult


@dataclass
class StepContext:
    """What a step sees when it runs."""
    turn: TurnContext
    draft: PostDraft
    # Recognized answer to the previous step's prompt (None for the first step)
    result: Any
    post_property: StateProperty


class WizardStep(ABC):
    """
    Abstract base class for wizard steps.

    A step records the answer to the previous prompt into the draft, then
    either asks the next question or ends the wizard.
    """

    # Step metadata
    name: str = "Unnamed Step"
    description: str = ""

    @abstractmethod
    def execute(self, context: StepContext) -> StepResult:
        """
        Execute this wizard step.

        Args:
            context: Turn, draft and previous answer

        Returns:
            StepResult with the next prompt, or an end result
        """
        pass

    def validate(self, draft: PostDraft) -> List[str]:
        """
        Check the draft after this step ran.

        Returns:
            List of problems (empty if none)
        """
        return []

    def ask(
        self,
        prompt_id: str,
        text: str,
        choices: Optional[List[str]] = None,
        retry_text: Optional[str] = None,
    ) -> StepResult:
        """Create a result that waits for an answer."""
        return StepResult(
            prompt=PromptRequest(
                prompt_id=prompt_id,
                text=text,
                choices=list(choices or []),
                retry_text=retry_text,
            )
        )

    def finish(self, message: str, status: DialogStatus = DialogStatus.COMPLETE) -> StepResult:
        """Create a result that ends the wizard."""
        return StepResult(messages=[message], end=True, status=status)
