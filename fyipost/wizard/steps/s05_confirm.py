"""
Step 5: Confirm

Record the priority and ask whether the answers are correct.
"""

from typing import List

from .base import StepContext, WizardStep
from ..state import StepResult
from ...config.defaults import CONFIRM_PROMPT, CONFIRM_TEXT
from ...config.models import PostDraft


class ConfirmStep(WizardStep):
    """Confirm step - yes/no."""

    name = "Confirm"

    def execute(self, context: StepContext) -> StepResult:
        context.draft.priority = context.result
        return self.ask(CONFIRM_PROMPT, CONFIRM_TEXT)

    def validate(self, draft: PostDraft) -> List[str]:
        return [f"Missing answer: {name}" for name in draft.missing_fields()]
