"""
Step 4: Priority

Record the description and ask how important the source is.
"""

from .base import StepContext, WizardStep
from ..state import StepResult
from ...config.defaults import PRIORITIES, PRIORITY_PROMPT, PRIORITY_TEXT


class PriorityStep(WizardStep):
    """Priority step - closed choice of importance levels."""

    name = "Priority"

    def execute(self, context: StepContext) -> StepResult:
        context.draft.description = context.result
        return self.ask(PRIORITY_PROMPT, PRIORITY_TEXT, choices=PRIORITIES)
