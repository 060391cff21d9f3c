"""
Step 3: Description

Record the URL and ask what to tell the others about the source.
The description is taken over verbatim.
"""

from typing import List

from .base import StepContext, WizardStep
from ..state import StepResult
from ...config.defaults import DESCRIPTION_PROMPT, DESCRIPTION_TEXT
from ...config.models import PostDraft


class DescriptionStep(WizardStep):
    """Description step - free text."""

    name = "Description"
    description = "Short note for the other readers"

    def execute(self, context: StepContext) -> StepResult:
        context.draft.url = context.result
        return self.ask(DESCRIPTION_PROMPT, DESCRIPTION_TEXT)

    def validate(self, draft: PostDraft) -> List[str]:
        errors = []
        if not draft.url:
            errors.append("URL is missing")
        elif "://" not in draft.url and not draft.url.startswith("www."):
            # Not enforced; the URL is stored as typed
            errors.append(f"URL does not look like a web address: {draft.url}")
        return errors
