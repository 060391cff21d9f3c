"""
Step 2: URL

Record the source type and ask for the URL.
"""

from typing import List

from .base import StepContext, WizardStep
from ..state import StepResult
from ...config.defaults import URL_PROMPT, URL_TEXT
from ...config.models import PostDraft


class UrlStep(WizardStep):
    """URL step - free text."""

    name = "URL"
    description = "Where the source can be found"

    def execute(self, context: StepContext) -> StepResult:
        context.draft.source_type = context.result
        return self.ask(URL_PROMPT, URL_TEXT)

    def validate(self, draft: PostDraft) -> List[str]:
        if not draft.source_type:
            return ["Source type is missing"]
        return []
