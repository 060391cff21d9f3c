"""
Step 1: Source Type

Ask what kind of source is being recommended.
"""

from .base import StepContext, WizardStep
from ..state import StepResult
from ...config.defaults import SOURCE_TYPES, SOURCE_TYPE_TEXT, SOURCETYPE_PROMPT


class SourceTypeStep(WizardStep):
    """Source type step - closed choice of source kinds."""

    name = "Source Type"
    description = "Website, conference, literature or other"

    def execute(self, context: StepContext) -> StepResult:
        return self.ask(SOURCETYPE_PROMPT, SOURCE_TYPE_TEXT, choices=SOURCE_TYPES)
