"""
Wizard Steps

Each step records one answer and asks the next question.
"""

from .base import WizardStep, StepContext
from .s01_source_type import SourceTypeStep
from .s02_url import UrlStep
from .s03_description import DescriptionStep
from .s04_priority import PriorityStep
from .s05_confirm import ConfirmStep
from .s06_summary import SummaryStep

__all__ = [
    "WizardStep",
    "StepContext",
    "SourceTypeStep",
    "UrlStep",
    "DescriptionStep",
    "PriorityStep",
    "ConfirmStep",
    "SummaryStep",
]
