"""
Post Wizard

A fixed, linear sequence of questions that collects a post
recommendation and stores it in per-user state.
"""

from .runner import PostDialog
from .state import DialogState, DialogStatus, DialogError, StepResult, PromptRequest

__all__ = [
    "PostDialog",
    "DialogState",
    "DialogStatus",
    "DialogError",
    "StepResult",
    "PromptRequest",
]
