"""
Step 6: Summary

Commit the draft to the user's stored post if confirmed, and report
what was saved. Declining leaves user state untouched.
"""

import logging

from .base import StepContext, WizardStep
from ..state import DialogStatus, StepResult
from ...config.defaults import NOT_SAVED_TEXT, format_summary
from ...config.models import FyiPost

logger = logging.getLogger(__name__)


class SummaryStep(WizardStep):
    """Summary step - terminal."""

    name = "Summary"
    description = "Store the post and show what was saved"

    def execute(self, context: StepContext) -> StepResult:
        if not context.result:
            logger.info("User %s declined, nothing stored", context.turn.user_id)
            return self.finish(NOT_SAVED_TEXT, status=DialogStatus.CANCELLED)

        # Read or initialize the stored post, then overwrite it
        stored = context.post_property.get(context.turn, lambda: FyiPost().model_dump())
        post = FyiPost(**stored)
        post.overwrite_from(context.draft)
        context.post_property.set(context.turn, post.model_dump())
        logger.info("Stored %s post for user %s", post.source_type, context.turn.user_id)

        return self.finish(format_summary(
            source_type=post.source_type,
            url=post.url,
            description=post.description,
            priority=post.priority,
        ))
