"""
Wizard Runner

Dispatches one step per inbound turn. Between turns the wizard is
suspended; its cursor lives in conversation state.
"""

import logging
from typing import Dict, List, Optional, Type

from ..config.defaults import (
    CONFIRM_PROMPT,
    DESCRIPTION_PROMPT,
    DIALOG_STATE_PROPERTY,
    PRIORITY_PROMPT,
    SOURCETYPE_PROMPT,
    URL_PROMPT,
    USER_POST_PROPERTY,
)
from ..storage.state import ConversationState, UserState
from ..turn import TurnContext
from .prompts import ChoicePrompt, ConfirmPrompt, Prompt, TextPrompt, description_validator
from .state import DialogError, DialogState, DialogStatus
from .steps import (
    ConfirmStep,
    DescriptionStep,
    PriorityStep,
    SourceTypeStep,
    SummaryStep,
    UrlStep,
)
from .steps.base import StepContext, WizardStep

logger = logging.getLogger(__name__)


class PostDialog:
    """
    Orchestrates the post wizard.

    Holds the ordered steps and the prompts they wait on, and moves the
    durable cursor forward by exactly one step per recognized answer.
    """

    def __init__(self, conversation_state: ConversationState, user_state: UserState):
        """
        Initialize the dialog.

        Args:
            conversation_state: Scope holding the dialog cursor
            user_state: Scope holding the stored post
        """
        self.dialog_property = conversation_state.create_property(DIALOG_STATE_PROPERTY)
        self.post_property = user_state.create_property(USER_POST_PROPERTY)

        self.prompts: Dict[str, Prompt] = {}
        for prompt in (
            TextPrompt(DESCRIPTION_PROMPT, validator=description_validator),
            TextPrompt(URL_PROMPT),
            ChoicePrompt(SOURCETYPE_PROMPT),
            ChoicePrompt(PRIORITY_PROMPT),
            ConfirmPrompt(CONFIRM_PROMPT),
        ):
            self.add_prompt(prompt)

        # Steps will be registered here
        self.steps: List[WizardStep] = []
        self._steps_initialized = False

    def add_prompt(self, prompt: Prompt) -> None:
        self.prompts[prompt.prompt_id] = prompt

    def register_steps(self, step_classes: List[Type[WizardStep]]) -> None:
        """
        Register wizard step classes.

        Args:
            step_classes: List of WizardStep subclasses in order
        """
        self.steps = [cls() for cls in step_classes]
        self._steps_initialized = True

    def _initialize_steps(self) -> None:
        """Initialize default steps if not already registered."""
        if self._steps_initialized:
            return

        self.register_steps([
            SourceTypeStep,
            UrlStep,
            DescriptionStep,
            PriorityStep,
            ConfirmStep,
            SummaryStep,
        ])

    def is_active(self, turn: TurnContext) -> bool:
        """Whether a wizard run is waiting for an answer in this conversation."""
        return self.dialog_property.get(turn) is not None

    def load_state(self, turn: TurnContext) -> Optional[DialogState]:
        data = self.dialog_property.get(turn)
        if data is None:
            return None
        return DialogState.from_dict(data)

    def run(self, turn: TurnContext) -> DialogStatus:
        """
        Handle one inbound turn.

        If no wizard run is active, a new one begins and the message text
        is ignored. Otherwise the message answers the pending prompt.

        Returns:
            Status after this turn
        """
        self._initialize_steps()

        state = self.load_state(turn)
        if state is None:
            logger.debug("Beginning post wizard for %s", turn.conversation_id)
            return self._execute_step(turn, DialogState.begin(), result=None)

        if state.pending_prompt is None:
            raise DialogError(f"Dialog at step {state.step_index} has no pending prompt")

        prompt = self.prompts.get(state.pending_prompt.prompt_id)
        if prompt is None:
            raise DialogError(f"Unknown prompt: {state.pending_prompt.prompt_id}")

        recognized = prompt.check(turn.text, state.pending_prompt)
        if not recognized.succeeded:
            state.attempts += 1
            state.touch()
            logger.debug(
                "Unrecognized reply to %s (attempt %d)",
                state.pending_prompt.prompt_id, state.attempts,
            )
            turn.send(prompt.render(state.pending_prompt, retry=True))
            self.dialog_property.set(turn, state.to_dict())
            return DialogStatus.WAITING

        state.advance()
        return self._execute_step(turn, state, result=recognized.value)

    def reprompt(self, turn: TurnContext) -> bool:
        """
        Send the pending question again without consuming a reply.

        Returns:
            True if a run was active
        """
        state = self.load_state(turn)
        if state is None or state.pending_prompt is None:
            return False
        prompt = self.prompts.get(state.pending_prompt.prompt_id)
        if prompt is None:
            raise DialogError(f"Unknown prompt: {state.pending_prompt.prompt_id}")
        turn.send(prompt.render(state.pending_prompt))
        return True

    def cancel(self, turn: TurnContext) -> bool:
        """
        Abandon the active run, discarding its draft.

        Returns:
            True if a run was active
        """
        if not self.is_active(turn):
            return False
        self.dialog_property.delete(turn)
        logger.info("Post wizard abandoned in %s", turn.conversation_id)
        return True

    def _execute_step(self, turn: TurnContext, state: DialogState, result) -> DialogStatus:
        if not 0 <= state.step_index < len(self.steps):
            raise DialogError(f"Step index out of range: {state.step_index}")

        step = self.steps[state.step_index]
        logger.debug("Step %d of %d: %s", state.step_index + 1, len(self.steps), step.name)

        step_result = step.execute(StepContext(
            turn=turn,
            draft=state.draft,
            result=result,
            post_property=self.post_property,
        ))

        for problem in step.validate(state.draft):
            logger.debug("%s: %s", step.name, problem)

        for message in step_result.messages:
            turn.send(message)

        if not step_result.should_continue:
            self.dialog_property.delete(turn)
            return step_result.status

        prompt = self.prompts.get(step_result.prompt.prompt_id)
        if prompt is None:
            raise DialogError(f"Unknown prompt: {step_result.prompt.prompt_id}")

        state.pending_prompt = step_result.prompt
        turn.send(prompt.render(step_result.prompt))
        self.dialog_property.set(turn, state.to_dict())
        return DialogStatus.WAITING
