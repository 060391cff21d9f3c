"""
Wizard Prompts

Render questions and recognize the user's reply. A reply that is not
recognized leaves the dialog where it is and the question is asked again.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from ..config.defaults import (
    CHOICE_LAST_SEPARATOR,
    CHOICE_SEPARATOR,
    CONFIRM_CHOICES,
    RETRY_TEXT,
)
from .state import PromptRequest


@dataclass
class Recognized:
    """Recognition result for one reply."""
    succeeded: bool
    value: Any = None


PromptValidator = Callable[[Recognized], bool]


def inline_choices(choices: List[str]) -> str:
    """Format choices as '(1) A, (2) B oder (3) C'."""
    numbered = [f"({i}) {choice}" for i, choice in enumerate(choices, 1)]
    if len(numbered) <= 1:
        return "".join(numbered)
    return CHOICE_SEPARATOR.join(numbered[:-1]) + CHOICE_LAST_SEPARATOR + numbered[-1]


class Prompt(ABC):
    """Base class for all prompt types."""

    def __init__(self, prompt_id: str, validator: Optional[PromptValidator] = None):
        self.prompt_id = prompt_id
        self.validator = validator

    @abstractmethod
    def recognize(self, text: str, request: PromptRequest) -> Recognized:
        """
        Recognize a reply to this prompt.

        Args:
            text: Raw message text
            request: The question that was asked

        Returns:
            Recognition result
        """
        pass

    def check(self, text: str, request: PromptRequest) -> Recognized:
        """Recognize the reply and run the validator, if any."""
        recognized = self.recognize(text, request)
        if recognized.succeeded and self.validator is not None:
            if not self.validator(recognized):
                return Recognized(succeeded=False)
        return recognized

    def render(self, request: PromptRequest, retry: bool = False) -> str:
        """Text sent to the user for this question."""
        text = request.text
        if request.choices:
            text = f"{text} {inline_choices(request.choices)}"
        if retry:
            text = f"{request.retry_text or RETRY_TEXT} {text}"
        return text


class TextPrompt(Prompt):
    """Free-text question. Any non-blank reply is accepted as-is."""

    def recognize(self, text: str, request: PromptRequest) -> Recognized:
        if text is None or not text.strip():
            return Recognized(succeeded=False)
        return Recognized(succeeded=True, value=text)


class ChoicePrompt(Prompt):
    """Closed choice. Accepts a 1-based number or a label."""

    def recognize(self, text: str, request: PromptRequest) -> Recognized:
        selection = (text or "").strip()
        if not selection:
            return Recognized(succeeded=False)

        try:
            # Try as number
            idx = int(selection) - 1
            if 0 <= idx < len(request.choices):
                return Recognized(succeeded=True, value=request.choices[idx])
        except ValueError:
            # Try as string match
            for choice in request.choices:
                if choice.lower() == selection.lower():
                    return Recognized(succeeded=True, value=choice)

        return Recognized(succeeded=False)


class ConfirmPrompt(Prompt):
    """Yes/no question."""

    YES = {"ja", "j", "yes", "y", "1"}
    NO = {"nein", "n", "no", "2"}

    def recognize(self, text: str, request: PromptRequest) -> Recognized:
        answer = (text or "").strip().lower()
        if answer in self.YES:
            return Recognized(succeeded=True, value=True)
        if answer in self.NO:
            return Recognized(succeeded=True, value=False)
        return Recognized(succeeded=False)

    def render(self, request: PromptRequest, retry: bool = False) -> str:
        if not request.choices:
            request = PromptRequest(
                prompt_id=request.prompt_id,
                text=request.text,
                choices=list(CONFIRM_CHOICES),
                retry_text=request.retry_text,
            )
        return super().render(request, retry=retry)


def description_validator(recognized: Recognized) -> bool:
    """Accept any description the text prompt recognized."""
    return recognized.succeeded
