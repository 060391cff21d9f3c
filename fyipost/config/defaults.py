"""
Fixed texts for the post wizard.

All user-facing messages are German; prompt ids name the prompt each
step waits on.
"""

from typing import List

# Prompt ids
SOURCETYPE_PROMPT = "SOURCETYPE_PROMPT"
URL_PROMPT = "URL_PROMPT"
DESCRIPTION_PROMPT = "DESCRIPTION_PROMPT"
PRIORITY_PROMPT = "PRIORITY_PROMPT"
CONFIRM_PROMPT = "CONFIRM_PROMPT"

# User state property holding the stored post
USER_POST_PROPERTY = "fyi_post"

# Conversation state property holding the dialog cursor
DIALOG_STATE_PROPERTY = "post_dialog"

SOURCE_TYPES: List[str] = [
    "Website",
    "Konferenz",
    "Literatur",
    "Sonstiges",
]

PRIORITIES: List[str] = [
    "Eher unwichtig",
    "Wichtig",
    "Dringend",
]

CONFIRM_CHOICES: List[str] = ["Ja", "Nein"]

SOURCE_TYPE_TEXT = "Bitte sage mir kurz, um was für eine Quelle es sich handelt"
URL_TEXT = "Bitte gebe mir die URL des Webinhaltes."
DESCRIPTION_TEXT = (
    "Was möchtest du den anderen hinsichtlich der Quelle sagen "
    "(diese Angabe wird 1 zu 1 in übernommen)?"
)
PRIORITY_TEXT = "Bitte sage mir kurz, wie wichtig diese Quelle ist."
CONFIRM_TEXT = "Sind deine Angaben so in Ordnung?"

RETRY_TEXT = "Das habe ich leider nicht verstanden."
CHOICE_SEPARATOR = ", "
CHOICE_LAST_SEPARATOR = " oder "

NOT_SAVED_TEXT = "Die Daten wurden nicht gespeichert."

WELCOME_TEXT = (
    "Hallo! Ich helfe dir, eine Empfehlung für die anderen abzulegen. "
    "Schreib mir einfach eine Nachricht, um zu beginnen."
)


def format_summary(source_type: str, url: str, description: str, priority: str) -> str:
    """Build the confirmation message for a stored post."""
    msg = f"Ich hab deine Empfehlung vom Typ *{source_type}* wie folgt abgespeichert:\n\n"
    msg += f"**URL:** {url}. \n \n"
    msg += "\n"
    msg += f" **Beschreibung:** {description}.\n"
    msg += "\n"
    msg += f" Ebenfalls habe ich die Quelle als *{priority}* einsortiert."
    return msg
