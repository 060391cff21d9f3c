"""Post wizard dialog tests."""

import pytest

from fyipost.config.defaults import (
    NOT_SAVED_TEXT,
    PRIORITIES,
    RETRY_TEXT,
    SOURCE_TYPE_TEXT,
    SOURCE_TYPES,
    URL_TEXT,
    format_summary,
)
from fyipost.storage import MemoryStorage
from fyipost.bot import PostBot
from fyipost.turn import TurnContext
from fyipost.wizard import DialogError, DialogStatus


def run_answers(source_type="Website", url="http://x.com", description="a cool read",
                priority="Wichtig", confirm="ja"):
    # First message only opens the wizard
    return ["hallo", source_type, url, description, priority, confirm]


def stored_post(storage, user_id="alice"):
    return storage.read([f"users/{user_id}"]).get(f"users/{user_id}", {}).get("fyi_post")


def dialog_cursor(storage, conversation_id="conv-1"):
    key = f"conversations/{conversation_id}"
    return storage.read([key]).get(key, {}).get("post_dialog")


class TestWizardFlow:
    """Test the six-step sequence."""

    def test_first_turn_asks_source_type(self, converse, storage):
        """Any first message begins the wizard with the source type question."""
        [turn] = converse(["irgendwas"])
        assert len(turn.responses) == 1
        assert turn.responses[0].startswith(SOURCE_TYPE_TEXT)
        assert "(1) Website, (2) Konferenz, (3) Literatur oder (4) Sonstiges" in turn.responses[0]
        assert dialog_cursor(storage)["step_index"] == 0

    def test_questions_in_order(self, converse):
        turns = converse(run_answers())
        assert turns[1].responses == [URL_TEXT]
        assert turns[2].responses[0].startswith("Was möchtest du den anderen")
        assert turns[3].responses[0].startswith("Bitte sage mir kurz, wie wichtig")
        assert "(1) Eher unwichtig, (2) Wichtig oder (3) Dringend" in turns[3].responses[0]
        assert turns[4].responses == ["Sind deine Angaben so in Ordnung? (1) Ja oder (2) Nein"]

    def test_example_run(self, converse, storage):
        turns = converse(run_answers())
        summary = turns[-1].responses[0]

        assert "Typ *Website*" in summary
        assert "URL:** http://x.com" in summary
        assert "Beschreibung:** a cool read" in summary
        assert "*Wichtig*" in summary
        assert stored_post(storage) == {
            "source_type": "Website",
            "url": "http://x.com",
            "description": "a cool read",
            "priority": "Wichtig",
        }

    def test_summary_format(self, converse):
        turns = converse(run_answers())
        assert turns[-1].responses == [format_summary("Website", "http://x.com", "a cool read", "Wichtig")]
        assert turns[-1].responses[0] == (
            "Ich hab deine Empfehlung vom Typ *Website* wie folgt abgespeichert:\n\n"
            "**URL:** http://x.com. \n \n\n"
            " **Beschreibung:** a cool read.\n\n"
            " Ebenfalls habe ich die Quelle als *Wichtig* einsortiert."
        )

    @pytest.mark.parametrize("source_type", SOURCE_TYPES)
    def test_every_source_type_in_summary(self, converse, source_type):
        turns = converse(run_answers(source_type=source_type))
        assert f"Typ *{source_type}*" in turns[-1].responses[0]

    @pytest.mark.parametrize("priority", PRIORITIES)
    def test_every_priority_in_summary(self, converse, storage, priority):
        turns = converse(run_answers(priority=priority))
        assert f"*{priority}*" in turns[-1].responses[0]
        assert stored_post(storage)["priority"] == priority

    def test_free_text_kept_verbatim(self, converse, storage):
        url = "  https://example.org/a?b=c&d=ä  "
        description = "Sehr **lesenswert**, vor allem Kapitel 3!"
        turns = converse(run_answers(url=url, description=description))

        assert f"URL:** {url}" in turns[-1].responses[0]
        assert f"Beschreibung:** {description}" in turns[-1].responses[0]
        assert stored_post(storage)["url"] == url
        assert stored_post(storage)["description"] == description

    def test_choice_by_number_and_case(self, converse, storage):
        converse(run_answers(source_type="3", priority="dringend"))
        post = stored_post(storage)
        assert post["source_type"] == "Literatur"
        assert post["priority"] == "Dringend"

    def test_cursor_removed_when_done(self, converse, storage):
        converse(run_answers())
        assert dialog_cursor(storage) is None

    def test_next_message_starts_new_run(self, converse):
        turns = converse(run_answers() + ["noch eine"])
        assert turns[-1].responses[0].startswith(SOURCE_TYPE_TEXT)


class TestConfirmation:
    """Test the confirm/decline branch."""

    def test_decline_sends_notice(self, bot, converse):
        turns = converse(run_answers(confirm="nein"))
        assert turns[-1].responses == [NOT_SAVED_TEXT]

    def test_decline_without_record_stores_nothing(self, converse, storage):
        converse(run_answers(confirm="nein"))
        assert storage.read(["users/alice"]) == {}

    def test_decline_keeps_previous_record(self, converse, storage):
        converse(run_answers())
        before = stored_post(storage)

        converse(run_answers(source_type="Konferenz", url="http://y.com",
                             description="anders", priority="Dringend", confirm="n"))
        assert stored_post(storage) == before

    def test_confirm_overwrites_all_fields(self, converse, storage):
        converse(run_answers())
        converse(run_answers(source_type="Sonstiges", url="http://y.com",
                             description="neu", priority="Eher unwichtig", confirm="Ja"))
        assert stored_post(storage) == {
            "source_type": "Sonstiges",
            "url": "http://y.com",
            "description": "neu",
            "priority": "Eher unwichtig",
        }

    def test_status_per_outcome(self, bot):
        def last_status(confirm):
            status = None
            for text in run_answers(confirm=confirm):
                status = bot.on_turn(TurnContext(user_id="bob", conversation_id="c", text=text))
            return status

        assert last_status("ja") == DialogStatus.COMPLETE
        assert last_status("nein") == DialogStatus.CANCELLED

    def test_users_do_not_share_records(self, converse, storage):
        converse(run_answers(url="http://alice.example"), user_id="alice", conversation_id="a")
        converse(run_answers(url="http://bob.example"), user_id="bob", conversation_id="b")
        assert stored_post(storage, "alice")["url"] == "http://alice.example"
        assert stored_post(storage, "bob")["url"] == "http://bob.example"


class TestRetry:
    """Unrecognized replies re-ask the same question."""

    def test_unknown_choice_reprompts(self, converse, storage):
        turns = converse(["hallo", "Podcast"])
        assert turns[1].responses[0].startswith(RETRY_TEXT)
        assert SOURCE_TYPE_TEXT in turns[1].responses[0]
        cursor = dialog_cursor(storage)
        assert cursor["step_index"] == 0
        assert cursor["attempts"] == 1

    def test_out_of_range_number_reprompts(self, converse, storage):
        converse(["hallo", "7"])
        assert dialog_cursor(storage)["step_index"] == 0

    def test_blank_url_reprompts(self, converse, storage):
        turns = converse(["hallo", "Website", "   "])
        assert turns[-1].responses == [f"{RETRY_TEXT} {URL_TEXT}"]
        assert dialog_cursor(storage)["step_index"] == 1

    def test_unclear_confirmation_reprompts(self, converse, storage):
        turns = converse(run_answers(confirm="vielleicht"))
        assert turns[-1].responses[0].startswith(RETRY_TEXT)
        assert stored_post(storage) is None

    def test_run_recovers_after_retry(self, converse, storage):
        converse(["hallo", "Podcast", "2", "http://x.com", "text", "Wichtig", "ja"])
        assert stored_post(storage)["source_type"] == "Konferenz"


class TestCursor:
    """Test the durable cursor."""

    def test_cursor_tracks_draft(self, converse, storage):
        converse(["hallo", "Website", "http://x.com"])
        cursor = dialog_cursor(storage)
        assert cursor["step_index"] == 2
        assert cursor["draft"]["source_type"] == "Website"
        assert cursor["draft"]["url"] == "http://x.com"
        assert cursor["draft"]["description"] is None
        assert cursor["pending_prompt"]["prompt_id"] == "DESCRIPTION_PROMPT"

    def test_run_continues_with_new_bot(self, storage):
        """A fresh bot over the same storage picks up the cursor."""
        for text in ["hallo", "Website", "http://x.com"]:
            PostBot(storage).on_turn(TurnContext(user_id="alice", conversation_id="conv-1", text=text))

        bot = PostBot(storage)
        for text in ["a cool read", "Wichtig", "ja"]:
            bot.on_turn(TurnContext(user_id="alice", conversation_id="conv-1", text=text))
        assert stored_post(storage)["url"] == "http://x.com"

    def test_reprompt_does_not_advance(self, bot, converse, storage):
        converse(["hallo", "Website"])
        turn = TurnContext(user_id="alice", conversation_id="conv-1")
        assert bot.dialog.reprompt(turn) is True
        assert turn.responses == [URL_TEXT]
        assert dialog_cursor(storage)["step_index"] == 1

    def test_reprompt_without_run(self, bot):
        assert bot.dialog.reprompt(TurnContext(user_id="alice", conversation_id="conv-1")) is False

    def test_cancel_discards_draft(self, bot, converse, storage):
        converse(["hallo", "Website"])
        turn = TurnContext(user_id="alice", conversation_id="conv-1")
        assert bot.dialog.cancel(turn) is True
        bot.conversation_state.save_changes(turn)
        assert dialog_cursor(storage) is None
        assert bot.dialog.cancel(TurnContext(user_id="alice", conversation_id="conv-1")) is False

    def test_step_index_out_of_range(self):
        storage = MemoryStorage({
            "conversations/conv-1": {
                "post_dialog": {
                    "step_index": 5,
                    "pending_prompt": {"prompt_id": "URL_PROMPT", "text": "?"},
                },
            },
        })
        with pytest.raises(DialogError):
            PostBot(storage).on_turn(TurnContext(user_id="alice", conversation_id="conv-1", text="x"))

    def test_unknown_prompt(self):
        storage = MemoryStorage({
            "conversations/conv-1": {
                "post_dialog": {
                    "step_index": 1,
                    "pending_prompt": {"prompt_id": "NOPE", "text": "?"},
                },
            },
        })
        with pytest.raises(DialogError):
            PostBot(storage).on_turn(TurnContext(user_id="alice", conversation_id="conv-1", text="x"))

    def test_malformed_cursor(self):
        storage = MemoryStorage({"conversations/conv-1": {"post_dialog": {"draft": {}}}})
        with pytest.raises(DialogError):
            PostBot(storage).on_turn(TurnContext(user_id="alice", conversation_id="conv-1", text="x"))

    def test_cursor_not_an_object(self):
        storage = MemoryStorage({"conversations/conv-1": {"post_dialog": ["x"]}})
        with pytest.raises(DialogError):
            PostBot(storage).on_turn(TurnContext(user_id="alice", conversation_id="conv-1", text="x"))

    def test_finished_run_leaves_no_conversation_key(self, converse, storage):
        converse(run_answers())
        assert storage.read(["conversations/conv-1"]) == {}
