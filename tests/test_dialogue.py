"""Tests for the :mod:`hub_bot.core.dialogue` module."""

import asyncio
from typing import Any

import pytest

from hub_bot.core.dialogue import APOLOGY, Conversation, Dialogue
from hub_bot.errors import ConversationAbandoned
from tests.fakes import FakeChannel, ScriptedWaiter, message

ROLES = ("judge", "competitor", "spectator")


def run(coro: Any) -> Any:
    """Run an async coroutine synchronously for tests."""
    return asyncio.run(coro)


def test_matching_reply_returns_lowercased_option() -> None:
    channel = FakeChannel()
    waiter = ScriptedWaiter([message(7, "Judge", channel)])

    answer = run(Dialogue(waiter).ask(channel, 7, "What is your role?", ROLES))

    assert answer == "judge"
    assert channel.sent == [
        "What is your role?  Please reply with one of "
        "'judge', 'competitor', 'spectator'."
    ]


def test_reprompts_once_per_rejected_reply() -> None:
    channel = FakeChannel()
    waiter = ScriptedWaiter(
        [
            message(7, "referee", channel),
            message(7, "no idea", channel),
            message(7, " COMPETITOR ", channel),
        ]
    )

    answer = run(Dialogue(waiter).ask(channel, 7, "Role?", ROLES))

    assert answer == "competitor"
    assert len(channel.sent) == 3
    assert not channel.sent[0].startswith(APOLOGY)
    assert all(text.startswith(APOLOGY + "Role?") for text in channel.sent[1:])


def test_free_text_is_returned_verbatim() -> None:
    channel = FakeChannel()
    waiter = ScriptedWaiter([message(7, "Alice Smith", channel)])

    answer = run(Dialogue(waiter).ask(channel, 7, "What is your name?"))

    assert answer == "Alice Smith"
    assert channel.sent == ["What is your name?"]


def test_blank_free_text_is_asked_again() -> None:
    channel = FakeChannel()
    waiter = ScriptedWaiter([message(7, "   ", channel), message(7, "Bob", channel)])

    answer = run(Dialogue(waiter).ask(channel, 7, "Name?"))

    assert answer == "Bob"
    assert channel.sent == ["Name?", APOLOGY + "Name?"]


def test_messages_from_other_authors_or_channels_are_ignored() -> None:
    channel = FakeChannel(1)
    elsewhere = FakeChannel(2)
    waiter = ScriptedWaiter(
        [
            message(8, "spectator", channel),
            message(7, "spectator", elsewhere),
            message(7, "judge", channel),
        ]
    )

    answer = run(Dialogue(waiter).ask(channel, 7, "Role?", ROLES))

    assert answer == "judge"
    assert len(channel.sent) == 1


def test_timeout_abandons_the_conversation() -> None:
    channel = FakeChannel()
    waiter = ScriptedWaiter([message(7, "maybe", channel)])

    with pytest.raises(ConversationAbandoned) as exc_info:
        run(Dialogue(waiter, timeout=30.0).ask(channel, 7, "Role?", ROLES))

    assert exc_info.value.asker_id == 7
    assert waiter.timeouts == [30.0, 30.0]
    assert channel.sent[-1].startswith(APOLOGY)


def test_conversation_render_without_options() -> None:
    conversation = Conversation(channel=FakeChannel(), asker_id=1, prompt="Hi?")
    assert conversation.render() == "Hi?"
    conversation.first_attempt = False
    assert conversation.render() == "Sorry, I didn't understand your response. Hi?"


def test_free_text_longer_than_max_length_is_asked_again() -> None:
    channel = FakeChannel()
    waiter = ScriptedWaiter(
        [message(7, "A" * 33, channel), message(7, "A" * 32, channel)]
    )

    answer = run(Dialogue(waiter).ask(channel, 7, "Name?", max_length=32))

    assert answer == "A" * 32
    assert channel.sent == ["Name?", APOLOGY + "Name?"]
