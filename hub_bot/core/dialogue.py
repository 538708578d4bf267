"""Question and answer exchanges over a direct message channel."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

import discord

from ..errors import ConversationAbandoned

log = logging.getLogger("hub_bot.dialogue")

APOLOGY = "Sorry, I didn't understand your response. "


class MessageWaiter(Protocol):
    """Anything exposing ``discord.Client.wait_for``."""

    async def wait_for(
        self, event: str, /, *, check: Any = None, timeout: float | None = None
    ) -> Any: ...


@dataclass
class Conversation:
    """State of one question: who is asked, where, and what is accepted."""

    channel: discord.abc.Messageable
    asker_id: int
    prompt: str
    options: tuple[str, ...] | None = None
    max_length: int | None = None
    first_attempt: bool = True

    def render(self) -> str:
        text = "" if self.first_attempt else APOLOGY
        text += self.prompt
        if self.options:
            listed = ", ".join(f"'{option}'" for option in self.options)
            text += f"  Please reply with one of {listed}."
        return text

    def is_reply(self, message: discord.Message) -> bool:
        """Filter for ``wait_for``: same author, same channel."""
        return (
            message.author.id == self.asker_id
            and message.channel.id == self.channel.id
        )

    def accept(self, content: str) -> str | None:
        """Return the accepted answer for ``content`` or ``None``.

        Free text is returned verbatim when it is not blank and fits
        ``max_length``.  Constrained answers are compared case-insensitively
        and the lower-cased option is returned.
        """
        if not self.options:
            if not content.strip():
                return None
            if self.max_length is not None and len(content) > self.max_length:
                return None
            return content
        reply = content.strip().lower()
        for option in self.options:
            if option.lower() == reply:
                return option.lower()
        return None


class Dialogue:
    """Ask members questions and wait for acceptable replies.

    Each wait is registered through ``waiter.wait_for`` with a check scoped to
    the asker and the channel, so concurrent conversations never see each
    other's messages and the listener is released on match, timeout or
    cancellation alike.
    """

    def __init__(self, waiter: MessageWaiter, timeout: float | None = None) -> None:
        self.waiter = waiter
        self.timeout = timeout

    async def ask(
        self,
        channel: discord.abc.Messageable,
        asker_id: int,
        prompt: str,
        options: Iterable[str] | None = None,
        max_length: int | None = None,
    ) -> str:
        """Send ``prompt`` and return the first acceptable reply.

        Rejected replies, including free text longer than ``max_length``,
        trigger the same prompt again with an apology.
        Raises :class:`ConversationAbandoned` if no reply arrives within the
        configured timeout.
        """
        conversation = Conversation(
            channel=channel,
            asker_id=asker_id,
            prompt=prompt,
            options=tuple(options) if options else None,
            max_length=max_length,
        )
        while True:
            await channel.send(conversation.render())
            try:
                message = await self.waiter.wait_for(
                    "message", check=conversation.is_reply, timeout=self.timeout
                )
            except asyncio.TimeoutError as exc:
                log.info("Conversation with %s abandoned at %r", asker_id, prompt)
                raise ConversationAbandoned(asker_id, prompt) from exc

            answer = conversation.accept(message.content)
            if answer is not None:
                return answer
            log.debug("Rejected reply from %s to %r", asker_id, prompt)
            conversation.first_attempt = False
