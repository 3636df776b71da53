"""Client-side conversation state and the submit/clear lifecycle."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Protocol

from qa_client.errors import RelayRequestError
from qa_client.models import Message
from qa_client.persistence import ConversationPersistence

logger = logging.getLogger(__name__)

CLEAR_PROMPT = "Are you sure you want to clear the conversation?"


class AnswerSource(Protocol):
    async def ask(self, question: str) -> str: ...


class ConversationStore:
    """Ordered, persisted conversation for one client session.

    Every change to :attr:`messages` is written through ``persistence`` as a
    full snapshot. Failures from ``relay`` end up as error messages in the
    conversation and are never raised to the caller.
    """

    def __init__(
        self,
        relay: AnswerSource,
        persistence: ConversationPersistence,
        confirm: Callable[[str], bool],
    ) -> None:
        self._relay = relay
        self._persistence = persistence
        self._confirm = confirm
        self._messages: tuple[Message, ...] = tuple(persistence.load())
        self.pending = False
        self.error: str | None = None
        self.draft = ""

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._messages

    async def submit(self, question: str) -> None:
        """Send ``question`` to the relay and record both sides of the exchange."""

        if not question.strip() or self.pending:
            return

        self._append(Message(text=question, sender="user"))
        self.draft = ""
        self.pending = True
        self.error = None

        try:
            answer = await self._relay.ask(question)
        except RelayRequestError as exc:
            logger.warning("Question failed (%s): %s", exc.kind.value, exc.message)
            self.error = exc.message
            self._append(Message(text=f"Error: {exc.message}", sender="ai", is_error=True))
        else:
            self._append(
                Message(
                    text=answer,
                    sender="ai",
                    is_error=False,
                    timestamp=datetime.now(timezone.utc).isoformat(),
                )
            )
        finally:
            self.pending = False

    def clear(self) -> bool:
        """Empty the conversation after the user confirms. Returns whether it was cleared."""

        if not self._confirm(CLEAR_PROMPT):
            return False

        self._commit(())
        self.error = None
        return True

    def _append(self, message: Message) -> None:
        self._commit(self._messages + (message,))

    def _commit(self, messages: tuple[Message, ...]) -> None:
        self._messages = messages
        self._persistence.save(messages)
