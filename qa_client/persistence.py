"""Durable storage for the conversation snapshot."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Protocol

from pydantic import TypeAdapter, ValidationError

from qa_client.models import Message

logger = logging.getLogger(__name__)

STORAGE_KEY = "chatMessages"

_MESSAGES = TypeAdapter(list[Message])


class ConversationPersistence(Protocol):
    """Where a :class:`~qa_client.store.ConversationStore` keeps its snapshot."""

    def load(self) -> list[Message]: ...

    def save(self, messages: Iterable[Message]) -> None: ...


def dump_messages(messages: Iterable[Message]) -> list[dict[str, Any]]:
    """Serialize messages into their wire form (``isError``, optional ``timestamp``)."""

    return [message.model_dump(by_alias=True, exclude_none=True) for message in messages]


def load_messages(data: Any) -> list[Message]:
    """Validate wire-form data back into messages."""

    return _MESSAGES.validate_python(data)


class JsonFilePersistence:
    """Keeps the conversation under one key of a JSON object file.

    Other keys already present in the file are left untouched, so several
    tools can share a single state file the way browser pages share
    ``localStorage``.
    """

    def __init__(self, path: str | Path, key: str = STORAGE_KEY) -> None:
        self._path = Path(path).expanduser()
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Message]:
        document = self._read()
        if self._key not in document:
            return []

        try:
            return load_messages(document[self._key])
        except ValidationError:
            logger.warning("Discarding unreadable conversation snapshot in %s", self._path)
            return []

    def save(self, messages: Iterable[Message]) -> None:
        document = self._read()
        document[self._key] = dump_messages(messages)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read(self) -> dict[str, Any]:
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            logger.warning("Ignoring unparseable state file %s", self._path)
            return {}

        if not isinstance(document, dict):
            logger.warning("Ignoring state file %s: not a JSON object", self._path)
            return {}
        return document
