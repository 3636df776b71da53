"""Tagged failures produced by the relay client."""

from dataclasses import dataclass
from enum import Enum


class RequestErrorKind(str, Enum):
    TIMEOUT = "timeout"
    QUOTA = "quota"
    GENERIC = "generic"
    UNCLASSIFIED = "unclassified"


@dataclass(eq=False)
class RelayRequestError(Exception):
    """Raised by :class:`~qa_client.relay_client.RelayClient` for any failed ask."""

    kind: RequestErrorKind
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    @classmethod
    def timeout(cls) -> "RelayRequestError":
        return cls(RequestErrorKind.TIMEOUT, "Request timeout")

    @classmethod
    def unclassified(cls) -> "RelayRequestError":
        return cls(RequestErrorKind.UNCLASSIFIED, "Failed to get response")

    @classmethod
    def from_relay(cls, error: str) -> "RelayRequestError":
        """Classify the ``error`` string of a relay failure body."""

        if "quota" in error.lower():
            return cls(RequestErrorKind.QUOTA, "API limit reached")
        return cls(RequestErrorKind.GENERIC, error)
