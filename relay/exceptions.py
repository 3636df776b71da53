"""Custom exceptions shared across services."""

from dataclasses import dataclass
from enum import Enum


@dataclass(eq=False)
class ServiceError(Exception):
    """Base exception for service layer failures."""

    message: str
    code: str = "service_error"
    status_code: int | None = None
    detail: str | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class ProviderErrorKind(str, Enum):
    """Provider failure classes the relay knows how to report."""

    INVALID_CREDENTIAL = "invalid_credential"
    MODEL_NOT_FOUND = "model_not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    GENERIC = "generic"


_MESSAGES = {
    ProviderErrorKind.INVALID_CREDENTIAL: "Invalid API key - check your .env file",
    ProviderErrorKind.MODEL_NOT_FOUND: "Model not found. Ensure you have access to {model}",
    ProviderErrorKind.QUOTA_EXCEEDED: "API quota exceeded",
    ProviderErrorKind.GENERIC: "Failed to process question",
}


@dataclass(eq=False)
class ProviderError(ServiceError):
    """Raised when the generative provider fails to answer."""

    code: str = "provider_error"
    kind: ProviderErrorKind = ProviderErrorKind.GENERIC

    @classmethod
    def of_kind(
        cls,
        kind: ProviderErrorKind,
        *,
        model: str = "",
        status_code: int | None = None,
        detail: str | None = None,
    ) -> "ProviderError":
        """Build an error whose message is the fixed text for ``kind``."""

        return cls(
            message=_MESSAGES[kind].format(model=model),
            kind=kind,
            status_code=status_code,
            detail=detail,
        )
