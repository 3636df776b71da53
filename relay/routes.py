"""HTTP handlers for the ask endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from relay.config import Settings, get_settings
from relay.dependencies import get_provider_service
from relay.exceptions import ProviderError
from relay.models import AskRequest, AskResponse, ErrorResponse
from relay.services.provider import GeminiService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
)
async def ask(
    payload: AskRequest,
    provider: Annotated[GeminiService, Depends(get_provider_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AskResponse | JSONResponse:
    """Forward one question to the provider and normalize the outcome."""

    try:
        answer = await provider.generate(payload.question)
    except ProviderError as exc:
        logger.warning(
            "Question could not be answered",
            extra={"kind": exc.kind.value, "status_code": exc.status_code},
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                error=exc.message,
                details=exc.detail if settings.is_development else None,
            ),
        )

    logger.info("Question answered", extra={"answer_chars": len(answer)})
    return AskResponse(answer=answer)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body validation failures in the same shape as provider failures."""

    settings = get_settings()
    details = "; ".join(error.get("msg", "") for error in exc.errors())
    return _error_response(
        422,
        ErrorResponse(
            error="Invalid request",
            details=details if settings.is_development else None,
        ),
    )


def _error_response(status_code: int, error: ErrorResponse) -> JSONResponse:
    """Serialize an error body, leaving out unset details."""

    return JSONResponse(status_code=status_code, content=error.model_dump(exclude_none=True))
