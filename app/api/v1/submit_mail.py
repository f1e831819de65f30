"""
Public endpoint for the website contact, support and quote forms.

Each POST is validated, formatted into an email and relayed once through
SMTP before the response is sent.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.deps import get_form_submission_service
from app.core.cors import compute_cors_headers
from app.schemas.submission import SubmitMailResponse
from app.services.form_submission_service import FormSubmissionService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.options(
    "/submit-mail",
    summary="CORS preflight for the form endpoint",
)
async def submit_mail_preflight(origin: Optional[str] = Header(None)) -> Response:
    """Answer the browser preflight with the allow-list headers only."""
    return Response(status_code=status.HTTP_200_OK, headers=compute_cors_headers(origin))


@router.post(
    "/submit-mail",
    response_model=SubmitMailResponse,
    summary="Submit a contact, support or quote form",
    responses={
        400: {"model": SubmitMailResponse, "description": "Invalid form data"},
        500: {"model": SubmitMailResponse, "description": "Mail relay failure"},
    },
)
async def submit_mail(
    request: Request,
    origin: Optional[str] = Header(None),
    service: FormSubmissionService = Depends(get_form_submission_service),
) -> JSONResponse:
    """Validate the JSON body and relay it as an email."""
    cors_headers = compute_cors_headers(origin)

    try:
        payload = await request.json()
    except ValueError as exc:
        logger.info("Rejected submission with unreadable JSON body: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=SubmitMailResponse(
                status="error", message="Invalid request data"
            ).model_dump(),
            headers=cors_headers,
        )

    result = await service.submit(payload)
    return JSONResponse(
        status_code=result.status_code,
        content=result.body.model_dump(),
        headers=cors_headers,
    )
