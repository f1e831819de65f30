from fastapi import Depends, Request

from app.core.email import MailRelay
from app.services.form_submission_service import FormSubmissionService


def get_mail_relay(request: Request) -> MailRelay:
    """
    Mail relay dependency.

    The relay is created once in the application lifespan and stored on
    ``app.state``; every request reuses that instance.
    """
    return request.app.state.mail_relay


def get_form_submission_service(
    relay: MailRelay = Depends(get_mail_relay),
) -> FormSubmissionService:
    return FormSubmissionService(relay)
