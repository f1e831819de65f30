"""
CADUAE Mail Relay Services Module.

Services:
    - FormSubmissionService: validates website form payloads, formats them
      into an email and relays it through SMTP
"""

from .form_submission_service import (
    FormSubmissionService,
    format_email_content,
    parse_form_data,
    validate_form_data,
)

__all__ = [
    "FormSubmissionService",
    "format_email_content",
    "parse_form_data",
    "validate_form_data",
]
