from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

FORM_TYPES = ("contact", "support", "quote")
VALID_PRODUCTS = ("ARCHITECT", "LANDMARK", "SPOTLIGHT", "FUNDAMENTALS")


class _SubmissionBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str
    email: str


class ContactSubmission(_SubmissionBase):
    form_type: Literal["contact"] = Field(alias="formType")
    phone: str
    message: str


class SupportSubmission(_SubmissionBase):
    form_type: Literal["support"] = Field(alias="formType")
    phone: str
    message: str


class QuoteSubmission(_SubmissionBase):
    form_type: Literal["quote"] = Field(alias="formType")
    product: Literal["ARCHITECT", "LANDMARK", "SPOTLIGHT", "FUNDAMENTALS"]
    mobile: Optional[str] = None


FormSubmission = Annotated[
    Union[ContactSubmission, SupportSubmission, QuoteSubmission],
    Field(discriminator="form_type"),
]

form_submission_adapter: TypeAdapter[FormSubmission] = TypeAdapter(FormSubmission)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class EmailContent:
    """Subject and bodies composed from a validated submission."""

    subject: str
    html: str
    text: str


class SubmitMailResponse(BaseModel):
    status: Literal["success", "error"]
    message: str


@dataclass(frozen=True)
class SubmissionResult:
    status_code: int
    body: SubmitMailResponse
