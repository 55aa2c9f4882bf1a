"""Contact page: facility details and message submission."""

import asyncio
import logging
import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from econirvana.config import settings

logger = logging.getLogger(__name__)

CONTACT_INFO: dict = {
    "address": "123 Recycling Way, Green City, EC 12345",
    "phone": "(555) 123-4567",
    "email": "info@econirvana.com",
    "hours": {
        "Monday - Friday": "8:00 AM - 6:00 PM",
        "Saturday": "9:00 AM - 2:00 PM",
        "Sunday": "Closed",
    },
}


class ContactSubmission(BaseModel):
    """A message from the contact form. Phone is the only optional field."""

    name: str
    email: str
    phone: str = ""
    subject: str
    message: str

    @field_validator("name", "email", "subject", "message")
    @classmethod
    def _required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, value: str) -> str:
        if "@" not in value:
            msg = "must be an email address"
            raise ValueError(msg)
        return value


class ContactReceipt(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    received_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())


async def submit_contact(submission: ContactSubmission, *, delay: float | None = None) -> ContactReceipt:
    """Accept a contact message. Delivery is simulated."""
    delay = settings.contact_delay_seconds if delay is None else delay
    if delay > 0:
        await asyncio.sleep(delay)
    receipt = ContactReceipt()
    logger.info(
        "Contact message %s from %s: subject=%r, %d chars",
        receipt.id,
        submission.email,
        submission.subject,
        len(submission.message),
    )
    return receipt
