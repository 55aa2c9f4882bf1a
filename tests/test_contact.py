"""Tests for contact form submission."""

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from econirvana.contact import CONTACT_INFO, ContactSubmission, submit_contact


def _submission(**overrides) -> dict:
    fields = {
        "name": "Jane",
        "email": "jane@x.com",
        "subject": "Pickup",
        "message": "Can you collect two monitors?",
    }
    fields.update(overrides)
    return fields


def test_phone_is_optional() -> None:
    sub = ContactSubmission(**_submission())
    assert sub.phone == ""


def test_fields_are_trimmed() -> None:
    sub = ContactSubmission(**_submission(name="  Jane  "))
    assert sub.name == "Jane"


@pytest.mark.parametrize("field", ["name", "email", "subject", "message"])
def test_blank_required_field_rejected(field: str) -> None:
    with pytest.raises(ValidationError, match="must not be blank"):
        ContactSubmission(**_submission(**{field: "   "}))


def test_email_needs_at_sign() -> None:
    with pytest.raises(ValidationError, match="email address"):
        ContactSubmission(**_submission(email="jane.x.com"))


async def test_submit_returns_receipt() -> None:
    receipt = await submit_contact(ContactSubmission(**_submission()), delay=0)
    assert len(receipt.id) == 12
    assert receipt.received_at


async def test_submit_simulates_latency() -> None:
    with patch("econirvana.contact.asyncio.sleep", new_callable=AsyncMock) as sleep:
        await submit_contact(ContactSubmission(**_submission()), delay=1.5)
    sleep.assert_awaited_once_with(1.5)


def test_contact_info_has_facility_details() -> None:
    assert CONTACT_INFO["address"].startswith("123 Recycling Way")
    assert CONTACT_INFO["hours"]["Sunday"] == "Closed"
