"""Contact form submission handling."""

from __future__ import annotations

import logging

from storefront.core.logging import StructuredLogger
from storefront.schemas.contact import ContactResponse, ContactSubmission

CONTACT_SUCCESS_MESSAGE = "Contact form submitted successfully"


class ContactService:
    """Accept validated contact submissions.

    The submission is audited through the structured logger; delivery of a
    confirmation email is not part of this service.
    """

    def __init__(self, logger: StructuredLogger | None = None) -> None:
        self._logger = logger or StructuredLogger(logging.getLogger(__name__))

    async def submit(self, submission: ContactSubmission) -> ContactResponse:
        # Only non-identifying fields reach the audit log
        self._logger.log_info(
            "contact.submitted",
            {
                "interest": submission.interest,
                "email_domain": submission.email.rsplit("@", 1)[-1],
                "has_phone": submission.phone is not None,
                "message_length": len(submission.message),
            },
        )
        return ContactResponse(message=CONTACT_SUCCESS_MESSAGE)
