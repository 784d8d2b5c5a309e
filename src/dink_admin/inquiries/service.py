from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import utc_iso
from ..common.validators import optional_text, parse_choice, require_non_empty
from ..core.enums import InquiryStatus
from ..core.exceptions import NotFoundError, UpstreamError, ValidationError
from .mailer import SmtpMailer, response_html, response_text
from .model import Inquiry
from .repository import InquiryRepository

logger = logging.getLogger(__name__)

ADMIN_RESPONSE_TEMPLATE = "admin_response"


class InquiryService:
    def __init__(self, repo: InquiryRepository, mailer: SmtpMailer, *, site_url: str, logo_url: str = ""):
        self._repo = repo
        self._mailer = mailer
        self._site_url = site_url
        self._logo_url = logo_url

    def list_inquiries(self, status: Optional[str] = None, search: Optional[str] = None) -> List[Inquiry]:
        choice = parse_choice(status, InquiryStatus, "status")
        data = self._repo.list_inquiries(
            status=choice.value if choice else None,
            search=optional_text(search),
        )
        return [Inquiry.from_row(r) for r in data]

    def get(self, inquiry_id: str) -> Inquiry:
        row = self._repo.get_inquiry(inquiry_id)
        if not row:
            raise NotFoundError("Inquiry not found")
        return Inquiry.from_row(row)

    def responses(self, inquiry_id: str) -> List[Dict[str, Any]]:
        return self._repo.list_responses(inquiry_id)

    def update_status(self, inquiry_id: str, status: Any) -> None:
        choice = parse_choice(status, InquiryStatus, "status")
        if choice is None:
            raise ValidationError("Status is required")
        fields: Dict[str, Any] = {"status": choice.value}
        if choice is InquiryStatus.RESPONDED:
            fields["responded_at"] = utc_iso()
        self._repo.update_inquiry(inquiry_id, fields)

    def respond(self, inquiry_id: str, message: Any) -> Inquiry:
        """Record a reply, mark the inquiry responded and email it to the sender."""
        text = require_non_empty(message, "Response message is required")
        inquiry = self.get(inquiry_id)
        self._repo.add_response(
            {
                "inquiry_id": inquiry.id,
                "response_type": "email",
                "message": text,
                "subject": inquiry.reply_subject,
            }
        )
        self.update_status(inquiry.id, InquiryStatus.RESPONDED.value)
        self.send_response(inquiry.email, inquiry.reply_subject, text, inquiry_id=inquiry.id)
        return inquiry

    def send_response(self, to: Any, subject: Any, message: Any, inquiry_id: Optional[str] = None) -> bool:
        if not (optional_text(to) and optional_text(subject) and optional_text(message)):
            raise ValidationError("Missing required fields")
        sent = self._mailer.send(
            to,
            subject,
            response_text(subject, message, site_url=self._site_url),
            response_html(subject, message, site_url=self._site_url, logo_url=self._logo_url),
        )
        if inquiry_id:
            try:
                self._repo.log_email(
                    {
                        "p_template_key": ADMIN_RESPONSE_TEMPLATE,
                        "p_to_email": to,
                        "p_from_email": self._mailer.sender,
                        "p_subject": subject,
                        "p_status": "sent" if sent else "pending",
                        "p_metadata": {
                            "inquiry_id": inquiry_id,
                            "type": ADMIN_RESPONSE_TEMPLATE,
                            "sent_at": utc_iso(),
                        },
                    }
                )
            except UpstreamError:
                logger.warning("Could not log response email for inquiry %s", inquiry_id)
        return sent
