from __future__ import annotations

from typing import Any, Dict, Optional

from ..common.validators import optional_text, parse_positive_int
from ..core.constants import (
    CAMPAIGN_OVERVIEW_DAYS,
    DEFAULT_EMAIL_CONTENT_TYPE,
    DEFAULT_EMAIL_PROMPT,
    DEFAULT_EMAIL_TONE,
    EMAIL_ANALYTICS_DEFAULT_LIMIT,
    MARKETING_EMAILS_DEFAULT_LIMIT,
    PREVIEW_SAMPLE_DATA,
    TOP_PERFORMERS_DEFAULT_LIMIT,
)
from ..core.enums import EmailStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..database.supabase_base import page_range
from .model import MarketingEmail, percent, personalize
from .repository import MarketingRepository

EDITABLE_FIELDS = ("subject", "html_content", "text_content", "status")


class MarketingService:
    """Email campaign drafts, sending and engagement analytics."""

    def __init__(self, repo: MarketingRepository):
        self._repo = repo

    def list_emails(
        self, *, page: Any = 1, limit: Any = MARKETING_EMAILS_DEFAULT_LIMIT, status: Optional[str] = None, search: Optional[str] = None
    ) -> Dict[str, Any]:
        page = parse_positive_int(page, 1)
        limit = parse_positive_int(limit, MARKETING_EMAILS_DEFAULT_LIMIT)
        status = optional_text(status)
        start, end = page_range(page, limit)
        data, count = self._repo.list_emails(
            status=None if status in (None, "all") else status,
            search=optional_text(search),
            start=start,
            end=end,
        )
        return {
            "success": True,
            "data": data,
            "pagination": {"page": page, "limit": limit, "total": count, "totalPages": -(-count // limit)},
        }

    def generate(self, body: Dict[str, Any]) -> Any:
        result = self._repo.generate_email(
            {
                "prompt": body.get("prompt") or DEFAULT_EMAIL_PROMPT,
                "tone": body.get("tone") or DEFAULT_EMAIL_TONE,
                "contentType": body.get("contentType") or DEFAULT_EMAIL_CONTENT_TYPE,
            }
        )
        return result.get("email")

    def get_email(self, email_id: str) -> MarketingEmail:
        row = self._repo.get_email(email_id)
        if not row:
            raise NotFoundError("Email not found")
        return MarketingEmail.from_row(row)

    def update_email(self, email_id: str, body: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        fields = {name: body[name] for name in EDITABLE_FIELDS if name in body}
        if "status" in fields:
            try:
                EmailStatus(fields["status"])
            except ValueError:
                raise ValidationError(f"Invalid status: {fields['status']}")
        if not fields:
            raise ValidationError("Nothing to update")
        return self._repo.update_email(email_id, fields)

    def delete_email(self, email_id: str) -> None:
        email = self.get_email(email_id)
        if not email.is_deletable:
            raise ValidationError("Can only delete draft or failed emails")
        self._repo.delete_email(email_id)

    def preview(self, email_id: str) -> Dict[str, Any]:
        email = self.get_email(email_id)
        return {
            "id": email.id,
            "subject": email.subject,
            "htmlContent": personalize(email.html_content, PREVIEW_SAMPLE_DATA),
            "textContent": personalize(email.text_content, PREVIEW_SAMPLE_DATA),
            "status": email.status,
            "created_at": email.created_at,
        }

    def send(self, email_id: str, modifications: Any = None) -> Dict[str, Any]:
        email = self.get_email(email_id)
        if not email.is_sendable:
            raise ValidationError("Email has already been sent or is currently sending")
        if self._repo.count_verified_subscribers() == 0:
            raise ValidationError("No active subscribers found")
        result = self._repo.send_email({"emailId": email_id, "modifications": modifications})
        return {"success": True, "data": result.get("stats"), "message": result.get("message")}

    def overview(self) -> Dict[str, Any]:
        chart = self._repo.campaign_overview(CAMPAIGN_OVERVIEW_DAYS)
        emails = sum(r.get("emails_sent") or 0 for r in chart)
        recipients = sum(r.get("total_recipients") or 0 for r in chart)
        opens = sum(r.get("total_opens") or 0 for r in chart)
        clicks = sum(r.get("total_clicks") or 0 for r in chart)
        return {
            "totalCampaigns": emails,
            "totalRecipients": recipients,
            "totalOpens": opens,
            "totalClicks": clicks,
            "avgOpenRate": percent(opens, recipients),
            "avgClickRate": percent(clicks, recipients),
            "activeSubscribers": self._repo.count_verified_subscribers(),
            "chartData": chart,
        }

    def email_analytics(self, limit: Any = EMAIL_ANALYTICS_DEFAULT_LIMIT) -> Dict[str, Any]:
        emails = self._repo.email_analytics(parse_positive_int(limit, EMAIL_ANALYTICS_DEFAULT_LIMIT))
        stats = {
            "totalSent": sum(e.get("sent_count") or 0 for e in emails),
            "totalDelivered": sum(e.get("delivered_count") or 0 for e in emails),
            "totalOpened": sum(e.get("unique_opens") or 0 for e in emails),
            "totalClicked": sum(e.get("unique_clicks") or 0 for e in emails),
            "totalBounced": sum(e.get("bounced_count") or 0 for e in emails),
            "totalFailed": sum(e.get("failed_count") or 0 for e in emails),
        }
        stats["deliveryRate"] = percent(stats["totalDelivered"], stats["totalSent"])
        stats["openRate"] = percent(stats["totalOpened"], stats["totalDelivered"])
        stats["clickRate"] = percent(stats["totalClicked"], stats["totalDelivered"])
        stats["bounceRate"] = percent(stats["totalBounced"], stats["totalSent"])
        return {"emails": emails, "aggregateStats": stats}

    def top_performers(self, limit: Any = TOP_PERFORMERS_DEFAULT_LIMIT):
        return self._repo.top_performers(parse_positive_int(limit, TOP_PERFORMERS_DEFAULT_LIMIT))
