from __future__ import annotations

from dink_admin.inquiries.mailer import SmtpConfig, SmtpMailer
from dink_admin.inquiries.service import InquiryService

from test_inquiry_service import InMemoryInquiries


def _client(make_app, repo):
    svc = InquiryService(repo, SmtpMailer(SmtpConfig()), site_url="http://localhost")
    return make_app(inquiry_service=svc).test_client()


def test_send_response_missing_fields_is_400(make_app):
    response = _client(make_app, InMemoryInquiries()).post("/api/send-response", json={"to": "a@x.com"})

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "error": "Missing required fields"}


def test_send_response_success(make_app):
    response = _client(make_app, InMemoryInquiries()).post(
        "/api/send-response", json={"to": "a@x.com", "subject": "Re: hi", "message": "Thanks"}
    )
    assert response.get_json() == {"success": True, "message": "Response sent successfully"}
