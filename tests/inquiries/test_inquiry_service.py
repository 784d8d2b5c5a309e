from __future__ import annotations

import pytest

from dink_admin.core.exceptions import NotFoundError, UpstreamError, ValidationError
from dink_admin.inquiries.mailer import SmtpConfig, SmtpMailer, response_html
from dink_admin.inquiries.service import InquiryService


class InMemoryInquiries:
    def __init__(self, rows=(), fail_log=False):
        self.rows = {r["id"]: dict(r) for r in rows}
        self.responses = []
        self.logged = []
        self.fail_log = fail_log

    def list_inquiries(self, *, status, search):
        return [r for r in self.rows.values() if status is None or r.get("status") == status]

    def get_inquiry(self, inquiry_id):
        return self.rows.get(inquiry_id)

    def update_inquiry(self, inquiry_id, fields):
        self.rows[inquiry_id].update(fields)

    def list_responses(self, inquiry_id):
        return [r for r in self.responses if r["inquiry_id"] == inquiry_id]

    def add_response(self, payload):
        self.responses.append(payload)
        return payload

    def log_email(self, params):
        if self.fail_log:
            raise UpstreamError("function log_email does not exist")
        self.logged.append(params)


class RecordingMailer(SmtpMailer):
    def __init__(self):
        super().__init__(SmtpConfig(host="smtp", user="u", password="p"))
        self.outbox = []

    def send(self, to_email, subject, text, body_html=None):
        self.outbox.append((to_email, subject, text, body_html))
        return True


INQUIRY = {"id": "i1", "first_name": "Jo", "last_name": "Bee", "email": "jo@x.com", "subject": "Court rental", "status": "new"}


def _service(repo, mailer=None):
    return InquiryService(repo, mailer or SmtpMailer(SmtpConfig()), site_url="https://dinkhousepb.com")


@pytest.mark.parametrize("to, subject, message", [("", "s", "m"), ("a@x.com", None, "m"), ("a@x.com", "s", "  ")])
def test_send_response_requires_fields(to, subject, message):
    with pytest.raises(ValidationError) as exc:
        _service(InMemoryInquiries()).send_response(to, subject, message)
    assert str(exc.value) == "Missing required fields"


def test_unconfigured_smtp_logs_pending():
    repo = InMemoryInquiries()
    sent = _service(repo).send_response("a@x.com", "Re: hi", "Thanks!", inquiry_id="i1")

    assert sent is False
    assert repo.logged[0]["p_status"] == "pending"
    assert repo.logged[0]["p_template_key"] == "admin_response"
    assert repo.logged[0]["p_metadata"]["inquiry_id"] == "i1"


def test_log_failure_does_not_fail_send():
    assert _service(InMemoryInquiries(fail_log=True), RecordingMailer()).send_response("a@x.com", "s", "m", inquiry_id="i1")


def test_respond_records_reply_and_marks_responded():
    repo = InMemoryInquiries([INQUIRY])
    mailer = RecordingMailer()
    _service(repo, mailer).respond("i1", "We have courts free at 18:00.")

    assert repo.responses[0]["subject"] == "Re: Court rental"
    assert repo.responses[0]["response_type"] == "email"
    assert repo.rows["i1"]["status"] == "responded"
    assert repo.rows["i1"]["responded_at"]
    assert mailer.outbox[0][0] == "jo@x.com"
    assert repo.logged[0]["p_status"] == "sent"


def test_respond_requires_message():
    with pytest.raises(ValidationError):
        _service(InMemoryInquiries([INQUIRY])).respond("i1", "")


def test_get_missing_inquiry():
    with pytest.raises(NotFoundError):
        _service(InMemoryInquiries()).get("nope")


def test_list_rejects_unknown_status():
    with pytest.raises(ValidationError):
        _service(InMemoryInquiries()).list_inquiries("archived")


def test_response_html_escapes_message():
    body = response_html("Hi", "<b>bold</b>\nline two", site_url="https://x")

    assert "&lt;b&gt;bold&lt;/b&gt;<br>line two" in body
    assert "<img" not in body
