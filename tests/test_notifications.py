import logging
from types import SimpleNamespace

from backend.sufopoc.models.application import ApplicationStatus
from backend.sufopoc.services import emailer, notifications


def _user(**kw):
    base = {
        "name": "Stu",
        "email": "stu@example.com",
        "role": "STUDENT",
        "company_name": None,
        "company_website": None,
        "region": None,
    }
    base.update(kw)
    return SimpleNamespace(**base)


def test_admin_copies_go_to_admin_mailbox(monkeypatch):
    from backend.sufopoc import config

    monkeypatch.setattr(config, "ADMIN_EMAIL", "ops@example.com")
    note = notifications.admin_new_signup(_user())
    assert note.to_email == "ops@example.com"
    assert note.subject == "[Admin Notification] New User Signup"
    assert "Role: STUDENT" in note.text


def test_business_signup_copy_lists_company():
    note = notifications.admin_new_signup(_user(role="BUSINESS", company_name="Acme BV"))
    assert note.subject.endswith("Business Account")
    assert "Company Name: Acme BV" in note.text
    assert "Company Website: Not provided" in note.text


def test_ambassador_code_mail(monkeypatch):
    from backend.sufopoc import config

    monkeypatch.setattr(config, "APP_BASE_URL", "https://jobs.example.com")
    note = notifications.ambassador_code(_user(), "482913")
    assert "Verification Code: 482913" in note.text
    assert "https://jobs.example.com/verify-ambassador" in note.text
    assert "expire in 24 hours" in note.text


def test_status_templates_fall_back_to_generic():
    applicant = _user()
    generic = notifications.application_status_changed(applicant, "Nurse", ApplicationStatus.SUBMITTED)
    assert generic.subject == "Application Status Updated: Nurse"
    assert "updated to SUBMITTED" in generic.text

    rejected = notifications.application_status_changed(applicant, "Nurse", "REJECTED")
    assert rejected.subject == "Application Update: Nurse"


def test_bug_report_mail_omits_empty_steps():
    note = notifications.admin_bug_report(
        title="Broken button",
        description="Nothing happens",
        steps=None,
        email=None,
        user_agent="pytest",
        referer="Unknown",
        timestamp="2026-01-01T00:00:00+00:00",
    )
    assert note.subject == "[Admin Notification] Bug Report: Broken button"
    assert "Steps to Reproduce" not in note.text
    assert "Reporter Email: Not provided" in note.text
    assert "- User Agent: pytest" in note.text


def test_deliver_logs_and_swallows_failures(monkeypatch, caplog):
    def _boom(**kwargs):
        raise ConnectionRefusedError("no smtp")

    monkeypatch.setattr(emailer, "send_email", _boom)
    note = notifications.Notification(to_email="stu@example.com", subject="Hi", text="Hello")

    with caplog.at_level(logging.WARNING, logger="backend.sufopoc.services.notifications"):
        assert notifications.deliver(note) is False
    assert "stu@example.com" in caplog.text


def test_deliver_success(outbox):
    note = notifications.Notification(to_email="stu@example.com", subject="Hi", text="Hello")
    assert notifications.deliver(note) is True
    assert outbox == [{"to": "stu@example.com", "subject": "Hi", "text": "Hello"}]


def test_emailer_mock_mode_without_smtp_host(monkeypatch, caplog):
    from backend.sufopoc import config

    monkeypatch.setattr(config, "SMTP_HOST", "")
    assert emailer.smtp_configured() is False
    with caplog.at_level(logging.INFO, logger="backend.sufopoc.services.emailer"):
        emailer.send_email(to_email="stu@example.com", subject="Hi", text="Hello")
    assert "[EMAIL MOCK]" in caplog.text


def test_emailer_uses_smtp_when_configured(monkeypatch):
    from backend.sufopoc import config

    sent = []

    class FakeSMTP:
        def __init__(self, host, port, timeout=None):
            sent.append(("connect", host, port))

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def ehlo(self):
            pass

        def starttls(self):
            sent.append(("starttls",))

        def login(self, user, password):
            sent.append(("login", user))

        def send_message(self, msg):
            sent.append(("send", msg["To"], msg["Subject"]))

    monkeypatch.setattr(config, "SMTP_HOST", "smtp.example.com")
    monkeypatch.setattr(config, "SMTP_PORT", 2525)
    monkeypatch.setattr(config, "SMTP_USER", "mailer")
    monkeypatch.setattr(config, "SMTP_PASS", "secret")
    monkeypatch.setattr(config, "SMTP_FROM", "noreply@example.com")
    monkeypatch.setattr(config, "SMTP_TLS", True)
    monkeypatch.setattr(emailer.smtplib, "SMTP", FakeSMTP)

    emailer.send_email(to_email="stu@example.com", subject="Hi", text="Hello")
    assert sent == [
        ("connect", "smtp.example.com", 2525),
        ("starttls",),
        ("login", "mailer"),
        ("send", "stu@example.com", "Hi"),
    ]
