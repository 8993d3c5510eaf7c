"""
Email notifications.

Builders return ``Notification`` values; ``queue`` hands them to FastAPI
``BackgroundTasks`` so they go out only after the request's database work has
committed. Delivery is best-effort: a failing send is logged and dropped, it
never reaches the caller.
"""
import logging
from dataclasses import dataclass

from fastapi import BackgroundTasks

from .. import config
from ..models.application import ApplicationStatus
from . import emailer

logger = logging.getLogger(__name__)

SIGN_OFF = "Best regards,\nThe Team"


@dataclass(frozen=True)
class Notification:
    to_email: str
    subject: str
    text: str


def deliver(notification: Notification) -> bool:
    try:
        emailer.send_email(
            to_email=notification.to_email,
            subject=notification.subject,
            text=notification.text,
        )
        return True
    except Exception as e:
        logger.warning(
            "Email to %s failed (non-blocking): %s: %s",
            notification.to_email, type(e).__name__, e,
        )
        return False


def queue(background_tasks: BackgroundTasks, *notifications: Notification) -> None:
    for n in notifications:
        background_tasks.add_task(deliver, n)


def _admin(subject: str, text: str) -> Notification:
    return Notification(to_email=config.ADMIN_EMAIL, subject=f"[Admin Notification] {subject}", text=text)


def _greeting(name: str | None) -> str:
    return f"Hi {(name or 'there').strip()},"


# Accounts


def welcome(user) -> Notification:  # noqa: ANN001
    return Notification(
        to_email=user.email,
        subject="Welcome to Sufopoc!",
        text=(
            f"{_greeting(user.name)}\n\n"
            "Welcome to Sufopoc! We are excited to have you on board.\n\n"
            "Your account has been created successfully.\n\n"
            f"{SIGN_OFF}"
        ),
    )


def admin_new_signup(user) -> Notification:  # noqa: ANN001
    is_business = user.role == "BUSINESS"
    text = f"New user registered:\nName: {user.name}\nEmail: {user.email}\nRole: {user.role}"
    if is_business:
        text += (
            f"\n\nCompany Name: {user.company_name or 'Not provided'}"
            f"\nCompany Website: {user.company_website or 'Not provided'}"
            "\n\nThis business account requires verification. Please review and verify the company."
        )
    return _admin(f"New User Signup{' - Business Account' if is_business else ''}", text)


def admin_ambassador_application(user) -> Notification:  # noqa: ANN001
    return _admin(
        "New Ambassador Application",
        f"A user applied to become an ambassador:\nName: {user.name}\nEmail: {user.email}\n"
        f"Region: {user.region or 'Not provided'}\n\nReview the application in the admin dashboard.",
    )


# Verification


def ambassador_code(user, code: str) -> Notification:  # noqa: ANN001
    link = f"{config.APP_BASE_URL}/verify-ambassador"
    return Notification(
        to_email=user.email,
        subject="Ambassador Application Approved - Action Required",
        text=(
            f"{_greeting(user.name)}\n\n"
            "Congratulations! Your application to become an ambassador has been approved.\n\n"
            "To complete the process and activate your ambassador privileges, "
            "please verify your account using the following code:\n\n"
            f"Verification Code: {code}\n\n"
            f"Visit this link to enter your code: {link}\n\n"
            f"This code will expire in {config.VERIFICATION_CODE_TTL_HOURS} hours.\n\n"
            f"{SIGN_OFF}"
        ),
    )


def ambassador_declined(user) -> Notification:  # noqa: ANN001
    return Notification(
        to_email=user.email,
        subject="Ambassador Application Update",
        text=(
            f"{_greeting(user.name)}\n\n"
            "Thank you for your interest in becoming an ambassador. After reviewing your application, "
            "we have decided not to proceed at this time.\n\n"
            f"{SIGN_OFF}"
        ),
    )


def business_approved(user) -> Notification:  # noqa: ANN001
    return Notification(
        to_email=user.email,
        subject="Your Business Account Has Been Approved!",
        text=(
            "Congratulations! Your business account has been approved.\n\n"
            "You can now log in to your dashboard and start posting jobs.\n\n"
            f"{SIGN_OFF}"
        ),
    )


# Applications


def application_received(applicant, posting_title: str) -> Notification:  # noqa: ANN001
    return Notification(
        to_email=applicant.email,
        subject=f"Application Received: {posting_title}",
        text=(
            f"{_greeting(applicant.name)}\n\n"
            f'We have received your application for "{posting_title}". '
            "You will be notified by email when its status changes.\n\n"
            f"{SIGN_OFF}"
        ),
    )


def admin_new_application(applicant, posting_title: str, posting_kind: str) -> Notification:  # noqa: ANN001
    return _admin(
        f"New Application: {posting_title}",
        f"New application submitted:\nApplicant: {applicant.name} ({applicant.email})\n"
        f"{posting_kind}: {posting_title}",
    )


# status -> (subject prefix, body line); anything missing gets the generic update
_STATUS_TEMPLATES = {
    ApplicationStatus.REQUEST_INFO: (
        "Additional Documents Needed",
        'Additional documents are needed to continue processing your application for "{title}". '
        "Please log in to your dashboard and provide the requested information.",
    ),
    ApplicationStatus.INTERVIEW: (
        "Interview Invitation",
        'Good news! You have been invited to an interview for "{title}". '
        "We will contact you shortly with the details.",
    ),
    ApplicationStatus.ACCEPTED: (
        "Congratulations",
        'Congratulations! Your application for "{title}" has been accepted.',
    ),
    ApplicationStatus.REJECTED: (
        "Application Update",
        'Thank you for applying for "{title}". After careful review, we have decided '
        "not to proceed with your application at this time.",
    ),
}


def application_status_changed(applicant, posting_title: str, status: ApplicationStatus | str) -> Notification:  # noqa: ANN001
    status = ApplicationStatus(status)
    subject_prefix, body = _STATUS_TEMPLATES.get(
        status,
        ("Application Status Updated", 'The status of your application for "{title}" has been updated to {status}.'),
    )
    return Notification(
        to_email=applicant.email,
        subject=f"{subject_prefix}: {posting_title}",
        text=(
            f"{_greeting(applicant.name)}\n\n"
            f"{body.format(title=posting_title, status=status.value)}\n\n"
            f"{SIGN_OFF}"
        ),
    )


# Contact


def contact_confirmation(*, name: str, email: str, subject: str, message: str) -> Notification:
    return Notification(
        to_email=email,
        subject=f"Received: {subject}",
        text=(
            f"{_greeting(name)}\n\n"
            f'Thank you for contacting us. We have received your message regarding "{subject}" '
            "and will get back to you shortly.\n\n"
            f"Your Message:\n{message}\n\n"
            f"{SIGN_OFF}"
        ),
    )


def admin_contact(*, name: str, email: str, subject: str, message: str) -> Notification:
    return _admin(
        f"New Contact Form Submission: {subject}",
        f"Name: {name}\nEmail: {email}\nSubject: {subject}\n\nMessage:\n{message}",
    )


def admin_bug_report(
    *,
    title: str,
    description: str,
    steps: str | None,
    email: str | None,
    user_agent: str,
    referer: str,
    timestamp: str,
) -> Notification:
    lines = ["Bug Report Submitted", "", f"Title: {title}", "", "Description:", description, ""]
    if steps:
        lines += ["Steps to Reproduce:", steps, ""]
    lines.append(f"Reporter Email: {email or 'Not provided'}")
    lines += [
        "",
        "---",
        "Additional Information:",
        f"- Timestamp: {timestamp}",
        f"- Page URL: {referer}",
        f"- User Agent: {user_agent}",
    ]
    return _admin(f"Bug Report: {title}", "\n".join(lines))
