"""Contact submission notifications."""

import logging
from dataclasses import dataclass
from pathlib import Path

from django.conf import settings
from django.core.mail import EmailMessage

from .exceptions import NotificationError
from .models import ContactSubmission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    subject: str
    body: str


def compose_notification(submission: ContactSubmission) -> Notification:
    """Build the team notification for a new submission."""
    subject = f"New Contact Submission from {submission.name}"

    body = (
        f"New contact form submission received:\n\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Company: {submission.company or 'Not provided'}\n"
        f"Service: {submission.service or 'Not specified'}\n"
        f"Message:\n{submission.message}\n\n"
        f"Submitted: {submission.created_at:%Y-%m-%d %H:%M}\n"
        f"Submission ID: {submission.pk}\n"
    )
    return Notification(subject=subject, body=body)


def send_contact_notification(
    submission: ContactSubmission,
    attachment: Path | None = None,
) -> bool:
    """
    Log the notification and e-mail it to the team.

    Returns False when no recipients are configured.

    Raises:
        NotificationError: if the e-mail could not be sent.
    """
    notification = compose_notification(submission)
    logger.info("New contact submission from: %s (#%d)", submission.email, submission.pk)

    recipients: list[str] = getattr(settings, "CONTACT_NOTIFICATION_EMAILS", [])
    if not recipients:
        logger.warning("No CONTACT_NOTIFICATION_EMAILS configured, skipping notification.")
        return False

    msg = EmailMessage(
        subject=notification.subject,
        body=notification.body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=recipients,
        reply_to=[f"{submission.name} <{submission.email}>"],
    )
    if attachment is not None:
        msg.attach_file(str(attachment), mimetype="text/csv")

    try:
        msg.send(fail_silently=False)
    except Exception as exc:
        raise NotificationError(f"Failed to send notification for submission #{submission.pk}: {exc}") from exc

    logger.info("Contact notification sent to %s for submission #%d", recipients, submission.pk)
    return True
