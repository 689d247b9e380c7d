"""Contact form payload validation.

Every field is checked before anything is written, and every failure is
collected so the client can fix all of them in a single round trip.
"""

from dataclasses import dataclass
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email

from .exceptions import ValidationError
from .models import SERVICE_NAMES

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
COMPANY_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 2000

NAME_ERROR = f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
EMAIL_ERROR = "Please enter a valid email address"
COMPANY_ERROR = f"Company name cannot exceed {COMPANY_MAX_LENGTH} characters"
SERVICE_ERROR = "Invalid service selection"
MESSAGE_ERROR = f"Message must be between {MESSAGE_MIN_LENGTH} and {MESSAGE_MAX_LENGTH} characters"

# Providers whose mailboxes ignore a "+tag" (or "-tag" for Yahoo) suffix.
_GMAIL_DOMAINS = ("gmail.com", "googlemail.com")
_PLUS_SUBADDRESS_DOMAINS = (
    "gmail.com",
    "googlemail.com",
    "outlook.com",
    "hotmail.com",
    "live.com",
    "icloud.com",
    "me.com",
)
_DASH_SUBADDRESS_DOMAINS = ("yahoo.com", "ymail.com", "rocketmail.com")


@dataclass(frozen=True)
class CleanedSubmission:
    """A payload that passed validation, ready to be stored."""

    name: str
    email: str
    company: str
    service: str
    message: str


def normalize_email(email: str) -> str:
    """Return the canonical form of a syntactically valid address.

    The address is lower-cased, provider sub-addresses are dropped and
    Gmail's ignored dots are removed, so ``John.Doe+site@GoogleMail.com``
    becomes ``johndoe@gmail.com``.
    """
    local, _, domain = email.strip().rpartition("@")
    local = local.lower()
    domain = domain.lower()

    if domain in _PLUS_SUBADDRESS_DOMAINS:
        local = local.split("+", 1)[0]
    elif domain in _DASH_SUBADDRESS_DOMAINS:
        local = local.split("-", 1)[0]

    if domain in _GMAIL_DOMAINS:
        local = local.replace(".", "")
        domain = "gmail.com"

    return f"{local}@{domain}"


def _text(data: dict[str, Any], field: str) -> str | None:
    """Return a trimmed string, ``""`` when missing, ``None`` when not text."""
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        return None
    return value.strip()


def validate_submission(data: Any) -> CleanedSubmission:
    """
    Validate a raw contact payload.

    Args:
        data: Decoded request body (normally a dict).

    Returns:
        The cleaned, normalized submission.

    Raises:
        ValidationError: listing one ``{field, message}`` entry per violated field.
    """
    if not isinstance(data, dict):
        raise ValidationError([{"field": "body", "message": "Request body must be a JSON object"}])

    errors: list[dict[str, str]] = []

    name = _text(data, "name")
    if name is None or not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        errors.append({"field": "name", "message": NAME_ERROR})

    email = _text(data, "email")
    try:
        if not email or len(email) > EMAIL_MAX_LENGTH:
            raise DjangoValidationError(EMAIL_ERROR)
        validate_email(email)
        email = normalize_email(email)
    except DjangoValidationError:
        errors.append({"field": "email", "message": EMAIL_ERROR})

    company = _text(data, "company")
    if company is None or len(company) > COMPANY_MAX_LENGTH:
        errors.append({"field": "company", "message": COMPANY_ERROR})

    service = _text(data, "service")
    if service is None or (service and service not in SERVICE_NAMES):
        errors.append({"field": "service", "message": SERVICE_ERROR})

    message = _text(data, "message")
    if message is None or not MESSAGE_MIN_LENGTH <= len(message) <= MESSAGE_MAX_LENGTH:
        errors.append({"field": "message", "message": MESSAGE_ERROR})

    if errors:
        raise ValidationError(errors)

    return CleanedSubmission(
        name=name,
        email=email,
        company=company,
        service=service,
        message=message,
    )
