"""Human-readable CSV exports of single contact submissions."""

import csv
import logging
import time
import uuid
from pathlib import Path

from django.conf import settings

from .models import ContactSubmission

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "contact-submission-"


def get_export_dir() -> Path:
    """Return the export directory, creating it if needed."""
    export_dir = Path(settings.CONTACT_EXPORT_DIR)
    export_dir.mkdir(parents=True, exist_ok=True)
    return export_dir


def write_submission_export(submission: ContactSubmission) -> Path:
    """Write a two-column Field/Value CSV describing one submission."""
    path = get_export_dir() / f"{EXPORT_PREFIX}{submission.pk}-{uuid.uuid4().hex[:12]}.csv"

    rows = [
        ("Submission ID", submission.pk),
        ("Name", submission.name),
        ("Email", submission.email),
        ("Company", submission.company or "Not provided"),
        ("Service", submission.service or "Not specified"),
        ("Message", submission.message),
        ("IP Address", submission.ip_address or "unknown"),
        ("User Agent", submission.user_agent or "unknown"),
        ("Submitted", submission.created_at.strftime("%Y-%m-%d %H:%M:%S")),
    ]

    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["Field", "Value"])
        writer.writerows(rows)

    logger.info("Wrote export for submission #%d to %s", submission.pk, path)
    return path


def delete_export(path: Path) -> None:
    """Remove an export artifact. Missing files are ignored."""
    path.unlink(missing_ok=True)


def purge_stale_exports(max_age: float | None = None) -> int:
    """
    Delete export artifacts older than ``max_age`` seconds.

    Defaults to ``settings.CONTACT_EXPORT_TTL``. Returns the number of files removed.
    """
    if max_age is None:
        max_age = settings.CONTACT_EXPORT_TTL

    cutoff = time.time() - max_age
    removed = 0
    for path in get_export_dir().glob(f"{EXPORT_PREFIX}*.csv"):
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
        except FileNotFoundError:
            continue

    if removed:
        logger.info("Purged %d stale submission export(s)", removed)
    return removed
