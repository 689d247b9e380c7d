"""
Background side channel for contact submissions.

After a submission is stored, a CSV export is written, a notification is
composed, logged and e-mailed with the export attached, and the export is
deleted again. This runs on a small thread pool so the request that stored
the submission never waits on it. Failures are logged and swallowed; there
is no retry.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from django.conf import settings

from . import exports, notifications
from .exceptions import NotificationError
from .models import ContactSubmission

logger = logging.getLogger(__name__)

_executor: ThreadPoolExecutor | None = None
_pending: threading.BoundedSemaphore | None = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """Return the shared side-channel executor, creating it on first use."""
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=settings.CONTACT_SIDE_CHANNEL_WORKERS,
                thread_name_prefix="contact-side-channel",
            )
        return _executor


def _pending_slots() -> threading.BoundedSemaphore:
    """Slots for queued or running tasks, at most ``CONTACT_SIDE_CHANNEL_MAX_PENDING``."""
    global _pending
    with _executor_lock:
        if _pending is None:
            _pending = threading.BoundedSemaphore(settings.CONTACT_SIDE_CHANNEL_MAX_PENDING)
        return _pending


def shutdown_executor(wait: bool = True) -> None:
    """Stop the executor. A new one is created on the next dispatch."""
    global _executor, _pending
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=wait)
            _executor = None
        _pending = None


def _cleanup_exports(export_path: Path | None) -> None:
    try:
        if export_path is not None:
            exports.delete_export(export_path)
        exports.purge_stale_exports()
    except OSError:
        logger.warning("Could not clean up submission exports", exc_info=True)


def run_side_channel(submission: ContactSubmission) -> bool:
    """Export and notify for one submission. Never raises."""
    export_path = None
    try:
        export_path = exports.write_submission_export(submission)
        notifications.send_contact_notification(submission, attachment=export_path)
    except Exception as exc:
        error = exc if isinstance(exc, NotificationError) else NotificationError(str(exc))
        logger.error(
            "Contact side channel failed for submission #%s: %s",
            submission.pk,
            error,
            exc_info=exc,
        )
        return False
    finally:
        _cleanup_exports(export_path)
    return True


def dispatch_side_channel(submission: ContactSubmission) -> Future | None:
    """
    Queue the side channel for a stored submission without waiting for it.

    Returns the future, or None if the side channel is disabled, already has
    ``CONTACT_SIDE_CHANNEL_MAX_PENDING`` tasks in flight, or could not be queued.
    """
    if not getattr(settings, "CONTACT_SIDE_CHANNEL_ENABLED", True):
        return None

    slots = _pending_slots()
    if not slots.acquire(blocking=False):
        logger.warning("Contact side channel is full; dropping notification for submission #%s", submission.pk)
        return None

    try:
        future = get_executor().submit(run_side_channel, submission)
    except Exception:
        slots.release()
        logger.exception("Could not queue contact side channel for submission #%s", submission.pk)
        return None

    future.add_done_callback(lambda _: slots.release())
    return future
