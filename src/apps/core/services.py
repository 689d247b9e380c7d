"""Core app services: the contact submission pipeline."""

import asyncio
import logging
import threading
from typing import Any

from asgiref.sync import sync_to_async
from django.conf import settings
from django.db import DatabaseError, InterfaceError, OperationalError, transaction

from .exceptions import PersistenceError
from .models import ContactSubmission
from .store import connection_manager
from .tasks import dispatch_side_channel
from .validation import validate_submission

logger = logging.getLogger(__name__)


class AbandonedWrite(Exception):
    """Raised inside a store write whose caller stopped waiting for it."""


class WriteGuard:
    """
    Decides the race between a store write and its timeout.

    The write may only commit after ``claim_commit()`` succeeds, and a
    timed-out caller may only report failure after ``abandon()`` succeeds.
    Exactly one of the two wins.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._abandoned = False
        self._committing = False

    def claim_commit(self) -> bool:
        with self._lock:
            if self._abandoned:
                return False
            self._committing = True
            return True

    def abandon(self) -> bool:
        with self._lock:
            if self._committing:
                return False
            self._abandoned = True
            return True


def _store_timeout() -> float:
    return float(getattr(settings, "CONTACT_STORE_TIMEOUT", 10))


def _store_failure(exc: BaseException, message: str) -> PersistenceError:
    """Translate a store exception, updating the connection state if needed."""
    if isinstance(exc, (OperationalError, InterfaceError, TimeoutError)):
        connection_manager.mark_disconnected()
    return PersistenceError(message=message, detail=str(exc) or exc.__class__.__name__)


def _create_submission(guard: WriteGuard, fields: dict[str, Any]) -> ContactSubmission:
    """Insert inside a transaction that rolls back if the caller gave up."""
    with transaction.atomic():
        submission = ContactSubmission.objects.create(**fields)
        if not guard.claim_commit():
            raise AbandonedWrite(f"store write exceeded {_store_timeout()}s")
    return submission


def _discard_abandoned(write: asyncio.Future) -> None:
    if not write.cancelled() and isinstance(write.exception(), AbandonedWrite):
        logger.warning("Timed-out contact submission write was rolled back")


async def _store_submission(fields: dict[str, Any]) -> ContactSubmission:
    """
    Write a submission within ``CONTACT_STORE_TIMEOUT`` seconds.

    A write that times out is rolled back, so a timeout never leaves a
    record behind. A write that had already started committing when the
    timeout fired is awaited instead.
    """
    guard = WriteGuard()
    write = asyncio.ensure_future(sync_to_async(_create_submission)(guard, fields))
    try:
        return await asyncio.wait_for(asyncio.shield(write), timeout=_store_timeout())
    except TimeoutError:
        if guard.abandon():
            write.add_done_callback(_discard_abandoned)
            raise
        return await write


async def submit_contact(
    payload: Any,
    *,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> ContactSubmission:
    """
    Validate, store and announce a contact form submission.

    Args:
        payload: Decoded request body.
        ip_address: Origin address of the request, if known.
        user_agent: The request's User-Agent header, if any.

    Returns:
        The stored submission.

    Raises:
        ValidationError: if any field is invalid. Nothing is written.
        PersistenceError: if the submission could not be stored.
    """
    cleaned = validate_submission(payload)

    try:
        submission = await _store_submission(
            {
                "name": cleaned.name,
                "email": cleaned.email,
                "company": cleaned.company,
                "service": cleaned.service,
                "message": cleaned.message,
                "ip_address": ip_address or None,
                "user_agent": (user_agent or "")[:512],
            }
        )
    except (DatabaseError, TimeoutError) as exc:
        logger.exception("Contact form submission could not be stored")
        raise _store_failure(exc, "Failed to submit contact form. Please try again later.") from exc

    logger.info("New contact submission #%d from %s", submission.pk, submission.email)

    dispatch_side_channel(submission)
    return submission


async def list_recent_submissions(limit: int | None = None) -> list[ContactSubmission]:
    """
    Return the most recent submissions, newest first.

    ``limit`` is clamped to ``1..CONTACT_LIST_LIMIT``.

    Raises:
        PersistenceError: if the store could not be read.
    """
    max_limit = settings.CONTACT_LIST_LIMIT
    limit = max_limit if limit is None else min(max(limit, 1), max_limit)

    async def _fetch() -> list[ContactSubmission]:
        return [submission async for submission in ContactSubmission.objects.order_by("-created_at", "-id")[:limit]]

    try:
        return await asyncio.wait_for(_fetch(), timeout=_store_timeout())
    except (DatabaseError, TimeoutError) as exc:
        logger.exception("Contact submissions could not be read")
        raise _store_failure(exc, "Failed to retrieve contact submissions") from exc
