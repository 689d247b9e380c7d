"""Tests for the export/notification side channel."""

import csv
import os
import threading
import time
from smtplib import SMTPException
from unittest.mock import patch

import pytest
from django.core import mail
from django.utils import timezone

from apps.core import exports, notifications, tasks
from apps.core.exceptions import NotificationError
from apps.core.models import ContactSubmission


@pytest.fixture
def export_dir(tmp_path, settings):
    """Point exports at a per-test directory."""
    settings.CONTACT_EXPORT_DIR = str(tmp_path / "exports")
    return tmp_path / "exports"


@pytest.fixture
def submission() -> ContactSubmission:
    """An in-memory submission; the side channel never touches the database."""
    return ContactSubmission(
        pk=42,
        name="Brian Kamau",
        email="brian@example.com",
        company="",
        service="Mobile App Development",
        message="We want an Android app for our delivery riders.",
        ip_address="198.51.100.4",
        user_agent="Mozilla/5.0",
        created_at=timezone.now(),
    )


class TestExports:
    """CSV export artifacts."""

    def test_export_contains_submission(self, export_dir, submission: ContactSubmission) -> None:
        path = exports.write_submission_export(submission)

        assert path.parent == export_dir
        with path.open(newline="", encoding="utf-8") as handle:
            rows = list(csv.reader(handle))

        assert rows[0] == ["Field", "Value"]
        values = dict(rows[1:])
        assert values["Submission ID"] == "42"
        assert values["Email"] == "brian@example.com"
        assert values["Company"] == "Not provided"
        assert values["Service"] == "Mobile App Development"

    def test_delete_export_ignores_missing_file(self, export_dir, submission: ContactSubmission) -> None:
        path = exports.write_submission_export(submission)

        exports.delete_export(path)
        exports.delete_export(path)

        assert not path.exists()

    def test_purge_removes_only_stale_files(self, export_dir, submission: ContactSubmission) -> None:
        stale = exports.write_submission_export(submission)
        old = time.time() - 7200
        os.utime(stale, (old, old))
        fresh = exports.write_submission_export(submission)
        unrelated = export_dir / "keep-me.csv"
        unrelated.write_text("x")
        os.utime(unrelated, (old, old))

        removed = exports.purge_stale_exports(max_age=3600)

        assert removed == 1
        assert not stale.exists()
        assert fresh.exists()
        assert unrelated.exists()


class TestNotifications:
    """Composing and sending the team notification."""

    def test_compose(self, submission: ContactSubmission) -> None:
        notification = notifications.compose_notification(submission)

        assert notification.subject == "New Contact Submission from Brian Kamau"
        assert "Email: brian@example.com" in notification.body
        assert "Company: Not provided" in notification.body
        assert "Service: Mobile App Development" in notification.body
        assert "Submission ID: 42" in notification.body

    def test_send_with_attachment(self, export_dir, submission: ContactSubmission, settings) -> None:
        settings.CONTACT_NOTIFICATION_EMAILS = ["team@tagadplatforms.com"]
        path = exports.write_submission_export(submission)

        assert notifications.send_contact_notification(submission, attachment=path) is True

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ["team@tagadplatforms.com"]
        assert message.reply_to == ["Brian Kamau <brian@example.com>"]
        assert message.attachments[0][0] == path.name
        assert message.attachments[0][2] == "text/csv"

    def test_no_recipients_skips_mail(self, submission: ContactSubmission, settings, caplog) -> None:
        settings.CONTACT_NOTIFICATION_EMAILS = []

        assert notifications.send_contact_notification(submission) is False

        assert mail.outbox == []
        assert "New contact submission from: brian@example.com" in caplog.text

    def test_send_failure_raises_notification_error(self, submission: ContactSubmission) -> None:
        with (
            patch("django.core.mail.EmailMessage.send", side_effect=SMTPException("relay denied")),
            pytest.raises(NotificationError) as excinfo,
        ):
            notifications.send_contact_notification(submission)

        assert "relay denied" in excinfo.value.message


class TestSideChannelTask:
    """run_side_channel / dispatch_side_channel."""

    def test_run_sends_and_cleans_up(self, export_dir, submission: ContactSubmission) -> None:
        assert tasks.run_side_channel(submission) is True

        assert len(mail.outbox) == 1
        assert list(export_dir.iterdir()) == []

    def test_run_swallows_notification_failure(
        self, export_dir, submission: ContactSubmission, caplog
    ) -> None:
        with patch("django.core.mail.EmailMessage.send", side_effect=SMTPException("relay denied")):
            assert tasks.run_side_channel(submission) is False

        assert "Contact side channel failed for submission #42" in caplog.text
        assert list(export_dir.iterdir()) == []

    def test_run_swallows_export_failure(self, export_dir, submission: ContactSubmission) -> None:
        with patch("apps.core.tasks.exports.write_submission_export", side_effect=OSError("disk full")):
            assert tasks.run_side_channel(submission) is False

        assert mail.outbox == []

    def test_dispatch_runs_in_background(self, export_dir, submission: ContactSubmission) -> None:
        future = tasks.dispatch_side_channel(submission)

        assert future is not None
        assert future.result(timeout=5) is True
        assert len(mail.outbox) == 1

    def test_dispatch_disabled(self, submission: ContactSubmission, settings) -> None:
        settings.CONTACT_SIDE_CHANNEL_ENABLED = False

        assert tasks.dispatch_side_channel(submission) is None

    def test_dispatch_failure_is_swallowed(self, submission: ContactSubmission) -> None:
        with patch("apps.core.tasks.get_executor", side_effect=RuntimeError("cannot schedule new futures")):
            assert tasks.dispatch_side_channel(submission) is None

    def test_dispatch_drops_work_when_full(self, submission: ContactSubmission, settings, caplog) -> None:
        settings.CONTACT_SIDE_CHANNEL_MAX_PENDING = 1
        tasks.shutdown_executor()
        release = threading.Event()

        with patch("apps.core.tasks.run_side_channel", side_effect=lambda _: release.wait(5)):
            first = tasks.dispatch_side_channel(submission)
            second = tasks.dispatch_side_channel(submission)

            assert first is not None
            assert second is None
            assert "Contact side channel is full" in caplog.text

            finished = threading.Event()
            first.add_done_callback(lambda _: finished.set())
            release.set()
            assert finished.wait(5)
            third = tasks.dispatch_side_channel(submission)
            assert third is not None
            third.result(timeout=5)
