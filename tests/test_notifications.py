"""Tests for notification composition, channel selection and failure isolation."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from urllib.error import URLError

import pytest
from django.core.mail import get_connection as django_get_connection

from apps.inquiries.config import (
    Branding,
    IntakeConfig,
    NotificationConfig,
    ResendConfig,
    SMTPConfig,
)
from apps.inquiries.forms import validate
from apps.inquiries.notifications import (
    MESSAGE_PREVIEW_CHARS,
    NotificationDispatcher,
    internal_subject,
    internal_summary,
    post_to_chat,
    provider_receipt,
    relay_receipt,
    send_via_provider,
    send_via_smtp,
)

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"

SMTP = SMTPConfig(
    host="smtp.example.com",
    port=465,
    user="robotics@example.com",
    password="secret",  # noqa: S106
    recipients=("team@example.com",),
)
RESEND = ResendConfig(
    api_key="re_test_key",
    from_email="Turtleback Robotics <robotics@example.com>",
    recipients=("ops@example.com",),
    bcc=("archive@example.com",),
)
BRANDING = Branding(
    signature_name="Eloi Delva",
    signature_title="CEO",
    signature_email="robotics@example.com",
    signature_address="Washington, DC",
    privacy_text="We never sell your information.",
    privacy_url="https://example.com/privacy",
)


@pytest.fixture
def parent(parent_payload):
    return validate(parent_payload)


@pytest.fixture
def partner(partner_payload):
    return validate({**partner_payload, "orgType": "other", "orgTypeOther": "Rotary Club"})


def locmem_connection(*args, **kwargs):
    return django_get_connection("django.core.mail.backends.locmem.EmailBackend")


# ───────────────────────────── Content ───────────────────────────────────────


class TestContent:
    """Subjects, summaries and receipts."""

    def test_subjects(self, parent, partner) -> None:
        """Parent subjects name the contact; partner subjects name the organization."""
        assert internal_subject(parent) == "New Parent Inquiry - Jane Doe"
        assert internal_subject(partner) == "New Partner Inquiry - Prince George Elementary"

    def test_parent_summary(self, parent) -> None:
        """The parent summary carries contact, kids and age groups."""
        text = internal_summary(parent)
        assert "Jane Doe" in text
        assert "jane.doe@example.com" in text
        assert "Kids: 2" in text
        assert "9-13, 6-9" in text
        assert "Page: /programs" in text

    def test_partner_summary_includes_other_label(self, partner) -> None:
        """The partner summary shows the free-text type label for 'other'."""
        text = internal_summary(partner)
        assert "Org: Prince George Elementary" in text
        assert "other (Rotary Club)" in text
        assert "Phone: -" in text

    def test_message_truncated(self, parent_payload) -> None:
        """Messages are cut to the preview length in the internal summary."""
        long_message = "a" * MESSAGE_PREVIEW_CHARS + "TAIL"
        text = internal_summary(validate({**parent_payload, "message": long_message}))
        assert "a" * MESSAGE_PREVIEW_CHARS in text
        assert "TAIL" not in text

    def test_relay_receipt(self, parent, partner) -> None:
        """The relay receipt greets by first name and summarizes the request."""
        subject, text = relay_receipt(parent)
        assert subject == "We received your inquiry - Turtleback Robotics Academy"
        assert text.startswith("Hi Jane,")
        assert "Age groups: 9-13, 6-9" in text

        subject, text = relay_receipt(partner)
        assert subject == "We received your partnership inquiry - Turtleback Robotics Academy"
        assert "Organization: Prince George Elementary" in text

    def test_provider_receipt_renders_branding(self, parent) -> None:
        """The provider receipt carries the signature and privacy text in both parts."""
        subject, text, html = provider_receipt(parent, BRANDING)
        assert subject == "Thanks for your interest - Turtleback Robotics Academy"
        assert "Eloi Delva, CEO" in text
        assert "https://example.com/privacy" in text
        assert "Jane" in html
        assert "Eloi Delva" in html
        assert "We never sell your information." in html
        assert "Age groups: 9-13, 6-9" in html

    def test_provider_receipt_partner(self, partner) -> None:
        """Partners get the partnership wording."""
        subject, _text, html = provider_receipt(partner, BRANDING)
        assert subject == "Thank you - Turtleback Robotics Academy"
        assert "Organization: Prince George Elementary" in html


# ───────────────────────────── Channels ──────────────────────────────────────


class TestChannels:
    """Low-level channel calls."""

    @patch("apps.inquiries.notifications.urlopen")
    def test_post_to_chat(self, mock_urlopen) -> None:
        """The chat alert is a JSON POST with a text field."""
        mock_urlopen.return_value.__enter__.return_value = SimpleNamespace(status=200)

        post_to_chat(WEBHOOK_URL, "hello")

        request = mock_urlopen.call_args[0][0]
        assert request.full_url == WEBHOOK_URL
        assert request.get_method() == "POST"
        assert json.loads(request.data) == {"text": "hello"}
        assert mock_urlopen.call_args[1]["timeout"] == 10

    @patch("apps.inquiries.notifications.get_connection", side_effect=locmem_connection)
    def test_send_via_smtp_is_plain_text(self, mock_connection, mailoutbox) -> None:
        """The relay path sends plain text with no reply-to or BCC."""
        send_via_smtp(SMTP, to=["jane@example.com"], subject="Hi", text="Body")

        assert mock_connection.call_args[1]["use_ssl"] is True
        assert mock_connection.call_args[1]["use_tls"] is False
        assert len(mailoutbox) == 1
        message = mailoutbox[0]
        assert message.from_email == "robotics@example.com"
        assert message.to == ["jane@example.com"]
        assert message.bcc == []
        assert message.reply_to == []
        assert not getattr(message, "alternatives", [])

    @patch("apps.inquiries.notifications.get_connection", side_effect=locmem_connection)
    def test_send_via_smtp_starttls_port(self, mock_connection, mailoutbox) -> None:
        """Port 587 uses STARTTLS instead of implicit TLS."""
        smtp = SMTPConfig(host="smtp.example.com", port=587, user="u@example.com", password="p")  # noqa: S106

        send_via_smtp(smtp, to=["jane@example.com"], subject="Hi", text="Body")

        assert mock_connection.call_args[1]["use_ssl"] is False
        assert mock_connection.call_args[1]["use_tls"] is True

    @patch("apps.inquiries.notifications.get_connection", side_effect=locmem_connection)
    def test_send_via_provider(self, mock_connection, mailoutbox) -> None:
        """The provider path adds BCC, reply-to and an HTML alternative."""
        send_via_provider(
            RESEND,
            to=["jane@example.com"],
            subject="Hi",
            text="Body",
            html="<p>Body</p>",
            reply_to="robotics@example.com",
        )

        assert mock_connection.call_args[0][0] == "anymail.backends.resend.EmailBackend"
        assert mock_connection.call_args[1]["api_key"] == "re_test_key"
        message = mailoutbox[0]
        assert message.bcc == ["archive@example.com"]
        assert message.reply_to == ["robotics@example.com"]
        assert message.alternatives[0][0] == "<p>Body</p>"


# ───────────────────────────── Dispatcher ────────────────────────────────────


class TestDispatcher:
    """Channel selection and failure isolation."""

    def test_nothing_configured_is_noop(self, parent, inline_executor) -> None:
        """With no channels configured nothing is scheduled."""
        NotificationDispatcher(NotificationConfig(), executor=inline_executor).dispatch(parent)
        assert inline_executor.submitted == []

    @patch("apps.inquiries.notifications.post_to_chat")
    def test_chat_only(self, mock_chat, parent, inline_executor) -> None:
        """A webhook alone sends the chat alert and no receipt."""
        config = NotificationConfig(slack_webhook_url=WEBHOOK_URL)

        NotificationDispatcher(config, executor=inline_executor).dispatch(parent)

        mock_chat.assert_called_once_with(WEBHOOK_URL, internal_summary(parent))
        assert len(inline_executor.submitted) == 1

    @patch("apps.inquiries.notifications.send_via_provider")
    @patch("apps.inquiries.notifications.send_via_smtp")
    def test_smtp_preferred_over_resend(self, mock_smtp, mock_provider, parent, inline_executor) -> None:
        """When both email channels are configured only SMTP is used."""
        config = NotificationConfig(smtp=SMTP, resend=RESEND)

        NotificationDispatcher(config, executor=inline_executor).dispatch(parent)

        mock_provider.assert_not_called()
        recipients = [c.kwargs["to"] for c in mock_smtp.call_args_list]
        assert recipients == [["team@example.com"], ["jane.doe@example.com"]]

    @patch("apps.inquiries.notifications.send_via_provider")
    @patch("apps.inquiries.notifications.send_via_smtp")
    def test_smtp_without_recipients_still_sends_receipt(
        self, mock_smtp, mock_provider, parent, inline_executor
    ) -> None:
        """SMTP with no internal recipients skips the team email but still sends the receipt."""
        smtp = SMTPConfig(host="smtp.example.com", user="u@example.com", password="p")  # noqa: S106
        config = NotificationConfig(smtp=smtp, resend=RESEND)

        NotificationDispatcher(config, executor=inline_executor).dispatch(parent)

        mock_provider.assert_not_called()
        mock_smtp.assert_called_once()
        assert mock_smtp.call_args.kwargs["to"] == ["jane.doe@example.com"]

    @patch("apps.inquiries.notifications.send_via_provider")
    def test_resend_fallback(self, mock_provider, parent, inline_executor) -> None:
        """Without SMTP, Resend sends the team email and an HTML receipt."""
        config = NotificationConfig(resend=RESEND, branding=BRANDING)

        NotificationDispatcher(config, executor=inline_executor).dispatch(parent)

        internal, receipt = mock_provider.call_args_list
        assert internal.kwargs["to"] == ["ops@example.com"]
        assert internal.kwargs["subject"] == "New Parent Inquiry - Jane Doe"
        assert internal.kwargs["reply_to"] == ""
        assert receipt.kwargs["to"] == ["jane.doe@example.com"]
        assert receipt.kwargs["html"]
        assert receipt.kwargs["reply_to"] == "robotics@example.com"

    @patch("apps.inquiries.notifications.send_via_provider")
    def test_resend_without_recipients_sends_receipt_only(self, mock_provider, partner, inline_executor) -> None:
        """Resend with no team recipients still sends the submitter receipt."""
        resend = ResendConfig(api_key="re_test_key", from_email="robotics@example.com")
        config = NotificationConfig(resend=resend)

        NotificationDispatcher(config, executor=inline_executor).dispatch(partner)

        mock_provider.assert_called_once()
        assert mock_provider.call_args.kwargs["to"] == ["sam.lee@pges.example.org"]

    @patch("apps.inquiries.notifications.send_via_smtp")
    @patch("apps.inquiries.notifications.urlopen", side_effect=URLError("connection refused"))
    def test_channel_failure_is_isolated(self, mock_urlopen, mock_smtp, parent, inline_executor, caplog) -> None:
        """A failing webhook is logged and the other channels still run."""
        config = NotificationConfig(slack_webhook_url=WEBHOOK_URL, smtp=SMTP)

        NotificationDispatcher(config, executor=inline_executor).dispatch(parent)

        assert mock_urlopen.called
        assert mock_smtp.call_count == 2
        assert "[notify] chat alert failed" in caplog.text

    def test_scheduling_failure_is_logged(self, parent, caplog) -> None:
        """An executor that refuses work does not raise into the caller."""
        executor = MagicMock()
        executor.submit.side_effect = RuntimeError("cannot schedule new futures after shutdown")
        config = NotificationConfig(slack_webhook_url=WEBHOOK_URL)

        NotificationDispatcher(config, executor=executor).dispatch(parent)

        assert "[notify] could not schedule chat alert" in caplog.text

    @patch("apps.inquiries.notifications.post_to_chat")
    def test_notify_internal_is_fire_and_forget(self, mock_chat, partner) -> None:
        """notify_internal only schedules the alert; the executor sends it later."""
        executor = MagicMock()
        config = NotificationConfig(slack_webhook_url=WEBHOOK_URL)

        NotificationDispatcher(config, executor=executor).notify_internal(partner)

        mock_chat.assert_not_called()
        executor.submit.assert_called_once()
        run, name, job = executor.submit.call_args[0]
        assert name == "chat alert"

        run(name, job)
        mock_chat.assert_called_once_with(WEBHOOK_URL, internal_summary(partner))

    @patch("apps.inquiries.notifications.send_via_smtp", side_effect=OSError("relay down"))
    def test_notify_receipt_schedules_receipt_only(self, mock_smtp, parent, inline_executor, caplog) -> None:
        """notify_receipt schedules just the receipt, and its failure is logged, not raised."""
        NotificationDispatcher(NotificationConfig(smtp=SMTP), executor=inline_executor).notify_receipt(parent)

        assert [args[0] for _fn, args, _kw in inline_executor.submitted] == ["receipt (smtp)"]
        mock_smtp.assert_called_once()
        assert mock_smtp.call_args.kwargs["to"] == ["jane.doe@example.com"]
        assert "[notify] receipt (smtp) failed" in caplog.text



# ───────────────────────────── Config ────────────────────────────────────────


class TestConfig:
    """Channel enablement and settings parsing."""

    def test_smtp_enabled_needs_credentials(self) -> None:
        """SMTP needs host, user and password."""
        assert SMTP.enabled
        assert not SMTPConfig(host="smtp.example.com", user="u").enabled
        assert SMTP.sender == "robotics@example.com"
        assert SMTPConfig(user="u@example.com", from_email="f@example.com").sender == "f@example.com"

    def test_resend_enabled_needs_key_and_sender(self) -> None:
        """Resend needs an API key and a sender."""
        assert RESEND.enabled
        assert not ResendConfig(api_key="re_test_key").enabled

    def test_receipt_reply_to(self) -> None:
        """Receipts reply to the configured address, else the bracketed sender address."""
        assert RESEND.receipt_reply_to == "robotics@example.com"
        assert ResendConfig(from_email="a@example.com", reply_to="b@example.com").receipt_reply_to == "b@example.com"
        assert ResendConfig(from_email="a@example.com").receipt_reply_to == ""

    def test_from_settings_splits_address_lists(self) -> None:
        """Comma-separated address strings become tuples."""
        settings = SimpleNamespace(
            ADMIN_TOKEN="tok",
            SMTP_HOST="smtp.example.com",
            SMTP_PORT="587",
            SMTP_TO="a@example.com, b@example.com",
            RESEND_BCC=["c@example.com", ""],
        )

        config = IntakeConfig.from_settings(settings)

        assert config.admin_token == "tok"
        assert config.admin_page_size == 200
        assert config.notifications.smtp.port == 587
        assert config.notifications.smtp.recipients == ("a@example.com", "b@example.com")
        assert config.notifications.resend.bcc == ("c@example.com",)
        assert config.notifications.resend.recipients == ()
        assert config.notifications.workers == 4
