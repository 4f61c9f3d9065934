"""Best-effort notifications for stored inquiries.

Three channels, each optional:

* a chat webhook (Slack incoming webhook) for an internal alert,
* a direct SMTP relay, preferred for email when fully configured,
* Resend through Anymail, used for email when SMTP is not configured.

Every channel call runs on the dispatcher's background executor inside its
own error boundary. Failures are logged and dropped, never retried.
"""

import json
import logging
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from urllib.request import Request, urlopen

from django.core.mail import EmailMessage, EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string

from .config import Branding, NotificationConfig, ResendConfig, SMTPConfig
from .forms import PartnerSubmission, Submission

logger = logging.getLogger(__name__)

ACADEMY_NAME = "Turtleback Robotics Academy"
MESSAGE_PREVIEW_CHARS = 500
WEBHOOK_TIMEOUT = 10
SMTP_TIMEOUT = 15

SMTP_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
RESEND_BACKEND = "anymail.backends.resend.EmailBackend"

Job = tuple[str, Callable[[], None]]


# ───────────────────────────── Content ───────────────────────────────────────


def internal_subject(submission: Submission) -> str:
    if isinstance(submission, PartnerSubmission):
        return f"New Partner Inquiry - {submission.org_name}"
    return f"New Parent Inquiry - {submission.full_name}"


def internal_summary(submission: Submission) -> str:
    """Plain-text summary for the team (chat alert and internal email)."""
    message = submission.message[:MESSAGE_PREVIEW_CHARS]
    page = submission.page_path or "-"
    phone = submission.phone or "-"

    if isinstance(submission, PartnerSubmission):
        return (
            f"New Partner Inquiry\n"
            f"Org: {submission.org_name}  Type: {submission.org_type_display}\n"
            f"Contact: {submission.full_name}  Email: {submission.email}  Phone: {phone}\n"
            f"Message: {message}\n"
            f"Page: {page}  Source: {submission.source}"
        )
    return (
        f"New Parent Inquiry\n"
        f"Name: {submission.full_name}\n"
        f"Email: {submission.email}  Phone: {phone}\n"
        f"Kids: {submission.number_of_kids}  Ages: {', '.join(submission.age_groups)}\n"
        f"Message: {message}\n"
        f"Page: {page}  Source: {submission.source}"
    )


def _summary_lines(submission: Submission) -> list[str]:
    if isinstance(submission, PartnerSubmission):
        return [f"Organization: {submission.org_name}", f"Type: {submission.org_type_display}"]
    return [f"Kids: {submission.number_of_kids}", f"Age groups: {', '.join(submission.age_groups)}"]


def relay_receipt(submission: Submission) -> tuple[str, str]:
    """Short plain-text receipt sent through the SMTP relay. Returns (subject, text)."""
    if isinstance(submission, PartnerSubmission):
        subject = f"We received your partnership inquiry - {ACADEMY_NAME}"
        intro = "Thanks for reaching out about partnering."
    else:
        subject = f"We received your inquiry - {ACADEMY_NAME}"
        intro = f"Thanks for your interest in {ACADEMY_NAME}!"

    summary = "\n".join(f"- {line}" for line in _summary_lines(submission))
    text = (
        f"Hi {submission.first_name},\n\n"
        f"{intro} We received your request and will follow up within 1-2 business days.\n\n"
        f"Summary:\n{summary}\n\n"
        f"If you have updates, just reply to this email.\n\n"
        f"Turtleback Robotics Team"
    )
    return subject, text


def provider_receipt(submission: Submission, branding: Branding) -> tuple[str, str, str]:
    """Branded receipt sent through the email provider. Returns (subject, text, html)."""
    if isinstance(submission, PartnerSubmission):
        subject = f"Thank you - {ACADEMY_NAME}"
        intro = (
            f"We appreciate your interest in partnering with {ACADEMY_NAME}. "
            "Our team will follow up within 1-2 business days."
        )
    else:
        subject = f"Thanks for your interest - {ACADEMY_NAME}"
        intro = (
            "We're excited that you're considering our programs. Our team received your request "
            "and will follow up within 1-2 business days.\n\n"
            "Our classes strengthen STEM (Science, Technology, Engineering, and Mathematics) while "
            "building creativity, teamwork, problem solving, and confidence."
        )

    signature = branding.signature_name
    if branding.signature_title:
        signature = f"{signature}, {branding.signature_title}"
    contact = branding.signature_address
    if branding.signature_email:
        contact = f"{contact}\n{branding.signature_email}"
    privacy = branding.privacy_text
    if branding.privacy_url:
        privacy = f"{privacy} ({branding.privacy_url})"

    summary = "\n".join(f"- {line}" for line in _summary_lines(submission))
    text = (
        f"Hi {submission.first_name},\n\n"
        f"{intro}\n\n"
        f"Summary\n{summary}\n\n"
        f"Reply to this email with any questions.\n\n"
        f"{signature}\n{contact}\n\n"
        f"Privacy: {privacy}"
    )
    html = render_to_string(
        f"emails/{submission.kind}_receipt.html",
        {
            "academy_name": ACADEMY_NAME,
            "submission": submission,
            "summary_lines": _summary_lines(submission),
            "branding": branding,
        },
    )
    return subject, text, html


# ───────────────────────────── Channels ──────────────────────────────────────


def post_to_chat(webhook_url: str, text: str) -> None:
    """POST ``{"text": ...}`` to a chat incoming webhook."""
    req = Request(  # noqa: S310
        webhook_url,
        data=json.dumps({"text": text}).encode(),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    with urlopen(req, timeout=WEBHOOK_TIMEOUT) as response:  # noqa: S310
        if not 200 <= response.status < 300:
            logger.warning("[notify] chat webhook returned HTTP %s", response.status)


def send_via_smtp(smtp: SMTPConfig, *, to: list[str], subject: str, text: str) -> None:
    """Plain-text mail through the SMTP relay. No HTML, reply-to or BCC on this path."""
    connection = get_connection(
        SMTP_BACKEND,
        host=smtp.host,
        port=smtp.port,
        username=smtp.user,
        password=smtp.password,
        use_ssl=smtp.port == 465,
        use_tls=smtp.port == 587,
        timeout=SMTP_TIMEOUT,
        fail_silently=False,
    )
    EmailMessage(subject=subject, body=text, from_email=smtp.sender, to=to, connection=connection).send()


def send_via_provider(
    resend: ResendConfig,
    *,
    to: list[str],
    subject: str,
    text: str,
    html: str | None = None,
    reply_to: str = "",
) -> None:
    """Mail through Resend (Anymail), with configured BCC and optional reply-to."""
    connection = get_connection(RESEND_BACKEND, api_key=resend.api_key, fail_silently=False)
    msg = EmailMultiAlternatives(
        subject=subject,
        body=text,
        from_email=resend.from_email,
        to=to,
        bcc=list(resend.bcc),
        reply_to=[reply_to] if reply_to else [],
        connection=connection,
    )
    if html:
        msg.attach_alternative(html, "text/html")
    msg.send()


# ───────────────────────────── Dispatcher ────────────────────────────────────


class NotificationDispatcher:
    """
    Compose and send inquiry notifications without blocking the request.

    ``dispatch()``, ``notify_internal()`` and ``notify_receipt()`` schedule each
    configured channel call on the executor and return at once; callers never
    see the futures. The executor runs ``config.workers`` threads over an
    unbounded queue.
    """

    def __init__(self, config: NotificationConfig, executor: Executor | None = None) -> None:
        self.config = config
        self.executor = executor or ThreadPoolExecutor(
            max_workers=config.workers,
            thread_name_prefix="inquiry-notify",
        )

    def dispatch(self, submission: Submission) -> None:
        """Fire and forget every notification for a stored submission."""
        self._schedule(self._internal_jobs(submission) + self._receipt_jobs(submission))

    def notify_internal(self, submission: Submission) -> None:
        """Fire and forget the team alert and internal email."""
        self._schedule(self._internal_jobs(submission))

    def notify_receipt(self, submission: Submission) -> None:
        """Fire and forget the submitter receipt."""
        self._schedule(self._receipt_jobs(submission))

    def _schedule(self, jobs: list[Job]) -> None:
        if not jobs:
            logger.debug("[notify] no channels configured, skipping")
            return
        for name, job in jobs:
            try:
                self.executor.submit(self._run, name, job)
            except RuntimeError:
                logger.exception("[notify] could not schedule %s", name)

    @staticmethod
    def _run(name: str, job: Callable[[], None]) -> None:
        try:
            job()
            logger.info("[notify] %s sent", name)
        except Exception:
            logger.exception("[notify] %s failed", name)

    def _internal_jobs(self, submission: Submission) -> list[Job]:
        cfg = self.config
        text = internal_summary(submission)
        subject = internal_subject(submission)
        jobs: list[Job] = []

        if cfg.slack_webhook_url:
            jobs.append(("chat alert", lambda: post_to_chat(cfg.slack_webhook_url, text)))

        if cfg.smtp.enabled:
            if cfg.smtp.recipients:
                to = list(cfg.smtp.recipients)
                jobs.append(
                    ("internal email (smtp)", lambda: send_via_smtp(cfg.smtp, to=to, subject=subject, text=text))
                )
        elif cfg.resend.enabled and cfg.resend.recipients:
            to = list(cfg.resend.recipients)
            jobs.append(
                (
                    "internal email (resend)",
                    lambda: send_via_provider(
                        cfg.resend, to=to, subject=subject, text=text, reply_to=cfg.resend.reply_to
                    ),
                )
            )
        return jobs

    def _receipt_jobs(self, submission: Submission) -> list[Job]:
        cfg = self.config
        to = [submission.email]

        if cfg.smtp.enabled:
            subject, text = relay_receipt(submission)
            return [("receipt (smtp)", lambda: send_via_smtp(cfg.smtp, to=to, subject=subject, text=text))]

        if cfg.resend.enabled:

            def send_receipt() -> None:
                subject, text, html = provider_receipt(submission, cfg.branding)
                send_via_provider(
                    cfg.resend,
                    to=to,
                    subject=subject,
                    text=text,
                    html=html,
                    reply_to=cfg.resend.receipt_reply_to,
                )

            return [("receipt (resend)", send_receipt)]
        return []

