"""Intake configuration, built once from Django settings at app startup."""

import re
from dataclasses import dataclass, field

ADMIN_PAGE_SIZE = 200


@dataclass(frozen=True)
class SMTPConfig:
    """Direct SMTP relay."""

    host: str = ""
    port: int = 465
    user: str = ""
    password: str = ""
    from_email: str = ""
    recipients: tuple[str, ...] = ()

    @property
    def enabled(self) -> bool:
        return bool(self.host and self.user and self.password)

    @property
    def sender(self) -> str:
        return self.from_email or self.user


@dataclass(frozen=True)
class ResendConfig:
    """HTTP email provider (Resend, sent through Anymail)."""

    api_key: str = ""
    from_email: str = ""
    recipients: tuple[str, ...] = ()
    bcc: tuple[str, ...] = ()
    reply_to: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.api_key and self.from_email)

    @property
    def receipt_reply_to(self) -> str:
        """Configured reply-to, else the address inside ``Name <addr>`` of the sender."""
        if self.reply_to:
            return self.reply_to
        match = re.search(r"<([^>]+)>", self.from_email)
        return match.group(1) if match else ""


@dataclass(frozen=True)
class Branding:
    """Fields used only to compose receipt emails."""

    logo_url: str = ""
    signature_name: str = ""
    signature_title: str = ""
    signature_email: str = ""
    signature_address: str = ""
    privacy_text: str = ""
    privacy_url: str = ""


@dataclass(frozen=True)
class NotificationConfig:
    """All outbound notification channels. Absent values disable a channel."""

    slack_webhook_url: str = ""
    smtp: SMTPConfig = field(default_factory=SMTPConfig)
    resend: ResendConfig = field(default_factory=ResendConfig)
    branding: Branding = field(default_factory=Branding)
    workers: int = 4


@dataclass(frozen=True)
class IntakeConfig:
    """Everything the intake API reads from configuration."""

    admin_token: str = ""
    admin_page_size: int = ADMIN_PAGE_SIZE
    notifications: NotificationConfig = field(default_factory=NotificationConfig)

    @classmethod
    def from_settings(cls, settings) -> "IntakeConfig":
        def setting(name, default=""):
            return getattr(settings, name, default)

        def addresses(name) -> tuple[str, ...]:
            value = setting(name, ())
            if isinstance(value, str):
                value = re.split(r"\s*,\s*", value)
            return tuple(item.strip() for item in value if item and item.strip())

        return cls(
            admin_token=setting("ADMIN_TOKEN"),
            notifications=NotificationConfig(
                slack_webhook_url=setting("SLACK_WEBHOOK_URL"),
                smtp=SMTPConfig(
                    host=setting("SMTP_HOST"),
                    port=int(setting("SMTP_PORT", 465) or 465),
                    user=setting("SMTP_USER"),
                    password=setting("SMTP_PASS"),
                    from_email=setting("SMTP_FROM"),
                    recipients=addresses("SMTP_TO"),
                ),
                resend=ResendConfig(
                    api_key=setting("RESEND_API_KEY"),
                    from_email=setting("RESEND_FROM"),
                    recipients=addresses("RESEND_TO"),
                    bcc=addresses("RESEND_BCC"),
                    reply_to=setting("RESEND_REPLY_TO"),
                ),
                branding=Branding(
                    logo_url=setting("EMAIL_LOGO_URL"),
                    signature_name=setting("EMAIL_SIGNATURE_NAME"),
                    signature_title=setting("EMAIL_SIGNATURE_TITLE"),
                    signature_email=setting("EMAIL_SIGNATURE_EMAIL"),
                    signature_address=setting("EMAIL_SIGNATURE_ADDRESS"),
                    privacy_text=setting("EMAIL_PRIVACY_TEXT"),
                    privacy_url=setting("EMAIL_PRIVACY_URL"),
                ),
                workers=int(setting("INQUIRY_NOTIFY_WORKERS", 4) or 4),
            ),
        )
