"""Inquiries app configuration."""

from django.apps import AppConfig
from django.conf import settings


class InquiriesConfig(AppConfig):
    """Builds the intake services once, from settings, when Django starts."""

    name = "apps.inquiries"
    label = "inquiries"
    verbose_name = "Inquiries"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self) -> None:
        from .admin_queries import InquiryAdminQueries
        from .config import IntakeConfig
        from .notifications import NotificationDispatcher
        from .writer import InquiryWriter

        self.intake = IntakeConfig.from_settings(settings)
        self.writer = InquiryWriter()
        self.dispatcher = NotificationDispatcher(self.intake.notifications)
        self.admin_queries = InquiryAdminQueries(page_size=self.intake.admin_page_size)
