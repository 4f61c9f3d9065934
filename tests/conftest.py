"""Pytest configuration and shared fixtures for the intake API tests."""

from concurrent.futures import Future

import pytest
from django.apps import apps

from apps.inquiries.config import NotificationConfig
from apps.inquiries.notifications import NotificationDispatcher

ADMIN_TOKEN = "test-admin-token"  # noqa: S105


class InlineExecutor:
    """Executor that runs submitted work immediately, in the calling thread."""

    def __init__(self) -> None:
        self.submitted: list[tuple] = []

    def submit(self, fn, *args, **kwargs) -> Future:
        self.submitted.append((fn, args, kwargs))
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:  # noqa: BLE001
            future.set_exception(exc)
        return future


@pytest.fixture
def inline_executor() -> InlineExecutor:
    """Executor that makes background notifications deterministic."""
    return InlineExecutor()


@pytest.fixture
def use_dispatcher(monkeypatch, inline_executor):
    """Install a dispatcher with the given config on the inquiries app."""

    def _install(config: NotificationConfig | None = None) -> NotificationDispatcher:
        dispatcher = NotificationDispatcher(config or NotificationConfig(), executor=inline_executor)
        monkeypatch.setattr(apps.get_app_config("inquiries"), "dispatcher", dispatcher)
        return dispatcher

    return _install


@pytest.fixture
def parent_payload() -> dict:
    """A valid parent inquiry body."""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane.doe@example.com",
        "phone": "555-0100",
        "numberOfKids": 2,
        "ageGroups": ["9-13", "6-9"],
        "message": "Do you run weekend classes?",
        "newsletterOptIn": False,
        "consent": True,
        "pagePath": "/programs",
    }


@pytest.fixture
def partner_payload() -> dict:
    """A valid partner inquiry body."""
    return {
        "orgType": "school",
        "orgName": "Prince George Elementary",
        "firstName": "Sam",
        "lastName": "Lee",
        "email": "sam.lee@pges.example.org",
        "consent": True,
    }


@pytest.fixture
def admin_headers() -> dict:
    """Headers carrying the admin shared secret."""
    return {"X-Admin-Token": ADMIN_TOKEN}
