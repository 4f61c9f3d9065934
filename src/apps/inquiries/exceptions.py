"""Errors raised by the inquiry intake pipeline."""


class IntakeError(Exception):
    """Base class for inquiry intake errors."""


class ValidationFailure(IntakeError):
    """The submitted payload did not match its schema.

    Carries every violation found, not just the first.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


class LookupFailure(IntakeError):
    """A syntactically valid reference code has no active row.

    Surfaced as a server error, not a validation error.
    """


class UnauthorizedAccess(IntakeError):
    """Admin operation without a matching shared secret."""


class InquiryNotFound(IntakeError):
    """No inquiry matches the requested identifier."""


class InvalidStatus(IntakeError):
    """Status value outside new / read / archived."""
