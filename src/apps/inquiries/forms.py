"""Payload validation for parent and partner inquiries.

A raw JSON payload is classified as a parent or partner inquiry, validated
against the matching form, and returned as one of two frozen submission
types. The rest of the pipeline never looks at the raw payload again.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from django import forms
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError

from .exceptions import ValidationFailure
from .models import Inquiry

PARTNER_SOURCE = "partners-page"
PARENT_SOURCE = "website"

AGE_GROUP_CODES = ("6-9", "9-13", "13-16", "16+")
ORG_TYPE_CODES = (
    "government",
    "nonprofit",
    "school",
    "library",
    "corporate_sponsor",
    "faith_community",
    "other",
)
ORG_TYPE_OTHER = "other"


@dataclass(frozen=True)
class ParentSubmission:
    """A validated parent inquiry."""

    kind: ClassVar[str] = Inquiry.Kind.PARENT

    first_name: str
    last_name: str
    email: str
    age_groups: tuple[str, ...]
    number_of_kids: int = 1
    phone: str = ""
    message: str = ""
    newsletter_opt_in: bool = False
    source: str = PARENT_SOURCE
    page_path: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class PartnerSubmission:
    """A validated partner / organization inquiry."""

    kind: ClassVar[str] = Inquiry.Kind.PARTNER
    newsletter_opt_in: ClassVar[bool] = False

    first_name: str
    last_name: str
    email: str
    org_type: str
    org_name: str
    org_type_other: str | None = None
    phone: str = ""
    message: str = ""
    source: str = PARTNER_SOURCE
    page_path: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def org_type_display(self) -> str:
        """Type code, with the free-text label appended for 'other'."""
        if self.org_type == ORG_TYPE_OTHER and self.org_type_other:
            return f"{self.org_type} ({self.org_type_other})"
        return self.org_type


Submission = Union[ParentSubmission, PartnerSubmission]


# ───────────────────────────── JSON fields ───────────────────────────────────
#
# Values arrive as parsed JSON, not form strings. The type is checked before any
# coercion.


class JSONValueInput(forms.Widget):
    """Hand the raw payload value to the field, untouched."""

    def value_from_datadict(self, data, files, name):
        return data.get(name)

    def value_omitted_from_data(self, data, files, name):
        return name not in data


class StrictBooleanField(forms.BooleanField):
    """Accepts a JSON boolean or the strings "true" / "false" only."""

    widget = JSONValueInput
    default_error_messages = {"invalid": "Must be true or false."}

    def to_python(self, value):
        if value is True or value == "true":
            return True
        if value is None or value is False or value == "false":
            return False
        raise ValidationError(self.error_messages["invalid"], code="invalid")


class StrictStringMixin:
    """Rejects non-string JSON values before CharField coerces them with str()."""

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise ValidationError("Must be a string.", code="invalid")
        return super().to_python(value)


class StrictCharField(StrictStringMixin, forms.CharField):
    pass


class StrictEmailField(StrictStringMixin, forms.EmailField):
    pass


class _ContactFields(forms.Form):
    """Fields shared by both inquiry forms. Field names match the JSON payload."""

    firstName = StrictCharField(min_length=1, max_length=100)  # noqa: N815
    lastName = StrictCharField(min_length=1, max_length=100)  # noqa: N815
    email = StrictEmailField(max_length=320)
    phone = StrictCharField(max_length=50, required=False)
    message = StrictCharField(max_length=2000, required=False)
    consent = StrictBooleanField(
        required=True,
        error_messages={"required": "Consent is required to submit this form."},
    )
    source = StrictCharField(max_length=120, required=False)
    pagePath = StrictCharField(max_length=512, required=False)  # noqa: N815


class ParentInquiryForm(_ContactFields):
    """Parent inquiry schema."""

    numberOfKids = forms.IntegerField(min_value=1, max_value=12, required=False)  # noqa: N815
    ageGroups = forms.MultipleChoiceField(  # noqa: N815
        choices=[(code, code) for code in AGE_GROUP_CODES],
        error_messages={"required": "Select at least one age group."},
    )
    newsletterOptIn = StrictBooleanField(required=False)  # noqa: N815

    def to_submission(self) -> ParentSubmission:
        data = self.cleaned_data
        number_of_kids = data.get("numberOfKids")
        return ParentSubmission(
            first_name=data["firstName"],
            last_name=data["lastName"],
            email=data["email"],
            age_groups=tuple(data["ageGroups"]),
            number_of_kids=1 if number_of_kids is None else number_of_kids,
            phone=data.get("phone") or "",
            message=data.get("message") or "",
            newsletter_opt_in=bool(data.get("newsletterOptIn")),
            source=data.get("source") or PARENT_SOURCE,
            page_path=data.get("pagePath") or "",
        )


class PartnerInquiryForm(_ContactFields):
    """Partner / organization inquiry schema."""

    orgType = forms.ChoiceField(choices=[(code, code) for code in ORG_TYPE_CODES])  # noqa: N815
    orgTypeOther = StrictCharField(max_length=200, required=False)  # noqa: N815
    orgName = StrictCharField(min_length=2, max_length=200)  # noqa: N815

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get("orgType") == ORG_TYPE_OTHER and not cleaned_data.get("orgTypeOther"):
            self.add_error("orgTypeOther", "This field is required when orgType is 'other'.")
        return cleaned_data

    def to_submission(self) -> PartnerSubmission:
        data = self.cleaned_data
        return PartnerSubmission(
            first_name=data["firstName"],
            last_name=data["lastName"],
            email=data["email"],
            org_type=data["orgType"],
            org_name=data["orgName"],
            org_type_other=data.get("orgTypeOther") or None,
            phone=data.get("phone") or "",
            message=data.get("message") or "",
            source=data.get("source") or PARTNER_SOURCE,
            page_path=data.get("pagePath") or "",
        )


def classify(payload: dict) -> str:
    """Decide the inquiry kind from the payload shape alone."""
    if "orgType" in payload or payload.get("source") == PARTNER_SOURCE:
        return Inquiry.Kind.PARTNER
    return Inquiry.Kind.PARENT


def _collect_errors(form: forms.Form) -> list[str]:
    errors = []
    for field, field_errors in form.errors.as_data().items():
        for error in field_errors:
            for message in error.messages:
                errors.append(message if field == NON_FIELD_ERRORS else f"{field}: {message}")
    return errors


def validate(payload) -> Submission:
    """Validate a raw payload and return the typed submission.

    Raises ValidationFailure carrying every violation found.
    """
    if not isinstance(payload, dict):
        raise ValidationFailure(["Request body must be a JSON object."])

    form_class = PartnerInquiryForm if classify(payload) == Inquiry.Kind.PARTNER else ParentInquiryForm
    form = form_class(data=payload)
    if not form.is_valid():
        raise ValidationFailure(_collect_errors(form))
    return form.to_submission()
