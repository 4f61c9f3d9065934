"""Transactional persistence of validated inquiries."""

import logging
import uuid

from django.utils import timezone

from .forms import ORG_TYPE_OTHER, ParentSubmission, PartnerSubmission, Submission
from .repository import DjangoInquiryRepository, InquiryRepository

logger = logging.getLogger(__name__)


class InquiryWriter:
    """
    Write one inquiry and its detail rows as a single atomic unit.

    Any exception inside the transaction (including a lookup failure found
    after the inquiry row was inserted) rolls back every row for the
    submission and propagates to the caller.
    """

    def __init__(self, repository: InquiryRepository | None = None) -> None:
        self.repository = repository or DjangoInquiryRepository()

    def write(self, submission: Submission) -> uuid.UUID:
        """Persist a submission of either kind and return the new inquiry id."""
        if isinstance(submission, PartnerSubmission):
            return self.write_partner(submission)
        return self.write_parent(submission)

    def write_parent(self, submission: ParentSubmission) -> uuid.UUID:
        repo = self.repository
        now = timezone.now()
        with repo.atomic():
            inquiry_id = repo.insert_inquiry(submission, consent_at=now)

            age_groups = repo.resolve_age_groups_by_code(list(submission.age_groups))
            repo.insert_parent_detail(
                inquiry_id,
                number_of_kids=submission.number_of_kids,
                primary_age_group_id=age_groups[0].id,
            )
            repo.insert_age_group_links(inquiry_id, [group.id for group in age_groups])

            if submission.newsletter_opt_in:
                repo.upsert_newsletter(submission, now=now)

        logger.info("Parent inquiry %s stored (%s)", inquiry_id, ", ".join(g.code for g in age_groups))
        return inquiry_id

    def write_partner(self, submission: PartnerSubmission) -> uuid.UUID:
        repo = self.repository
        with repo.atomic():
            inquiry_id = repo.insert_inquiry(submission, consent_at=timezone.now())

            org_type = repo.resolve_org_type_by_code(submission.org_type)
            repo.insert_partner_detail(
                inquiry_id,
                org_type_id=org_type.id,
                org_type_other=submission.org_type_other if org_type.code == ORG_TYPE_OTHER else None,
                org_name=submission.org_name,
            )

        logger.info("Partner inquiry %s stored (%s)", inquiry_id, submission.org_type)
        return inquiry_id
