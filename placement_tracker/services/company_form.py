"""
Company Editing Workflow

Load:   Company record  -> CompanyFormState (every field as editable text)
Submit: CompanyFormState -> storage payload -> insert/update -> re-fetch

Payload rules:
- empty text is stored as NULL, never as ""
- people_selected / cgpa_cutoff are parsed leniently; unparsable -> NULL
  (no range check here, the form control limits CGPA to 0-10)
- roles: comma separated, trimmed, blanks dropped; NULL when nothing is left
- milestone fields: IST editor value -> ISO instant with +05:30
"""

import logging
from typing import Any, Dict, List, Optional

from placement_tracker.core.errors import StoreError, ValidationError
from placement_tracker.schemas.schemas import Company, CompanyFormState, PlacementStatus
from placement_tracker.services.repository import CompanyRepository
from placement_tracker.utils.parsing import parse_decimal, parse_int
from placement_tracker.utils.timeutils import from_local_editable_form, to_local_editable_form

logger = logging.getLogger(__name__)

MILESTONE_FIELDS = ("registration_deadline", "ppt_datetime", "oa_datetime", "interview_datetime")

# Plain optional text fields, copied as-is or NULL when empty
TEXT_FIELDS = (
    "description", "logo_url", "website_url", "visit_date", "offered_ctc",
    "ctc_distribution", "bond_details", "job_location", "eligibility_criteria",
    "external_form",
)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def form_from_company(company: Optional[Company] = None) -> CompanyFormState:
    """Editable state for an existing company, or a blank form for a new one."""
    if company is None:
        return CompanyFormState()

    # str() of visit_date is already YYYY-MM-DD
    fields = {name: _text(getattr(company, name)) for name in TEXT_FIELDS}
    fields.update({name: to_local_editable_form(getattr(company, name)) for name in MILESTONE_FIELDS})

    return CompanyFormState(
        name=company.name,
        cgpa_cutoff=_text(company.cgpa_cutoff),
        people_selected=_text(company.people_selected),
        roles=", ".join(company.roles or []),
        status=company.status,
        **fields,
    )


def parse_roles(value: str) -> Optional[List[str]]:
    if not value:
        return None
    roles = [part.strip() for part in value.split(",")]
    roles = [r for r in roles if r]
    return roles or None


def build_payload(form: CompanyFormState) -> Dict[str, Any]:
    """Storage payload for a submitted form. Raises ValidationError without a name."""
    if not form.name.strip():
        raise ValidationError("Company name is required")

    payload: Dict[str, Any] = {"name": form.name}
    for name in TEXT_FIELDS:
        payload[name] = getattr(form, name) or None
    for name in MILESTONE_FIELDS:
        payload[name] = from_local_editable_form(getattr(form, name))

    payload["cgpa_cutoff"] = parse_decimal(form.cgpa_cutoff).value
    payload["people_selected"] = parse_int(form.people_selected).value
    payload["roles"] = parse_roles(form.roles)
    payload["status"] = PlacementStatus(form.status).value
    return payload


class CompanyEditor:
    """
    Writes a form through a CompanyRepository.

    The caller's form is never modified, so after a StoreError the same
    state can simply be submitted again.
    """

    def __init__(self, repository: CompanyRepository):
        self.repository = repository

    def submit(self, form: CompanyFormState, company_id: Optional[str] = None) -> Optional[Company]:
        """
        Create (no company_id) or update a company, then re-fetch it.

        Returns the stored record, or None when updating a company that
        does not exist. StoreError propagates; there is no retry.
        """
        payload = build_payload(form)
        try:
            if company_id is None:
                company_id = self.repository.insert(payload)
            elif not self.repository.update(company_id, payload):
                return None
        except StoreError:
            logger.warning("Company %s not saved; form left as submitted", company_id or "<new>")
            raise

        # Read-after-write: the refreshed record comes from the store
        return self.repository.fetch_by_id(company_id)
