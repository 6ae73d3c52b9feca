from datetime import date, datetime, timezone

import pytest

from fakes import FakeCompanyRepository, make_company
from placement_tracker.core.errors import StoreError, ValidationError
from placement_tracker.schemas.schemas import CompanyFormState, PlacementStatus
from placement_tracker.services.company_form import (
    CompanyEditor, build_payload, form_from_company, parse_roles
)


def _form(**fields) -> CompanyFormState:
    fields.setdefault("name", "Acme")
    return CompanyFormState(**fields)


def test_blank_form_for_new_company():
    form = form_from_company(None)
    assert form.name == ""
    assert form.registration_deadline == ""
    assert form.status is PlacementStatus.upcoming


def test_form_from_company_converts_fields_to_text():
    company = make_company(
        "Acme",
        registration_deadline=datetime(2026, 3, 1, 6, 30, tzinfo=timezone.utc),
        interview_datetime="2026-03-05T10:00:00+05:30",
        visit_date=date(2026, 3, 10),
        cgpa_cutoff=7.5,
        people_selected=3,
        roles=["SDE", "Data Analyst"],
        status=PlacementStatus.ongoing,
    )

    form = form_from_company(company)

    assert form.registration_deadline == "2026-03-01T12:00"
    assert form.interview_datetime == "2026-03-05T10:00"
    assert form.ppt_datetime == ""
    assert form.visit_date == "2026-03-10"
    assert form.cgpa_cutoff == "7.5"
    assert form.people_selected == "3"
    assert form.roles == "SDE, Data Analyst"
    assert form.description == ""
    assert form.status is PlacementStatus.ongoing


def test_payload_turns_empty_text_into_absent():
    payload = build_payload(_form())
    assert payload["name"] == "Acme"
    for field in ("description", "visit_date", "offered_ctc", "cgpa_cutoff", "people_selected",
                  "roles", "registration_deadline", "ppt_datetime", "oa_datetime", "interview_datetime"):
        assert payload[field] is None, field
    assert payload["status"] == "upcoming"


def test_payload_cgpa_parsing_has_no_range_check():
    assert build_payload(_form(cgpa_cutoff=""))["cgpa_cutoff"] is None
    assert build_payload(_form(cgpa_cutoff="7.5"))["cgpa_cutoff"] == 7.5
    # Range is enforced by the form control, not here
    assert build_payload(_form(cgpa_cutoff="11"))["cgpa_cutoff"] == 11.0
    assert build_payload(_form(cgpa_cutoff="abc"))["cgpa_cutoff"] is None


def test_payload_people_selected():
    assert build_payload(_form(people_selected="12"))["people_selected"] == 12
    assert build_payload(_form(people_selected="many"))["people_selected"] is None


def test_payload_milestones_carry_ist_offset():
    payload = build_payload(_form(registration_deadline="2026-03-01T12:00", oa_datetime="2026-03-04T09:30"))
    assert payload["registration_deadline"] == "2026-03-01T12:00:00+05:30"
    assert payload["oa_datetime"] == "2026-03-04T09:30:00+05:30"
    assert payload["ppt_datetime"] is None


def test_parse_roles():
    assert parse_roles("SDE, Data Analyst") == ["SDE", "Data Analyst"]
    assert parse_roles(" SDE ,, Analyst , ") == ["SDE", "Analyst"]
    assert parse_roles("") is None
    assert parse_roles(" , ") is None


def test_payload_requires_name():
    with pytest.raises(ValidationError):
        build_payload(_form(name="   "))


def test_load_then_submit_preserves_milestones():
    instant = datetime(2026, 3, 1, 6, 30, tzinfo=timezone.utc)
    company = make_company("Acme", oa_datetime=instant, roles=["SDE"])

    payload = build_payload(form_from_company(company))

    assert datetime.fromisoformat(payload["oa_datetime"]) == instant
    assert payload["roles"] == ["SDE"]


# ============================================================
# CompanyEditor
# ============================================================

def test_submit_without_id_creates_and_refetches():
    repo = FakeCompanyRepository()
    company = CompanyEditor(repo).submit(_form(offered_ctc="12 LPA", roles="SDE"))

    assert company.id == "new-1"
    assert company.offered_ctc == "12 LPA"
    assert company.roles == ["SDE"]
    assert repo.companies["new-1"] == company


def test_submit_with_id_updates():
    repo = FakeCompanyRepository([make_company("Acme", offered_ctc="10 LPA")])
    company = CompanyEditor(repo).submit(_form(offered_ctc="14 LPA"), company_id="acme")

    assert company.offered_ctc == "14 LPA"
    assert len(repo.writes) == 1


def test_submit_update_of_missing_company_returns_none():
    repo = FakeCompanyRepository()
    assert CompanyEditor(repo).submit(_form(), company_id="missing") is None


def test_store_error_propagates_and_form_is_untouched():
    repo = FakeCompanyRepository(fail=True)
    form = _form(cgpa_cutoff="8", roles="SDE")
    before = form.model_dump()

    with pytest.raises(StoreError):
        CompanyEditor(repo).submit(form)

    assert form.model_dump() == before
