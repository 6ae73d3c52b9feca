import threading

from fakes import (
    EDITOR, VIEWER, FakeCompanyRepository, FakeInterviewRepository,
    build_app, hours, make_company, request
)
from placement_tracker.schemas.schemas import ExperienceCreate, PlacementStatus


def _repo():
    return FakeCompanyRepository([
        make_company("Zeta", roles=["SDE"], offered_ctc="8 LPA", status=PlacementStatus.ongoing),
        make_company("Acme", roles=["Data Analyst"], offered_ctc="20 LPA", registration_deadline=hours(5)),
        make_company("Mono", roles=["SDE Intern"], offered_ctc="12 LPA", interview_datetime=hours(-3), visit_date="2026-02-27"),
    ])


def _names(response):
    return [c["name"] for c in response.json()]


# ============================================================
# LIST
# ============================================================

def test_list_companies_includes_derived_status_and_badge():
    response = request(build_app(_repo()), "GET", "/api/companies", params={"sort_by": "name", "sort_dir": "asc"})

    assert response.status_code == 200
    body = response.json()
    assert [c["name"] for c in body] == ["Acme", "Mono", "Zeta"]
    mono = body[1]
    assert mono["status"] == "upcoming"
    assert mono["derived_status"] == "interviews_done"
    assert mono["badge"] == {"emphasis": "medium", "label": "Completed"}
    assert body[0]["registration_imminent"] is True


def test_list_companies_search_and_stored_status_filter():
    app = build_app(_repo())

    assert _names(request(app, "GET", "/api/companies", params={"search": "sde", "sort_by": "name", "sort_dir": "asc"})) == ["Mono", "Zeta"]
    assert _names(request(app, "GET", "/api/companies", params={"status": "ongoing"})) == ["Zeta"]
    assert _names(request(app, "GET", "/api/companies", params={"status": "interviews_done"})) == []


def test_status_filter_ignores_case():
    app = build_app(_repo())
    assert _names(request(app, "GET", "/api/companies", params={"status": "Ongoing"})) == ["Zeta"]
    assert len(request(app, "GET", "/api/companies", params={"status": " ALL "}).json()) == 3


def test_list_companies_rejects_unknown_filter_and_sort_key():
    app = build_app(_repo())
    assert request(app, "GET", "/api/companies", params={"status": "archived"}).status_code == 422
    assert request(app, "GET", "/api/companies", params={"sort_by": "salary"}).status_code == 422


def test_ctc_sort_follows_direction():
    app = build_app(_repo())
    desc = request(app, "GET", "/api/companies", params={"sort_by": "ctc", "sort_dir": "desc"})
    asc = request(app, "GET", "/api/companies", params={"sort_by": "ctc", "sort_dir": "asc"})
    assert _names(desc) == ["Acme", "Mono", "Zeta"]
    assert _names(asc) == ["Zeta", "Mono", "Acme"]


def test_legacy_sort_setting_ignores_direction_for_name():
    app = build_app(_repo(), honor_sort_direction=False)
    response = request(app, "GET", "/api/companies", params={"sort_by": "name", "sort_dir": "desc"})
    assert _names(response) == ["Acme", "Mono", "Zeta"]


def test_store_failure_is_reported_as_bad_gateway():
    response = request(build_app(FakeCompanyRepository(fail=True)), "GET", "/api/companies")
    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to fetch companies: connection refused"


# ============================================================
# DETAIL
# ============================================================

def test_get_company():
    app = build_app(_repo())
    response = request(app, "GET", "/api/companies/mono")
    assert response.status_code == 200
    assert response.json()["interview_display"] == "Mar 1, 2026, 2:30 PM"
    assert response.json()["visit_date_display"] == "Feb 27, 2026"

    assert request(app, "GET", "/api/companies/missing").status_code == 404


def test_overview_reports_failed_secondary_fetch():
    interviews = FakeInterviewRepository(fail_on={"selected_profiles"})
    interviews.insert_experience("acme", "u1", ExperienceCreate(round_name="OA", experience="Aptitude"))
    app = build_app(_repo(), interviews=interviews)

    response = request(app, "GET", "/api/companies/acme/overview")

    assert response.status_code == 200
    body = response.json()
    assert body["company"]["name"] == "Acme"
    assert len(body["experiences"]) == 1
    assert body["selected_profiles"] == []
    assert set(body["errors"]) == {"selected_profiles"}


def test_overview_of_missing_company():
    assert request(build_app(_repo()), "GET", "/api/companies/missing/overview").status_code == 404


# ============================================================
# EDITING
# ============================================================

def test_get_form_state_requires_editor():
    repo = _repo()
    assert request(build_app(repo, user=None), "GET", "/api/companies/acme/form").status_code == 401
    assert request(build_app(repo, user=VIEWER), "GET", "/api/companies/acme/form").status_code == 403

    response = request(build_app(repo, user=EDITOR), "GET", "/api/companies/acme/form")
    assert response.status_code == 200
    body = response.json()
    assert body["registration_deadline"] == "2026-03-01T22:30"
    assert body["roles"] == "Data Analyst"
    assert body["cgpa_cutoff"] == ""


def test_create_company():
    repo = FakeCompanyRepository()
    app = build_app(repo, user=EDITOR)

    response = request(app, "POST", "/api/companies", json={
        "name": "Initech",
        "roles": "SDE, QA ",
        "cgpa_cutoff": "7.5",
        "people_selected": "",
        "oa_datetime": "2026-03-04T09:30",
        "description": "",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == "new-1"
    assert body["roles"] == ["SDE", "QA"]
    assert body["cgpa_cutoff"] == 7.5
    assert body["people_selected"] is None
    assert body["description"] is None
    assert body["derived_status"] == "ongoing"
    assert repo.writes[0]["oa_datetime"] == "2026-03-04T09:30:00+05:30"


def test_create_company_permissions_and_validation():
    repo = FakeCompanyRepository()
    assert request(build_app(repo, user=None), "POST", "/api/companies", json={"name": "X"}).status_code == 401
    assert request(build_app(repo, user=VIEWER), "POST", "/api/companies", json={"name": "X"}).status_code == 403

    response = request(build_app(repo, user=EDITOR), "POST", "/api/companies", json={"name": ""})
    assert response.status_code == 422
    assert repo.writes == []


def test_update_company():
    repo = _repo()
    app = build_app(repo, user=EDITOR)

    response = request(app, "PUT", "/api/companies/zeta", json={"name": "Zeta", "status": "cancelled"})

    assert response.status_code == 200
    assert response.json()["derived_status"] == "cancelled"
    assert response.json()["badge"]["emphasis"] == "critical"
    assert request(app, "PUT", "/api/companies/missing", json={"name": "Ghost"}).status_code == 404


def test_failed_write_is_reported():
    app = build_app(FakeCompanyRepository(fail=True), user=EDITOR)
    response = request(app, "POST", "/api/companies", json={"name": "Initech"})
    assert response.status_code == 502


def test_store_calls_run_off_the_event_loop():
    threads = []

    class RecordingRepository(FakeCompanyRepository):
        def fetch_all(self):
            threads.append(threading.current_thread())
            return super().fetch_all()

    request(build_app(RecordingRepository([make_company("Acme")])), "GET", "/api/companies")

    assert threads and threads[0] is not threading.main_thread()
