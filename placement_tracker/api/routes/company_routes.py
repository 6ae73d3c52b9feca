"""
Company Routes

GET /companies - List companies (search, status filter, sort)
GET /companies/{id} - Get one company with derived status
GET /companies/{id}/overview - Company with experiences, questions, selected profiles
GET /companies/{id}/form - Editable form state (editor only)
POST /companies - Create company from form state (editor only)
PUT /companies/{id} - Update company from form state (editor only)
"""

from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from placement_tracker.api.deps import get_now
from placement_tracker.core.auth import require_editor
from placement_tracker.core.config import Settings, get_settings
from placement_tracker.schemas.schemas import (
    CompanyFormState, CompanyOverview, CompanyView, PlacementStatus, SortDirection, SortKey
)
from placement_tracker.services.company_detail import build_company_view, load_company_overview
from placement_tracker.services.company_form import CompanyEditor, form_from_company
from placement_tracker.services.company_list import assemble_company_list
from placement_tracker.services.repository import (
    CompanyRepository, InterviewRepository, ProfileRepository,
    get_company_repository, get_interview_repository, get_profile_repository
)

router = APIRouter(prefix="/companies", tags=["Companies"])

STATUS_FILTER_ALL = "all"


def _parse_status_filter(value: str) -> Optional[PlacementStatus]:
    normalized = value.strip().lower()
    if normalized == STATUS_FILTER_ALL:
        return None
    try:
        return PlacementStatus(normalized)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown status filter '{value}'")


@router.get("", response_model=List[CompanyView])
def list_companies(
    search: str = Query("", description="Substring of company name or any role"),
    status: str = Query(STATUS_FILTER_ALL, description="'all' or a stored placement status"),
    sort_by: SortKey = Query(SortKey.registration_deadline),
    sort_dir: SortDirection = Query(SortDirection.desc),
    repo: CompanyRepository = Depends(get_company_repository),
    settings: Settings = Depends(get_settings),
    now: datetime = Depends(get_now),
):
    """List companies filtered by search/stored status, ordered by the chosen key."""
    status_filter = _parse_status_filter(status)
    companies = assemble_company_list(
        repo.fetch_all(),
        now,
        search=search,
        status_filter=status_filter,
        sort_key=sort_by,
        direction=sort_dir,
        honor_direction=settings.honor_sort_direction,
    )
    return [build_company_view(c, now) for c in companies]


@router.get("/{company_id}", response_model=CompanyView)
def get_company(
    company_id: str,
    repo: CompanyRepository = Depends(get_company_repository),
    now: datetime = Depends(get_now),
):
    company = repo.fetch_by_id(company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return build_company_view(company, now)


@router.get("/{company_id}/overview", response_model=CompanyOverview)
async def get_company_overview(
    company_id: str,
    repo: CompanyRepository = Depends(get_company_repository),
    interviews: InterviewRepository = Depends(get_interview_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
    now: datetime = Depends(get_now),
):
    """
    Company details page data.

    Experiences, questions and selected profiles are fetched independently;
    any that failed are listed in `errors` and returned empty.
    """
    overview = await load_company_overview(company_id, repo, interviews, profiles, now)
    if overview is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return overview


@router.get("/{company_id}/form", response_model=CompanyFormState)
def get_company_form(
    company_id: str,
    repo: CompanyRepository = Depends(get_company_repository),
    editor: dict = Depends(require_editor),
):
    """Current values as editable text, milestones in IST."""
    company = repo.fetch_by_id(company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return form_from_company(company)


@router.post("", response_model=CompanyView, status_code=201)
def create_company(
    form: CompanyFormState,
    repo: CompanyRepository = Depends(get_company_repository),
    editor: dict = Depends(require_editor),
    now: datetime = Depends(get_now),
):
    """Create a company. Empty fields are stored as absent."""
    company = CompanyEditor(repo).submit(form)
    if company is None:
        raise HTTPException(status_code=500, detail="Company was saved but could not be re-fetched")
    return build_company_view(company, now)


@router.put("/{company_id}", response_model=CompanyView)
def update_company(
    company_id: str,
    form: CompanyFormState,
    repo: CompanyRepository = Depends(get_company_repository),
    editor: dict = Depends(require_editor),
    now: datetime = Depends(get_now),
):
    company = CompanyEditor(repo).submit(form, company_id=company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return build_company_view(company, now)
