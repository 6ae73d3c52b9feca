"""
Interview Experience & Question Routes

GET /companies/{id}/experiences - Experiences shared for a company
POST /companies/{id}/experiences - Share an experience (signed-in users)
GET /companies/{id}/questions - Questions shared for a company
POST /companies/{id}/questions - Share a question (signed-in users)

Append-only: there are no update routes.
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from placement_tracker.core.auth import get_current_user
from placement_tracker.schemas.schemas import (
    ExperienceCreate, InterviewExperience, InterviewQuestion, QuestionCreate
)
from placement_tracker.services.repository import (
    CompanyRepository, InterviewRepository, get_company_repository, get_interview_repository
)

router = APIRouter(prefix="/companies/{company_id}", tags=["Interviews"])


def _require_company(company_id: str, companies: CompanyRepository) -> None:
    if not companies.fetch_by_id(company_id):
        raise HTTPException(status_code=404, detail="Company not found")


@router.get("/experiences", response_model=List[InterviewExperience])
def list_experiences(
    company_id: str,
    interviews: InterviewRepository = Depends(get_interview_repository),
):
    """Newest first."""
    return interviews.fetch_experiences(company_id)


@router.post("/experiences", response_model=InterviewExperience, status_code=201)
def share_experience(
    company_id: str,
    data: ExperienceCreate,
    user: dict = Depends(get_current_user),
    companies: CompanyRepository = Depends(get_company_repository),
    interviews: InterviewRepository = Depends(get_interview_repository),
):
    _require_company(company_id, companies)
    return interviews.insert_experience(company_id, user["user_id"], data)


@router.get("/questions", response_model=List[InterviewQuestion])
def list_questions(
    company_id: str,
    interviews: InterviewRepository = Depends(get_interview_repository),
):
    """Newest first."""
    return interviews.fetch_questions(company_id)


@router.post("/questions", response_model=InterviewQuestion, status_code=201)
def share_question(
    company_id: str,
    data: QuestionCreate,
    user: dict = Depends(get_current_user),
    companies: CompanyRepository = Depends(get_company_repository),
    interviews: InterviewRepository = Depends(get_interview_repository),
):
    _require_company(company_id, companies)
    return interviews.insert_question(company_id, user["user_id"], data)
