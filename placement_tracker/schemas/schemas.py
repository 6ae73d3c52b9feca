"""
Pydantic Schemas - Records, Request/Response Validation

All data model and API schemas in one file for simplicity.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime, date
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class PlacementStatus(str, Enum):
    upcoming = "upcoming"
    ongoing = "ongoing"
    ppt_done = "ppt_done"
    oa_done = "oa_done"
    interviews_done = "interviews_done"
    completed = "completed"
    cancelled = "cancelled"


class AppRole(str, Enum):
    admin = "admin"
    editor = "editor"
    viewer = "viewer"


class Emphasis(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class SortKey(str, Enum):
    name = "name"
    status = "status"
    registration_deadline = "registration_deadline"
    ctc = "ctc"
    oa = "oa"
    interview = "interview"


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


# ============================================================
# STORED RECORDS
# ============================================================

class Company(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    visit_date: Optional[date] = None
    registration_deadline: Optional[datetime] = None
    ppt_datetime: Optional[datetime] = None
    oa_datetime: Optional[datetime] = None
    interview_datetime: Optional[datetime] = None
    cgpa_cutoff: Optional[float] = None
    offered_ctc: Optional[str] = None
    ctc_distribution: Optional[str] = None
    roles: Optional[List[str]] = None
    people_selected: Optional[int] = None
    status: PlacementStatus = PlacementStatus.upcoming
    bond_details: Optional[str] = None
    job_location: Optional[str] = None
    eligibility_criteria: Optional[str] = None
    external_form: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class InterviewExperience(BaseModel):
    id: str
    company_id: str
    user_id: Optional[str] = None
    round_name: str
    experience: str
    difficulty: Optional[str] = None
    result: Optional[str] = None
    tips: Optional[str] = None
    created_at: datetime


class InterviewQuestion(BaseModel):
    id: str
    company_id: str
    user_id: Optional[str] = None
    question: str
    answer: Optional[str] = None
    topic: Optional[str] = None
    question_type: Optional[str] = None
    created_at: datetime


class Profile(BaseModel):
    user_id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


# ============================================================
# COMPANY FORM (editable field state, every field is text)
# ============================================================

class CompanyFormState(BaseModel):
    name: str = ""
    description: str = ""
    logo_url: str = ""
    website_url: str = ""
    visit_date: str = ""
    registration_deadline: str = ""
    ppt_datetime: str = ""
    oa_datetime: str = ""
    interview_datetime: str = ""
    cgpa_cutoff: str = ""
    offered_ctc: str = ""
    ctc_distribution: str = ""
    roles: str = ""
    people_selected: str = ""
    status: PlacementStatus = PlacementStatus.upcoming
    bond_details: str = ""
    job_location: str = ""
    eligibility_criteria: str = ""
    external_form: str = ""


# ============================================================
# COMPANY RESPONSES
# ============================================================

class StatusPresentation(BaseModel):
    emphasis: Emphasis
    label: str


class CompanyView(Company):
    derived_status: PlacementStatus
    badge: StatusPresentation
    registration_deadline_display: str
    ppt_display: str
    oa_display: str
    interview_display: str
    visit_date_display: str = "-"
    registration_imminent: bool = False


class StatusOption(BaseModel):
    value: PlacementStatus
    badge: StatusPresentation


# ============================================================
# INTERVIEW EXPERIENCE / QUESTION SCHEMAS
# ============================================================

class ExperienceCreate(BaseModel):
    round_name: str = Field(..., min_length=1)
    experience: str = Field(..., min_length=1)
    difficulty: Optional[str] = None
    result: Optional[str] = None
    tips: Optional[str] = None


class QuestionCreate(BaseModel):
    question: str = Field(..., min_length=1)
    answer: Optional[str] = None
    topic: Optional[str] = None
    question_type: Optional[str] = None


class CompanyOverview(BaseModel):
    company: CompanyView
    experiences: List[InterviewExperience] = []
    questions: List[InterviewQuestion] = []
    selected_profiles: List[Profile] = []
    # Secondary fetch name -> store error message
    errors: Dict[str, str] = {}


# ============================================================
# AUTH / GENERIC SCHEMAS
# ============================================================

class UserResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    role: AppRole
    can_edit: bool


class MessageResponse(BaseModel):
    message: str
    success: bool = True
