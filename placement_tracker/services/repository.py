"""
Repositories - the only code that talks to the stores.

PostgreSQL (SQLAlchemy, raw SQL):
1. companies   - recruitment drives with milestone instants
2. profiles    - display data of registered users

MongoDB (pymongo):
3. interview_experiences - round narratives, append-only
4. interview_questions   - asked questions, append-only

Routes and services depend on the abstract classes so the list pipeline,
the editing workflow and the overview can be tested with in-memory stores.
Every driver failure is re-raised as StoreError with a readable message.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from placement_tracker.core.errors import StoreError
from placement_tracker.db.mongodb import COLLECTIONS, get_collection
from placement_tracker.db.postgres import execute_raw_sql, get_db_session
from placement_tracker.schemas.schemas import (
    Company, ExperienceCreate, InterviewExperience, InterviewQuestion,
    Profile, QuestionCreate
)

logger = logging.getLogger(__name__)

# Columns a company payload may write; id and timestamps belong to the store
COMPANY_WRITABLE_COLUMNS = (
    "name", "description", "logo_url", "website_url", "visit_date",
    "registration_deadline", "ppt_datetime", "oa_datetime", "interview_datetime",
    "cgpa_cutoff", "offered_ctc", "ctc_distribution", "roles", "people_selected",
    "status", "bond_details", "job_location", "eligibility_criteria", "external_form",
)

_COMPANY_SELECT = """
    SELECT id::text AS id, name, description, logo_url, website_url, visit_date,
           registration_deadline, ppt_datetime, oa_datetime, interview_datetime,
           cgpa_cutoff::float8 AS cgpa_cutoff, offered_ctc, ctc_distribution, roles, people_selected,
           status, bond_details, job_location, eligibility_criteria, external_form,
           created_at, updated_at
    FROM companies
"""


@contextmanager
def store_errors(action: str):
    """Translate driver exceptions raised inside the block into StoreError."""
    try:
        yield
    except (SQLAlchemyError, PyMongoError) as e:
        logger.error("Failed to %s: %s", action, e)
        raise StoreError(f"Failed to {action}: {e}") from e


def _writable(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in payload.items() if k in COMPANY_WRITABLE_COLUMNS}


# ============================================================
# INTERFACES
# ============================================================

class CompanyRepository(ABC):

    @abstractmethod
    def fetch_all(self) -> List[Company]:
        """All companies, newest first."""

    @abstractmethod
    def fetch_by_id(self, company_id: str) -> Optional[Company]:
        ...

    @abstractmethod
    def insert(self, payload: Dict[str, Any]) -> str:
        """Create a company and return its id."""

    @abstractmethod
    def update(self, company_id: str, payload: Dict[str, Any]) -> bool:
        """Update a company; False when no such company exists."""


class InterviewRepository(ABC):

    @abstractmethod
    def fetch_experiences(self, company_id: str) -> List[InterviewExperience]:
        ...

    @abstractmethod
    def fetch_questions(self, company_id: str) -> List[InterviewQuestion]:
        ...

    @abstractmethod
    def fetch_selected_user_ids(self, company_id: str) -> List[str]:
        """Distinct authors whose experience result mentions "selected"."""

    @abstractmethod
    def insert_experience(
        self, company_id: str, user_id: Optional[str], data: ExperienceCreate
    ) -> InterviewExperience:
        ...

    @abstractmethod
    def insert_question(
        self, company_id: str, user_id: Optional[str], data: QuestionCreate
    ) -> InterviewQuestion:
        ...


class ProfileRepository(ABC):

    @abstractmethod
    def fetch_profiles(self, user_ids: List[str]) -> List[Profile]:
        ...


# ============================================================
# POSTGRESQL
# ============================================================

class PostgresCompanyRepository(CompanyRepository):

    def fetch_all(self) -> List[Company]:
        with store_errors("fetch companies"):
            rows = execute_raw_sql(_COMPANY_SELECT + " ORDER BY created_at DESC")
        return [Company.model_validate(r) for r in rows]

    def fetch_by_id(self, company_id: str) -> Optional[Company]:
        with store_errors("fetch company"):
            rows = execute_raw_sql(_COMPANY_SELECT + " WHERE id::text = :id", {"id": company_id})
        return Company.model_validate(rows[0]) if rows else None

    def insert(self, payload: Dict[str, Any]) -> str:
        values = _writable(payload)
        columns = ", ".join(values)
        params = ", ".join(f":{k}" for k in values)
        with store_errors("create company"):
            with get_db_session() as db:
                result = db.execute(
                    text(f"INSERT INTO companies ({columns}) VALUES ({params}) RETURNING id::text"),
                    values
                )
                company_id = result.fetchone()[0]
        logger.info("Created company %s (%s)", company_id, values.get("name"))
        return company_id

    def update(self, company_id: str, payload: Dict[str, Any]) -> bool:
        values = _writable(payload)
        updates = [f"{k} = :{k}" for k in values]
        params = dict(values, id=company_id)
        with store_errors("update company"):
            with get_db_session() as db:
                result = db.execute(
                    text(
                        f"UPDATE companies SET {', '.join(updates + ['updated_at = CURRENT_TIMESTAMP'])} "
                        "WHERE id::text = :id"
                    ),
                    params
                )
                updated = result.rowcount > 0
        if updated:
            logger.info("Updated company %s", company_id)
        return updated


class PostgresProfileRepository(ProfileRepository):

    def fetch_profiles(self, user_ids: List[str]) -> List[Profile]:
        if not user_ids:
            return []
        with store_errors("fetch selected profiles"):
            rows = execute_raw_sql(
                """
                SELECT user_id::text AS user_id, email, full_name, avatar_url
                FROM profiles WHERE user_id::text = ANY(:ids)
                """,
                {"ids": list(user_ids)}
            )
        return [Profile.model_validate(r) for r in rows]


# ============================================================
# MONGODB
# ============================================================

def _from_doc(doc: dict) -> dict:
    """Mongo document -> record dict with a string id."""
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


class MongoInterviewRepository(InterviewRepository):
    """
    Experiences and questions live in one collection each, keyed by the
    PostgreSQL company id. There is no update path.
    """

    def __init__(self):
        self.experiences: Collection = get_collection(COLLECTIONS["experiences"])
        self.questions: Collection = get_collection(COLLECTIONS["questions"])

    def fetch_experiences(self, company_id: str) -> List[InterviewExperience]:
        with store_errors("fetch interview experiences"):
            docs = list(self.experiences.find({"company_id": company_id}).sort("created_at", DESCENDING))
        return [InterviewExperience.model_validate(_from_doc(d)) for d in docs]

    def fetch_questions(self, company_id: str) -> List[InterviewQuestion]:
        with store_errors("fetch interview questions"):
            docs = list(self.questions.find({"company_id": company_id}).sort("created_at", DESCENDING))
        return [InterviewQuestion.model_validate(_from_doc(d)) for d in docs]

    def fetch_selected_user_ids(self, company_id: str) -> List[str]:
        with store_errors("fetch selected applicants"):
            docs = self.experiences.find(
                {
                    "company_id": company_id,
                    "user_id": {"$ne": None},
                    "result": {"$regex": "selected", "$options": "i"},
                },
                {"user_id": 1}
            )
            user_ids = [d["user_id"] for d in docs]
        # dict keeps first-seen order
        return list(dict.fromkeys(uid for uid in user_ids if uid))

    def insert_experience(
        self, company_id: str, user_id: Optional[str], data: ExperienceCreate
    ) -> InterviewExperience:
        doc = {
            "company_id": company_id,
            "user_id": user_id,
            **data.model_dump(),
            "created_at": datetime.now(timezone.utc),
        }
        with store_errors("save interview experience"):
            result = self.experiences.insert_one(doc)
        doc["_id"] = result.inserted_id
        return InterviewExperience.model_validate(_from_doc(doc))

    def insert_question(
        self, company_id: str, user_id: Optional[str], data: QuestionCreate
    ) -> InterviewQuestion:
        doc = {
            "company_id": company_id,
            "user_id": user_id,
            **data.model_dump(),
            "created_at": datetime.now(timezone.utc),
        }
        with store_errors("save interview question"):
            result = self.questions.insert_one(doc)
        doc["_id"] = result.inserted_id
        return InterviewQuestion.model_validate(_from_doc(doc))


# ============================================================
# FASTAPI DEPENDENCIES
# ============================================================

def get_company_repository() -> CompanyRepository:
    return PostgresCompanyRepository()


def get_interview_repository() -> InterviewRepository:
    return MongoInterviewRepository()


def get_profile_repository() -> ProfileRepository:
    return PostgresProfileRepository()
