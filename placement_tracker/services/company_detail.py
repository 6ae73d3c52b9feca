"""
Company views and the company overview page.

The overview loads the company first, then its experiences, questions and
selected-applicant profiles concurrently. Those three are independent: a
failure in one is logged and reported under `errors` while the others are
still returned.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from starlette.concurrency import run_in_threadpool

from placement_tracker.core.errors import StoreError
from placement_tracker.schemas.schemas import (
    Company, CompanyOverview, CompanyView, Profile
)
from placement_tracker.services.repository import (
    CompanyRepository, InterviewRepository, ProfileRepository
)
from placement_tracker.services.status_badge import status_presentation
from placement_tracker.utils.timeutils import (
    derive_company_status, is_registration_imminent, to_human_date, to_human_display
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_company_view(company: Company, now: datetime) -> CompanyView:
    derived = derive_company_status(company, now)
    return CompanyView(
        **company.model_dump(),
        derived_status=derived,
        badge=status_presentation(derived),
        registration_deadline_display=to_human_display(company.registration_deadline),
        ppt_display=to_human_display(company.ppt_datetime),
        oa_display=to_human_display(company.oa_datetime),
        interview_display=to_human_display(company.interview_datetime),
        visit_date_display=to_human_date(company.visit_date),
        registration_imminent=is_registration_imminent(company.registration_deadline, now),
    )


def fetch_selected_profiles(
    company_id: str, interviews: InterviewRepository, profiles: ProfileRepository
) -> List[Profile]:
    user_ids = interviews.fetch_selected_user_ids(company_id)
    if not user_ids:
        return []
    return profiles.fetch_profiles(user_ids)


async def _isolated(name: str, fetch: Callable[[], List[T]]) -> Tuple[str, List[T], Optional[str]]:
    try:
        return name, await run_in_threadpool(fetch), None
    except StoreError as e:
        logger.warning("Overview fetch '%s' failed: %s", name, e.message)
        return name, [], e.message


async def load_company_overview(
    company_id: str,
    companies: CompanyRepository,
    interviews: InterviewRepository,
    profiles: ProfileRepository,
    now: datetime,
) -> Optional[CompanyOverview]:
    """
    Overview for one company, or None when it does not exist.

    A StoreError while loading the company itself propagates.
    """
    company = await run_in_threadpool(companies.fetch_by_id, company_id)
    if company is None:
        return None

    results = await asyncio.gather(
        _isolated("experiences", lambda: interviews.fetch_experiences(company_id)),
        _isolated("questions", lambda: interviews.fetch_questions(company_id)),
        _isolated(
            "selected_profiles",
            lambda: fetch_selected_profiles(company_id, interviews, profiles),
        ),
    )

    data: Dict[str, list] = {}
    errors: Dict[str, str] = {}
    for name, items, error in results:
        data[name] = items
        if error is not None:
            errors[name] = error

    return CompanyOverview(
        company=build_company_view(company, now),
        errors=errors,
        **data,
    )
