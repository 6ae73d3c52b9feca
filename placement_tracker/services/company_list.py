"""
Company List Assembly

Filter -> sort over fetched Company records.

FILTERING:
- search: case-insensitive substring of the name or of any role
- status filter: None means "all"; otherwise the STORED status must match
  (not the derived one)

SORTING:
- name                          A-Z
- registration_deadline/oa/interview
                                by instant, absent treated as the epoch
- ctc                           by the first number in the offered CTC text
- status                        by derived status, upcoming split into
                                registration_done / registration_pending

Direction applies to every key by default. With honor_direction=False the
legacy orderings are kept: name, milestone keys ascending and CTC highest
first whatever the toggle says; only the status key follows it.

Input lists are never mutated.
"""

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from placement_tracker.schemas.schemas import (
    Company, PlacementStatus, SortDirection, SortKey
)
from placement_tracker.utils.parsing import parse_first_number, parse_instant
from placement_tracker.utils.timeutils import derive_company_status

REGISTRATION_DONE = "registration_done"
REGISTRATION_PENDING = "registration_pending"

# Highest priority first; this is the "desc" order
STATUS_SORT_ORDER: Tuple[str, ...] = (
    PlacementStatus.completed.value,
    PlacementStatus.interviews_done.value,
    PlacementStatus.oa_done.value,
    PlacementStatus.ppt_done.value,
    REGISTRATION_DONE,
    REGISTRATION_PENDING,
    PlacementStatus.ongoing.value,
    PlacementStatus.upcoming.value,
    PlacementStatus.cancelled.value,
)
_STATUS_RANK: Dict[str, int] = {name: i for i, name in enumerate(STATUS_SORT_ORDER)}


# ============================================================
# FILTERING
# ============================================================

def matches_search(company: Company, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    if needle in company.name.lower():
        return True
    return any(needle in role.lower() for role in company.roles or [])


def matches_status(company: Company, status_filter: Optional[PlacementStatus]) -> bool:
    return status_filter is None or company.status == status_filter


def filter_companies(
    companies: Iterable[Company],
    search: str = "",
    status_filter: Optional[PlacementStatus] = None,
) -> List[Company]:
    return [
        c for c in companies
        if matches_search(c, search) and matches_status(c, status_filter)
    ]


# ============================================================
# SORT KEYS
# ============================================================

def parse_ctc(offered_ctc: Optional[str]) -> float:
    """Numeric value of a free-text CTC; 0 when there is nothing to read."""
    return parse_first_number(offered_ctc).or_default(0.0)


def _epoch_seconds(value) -> float:
    parsed = parse_instant(value)
    return parsed.value.timestamp() if parsed.ok else 0.0


def status_sort_class(company: Company, now: datetime) -> str:
    """
    Derived status, with "upcoming" narrowed by the registration deadline:
    passed -> registration_done, still open -> registration_pending.
    """
    status = derive_company_status(company, now)
    deadline = parse_instant(company.registration_deadline)
    if status is PlacementStatus.upcoming and deadline.ok:
        if parse_instant(now).value > deadline.value:
            return REGISTRATION_DONE
        return REGISTRATION_PENDING
    return status.value


_MILESTONE_FIELDS = {
    SortKey.registration_deadline: "registration_deadline",
    SortKey.oa: "oa_datetime",
    SortKey.interview: "interview_datetime",
}


def _milestone_key(field: str) -> Callable[[Company], float]:
    return lambda c: _epoch_seconds(getattr(c, field))


def _sort_by_status(
    companies: List[Company], direction: SortDirection, now: datetime
) -> List[Company]:
    descending = direction is SortDirection.desc

    def key(company: Company):
        rank = _STATUS_RANK.get(status_sort_class(company, now))
        if rank is None:
            # Unclassified companies go last, tied among themselves
            return (1, 0)
        return (0, rank if descending else -rank)

    return sorted(companies, key=key)


def sort_companies(
    companies: Iterable[Company],
    sort_key: Union[SortKey, str],
    direction: Union[SortDirection, str],
    now: datetime,
    honor_direction: bool = True,
) -> List[Company]:
    sort_key = SortKey(sort_key)
    direction = SortDirection(direction)
    items = list(companies)
    descending = direction is SortDirection.desc

    if sort_key is SortKey.status:
        return _sort_by_status(items, direction, now)

    if sort_key is SortKey.name:
        return sorted(
            items,
            key=lambda c: c.name.casefold(),
            reverse=descending and honor_direction,
        )

    if sort_key is SortKey.ctc:
        # Legacy order is highest first
        return sorted(
            items,
            key=lambda c: parse_ctc(c.offered_ctc),
            reverse=descending or not honor_direction,
        )

    return sorted(
        items,
        key=_milestone_key(_MILESTONE_FIELDS[sort_key]),
        reverse=descending and honor_direction,
    )


def assemble_company_list(
    companies: Iterable[Company],
    now: datetime,
    search: str = "",
    status_filter: Optional[PlacementStatus] = None,
    sort_key: Union[SortKey, str] = SortKey.registration_deadline,
    direction: Union[SortDirection, str] = SortDirection.desc,
    honor_direction: bool = True,
) -> List[Company]:
    """Filtered and ordered view of `companies` as a new list."""
    filtered = filter_companies(companies, search, status_filter)
    return sort_companies(filtered, sort_key, direction, now, honor_direction)
