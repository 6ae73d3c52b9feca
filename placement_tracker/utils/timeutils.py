"""
Time & Status Utilities

Stored instants are timezone-aware. Everything a person sees or edits is in
Indian Standard Time (UTC+05:30), a fixed offset with no daylight saving.

- to_local_editable_form / from_local_editable_form: datetime-local editor
  values ("YYYY-MM-DDTHH:mm") to and from stored instants
- to_human_display: "Oct 19, 2026, 3:05 PM"; to_human_date: "Oct 19, 2026"
- derive_status: coarse placement status from milestone instants

`now` is always passed in; nothing here reads the wall clock.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from placement_tracker.schemas.schemas import Company, PlacementStatus
from placement_tracker.utils.parsing import parse_instant

IST = timezone(timedelta(hours=5, minutes=30), "IST")
IST_OFFSET_SUFFIX = "+05:30"

NOT_SCHEDULED = "Not scheduled"
IMMINENT_WINDOW = timedelta(hours=12)

Instant = Union[datetime, str, None]


def _to_ist(instant: Instant) -> Optional[datetime]:
    parsed = parse_instant(instant)
    if not parsed.ok:
        return None
    return parsed.value.astimezone(IST)


def to_local_editable_form(instant: Instant) -> str:
    """Render an instant as an IST "YYYY-MM-DDTHH:mm" editor value, "" when absent."""
    local = _to_ist(instant)
    if local is None:
        return ""
    return local.strftime("%Y-%m-%dT%H:%M")


def from_local_editable_form(value: Optional[str]) -> Optional[str]:
    """
    Turn an IST editor value back into a storable ISO instant.

    The seconds and the +05:30 offset are appended literally; the value is
    neither converted nor validated, the store rejects malformed input.
    """
    if not value:
        return None
    return f"{value}:00{IST_OFFSET_SUFFIX}"


def to_human_display(instant: Instant, placeholder: str = NOT_SCHEDULED) -> str:
    local = _to_ist(instant)
    if local is None:
        return placeholder
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local.minute:02d} {meridiem}"


def to_human_date(instant: Union[Instant, date], placeholder: str = "-") -> str:
    """
    Date part of the human display, e.g. "Oct 19, 2026".

    A calendar date (such as a visit date) is shown as is.
    """
    if isinstance(instant, date) and not isinstance(instant, datetime):
        return f"{instant:%b} {instant.day}, {instant.year}"
    local = _to_ist(instant)
    if local is None:
        return placeholder
    return f"{local:%b} {local.day}, {local.year}"


def _instant(value: Instant) -> Optional[datetime]:
    return parse_instant(value).value


def derive_status(
    explicit_status: Union[PlacementStatus, str],
    registration_deadline: Instant,
    ppt: Instant,
    oa: Instant,
    interview: Instant,
    now: datetime,
) -> PlacementStatus:
    """
    Derive the placement status a person should see. First match wins:

    1. explicit status "cancelled"
    2. registration deadline still ahead        -> upcoming
    3. interview passed                         -> interviews_done
    4. OA passed                                -> oa_done
    5. PPT passed                               -> ppt_done
    6. any of PPT/OA/interview still ahead      -> ongoing
    7. nothing constrains the outcome           -> upcoming

    The stored status is ignored for every value except "cancelled", so
    "completed" is never produced here.
    """
    if PlacementStatus(explicit_status) is PlacementStatus.cancelled:
        return PlacementStatus.cancelled

    now = _instant(now)
    reg = _instant(registration_deadline)
    ppt_at = _instant(ppt)
    oa_at = _instant(oa)
    interview_at = _instant(interview)

    if reg is not None and now < reg:
        return PlacementStatus.upcoming
    if interview_at is not None and now > interview_at:
        return PlacementStatus.interviews_done
    if oa_at is not None and now > oa_at:
        return PlacementStatus.oa_done
    if ppt_at is not None and now > ppt_at:
        return PlacementStatus.ppt_done
    if any(at is not None and now < at for at in (oa_at, ppt_at, interview_at)):
        return PlacementStatus.ongoing
    return PlacementStatus.upcoming


def derive_company_status(company: Company, now: datetime) -> PlacementStatus:
    return derive_status(
        company.status,
        company.registration_deadline,
        company.ppt_datetime,
        company.oa_datetime,
        company.interview_datetime,
        now,
    )


def is_registration_imminent(
    deadline: Instant, now: datetime, window: timedelta = IMMINENT_WINDOW
) -> bool:
    """True when the deadline is still ahead but within `window` of now."""
    reg = _instant(deadline)
    if reg is None:
        return False
    remaining = reg - _instant(now)
    return timedelta(0) < remaining <= window
