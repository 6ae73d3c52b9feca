"""Placement status -> badge emphasis and label."""

from typing import Union

from placement_tracker.schemas.schemas import Emphasis, PlacementStatus, StatusPresentation

_PRESENTATION = {
    PlacementStatus.upcoming: StatusPresentation(emphasis=Emphasis.low, label="Upcoming"),
    PlacementStatus.ongoing: StatusPresentation(emphasis=Emphasis.high, label="Ongoing"),
    PlacementStatus.ppt_done: StatusPresentation(emphasis=Emphasis.low, label="PPT done"),
    PlacementStatus.oa_done: StatusPresentation(emphasis=Emphasis.low, label="OA done"),
    PlacementStatus.interviews_done: StatusPresentation(emphasis=Emphasis.medium, label="Completed"),
    PlacementStatus.completed: StatusPresentation(emphasis=Emphasis.medium, label="Completed"),
    PlacementStatus.cancelled: StatusPresentation(emphasis=Emphasis.critical, label="Cancelled"),
}

_missing = set(PlacementStatus) - set(_PRESENTATION)
if _missing:
    raise RuntimeError(f"No badge presentation for statuses: {sorted(s.value for s in _missing)}")


def status_presentation(status: Union[PlacementStatus, str]) -> StatusPresentation:
    """
    Badge for a status. Unknown values raise ValueError; every status
    the store can hold is in the table.
    """
    return _PRESENTATION[PlacementStatus(status)]
