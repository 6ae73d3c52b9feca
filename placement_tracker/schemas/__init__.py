"""
Schemas module - stored records and API request/response schemas.
"""

from placement_tracker.schemas.schemas import (
    Company, CompanyFormState, CompanyView, InterviewExperience,
    InterviewQuestion, PlacementStatus, Profile, SortDirection, SortKey
)

__all__ = [
    "Company",
    "CompanyFormState",
    "CompanyView",
    "InterviewExperience",
    "InterviewQuestion",
    "PlacementStatus",
    "Profile",
    "SortDirection",
    "SortKey",
]
