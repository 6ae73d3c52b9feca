"""
Placement Tracker
Company recruitment drives, placement status and interview experiences.

Architecture:
- PostgreSQL: Structured data (companies, profiles, user roles)
- MongoDB: Narrative documents (interview experiences, interview questions)
- Status derivation and list assembly are pure functions over fetched records
"""

__version__ = "1.0.0"
