"""Data structures for the candidate matching pipeline.

Candidates are read-only projections built by the storage layer while the
session is still open; nothing in the pipeline mutates them.
"""

import math
from dataclasses import dataclass
from typing import Optional


UNKNOWN_NAME = "Unknown"

# Candidate.status values, relative to the requested position
STATUS_ASSIGNED = "assigned"
STATUS_AVAILABLE = "available"
STATUS_UNAVAILABLE = "unavailable"


def display_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """Join first and last name, falling back to "Unknown" when both are empty."""
    name = f"{first_name or ''} {last_name or ''}".strip()
    return name or UNKNOWN_NAME


@dataclass(frozen=True)
class Candidate:
    """A jobseeker profile considered for a position."""
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[str] = None
    availability: Optional[str] = None
    weekend_availability: bool = False
    city: Optional[str] = None
    province: Optional[str] = None
    similarity_score: Optional[float] = 0.0
    is_available: bool = True
    status: str = STATUS_AVAILABLE
    verification_status: str = "verified"

    @property
    def name(self) -> str:
        return display_name(self.first_name, self.last_name)

    @property
    def sort_score(self) -> float:
        """Score used for ordering; missing or NaN scores sort last."""
        score = self.similarity_score
        if score is None or math.isnan(score):
            return -math.inf
        return float(score)


@dataclass(frozen=True)
class RankedResult:
    """A candidate with its 1-based position in the ranked, filtered list."""
    candidate: Candidate
    rank: int


@dataclass(frozen=True)
class PaginationState:
    """
    Pagination metadata.

    All page math is based on total_filtered; total is the count before
    any filter and is reported for display only.
    """
    page: int
    limit: int
    total: int
    total_filtered: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool
