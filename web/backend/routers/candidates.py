#!/usr/bin/env python3
"""
Position candidate endpoints - ranked jobseekers for an open position.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import AppConfig
from ..dependencies import get_db, get_app_config
from ..services.candidate_service import CandidateService
from ..models.responses import PositionCandidatesResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobseekers", tags=["candidates"])


@router.get("/position-candidates/{position_id}", response_model=PositionCandidatesResponse)
def get_position_candidates(
    position_id: str,
    page: int = Query(default=1, description="1-based page number"),
    limit: Optional[int] = Query(default=None, description="Page size"),
    search: Optional[str] = Query(default=None, description="Free text over name, contact, bio and location"),
    name_filter: Optional[str] = Query(default=None, alias="nameFilter"),
    email_filter: Optional[str] = Query(default=None, alias="emailFilter"),
    phone_filter: Optional[str] = Query(default=None, alias="phoneFilter"),
    experience_filter: Optional[str] = Query(default=None, alias="experienceFilter"),
    availability_filter: Optional[str] = Query(
        default=None, alias="availabilityFilter", description="Full-Time, Part-Time or all"
    ),
    weekend_availability_filter: Optional[str] = Query(
        default=None, alias="weekendAvailabilityFilter", description="true, false or all"
    ),
    city_filter: Optional[str] = Query(default=None, alias="cityFilter"),
    province_filter: Optional[str] = Query(default=None, alias="provinceFilter"),
    only_available: Optional[bool] = Query(
        default=None, alias="onlyAvailable", description="Hide candidates committed to other positions"
    ),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
):
    """
    Get candidates for a position, ranked by similarity to its requirements.

    Pagination counts (totalFiltered, totalPages) reflect every filter;
    total is the number of candidates before filtering.
    """
    service = CandidateService(db, config=config.matching)
    return service.get_position_candidates(
        position_id,
        dict(
            page=page,
            limit=limit if limit is not None else config.matching.default_limit,
            search=search,
            name_filter=name_filter,
            email_filter=email_filter,
            phone_filter=phone_filter,
            experience_filter=experience_filter,
            availability_filter=availability_filter,
            weekend_availability_filter=weekend_availability_filter,
            city_filter=city_filter,
            province_filter=province_filter,
            only_available=only_available
        )
    )
