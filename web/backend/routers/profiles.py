#!/usr/bin/env python3
"""
Jobseeker profile endpoints - directory list and verification.
"""

import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from ..config import AppConfig
from ..dependencies import get_db, get_app_config
from ..services.profile_service import ProfileService
from ..models.requests import StatusUpdateRequest
from ..models.responses import ProfilesResponse, ProfileStatusResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/jobseekers", tags=["profiles"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded: {exc.detail}",
            "type": "RateLimitExceeded"
        }
    )


@router.get("", response_model=ProfilesResponse)
def list_profiles(
    page: int = Query(default=1, description="1-based page number"),
    limit: Optional[int] = Query(default=None, description="Page size"),
    search: Optional[str] = Query(default=None, description="Free text over name, email, employee id and location"),
    name_filter: Optional[str] = Query(default=None, alias="nameFilter"),
    email_filter: Optional[str] = Query(default=None, alias="emailFilter"),
    phone_filter: Optional[str] = Query(default=None, alias="phoneFilter"),
    location_filter: Optional[str] = Query(default=None, alias="locationFilter", description="City or province"),
    experience_filter: Optional[str] = Query(default=None, alias="experienceFilter", description="Experience band or all"),
    employee_id_filter: Optional[str] = Query(default=None, alias="employeeIdFilter"),
    status_filter: Optional[str] = Query(
        default=None, alias="statusFilter", description="pending, verified, rejected or all"
    ),
    date_from: Optional[date] = Query(default=None, alias="dateFrom", description="Created on or after"),
    date_to: Optional[date] = Query(default=None, alias="dateTo", description="Created on or before"),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
):
    """
    Get jobseeker profiles, newest first.
    """
    service = ProfileService(db, matching_config=config.matching, profiles_config=config.profiles)
    return service.list_profiles(dict(
        page=page,
        limit=limit if limit is not None else config.matching.default_limit,
        search=search,
        name_filter=name_filter,
        email_filter=email_filter,
        phone_filter=phone_filter,
        location_filter=location_filter,
        experience_filter=experience_filter,
        employee_id_filter=employee_id_filter,
        status_filter=status_filter,
        date_from=date_from,
        date_to=date_to
    ))


@router.put("/profile/{profile_id}/status", response_model=ProfileStatusResponse)
@limiter.limit("30/minute")
def update_profile_status(
    request: Request,
    profile_id: str,
    body: StatusUpdateRequest,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
):
    """
    Change a profile's verification status.

    Rejecting requires a rejection reason. Verifying a profile that has no
    employee code assigns the next one.
    """
    service = ProfileService(db, matching_config=config.matching, profiles_config=config.profiles)
    return service.update_status(profile_id, body.status, body.rejection_reason)
