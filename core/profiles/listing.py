"""
Profile list - the jobseeker directory on the shared filter/pagination engine.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.config_loader import MatchingConfig
from core.errors import RetrievalError, ServiceException
from core.matching.filters import ProfileFilterSpec, profile_compiler
from core.matching.models import PaginationState
from core.matching.paginator import paginate
from core.matching.ranker import refine
from core.profiles.models import ProfileRecord, ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class ProfilePage:
    profiles: List[ProfileRecord]
    pagination: PaginationState
    filters: Dict[str, Any] = field(default_factory=dict)


class ProfileListService:
    def __init__(self, store: ProfileStore, config: Optional[MatchingConfig] = None):
        self.store = store
        self.config = config or MatchingConfig()
        self.compiler = profile_compiler(self.config.filters)

    def list_profiles(self, spec: ProfileFilterSpec) -> ProfilePage:
        compiled = self.compiler.compile(spec)
        cap = self.config.fetch_cap

        try:
            total = self.store.count_profiles()
            fetched = self.store.list_profiles(compiled.storage, cap)
        except ServiceException:
            raise
        except Exception as e:
            logger.error(f"Failed to list profiles: {e}", exc_info=True)
            raise RetrievalError("Failed to fetch jobseeker profiles", details=str(e)) from e

        if len(fetched) >= cap:
            logger.warning(f"Profile list hit the cap of {cap}; results may be truncated")

        # Storage returns newest first; refinement keeps that order
        matching = refine(fetched, compiled.in_process)
        page_items, pagination = paginate(matching, spec.page, spec.limit, total=max(total, len(matching)))

        return ProfilePage(profiles=page_items, pagination=pagination, filters=compiled.applied)
