#!/usr/bin/env python3
"""
Candidate Retrieval - single capped fetch from the storage collaborator.

The storage layer evaluates the storage-side predicate and attaches the
similarity score and availability flag to each candidate. In-process
refinement happens afterwards, so the cap must be generous enough that it
never silently truncates legitimate matches.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from core.errors import NotFound, RetrievalError, ServiceException
from core.matching.filters import Predicate
from core.matching.models import Candidate

logger = logging.getLogger(__name__)


class CandidateStore(ABC):
    """Storage contract consumed by the matching pipeline."""

    @abstractmethod
    def position_exists(self, position_id: str) -> bool:
        ...

    @abstractmethod
    def count_candidates(self, position_id: str) -> int:
        """Count of candidate profiles before any caller filter."""
        ...

    @abstractmethod
    def fetch_candidates(
        self,
        position_id: str,
        storage_predicate: Predicate,
        cap: int
    ) -> List[Candidate]:
        """
        Return at most `cap` candidates satisfying every storage-side rule,
        each carrying its similarity score for the position.

        Raises:
            RetrievalError: On a storage fault.
        """
        ...


class CandidateRetriever:
    """Fetches the candidate superset for a position."""

    def __init__(self, store: CandidateStore):
        self.store = store

    def fetch(
        self,
        position_id: str,
        storage_predicate: Predicate,
        cap: int,
        check_position: bool = True
    ) -> List[Candidate]:
        """
        Fetch candidates matching the storage predicate.

        Args:
            position_id: Position to match against.
            storage_predicate: Rules pushed down to storage.
            cap: Upper bound on rows returned.
            check_position: Pass False when the caller already checked the
                position, e.g. through count().

        Returns:
            Candidates in storage order.

        Raises:
            NotFound: If the position does not exist.
            RetrievalError: On a storage fault. Not retried here.
        """
        if cap < 1:
            raise ValueError(f"cap must be positive, got {cap}")

        if check_position:
            self.require_position(position_id)

        candidates = self._call(
            self.store.fetch_candidates, position_id, storage_predicate, cap
        )

        if len(candidates) >= cap:
            logger.warning(
                f"Candidate fetch for position {position_id} hit the cap of {cap}; "
                f"results may be truncated, tighten storage-side filters"
            )

        return candidates[:cap]

    def count(self, position_id: str) -> int:
        """Unfiltered candidate count for the position."""
        self.require_position(position_id)
        return self._call(self.store.count_candidates, position_id)

    def require_position(self, position_id: str) -> None:
        if not self._call(self.store.position_exists, position_id):
            raise NotFound(f"Position {position_id} not found")

    def _call(self, fn, *args):
        try:
            return fn(*args)
        except ServiceException:
            raise
        except Exception as e:
            logger.error(f"Storage fault during {fn.__name__}: {e}", exc_info=True)
            raise RetrievalError(
                "Failed to fetch position candidates",
                details=f"{fn.__name__}: {e}"
            ) from e
