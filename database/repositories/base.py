import contextlib
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List

from sqlalchemy import and_, not_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import RetrievalError
from core.matching.filters import FilterRule, RuleKind

logger = logging.getLogger(__name__)


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    @contextlib.contextmanager
    def storage_errors(self, action: str):
        """Translate database faults into RetrievalError."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"Storage fault while trying to {action}: {e}", exc_info=True)
            raise RetrievalError(f"Failed to {action}", details=f"{e.__class__.__name__}: {e}") from e

    def rule_clauses(self, rules: Iterable[FilterRule], columns: Dict[str, Any]) -> List[Any]:
        """
        Translate storage-side rules into SQL where clauses.

        Args:
            rules: Rules placed on storage.
            columns: Maps record field names to columns or SQL expressions.

        Raises:
            ValueError: If a rule references a field with no SQL mapping.
        """
        clauses = []
        for rule in rules:
            missing = [f for f in rule.fields if f not in columns]
            if missing:
                raise ValueError(f"Filter {rule.name} cannot be evaluated in storage: no column for {missing}")

            targets = [columns[f] for f in rule.fields]
            if rule.kind is RuleKind.EXACT:
                clauses.append(or_(*[_exact(col, rule.value) for col in targets]))
            elif rule.kind is RuleKind.SUBSTRING:
                clauses.append(or_(*[col.icontains(rule.value, autoescape=True) for col in targets]))
            else:
                low, high = rule.value
                clauses.append(or_(*[_range(col, low, high) for col in targets]))
        return clauses


def _exact(column: Any, value: Any) -> Any:
    if isinstance(value, bool):
        return column if value else not_(column)
    return column == value


def _range(column: Any, low: Any, high: Any) -> Any:
    conditions = []
    if low is not None:
        conditions.append(column >= low)
    if high is not None:
        # A date upper bound includes the whole day
        if isinstance(high, date) and not isinstance(high, datetime):
            conditions.append(column < high + timedelta(days=1))
        else:
            conditions.append(column <= high)
    return and_(*conditions)
